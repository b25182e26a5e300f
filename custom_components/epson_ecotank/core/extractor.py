"""Pattern-based field extraction from printer pages.

The printer repeats some values in different parts of a page, so every
match is scanned and the last one wins. A field that does not match, or
whose number cannot be parsed, is simply absent from the outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Union

from ..const import INK_BASELINE_HEIGHT
from .fields import FieldDescriptor, ValueKind

_LOGGER = logging.getLogger(__name__)

FieldValue = Union[str, int, float]


def percent_from_pixel_height(height: int) -> float:
    """Convert an ink bar height to a fill percentage.

    Values are not clamped; a bar taller than the baseline reads above 100.
    """
    return height * 100 / INK_BASELINE_HEIGHT


def _parse_int(text: str) -> int | None:
    try:
        return int(text, 10)
    except ValueError:
        return None


class ExtractionOutcome(Mapping[str, FieldValue]):
    """Values extracted from one page, keyed by field key.

    Fields that were not found are absent: ``outcome.get(key)`` returns None
    and ``key in outcome`` is False.
    """

    def __init__(self, values: dict[str, FieldValue] | None = None):
        """Initialize with extracted values."""
        self._values: dict[str, FieldValue] = dict(values or {})

    def __getitem__(self, key: str) -> FieldValue:
        """Return the value for a found field."""
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        """Iterate over found field keys."""
        return iter(self._values)

    def __len__(self) -> int:
        """Return the number of found fields."""
        return len(self._values)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ExtractionOutcome({self._values!r})"

    def is_found(self, key: str) -> bool:
        """Return True if the field was extracted."""
        return key in self._values


class FieldExtractor:
    """Apply field descriptors to a page body."""

    def extract(self, body: str, descriptors: Iterable[FieldDescriptor]) -> ExtractionOutcome:
        """Extract every descriptor's value from the body.

        Args:
            body: Page HTML
            descriptors: Fields to extract

        Returns:
            ExtractionOutcome with one entry per field that was found.
        """
        values: dict[str, FieldValue] = {}
        for descriptor in descriptors:
            value = self.extract_field(body, descriptor)
            if value is None:
                _LOGGER.debug("%s not found", descriptor.key)
                continue
            _LOGGER.debug("%s: %r", descriptor.key, value)
            values[descriptor.key] = value
        return ExtractionOutcome(values)

    def extract_field(self, body: str, descriptor: FieldDescriptor) -> FieldValue | None:
        """Extract a single field, returning None if not found."""
        raw: str | None = None
        for match in descriptor.regex.finditer(body):
            raw = match.group(1)
        if raw is None:
            return None
        return self._transform(raw, descriptor)

    @staticmethod
    def _transform(raw: str, descriptor: FieldDescriptor) -> FieldValue | None:
        if descriptor.value_kind is ValueKind.RAW_TEXT:
            return raw

        number = _parse_int(raw)
        if number is None:
            _LOGGER.debug("%s: cannot parse %r as integer", descriptor.key, raw)
            return None

        if descriptor.value_kind is ValueKind.PERCENT_FROM_PIXEL_HEIGHT:
            return percent_from_pixel_height(number)
        return number
