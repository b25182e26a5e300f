"""Field descriptor tables for the EcoTank information pages.

Each value the printer shows is described declaratively: a regex with
exactly one capture group and a transform applied to the captured text.
Label-based fields take their localized labels from printer_config's
labels.yaml; the page structure around the value is fixed here.

A labelled value on the pages looks like:

    <dt><span>Serial Number&nbsp;:</span></dt><dd class="value clearfix">
    <div class="preserve-white-space">X5BN012345</div></dd>

(without the line breaks). Ink levels are read from the height of the
bar image the web UI draws for each tank.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from ..const import (
    INK_COLORS,
    MAINTENANCE_PAGE,
    NETWORK_PAGE,
    STATE_FIRMWARE,
    STATE_FIRST_PRINT_DATE,
    STATE_MAC,
    STATE_MODEL,
    STATE_NAME,
    STATE_PAGE_COUNT,
    STATE_SERIAL,
    STATUS_PAGE,
)
from ..printer_config.schema import DocumentKind, LabelCatalog
from .sink import StateDescriptor

# Markup between a label and its value cell
VALUE_CELL_PREFIX = '&nbsp;:</span></dt><dd class="value clearfix"><div class="preserve-white-space">'
VALUE_CELL_SUFFIX = "</div>"

_MAC_CHARS = r"[a-zA-Z0-9:]*"
_FIRMWARE_CHARS = r"[a-zA-Z0-9 äöüÄÖÜ\-_.]*"
_SERIAL_CHARS = r"[a-zA-Z0-9]*"
_NAME_CHARS = r"[a-zA-Z0-9 äöüÄÖÜ\-_]*"
_DATE = r"(?:\d\d-\d\d-\d{4}|\d{4}-\d\d-\d\d)"
_DIGITS = r"\d*"
_CARTRIDGE_CHARS = r"[a-zA-Z0-9/]*"


class ValueKind(str, Enum):
    """Transform applied to a captured value."""

    RAW_TEXT = "raw_text"
    INTEGER = "integer"
    PERCENT_FROM_PIXEL_HEIGHT = "percent_from_pixel_height"


@dataclass(frozen=True)
class FieldDescriptor:
    """A named value to extract from a page.

    Attributes:
        key: Identifier of the value, also the published state key
        pattern: Regex with exactly one capturing group
        value_kind: Transform for the captured text
        display_name: Human-readable name
        publish: False for values that are extracted but not published
    """

    key: str
    pattern: str
    value_kind: ValueKind
    display_name: str
    publish: bool = True
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Compile the pattern and enforce the single capture group."""
        compiled = re.compile(self.pattern)
        if compiled.groups != 1:
            raise ValueError(
                f"Pattern for field '{self.key}' must have exactly one capture group, found {compiled.groups}"
            )
        object.__setattr__(self, "regex", compiled)


def labelled_pattern(label_alternation: str, value_chars: str) -> str:
    """Build the pattern for a value printed after a localized label."""
    return f"{label_alternation}{re.escape(VALUE_CELL_PREFIX)}({value_chars}){re.escape(VALUE_CELL_SUFFIX)}"


@dataclass(frozen=True)
class InkChannel:
    """One ink tank: its level bar and its cartridge/bottle code."""

    color: str
    name: str
    level: FieldDescriptor
    cartridge: FieldDescriptor

    @property
    def state_descriptor(self) -> StateDescriptor:
        """Descriptor registered for the published level."""
        return StateDescriptor(
            name=f"Level of {self.name}",
            value_type="number",
            role="level.volume",
            unit="%",
            read=True,
            write=False,
        )


def _build_ink_channel(color: str, image_code: str, label_code: str) -> InkChannel:
    name = color.capitalize()
    return InkChannel(
        color=color,
        name=name,
        level=FieldDescriptor(
            key=f"inks.{color}",
            pattern=rf"IMAGE/Ink_{image_code}\.PNG' height='([0-9]{{1,2}})'",
            value_kind=ValueKind.PERCENT_FROM_PIXEL_HEIGHT,
            display_name=f"Level of {name}",
        ),
        cartridge=FieldDescriptor(
            key=f"cartridges.{color}",
            pattern=labelled_pattern(re.escape(f"({label_code})"), _CARTRIDGE_CHARS),
            value_kind=ValueKind.RAW_TEXT,
            display_name=f"{name} cartridge",
            publish=False,
        ),
    )


# Image file letter and label code per color
_INK_CODES = {
    "cyan": ("C", "C"),
    "yellow": ("Y", "Y"),
    "black": ("K", "BK"),
    "magenta": ("M", "M"),
}

INK_CHANNELS: tuple[InkChannel, ...] = tuple(_build_ink_channel(color, *_INK_CODES[color]) for color in INK_COLORS)

# labels.yaml key -> (state key, value characters, transform, display name)
LABELLED_FIELDS: dict[str, tuple[str, str, ValueKind, str]] = {
    "mac_address": (STATE_MAC, _MAC_CHARS, ValueKind.RAW_TEXT, "MAC address"),
    "firmware": (STATE_FIRMWARE, _FIRMWARE_CHARS, ValueKind.RAW_TEXT, "Firmware"),
    "serial_number": (STATE_SERIAL, _SERIAL_CHARS, ValueKind.RAW_TEXT, "Serial number"),
    "device_name": (STATE_NAME, _NAME_CHARS, ValueKind.RAW_TEXT, "Device name"),
    "first_print_date": (STATE_FIRST_PRINT_DATE, _DATE, ValueKind.RAW_TEXT, "First print date"),
    "page_count": (STATE_PAGE_COUNT, _DIGITS, ValueKind.INTEGER, "Total printed pages"),
}

MODEL_DESCRIPTOR = FieldDescriptor(
    key=STATE_MODEL,
    pattern=rf"<title>({_NAME_CHARS})</title>",
    value_kind=ValueKind.RAW_TEXT,
    display_name="Model",
)

DOCUMENT_PATHS: dict[DocumentKind, str] = {
    DocumentKind.NETWORK: NETWORK_PAGE,
    DocumentKind.STATUS: STATUS_PAGE,
    DocumentKind.MAINTENANCE: MAINTENANCE_PAGE,
}

# Fetch order within a cycle
DOCUMENT_ORDER = (DocumentKind.NETWORK, DocumentKind.STATUS, DocumentKind.MAINTENANCE)


@dataclass(frozen=True)
class DocumentSpec:
    """A page to fetch and the fields to extract from it."""

    kind: DocumentKind
    path: str
    descriptors: tuple[FieldDescriptor, ...]


def build_document_specs(catalog: LabelCatalog) -> tuple[DocumentSpec, ...]:
    """Build the per-page descriptor tables from the label catalog.

    Args:
        catalog: Validated label catalog

    Returns:
        Document specs in fetch order (network, status, maintenance).

    Raises:
        KeyError: If the catalog lacks labels for a known field.
    """
    tables: dict[DocumentKind, list[FieldDescriptor]] = {kind: [] for kind in DOCUMENT_ORDER}
    tables[DocumentKind.NETWORK].append(MODEL_DESCRIPTOR)

    for catalog_key, (state_key, value_chars, value_kind, display_name) in LABELLED_FIELDS.items():
        labels = catalog.for_field(catalog_key)
        tables[labels.document].append(
            FieldDescriptor(
                key=state_key,
                pattern=labelled_pattern(labels.alternation(), value_chars),
                value_kind=value_kind,
                display_name=display_name,
            )
        )

    for channel in INK_CHANNELS:
        tables[DocumentKind.STATUS].extend((channel.level, channel.cartridge))

    return tuple(DocumentSpec(kind, DOCUMENT_PATHS[kind], tuple(tables[kind])) for kind in DOCUMENT_ORDER)
