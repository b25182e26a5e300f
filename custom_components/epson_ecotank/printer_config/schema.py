"""Pydantic schema for labels.yaml.

labels.yaml is the closed list of localized labels the printer prints in
front of each value on its information pages. Fields whose labels are not
listed for the printer's UI language are reported as not found.

Schema Structure:
    LabelCatalog (root)
    ├── version
    └── fields: {field key -> FieldLabels}
        ├── document (network, status, maintenance)
        ├── labels
        └── prefix
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentKind(str, Enum):
    """Information pages served by the printer."""

    NETWORK = "network"
    STATUS = "status"
    MAINTENANCE = "maintenance"


class FieldLabels(BaseModel):
    """Localized labels for one field."""

    document: DocumentKind = Field(description="Page the field is printed on")
    labels: list[str] = Field(min_length=1, description="Known label texts, one per UI language")
    prefix: bool = Field(
        default=False,
        description="Allow trailing text after the label (e.g. 'Firmware Version')",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("labels")
    @classmethod
    def _reject_blank_labels(cls, value: list[str]) -> list[str]:
        if any(not label.strip() for label in value):
            raise ValueError("Labels must not be blank")
        return value

    def alternation(self) -> str:
        """Build a non-capturing regex alternation matching any label."""
        options = "|".join(re.escape(label) for label in self.labels)
        suffix = "[^<]*" if self.prefix else ""
        return f"(?:{options}){suffix}"


class LabelCatalog(BaseModel):
    """Root of labels.yaml."""

    version: int = Field(ge=1)
    fields: dict[str, FieldLabels]

    # Reject unknown keys to catch typos early
    model_config = ConfigDict(extra="forbid")

    def for_field(self, key: str) -> FieldLabels:
        """Return labels for a field key.

        Raises:
            KeyError: If the catalog has no entry for the key.
        """
        return self.fields[key]
