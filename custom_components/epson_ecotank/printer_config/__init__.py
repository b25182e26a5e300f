"""Printer label configuration.

Localized field labels live in labels.yaml so that supporting another UI
language only means adding a label, not changing extraction code.
"""

from .loader import async_load_label_catalog, clear_cache, load_label_catalog
from .schema import DocumentKind, FieldLabels, LabelCatalog

__all__ = [
    "DocumentKind",
    "FieldLabels",
    "LabelCatalog",
    "async_load_label_catalog",
    "clear_cache",
    "load_label_catalog",
]
