"""Label catalog loader.

Loads labels.yaml and validates it against the LabelCatalog schema. The
default catalog is cached after the first load; pass an explicit path to
load an alternative file (used by tests).

Functions:
    get_catalog_path: Path of the bundled labels.yaml
    load_label_catalog: Load and validate a catalog (cached for the default path)
    clear_cache: Drop the cached default catalog
    async_load_label_catalog: Executor wrapper for the Home Assistant event loop
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from ..core.exceptions import InvalidLabelCatalogError
from .schema import LabelCatalog

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


def get_catalog_path() -> Path:
    """Get the path of the bundled labels.yaml."""
    return Path(__file__).resolve().parent / "labels.yaml"


def _read_catalog(yaml_path: Path) -> LabelCatalog:
    if not yaml_path.exists():
        raise InvalidLabelCatalogError(f"labels.yaml not found at {yaml_path}")

    _LOGGER.debug("Loading label catalog from %s", yaml_path)

    try:
        with open(yaml_path, encoding="utf-8") as f:
            raw_catalog = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as err:
        raise InvalidLabelCatalogError(f"Cannot read {yaml_path}: {err}") from err

    if not raw_catalog:
        raise InvalidLabelCatalogError(f"Empty labels.yaml at {yaml_path}")

    try:
        catalog = LabelCatalog.model_validate(raw_catalog)
    except ValidationError as err:
        raise InvalidLabelCatalogError(f"Invalid labels.yaml at {yaml_path}: {err}") from err

    _LOGGER.debug("Loaded label catalog v%d with %d fields", catalog.version, len(catalog.fields))
    return catalog


@lru_cache(maxsize=1)
def _load_default_catalog() -> LabelCatalog:
    return _read_catalog(get_catalog_path())


def load_label_catalog(path: Path | str | None = None) -> LabelCatalog:
    """Load the label catalog.

    Args:
        path: Optional labels.yaml path. Defaults to the bundled catalog,
              which is cached after the first call.

    Returns:
        Validated LabelCatalog.

    Raises:
        InvalidLabelCatalogError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        return _load_default_catalog()
    return _read_catalog(Path(path))


def clear_cache() -> None:
    """Clear the cached default catalog."""
    _load_default_catalog.cache_clear()


async def async_load_label_catalog(hass: HomeAssistant) -> LabelCatalog:
    """Async wrapper for load_label_catalog.

    File I/O runs in the executor to avoid blocking the event loop.
    """
    result: LabelCatalog = await hass.async_add_executor_job(load_label_catalog)
    return result
