"""Pytest configuration and fixtures for epson_ecotank tests."""

from __future__ import annotations

import pytest

from custom_components.epson_ecotank.core.fetcher import FetchResult
from custom_components.epson_ecotank.core.fields import build_document_specs
from custom_components.epson_ecotank.core.settings import PrinterSettings
from custom_components.epson_ecotank.printer_config import clear_cache, load_label_catalog
from tests.fakes import PAGE_FIXTURES, FakeScheduler, FakeSink, ok_result


@pytest.fixture(autouse=True)
def _clear_label_cache():
    """Reset the cached label catalog between tests."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def catalog():
    """Return the bundled label catalog."""
    return load_label_catalog()


@pytest.fixture
def document_specs(catalog):
    """Return the document specs built from the bundled catalog."""
    return build_document_specs(catalog)


@pytest.fixture
def settings() -> PrinterSettings:
    """Return settings for a printer at 192.168.1.50."""
    return PrinterSettings(host="192.168.1.50")


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def all_pages_ok() -> dict[str, FetchResult]:
    """Fetch table where every page answers with its fixture."""
    return {path: ok_result(filename) for path, filename in PAGE_FIXTURES.items()}
