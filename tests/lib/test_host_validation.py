"""Tests for lib/host_validation.py."""

from __future__ import annotations

import pytest

from custom_components.epson_ecotank.lib.host_validation import is_valid_host, is_valid_port, split_host_port

# fmt: off
SPLIT_CASES: list[tuple[str, str, tuple[str, str]]] = [
    # (test_id,        value,                          expected)
    ("ipv4",           "192.168.1.50",                 ("192.168.1.50", "")),
    ("ipv4_port",      "192.168.1.50:8080",            ("192.168.1.50", "8080")),
    ("hostname",       "epson-et2750.local",            ("epson-et2750.local", "")),
    ("whitespace",     "  192.168.1.50 ",              ("192.168.1.50", "")),
    ("url",            "http://192.168.1.50",          ("192.168.1.50", "")),
    ("url_port_path",  "http://printer.lan:8080/PRESENTATION", ("printer.lan", "8080")),
    ("ipv6",           "fe80::1",                      ("fe80::1", "")),
]

INVALID_CASES: list[tuple[str, str]] = [
    # (test_id,        value)
    ("empty",          ""),
    ("blank",          "   "),
    ("injection",      "192.168.1.50; rm -rf /"),
    ("https",          "https://192.168.1.50"),
    ("port_range",     "192.168.1.50:70000"),
    ("bad_hostname",   "-printer"),
]
# fmt: on


class TestSplitHostPort:
    """Tests for split_host_port."""

    @pytest.mark.parametrize("test_id,value,expected", SPLIT_CASES, ids=[c[0] for c in SPLIT_CASES])
    def test_valid(self, test_id: str, value: str, expected: tuple[str, str]):
        """Valid addresses split into host and port."""
        assert split_host_port(value) == expected, test_id

    @pytest.mark.parametrize("test_id,value", INVALID_CASES, ids=[c[0] for c in INVALID_CASES])
    def test_invalid(self, test_id: str, value: str):
        """Invalid addresses raise ValueError."""
        with pytest.raises(ValueError):
            split_host_port(value)


class TestIsValidHost:
    """Tests for is_valid_host."""

    def test_rejects_shell_metacharacters(self):
        """Shell metacharacters are never accepted."""
        for char in [";", "&", "|", "$", "`", "<", ">"]:
            assert not is_valid_host(f"printer{char}lan")

    def test_rejects_overlong_host(self):
        """Hosts longer than 253 characters are invalid."""
        assert not is_valid_host("a" * 254)


class TestIsValidPort:
    """Tests for is_valid_port."""

    @pytest.mark.parametrize("port,expected", [("", True), ("80", True), ("65535", True), ("0", False), ("http", False)])
    def test_port(self, port: str, expected: bool):
        """Ports must be empty or 1..65535."""
        assert is_valid_port(port) is expected
