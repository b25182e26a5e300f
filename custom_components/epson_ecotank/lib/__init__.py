"""Utility functions for Epson EcoTank Monitor integration."""

from __future__ import annotations

from .host_validation import is_valid_host, is_valid_port, split_host_port

__all__ = ["is_valid_host", "is_valid_port", "split_host_port"]
