"""Interfaces the engine publishes to and schedules with.

The Home Assistant side implements these in coordinator.py; tests use
in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol


@dataclass(frozen=True)
class StateDescriptor:
    """Shape of a published value, registered before the first write."""

    name: str
    value_type: str
    role: str
    unit: str | None = None
    read: bool = True
    write: bool = False


class StateSink(Protocol):
    """Receives published printer values."""

    def ensure_descriptor(self, key: str, descriptor: StateDescriptor) -> None:
        """Register the descriptor for a key unless one already exists."""

    def publish(self, key: str, value: Any, ack: bool = True) -> None:
        """Write a value; ack marks it as confirmed by the device."""


class Scheduler(Protocol):
    """Runs an action once after a delay."""

    def schedule(self, delay: timedelta, action: Callable[[], Awaitable[None]]) -> Callable[[], None]:
        """Schedule the action and return a callable that cancels it."""
