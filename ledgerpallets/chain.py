"""Minimal block-chain context: block height, signed origins and an event log."""

from __future__ import annotations

from typing import Any, Hashable


class BadOrigin(Exception):
    """Raised when a call requires a signed origin but none was given."""


def ensure_signed(origin: Hashable | None) -> Hashable:
    """Return the signing account of ``origin``; ``None`` stands for an unsigned origin."""
    if origin is None:
        raise BadOrigin("origin must be signed")
    return origin


class Chain:
    """Holds the current block number and the events deposited so far."""

    def __init__(self, block_number: int = 0) -> None:
        if block_number < 0:
            raise ValueError("block number cannot be negative")
        self.block_number = block_number
        self._events: list[Any] = []

    def advance(self, blocks: int = 1) -> int:
        """Move the chain forward by ``blocks`` and return the new block number."""
        if blocks < 0:
            raise ValueError("cannot move the chain backwards")
        self.block_number += blocks
        return self.block_number

    def deposit_event(self, event: Any) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[Any, ...]:
        return tuple(self._events)

    def take_events(self) -> list[Any]:
        """Return every deposited event and clear the log."""
        taken, self._events = self._events, []
        return taken