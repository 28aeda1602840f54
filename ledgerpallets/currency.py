"""A simple balances ledger with existential-deposit rules."""

from __future__ import annotations

import enum
from typing import Hashable


class CurrencyError(Exception):
    """Base class for currency failures."""


class InsufficientBalance(CurrencyError):
    """The source account does not hold enough funds."""


class KeepAliveViolation(CurrencyError):
    """The transfer would take the source below the existential deposit."""


class ExistenceRequirement(enum.Enum):
    KEEP_ALIVE = "keep_alive"
    ALLOW_DEATH = "allow_death"


class Balances:
    """Free balances per account, with an existential deposit."""

    def __init__(self, existential_deposit: int = 0) -> None:
        if existential_deposit < 0:
            raise ValueError("existential deposit cannot be negative")
        self.existential_deposit = existential_deposit
        self._free: dict[Hashable, int] = {}

    def free_balance(self, who: Hashable) -> int:
        return self._free.get(who, 0)

    def deposit(self, who: Hashable, amount: int) -> int:
        """Credit ``amount`` to ``who`` and return the new balance."""
        if amount < 0:
            raise ValueError("amount cannot be negative")
        new_balance = self.free_balance(who) + amount
        if new_balance < self.existential_deposit:
            raise CurrencyError("resulting balance is below the existential deposit")
        self._set(who, new_balance)
        return new_balance

    def transfer(
        self,
        source: Hashable,
        dest: Hashable,
        amount: int,
        requirement: ExistenceRequirement = ExistenceRequirement.KEEP_ALIVE,
    ) -> None:
        """Move ``amount`` from ``source`` to ``dest``."""
        if amount < 0:
            raise ValueError("amount cannot be negative")
        if amount == 0 or source == dest:
            return
        available = self.free_balance(source)
        if available < amount:
            raise InsufficientBalance(f"{source!r} holds {available}, needs {amount}")
        remaining = available - amount
        if remaining < self.existential_deposit:
            if requirement is ExistenceRequirement.KEEP_ALIVE:
                raise KeepAliveViolation(f"{source!r} would drop below the existential deposit")
            remaining = 0
        received = self.free_balance(dest) + amount
        if received < self.existential_deposit:
            raise CurrencyError("destination balance would be below the existential deposit")
        self._set(source, remaining)
        self._set(dest, received)

    def _set(self, who: Hashable, amount: int) -> None:
        if amount:
            self._free[who] = amount
        else:
            self._free.pop(who, None)