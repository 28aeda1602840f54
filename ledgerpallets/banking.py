"""Banking accounts registered on chain, with parent/child hierarchies."""

from __future__ import annotations

import copy
import enum
import hashlib
from dataclasses import dataclass, field
from typing import Any, Hashable

from .chain import Chain, ensure_signed
from .currency import Balances, ExistenceRequirement


class Status(enum.Enum):
    OPERATIVE = "Operative"
    DORMANT = "Dormant"
    CLOSED = "Closed"
    FROZEN = "Frozen"


@dataclass
class BankingAccount:
    account_number: bytes
    ifsc_code: bytes
    bank_name: bytes
    branch_name: bytes
    branch_address: bytes
    account_holder: Any
    account_type: bytes
    opening_date: int
    current_balance: int
    status: Status = Status.OPERATIVE
    micr_code: bytes | None = None
    holder_dob: int | None = None
    holder_pan: bytes | None = None
    holder_aadhaar: bytes | None = None
    holder_category: bytes | None = None
    overdraft_limit: int | None = None
    has_cheque_book: bool = False
    has_atm_debit_card: bool = False
    has_internet_banking: bool = False
    has_mobile_banking: bool = False
    last_txn: int | None = None
    parent_account: Any = None
    child_accounts: list[Any] = field(default_factory=list)


class BankingError(Exception):
    """Base class for banking pallet errors."""


class AccountAlreadyExists(BankingError):
    pass


class AccountNotFound(BankingError):
    pass


class CannotAddSelfAsChild(BankingError):
    pass


@dataclass(frozen=True)
class AccountCreated:
    holder: Any
    balance: int


@dataclass(frozen=True)
class SubAccountAdded:
    parent: Any
    child: Any


def _compact_length(n: int) -> bytes:
    if n < 1 << 6:
        return bytes([n << 2])
    if n < 1 << 14:
        return ((n << 2) | 0b01).to_bytes(2, "little")
    if n < 1 << 30:
        return ((n << 2) | 0b10).to_bytes(4, "little")
    size = (n.bit_length() + 7) // 8
    return bytes([((size - 4) << 2) | 0b11]) + n.to_bytes(size, "little")


def pallet_account_id(name: str) -> bytes:
    """Derive the 32-byte account owned by the pallet called ``name``."""
    raw = name.encode("utf-8")
    return hashlib.blake2b(_compact_length(len(raw)) + raw, digest_size=32).digest()


class BankingPallet:
    """Registers banking accounts and links them into hierarchies."""

    def __init__(self, chain: Chain, currency: Balances, name: str = "BankingAccount") -> None:
        self.chain = chain
        self.currency = currency
        self.name = name
        self._accounts: dict[Hashable, BankingAccount] = {}

    def account_id(self) -> bytes:
        return pallet_account_id(self.name)

    def bank_accounts(self, holder: Hashable) -> BankingAccount | None:
        """Return a copy of the account held by ``holder``, if any."""
        account = self._accounts.get(holder)
        return copy.deepcopy(account) if account is not None else None

    def create_account(
        self,
        origin,
        account_number,
        ifsc_code,
        bank_name,
        branch_name,
        branch_address,
        holder_dob,
        holder_pan,
        holder_aadhaar,
        holder_category,
        account_type,
        initial_balance,
    ) -> None:
        holder = ensure_signed(origin)
        if holder in self._accounts:
            raise AccountAlreadyExists(holder)

        account = BankingAccount(
            account_number=account_number,
            ifsc_code=ifsc_code,
            bank_name=bank_name,
            branch_name=branch_name,
            branch_address=branch_address,
            account_holder=holder,
            holder_dob=holder_dob,
            holder_pan=holder_pan,
            holder_aadhaar=holder_aadhaar,
            holder_category=holder_category,
            account_type=account_type,
            opening_date=self.chain.block_number,
            current_balance=initial_balance,
        )
        # A failed transfer leaves storage untouched, so move funds before recording.
        self.currency.transfer(
            holder, self.account_id(), initial_balance, ExistenceRequirement.KEEP_ALIVE
        )
        self._accounts[holder] = account
        self.chain.deposit_event(AccountCreated(holder, initial_balance))

    def add_sub_account(self, origin, parent, sub_account_id) -> None:
        ensure_signed(origin)
        if parent == sub_account_id:
            raise CannotAddSelfAsChild(parent)
        if parent not in self._accounts:
            raise AccountNotFound(parent)
        if sub_account_id not in self._accounts:
            raise AccountNotFound(sub_account_id)

        parent_account = self._accounts[parent]
        if sub_account_id not in parent_account.child_accounts:
            parent_account.child_accounts.append(sub_account_id)
        self._accounts[sub_account_id].parent_account = parent
        self.chain.deposit_event(SubAccountAdded(parent, sub_account_id))