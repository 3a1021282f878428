"""Domain model entities for churchbook.

These are pure data classes representing business concepts, independent of
database schema. Related entities (a receipt's transaction, a member's group)
are only populated when a caller explicitly asks for them.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from churchbook.utils.time_utils import to_utc_z


class AccountType(str, Enum):
    """Ledger account types.

    The values are matched literally; ``liability`` is lowercase.
    """

    BANK = "Bank"
    EXPENSE = "Expense"
    INCOME = "Income"
    ASSET = "Asset"
    LIABILITY = "liability"


class TransactionType(str, Enum):
    """Transaction types."""

    RECEIPTS = "receipts"
    WITHDRAWAL = "withdrawal"
    EXPENSES = "expenses"
    TRANSFER = "transfer"


class UserRole(str, Enum):
    """User roles."""

    ADMIN = "Admin"
    TREASURER = "Treasurer"
    CLERK = "Clerk"


def _money(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(Decimal("0.01")))


@dataclass(frozen=True)
class User:
    """Login principal."""

    id: str
    username: str
    email: str
    password_hash: str
    full_name: str
    role: str
    phone_number: str
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def validate_role(self) -> None:
        from churchbook.domain.validation import validate_role

        validate_role(self.role)

    def to_dict(self) -> dict[str, Any]:
        """Public view. The password hash is never included."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "phone_number": self.phone_number,
            "is_active": self.is_active,
            "last_login": to_utc_z(self.last_login),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


@dataclass(frozen=True)
class MembersGroup:
    """A named cohort of members."""

    id: str
    group_name: str
    notes: Optional[str]
    created_by: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "group_name": self.group_name,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


@dataclass(frozen=True)
class Member:
    """A contributor, distinct from a User."""

    id: str
    full_name: str
    phone_number: str
    email: Optional[str]
    notes: Optional[str]
    group_id: Optional[str]
    created_by: str
    created_at: datetime
    updated_at: datetime
    group: Optional[MembersGroup] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "full_name": self.full_name,
            "phone_number": self.phone_number,
            "email": self.email,
            "notes": self.notes,
            "group_id": self.group_id,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if self.group is not None:
            data["group"] = self.group.to_dict()
        return data


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: str
    account_name: str
    account_type: str
    local_share: Optional[Decimal]
    notes: Optional[str]
    is_active: bool
    created_by: str
    created_at: datetime
    updated_at: datetime

    def validate_type(self) -> None:
        from churchbook.domain.validation import validate_account_type

        validate_account_type(self.account_type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "account_name": self.account_name,
            "account_type": self.account_type,
            "local_share": None if self.local_share is None else str(self.local_share),
            "notes": self.notes,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


@dataclass(frozen=True)
class Transaction:
    """Parent ledger entry."""

    id: str
    transaction_ref: Optional[str]
    transaction_date: datetime
    transaction_type: str
    amount: Decimal
    notes: Optional[str]
    debit_account_id: str
    member_id: Optional[str]
    created_by: str
    created_at: datetime
    updated_at: datetime
    debit_account: Optional[Account] = None
    member: Optional[Member] = None

    def validate_type(self) -> None:
        from churchbook.domain.validation import validate_transaction_type

        validate_transaction_type(self.transaction_type)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "transaction_ref": self.transaction_ref,
            "transaction_date": to_utc_z(self.transaction_date),
            "transaction_type": self.transaction_type,
            "amount": _money(self.amount),
            "notes": self.notes,
            "debit_account_id": self.debit_account_id,
            "member_id": self.member_id,
            "created_by": self.created_by,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if self.debit_account is not None:
            data["debit_account"] = self.debit_account.to_dict()
        if self.member is not None:
            data["member"] = self.member.to_dict()
        return data


@dataclass(frozen=True)
class Receipt:
    """Income line of a transaction."""

    id: str
    transaction_id: str
    income_account_id: str
    amount: Decimal
    created_at: datetime
    updated_at: datetime
    transaction: Optional[Transaction] = None
    income_account: Optional[Account] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "income_account_id": self.income_account_id,
            "amount": _money(self.amount),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if self.transaction is not None:
            data["transaction"] = self.transaction.to_dict()
        if self.income_account is not None:
            data["income_account"] = self.income_account.to_dict()
        return data


@dataclass(frozen=True)
class Expenditure:
    """Expense line of a transaction, paid from a bank account."""

    id: str
    transaction_id: str
    particulars: str
    bank_account_id: str
    amount: Decimal
    created_at: datetime
    updated_at: datetime
    transaction: Optional[Transaction] = None
    bank_account: Optional[Account] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "particulars": self.particulars,
            "bank_account_id": self.bank_account_id,
            "amount": _money(self.amount),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if self.transaction is not None:
            data["transaction"] = self.transaction.to_dict()
        if self.bank_account is not None:
            data["bank_account"] = self.bank_account.to_dict()
        return data


@dataclass(frozen=True)
class Transfer:
    """Inter-account movement line of a transaction."""

    id: str
    transaction_id: str
    particulars: str
    credit_account_id: str
    amount: Decimal
    created_at: datetime
    updated_at: datetime
    transaction: Optional[Transaction] = None
    credit_account: Optional[Account] = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "particulars": self.particulars,
            "credit_account_id": self.credit_account_id,
            "amount": _money(self.amount),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
        if self.transaction is not None:
            data["transaction"] = self.transaction.to_dict()
        if self.credit_account is not None:
            data["credit_account"] = self.credit_account.to_dict()
        return data
