"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from churchbook.domain.entities import (
    Account,
    Expenditure,
    Member,
    MembersGroup,
    Receipt,
    Transaction,
    Transfer,
    User,
)


class Database(ABC):
    """Abstract persistence gateway for churchbook.

    Contract shared by every entity:

    - ``create_*`` assigns a fresh id and both timestamps and returns the
      stored entity.
    - ``update_*`` refreshes ``updated_at`` and raises PersistenceError when
      no row matches the entity's id.
    - ``get_*`` raises NotFoundError when no row matches; ``get_*_by_<key>``
      lookups return None instead.
    - ``delete_*`` raises NotFoundError when no row matches.
    - Constraint and connectivity failures raise PersistenceError.

    Date range bounds are inclusive.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database and release pooled connections."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        full_name: str,
        role: str,
        phone_number: str = "",
    ) -> User:
        """Create an active user."""
        pass

    @abstractmethod
    def update_user(self, user: User) -> User:
        """Persist all mutable user fields except the password hash."""
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email."""
        pass

    @abstractmethod
    def list_users(self, role: Optional[str] = None, active_only: bool = False) -> list[User]:
        """List users, newest first, optionally filtered by role and active flag."""
        pass

    @abstractmethod
    def deactivate_user(self, user_id: str) -> User:
        """Set is_active to False."""
        pass

    @abstractmethod
    def update_last_login(self, user_id: str) -> None:
        """Stamp last_login with the current time."""
        pass

    @abstractmethod
    def update_user_password(self, user_id: str, password_hash: str) -> None:
        """Replace the stored password hash."""
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> None:
        """Hard-delete a user."""
        pass

    # Members group operations
    @abstractmethod
    def create_group(self, group_name: str, created_by: str, notes: Optional[str] = None) -> MembersGroup:
        """Create a members group."""
        pass

    @abstractmethod
    def update_group(self, group: MembersGroup) -> MembersGroup:
        """Persist group name and notes."""
        pass

    @abstractmethod
    def get_group(self, group_id: str) -> MembersGroup:
        """Get group by ID."""
        pass

    @abstractmethod
    def get_group_by_name(self, group_name: str) -> Optional[MembersGroup]:
        """Get group by exact name."""
        pass

    @abstractmethod
    def list_groups(self) -> list[MembersGroup]:
        """List groups alphabetically."""
        pass

    @abstractmethod
    def list_groups_with_member_count(self) -> list[dict[str, Any]]:
        """List groups alphabetically with their member counts.

        Returns dictionaries (id, group_name, notes, member_count, created_at,
        updated_at). This structure is kept as dict for aggregation results.
        """
        pass

    @abstractmethod
    def count_members_in_group(self, group_id: str) -> int:
        """Count members referencing a group."""
        pass

    @abstractmethod
    def delete_group(self, group_id: str) -> None:
        """Hard-delete a group. Does not check for members."""
        pass

    # Member operations
    @abstractmethod
    def create_member(
        self,
        full_name: str,
        phone_number: str,
        created_by: str,
        email: Optional[str] = None,
        notes: Optional[str] = None,
        group_id: Optional[str] = None,
    ) -> Member:
        """Create a member."""
        pass

    @abstractmethod
    def update_member(self, member: Member) -> Member:
        """Persist all mutable member fields."""
        pass

    @abstractmethod
    def get_member(self, member_id: str, with_related: bool = False) -> Member:
        """Get member by ID, optionally with its group."""
        pass

    @abstractmethod
    def get_member_by_phone(self, phone_number: str) -> Optional[Member]:
        """Get member by exact phone number."""
        pass

    @abstractmethod
    def get_member_by_email(self, email: str) -> Optional[Member]:
        """Get member by exact email."""
        pass

    @abstractmethod
    def list_members(self, group_id: Optional[str] = None) -> list[Member]:
        """List members alphabetically, optionally only those in a group."""
        pass

    @abstractmethod
    def search_members(self, term: str) -> list[Member]:
        """Case-insensitive substring search over name, phone and email."""
        pass

    @abstractmethod
    def delete_member(self, member_id: str) -> None:
        """Hard-delete a member."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        account_name: str,
        account_type: str,
        created_by: str,
        local_share: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> Account:
        """Create an active account."""
        pass

    @abstractmethod
    def update_account(self, account: Account) -> Account:
        """Persist all mutable account fields."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, account_name: str) -> Optional[Account]:
        """Get account by exact (case-sensitive) name."""
        pass

    @abstractmethod
    def list_accounts(self, active_only: bool = False) -> list[Account]:
        """List accounts alphabetically."""
        pass

    @abstractmethod
    def deactivate_account(self, account_id: str) -> Account:
        """Set is_active to False. Accounts are never hard-deleted."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        transaction_type: str,
        amount: Decimal,
        debit_account_id: str,
        created_by: str,
        transaction_date: Optional[datetime] = None,
        transaction_ref: Optional[str] = None,
        notes: Optional[str] = None,
        member_id: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction. transaction_date defaults to now."""
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction) -> Transaction:
        """Persist all mutable transaction fields."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str, with_related: bool = False) -> Transaction:
        """Get transaction by ID, optionally with debit account and member."""
        pass

    @abstractmethod
    def get_transaction_by_ref(self, transaction_ref: str) -> Optional[Transaction]:
        """Get transaction by exact reference code."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[str] = None,
        member_id: Optional[str] = None,
        transaction_type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List transactions by transaction_date descending, with optional filters.

        Args:
            account_id: Optional debit account filter
            member_id: Optional member filter
            transaction_type: Optional type filter
            start_date: Optional inclusive lower bound on transaction_date
            end_date: Optional inclusive upper bound on transaction_date
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Hard-delete a transaction. Child records are not touched."""
        pass

    # Receipt operations
    @abstractmethod
    def create_receipt(self, transaction_id: str, income_account_id: str, amount: Decimal) -> Receipt:
        """Create a receipt."""
        pass

    @abstractmethod
    def update_receipt(self, receipt: Receipt) -> Receipt:
        """Persist income account and amount."""
        pass

    @abstractmethod
    def get_receipt(self, receipt_id: str, with_related: bool = False) -> Receipt:
        """Get receipt by ID."""
        pass

    @abstractmethod
    def list_receipts(
        self,
        transaction_id: Optional[str] = None,
        account_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Receipt]:
        """List receipts by created_at descending, with optional filters."""
        pass

    @abstractmethod
    def delete_receipt(self, receipt_id: str) -> None:
        """Hard-delete a receipt."""
        pass

    @abstractmethod
    def get_total_receipts_by_account(
        self,
        account_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Decimal:
        """Sum receipt amounts for an income account; Decimal('0') when none match."""
        pass

    # Expenditure operations
    @abstractmethod
    def create_expenditure(
        self, transaction_id: str, particulars: str, bank_account_id: str, amount: Decimal
    ) -> Expenditure:
        """Create an expenditure."""
        pass

    @abstractmethod
    def update_expenditure(self, expenditure: Expenditure) -> Expenditure:
        """Persist particulars, bank account and amount."""
        pass

    @abstractmethod
    def get_expenditure(self, expenditure_id: str, with_related: bool = False) -> Expenditure:
        """Get expenditure by ID."""
        pass

    @abstractmethod
    def list_expenditures(
        self,
        transaction_id: Optional[str] = None,
        account_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Expenditure]:
        """List expenditures by created_at descending, with optional filters."""
        pass

    @abstractmethod
    def delete_expenditure(self, expenditure_id: str) -> None:
        """Hard-delete an expenditure."""
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self, transaction_id: str, particulars: str, credit_account_id: str, amount: Decimal
    ) -> Transfer:
        """Create a transfer."""
        pass

    @abstractmethod
    def update_transfer(self, transfer: Transfer) -> Transfer:
        """Persist particulars, credit account and amount."""
        pass

    @abstractmethod
    def get_transfer(self, transfer_id: str, with_related: bool = False) -> Transfer:
        """Get transfer by ID."""
        pass

    @abstractmethod
    def list_transfers(
        self,
        transaction_id: Optional[str] = None,
        account_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transfer]:
        """List transfers by created_at descending, with optional filters."""
        pass

    @abstractmethod
    def delete_transfer(self, transfer_id: str) -> None:
        """Hard-delete a transfer."""
        pass

    @abstractmethod
    def get_total_transfers_by_credit_account(
        self,
        account_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Decimal:
        """Sum transfer amounts for a credit account; Decimal('0') when none match."""
        pass
