"""Transaction domain service."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog

from churchbook.domain.entities import Transaction as TransactionEntity
from churchbook.domain.errors import (
    AccountNotFoundError,
    DuplicateReferenceError,
    MemberNotFoundError,
    NotFoundError,
    TransactionNotFoundError,
    ValidationError,
    account_not_found,
    duplicate_value,
    member_not_found,
    transaction_not_found,
)
from churchbook.domain.validation import (
    check_length,
    validate_amount,
    validate_date_range,
    validate_transaction_type,
)
from churchbook.utils.time_utils import to_naive_utc, utcnow

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)

MAX_TRANSACTION_REF = 20


class TransactionService:
    """Service for managing parent ledger transactions.

    Child records (receipts, expenditures, transfers) are created by their
    own services in separate calls; nothing here touches them.
    """

    def __init__(self, db: "Database"):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _verify_account(self, account_id: str) -> None:
        try:
            self.db.get_account(account_id)
        except NotFoundError:
            raise AccountNotFoundError(account_not_found(account_id))

    def _verify_member(self, member_id: str) -> None:
        try:
            self.db.get_member(member_id)
        except NotFoundError:
            raise MemberNotFoundError(member_not_found(member_id))

    def _check_reference(self, transaction_ref: str, exclude_id: Optional[str] = None) -> None:
        check_length("Transaction reference", transaction_ref, MAX_TRANSACTION_REF)
        existing = self.db.get_transaction_by_ref(transaction_ref)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateReferenceError(
                duplicate_value("Transaction", "reference", transaction_ref)
            )

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
    ) -> TransactionEntity:
        """Create a transaction.

        Args:
            transaction_type: One of receipts, withdrawal, expenses, transfer
            amount: Transaction amount, must be greater than zero
            debit_account_id: Account the amount is drawn against
            created_by: ID of the creating user
            transaction_date: Optional date; defaults to now
            transaction_ref: Optional unique reference code
            notes: Optional notes
            member_id: Optional member the transaction belongs to

        Returns:
            Created transaction entity

        Raises:
            InvalidTransactionTypeError: If the type is not recognised
            InvalidAmountError: If amount is missing or not positive
            AccountNotFoundError: If the debit account doesn't exist
            MemberNotFoundError: If member_id doesn't resolve
            DuplicateReferenceError: If the reference code is already used
        """
        validate_transaction_type(transaction_type)
        amount = validate_amount(amount)
        if not debit_account_id:
            raise ValidationError("Debit account is required")

        # Verify debit account exists
        self._verify_account(debit_account_id)

        # Verify member if provided
        if member_id:
            self._verify_member(member_id)
        else:
            member_id = None

        # Check for duplicate reference
        if transaction_ref:
            self._check_reference(transaction_ref)
        else:
            transaction_ref = None

        if transaction_date is None:
            transaction_date = utcnow()

        transaction = self.db.create_transaction(
            transaction_type=transaction_type,
            amount=amount,
            debit_account_id=debit_account_id,
            created_by=created_by,
            transaction_date=to_naive_utc(transaction_date),
            transaction_ref=transaction_ref,
            notes=notes,
            member_id=member_id,
        )
        logger.info(
            "transaction_created",
            transaction_id=transaction.id,
            transaction_type=transaction_type,
            amount=str(amount),
        )
        return transaction

    def get_transaction(self, transaction_id: str, with_related: bool = False) -> TransactionEntity:
        """Get transaction by ID, optionally with debit account and member loaded.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist
        """
        try:
            return self.db.get_transaction(transaction_id, with_related=with_related)
        except NotFoundError:
            raise TransactionNotFoundError(transaction_not_found(transaction_id))

    def get_transaction_by_ref(self, transaction_ref: str) -> TransactionEntity:
        """Get transaction by reference code.

        Raises:
            TransactionNotFoundError: If no transaction has that reference
        """
        transaction = self.db.get_transaction_by_ref(transaction_ref)
        if transaction is None:
            raise TransactionNotFoundError(f"Transaction with reference '{transaction_ref}' not found")
        return transaction

    def list_transactions(self) -> list[TransactionEntity]:
        """List all transactions, most recent transaction date first."""
        return self.db.list_transactions()

    def list_transactions_by_account(self, account_id: str) -> list[TransactionEntity]:
        return self.db.list_transactions(account_id=account_id)

    def list_transactions_by_member(self, member_id: str) -> list[TransactionEntity]:
        return self.db.list_transactions(member_id=member_id)

    def list_transactions_by_type(self, transaction_type: str) -> list[TransactionEntity]:
        """List transactions of one type.

        Raises:
            InvalidTransactionTypeError: If the type is not recognised
        """
        validate_transaction_type(transaction_type)
        return self.db.list_transactions(transaction_type=transaction_type)

    def list_transactions_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> list[TransactionEntity]:
        """List transactions whose transaction date falls within inclusive bounds.

        Raises:
            ValidationError: If a bound is missing or start is after end
        """
        start_date, end_date = validate_date_range(start_date, end_date)
        return self.db.list_transactions(start_date=start_date, end_date=end_date)

    def update_transaction(
        self,
        transaction_id: str,
        transaction_type: Optional[str] = None,
        amount: Optional[Decimal] = None,
        debit_account_id: Optional[str] = None,
        transaction_date: Optional[datetime] = None,
        transaction_ref: Optional[str] = None,
        notes: Optional[str] = None,
        member_id: Optional[str] = None,
    ) -> TransactionEntity:
        """Update transaction fields. Only supplied fields change.

        An empty-string member_id detaches the member and an empty-string
        transaction_ref clears the reference.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist
            ValidationError: If a changed field is invalid
            AccountNotFoundError: If the new debit account doesn't exist
            MemberNotFoundError: If the new member doesn't exist
            DuplicateReferenceError: If the new reference is used elsewhere
        """
        transaction = self.get_transaction(transaction_id)
        changes = {}

        if transaction_type is not None:
            validate_transaction_type(transaction_type)
            changes["transaction_type"] = transaction_type

        if amount is not None:
            changes["amount"] = validate_amount(amount)

        if debit_account_id is not None and debit_account_id != transaction.debit_account_id:
            self._verify_account(debit_account_id)
            changes["debit_account_id"] = debit_account_id

        if transaction_date is not None:
            changes["transaction_date"] = to_naive_utc(transaction_date)

        if transaction_ref == "":
            changes["transaction_ref"] = None
        elif transaction_ref is not None and transaction_ref != transaction.transaction_ref:
            self._check_reference(transaction_ref, exclude_id=transaction_id)
            changes["transaction_ref"] = transaction_ref

        if notes is not None:
            changes["notes"] = notes

        if member_id is not None:
            if member_id == "":
                changes["member_id"] = None
            else:
                self._verify_member(member_id)
                changes["member_id"] = member_id

        updated = self.db.update_transaction(replace(transaction, **changes))
        logger.info("transaction_updated", transaction_id=transaction_id, fields=sorted(changes))
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction. Child records are left in place.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist
        """
        # Verify transaction exists
        self.get_transaction(transaction_id)

        self.db.delete_transaction(transaction_id)
        logger.info("transaction_deleted", transaction_id=transaction_id)
