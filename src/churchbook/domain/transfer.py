"""Transfer domain service."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog

from churchbook.domain.entities import Transfer as TransferEntity
from churchbook.domain.errors import (
    AccountNotFoundError,
    NotFoundError,
    TransactionNotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from churchbook.domain.validation import require_text, validate_amount, validate_date_range

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)

MAX_PARTICULARS = 255


class TransferService:
    """Service for inter-account movements credited to a second account."""

    def __init__(self, db: "Database"):
        """Initialize transfer service.

        Args:
            db: Database instance
        """
        self.db = db

    def _verify_transaction(self, transaction_id: str) -> None:
        try:
            self.db.get_transaction(transaction_id)
        except NotFoundError:
            raise TransactionNotFoundError(transaction_not_found(transaction_id))

    def _verify_account(self, account_id: str) -> None:
        try:
            self.db.get_account(account_id)
        except NotFoundError:
            raise AccountNotFoundError(account_not_found(account_id))

    def create_transfer(
        self,
        transaction_id: str,
        particulars: str,
        credit_account_id: str,
        amount: Decimal,
    ) -> TransferEntity:
        """Create a transfer for an existing transaction.

        Args:
            transaction_id: Parent transaction ID
            particulars: Description of the movement
            credit_account_id: Account credited
            amount: Transfer amount, must be greater than zero

        Returns:
            Created transfer entity

        Raises:
            ValidationError: If particulars are missing or amount is not positive
            TransactionNotFoundError: If the transaction doesn't exist
            AccountNotFoundError: If the credit account doesn't exist
        """
        particulars = require_text("Particulars", particulars, MAX_PARTICULARS)
        amount = validate_amount(amount)
        if not transaction_id:
            raise ValidationError("Transaction is required")
        if not credit_account_id:
            raise ValidationError("Account is required")

        # Verify transaction exists
        self._verify_transaction(transaction_id)

        # Verify credit account exists
        self._verify_account(credit_account_id)

        transfer = self.db.create_transfer(
            transaction_id=transaction_id,
            particulars=particulars,
            credit_account_id=credit_account_id,
            amount=amount,
        )
        logger.info(
            "transfer_created",
            transfer_id=transfer.id,
            transaction_id=transaction_id,
            amount=str(amount),
        )
        return transfer

    def get_transfer(self, transfer_id: str, with_related: bool = False) -> TransferEntity:
        """Get transfer by ID.

        Raises:
            NotFoundError: If transfer doesn't exist
        """
        return self.db.get_transfer(transfer_id, with_related=with_related)

    def list_transfers(self) -> list[TransferEntity]:
        return self.db.list_transfers()

    def list_transfers_by_transaction(self, transaction_id: str) -> list[TransferEntity]:
        return self.db.list_transfers(transaction_id=transaction_id)

    def list_transfers_by_credit_account(self, account_id: str) -> list[TransferEntity]:
        return self.db.list_transfers(account_id=account_id)

    def list_transfers_by_date_range(self, start_date: datetime, end_date: datetime) -> list[TransferEntity]:
        """List transfers created within inclusive bounds.

        Raises:
            ValidationError: If a bound is missing or start is after end
        """
        start_date, end_date = validate_date_range(start_date, end_date)
        return self.db.list_transfers(start_date=start_date, end_date=end_date)

    def get_total_transfers_by_credit_account(self, account_id: str) -> Decimal:
        """Sum all transfers credited to an account. Returns 0 when there are none."""
        return self.db.get_total_transfers_by_credit_account(account_id)

    def get_total_transfers_by_date_range(
        self, account_id: str, start_date: datetime, end_date: datetime
    ) -> Decimal:
        """Sum transfers credited to an account within inclusive bounds.

        Raises:
            ValidationError: If a bound is missing or start is after end
        """
        start_date, end_date = validate_date_range(start_date, end_date)
        return self.db.get_total_transfers_by_credit_account(
            account_id, start_date=start_date, end_date=end_date
        )

    def update_transfer(
        self,
        transfer_id: str,
        particulars: Optional[str] = None,
        credit_account_id: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> TransferEntity:
        """Update transfer fields. Only supplied fields change.

        Raises:
            NotFoundError: If transfer doesn't exist
            ValidationError: If a changed field is invalid
            AccountNotFoundError: If the new credit account doesn't exist
        """
        transfer = self.get_transfer(transfer_id)
        changes = {}

        if particulars is not None:
            changes["particulars"] = require_text("Particulars", particulars, MAX_PARTICULARS)

        if credit_account_id is not None and credit_account_id != transfer.credit_account_id:
            self._verify_account(credit_account_id)
            changes["credit_account_id"] = credit_account_id

        if amount is not None:
            changes["amount"] = validate_amount(amount)

        updated = self.db.update_transfer(replace(transfer, **changes))
        logger.info("transfer_updated", transfer_id=transfer_id, fields=sorted(changes))
        return updated

    def delete_transfer(self, transfer_id: str) -> None:
        """Delete a transfer.

        Raises:
            NotFoundError: If transfer doesn't exist
        """
        self.db.delete_transfer(transfer_id)
        logger.info("transfer_deleted", transfer_id=transfer_id)
