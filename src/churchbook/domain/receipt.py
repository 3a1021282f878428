"""Receipt domain service."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog

from churchbook.domain.entities import Receipt as ReceiptEntity
from churchbook.domain.errors import (
    AccountNotFoundError,
    NotFoundError,
    TransactionNotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from churchbook.domain.validation import validate_amount, validate_date_range

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)


class ReceiptService:
    """Service for income lines recorded against a transaction."""

    def __init__(self, db: "Database"):
        """Initialize receipt service.

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

    def create_receipt(self, transaction_id: str, income_account_id: str, amount: Decimal) -> ReceiptEntity:
        """Create a receipt for an existing transaction.

        The parent transaction must already exist; the receipt is stored on
        its own and the two are not committed together.

        Args:
            transaction_id: Parent transaction ID
            income_account_id: Income account credited
            amount: Receipt amount, must be greater than zero

        Returns:
            Created receipt entity

        Raises:
            InvalidAmountError: If amount is missing or not positive
            TransactionNotFoundError: If the transaction doesn't exist
            AccountNotFoundError: If the income account doesn't exist
        """
        amount = validate_amount(amount)
        if not transaction_id:
            raise ValidationError("Transaction is required")
        if not income_account_id:
            raise ValidationError("Account is required")

        # Verify transaction exists
        self._verify_transaction(transaction_id)

        # Verify income account exists
        self._verify_account(income_account_id)

        receipt = self.db.create_receipt(
            transaction_id=transaction_id,
            income_account_id=income_account_id,
            amount=amount,
        )
        logger.info(
            "receipt_created",
            receipt_id=receipt.id,
            transaction_id=transaction_id,
            amount=str(amount),
        )
        return receipt

    def get_receipt(self, receipt_id: str, with_related: bool = False) -> ReceiptEntity:
        """Get receipt by ID.

        Raises:
            NotFoundError: If receipt doesn't exist
        """
        return self.db.get_receipt(receipt_id, with_related=with_related)

    def list_receipts(self) -> list[ReceiptEntity]:
        return self.db.list_receipts()

    def list_receipts_by_transaction(self, transaction_id: str) -> list[ReceiptEntity]:
        return self.db.list_receipts(transaction_id=transaction_id)

    def list_receipts_by_account(self, account_id: str) -> list[ReceiptEntity]:
        return self.db.list_receipts(account_id=account_id)

    def list_receipts_by_date_range(self, start_date: datetime, end_date: datetime) -> list[ReceiptEntity]:
        """List receipts created within inclusive bounds.

        Raises:
            ValidationError: If a bound is missing or start is after end
        """
        start_date, end_date = validate_date_range(start_date, end_date)
        return self.db.list_receipts(start_date=start_date, end_date=end_date)

    def get_total_receipts_by_account(self, account_id: str) -> Decimal:
        """Sum all receipts for an income account. Returns 0 when there are none."""
        return self.db.get_total_receipts_by_account(account_id)

    def get_total_receipts_by_date_range(
        self, account_id: str, start_date: datetime, end_date: datetime
    ) -> Decimal:
        """Sum receipts for an income account within inclusive bounds.

        Raises:
            ValidationError: If a bound is missing or start is after end
        """
        start_date, end_date = validate_date_range(start_date, end_date)
        return self.db.get_total_receipts_by_account(
            account_id, start_date=start_date, end_date=end_date
        )

    def update_receipt(
        self,
        receipt_id: str,
        income_account_id: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> ReceiptEntity:
        """Update receipt fields. Only supplied fields change.

        Raises:
            NotFoundError: If receipt doesn't exist
            InvalidAmountError: If the new amount is not positive
            AccountNotFoundError: If the new income account doesn't exist
        """
        receipt = self.get_receipt(receipt_id)
        changes = {}

        if income_account_id is not None and income_account_id != receipt.income_account_id:
            self._verify_account(income_account_id)
            changes["income_account_id"] = income_account_id

        if amount is not None:
            changes["amount"] = validate_amount(amount)

        updated = self.db.update_receipt(replace(receipt, **changes))
        logger.info("receipt_updated", receipt_id=receipt_id, fields=sorted(changes))
        return updated

    def delete_receipt(self, receipt_id: str) -> None:
        """Delete a receipt.

        Raises:
            NotFoundError: If receipt doesn't exist
        """
        self.db.delete_receipt(receipt_id)
        logger.info("receipt_deleted", receipt_id=receipt_id)
