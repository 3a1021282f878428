"""Expenditure domain service."""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog

from churchbook.domain.entities import Expenditure as ExpenditureEntity
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


class ExpenditureService:
    """Service for expense lines paid out of a bank account."""

    def __init__(self, db: "Database"):
        """Initialize expenditure service.

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

    def create_expenditure(
        self,
        transaction_id: str,
        particulars: str,
        bank_account_id: str,
        amount: Decimal,
    ) -> ExpenditureEntity:
        """Create an expenditure for an existing transaction.

        Args:
            transaction_id: Parent transaction ID
            particulars: Description of the expense
            bank_account_id: Bank account paid from
            amount: Expenditure amount, must be greater than zero

        Returns:
            Created expenditure entity

        Raises:
            ValidationError: If particulars are missing or amount is not positive
            TransactionNotFoundError: If the transaction doesn't exist
            AccountNotFoundError: If the bank account doesn't exist
        """
        particulars = require_text("Particulars", particulars, MAX_PARTICULARS)
        amount = validate_amount(amount)
        if not transaction_id:
            raise ValidationError("Transaction is required")
        if not bank_account_id:
            raise ValidationError("Account is required")

        # Verify transaction exists
        self._verify_transaction(transaction_id)

        # Verify bank account exists
        self._verify_account(bank_account_id)

        expenditure = self.db.create_expenditure(
            transaction_id=transaction_id,
            particulars=particulars,
            bank_account_id=bank_account_id,
            amount=amount,
        )
        logger.info(
            "expenditure_created",
            expenditure_id=expenditure.id,
            transaction_id=transaction_id,
            amount=str(amount),
        )
        return expenditure

    def get_expenditure(self, expenditure_id: str, with_related: bool = False) -> ExpenditureEntity:
        """Get expenditure by ID.

        Raises:
            NotFoundError: If expenditure doesn't exist
        """
        return self.db.get_expenditure(expenditure_id, with_related=with_related)

    def list_expenditures(self) -> list[ExpenditureEntity]:
        return self.db.list_expenditures()

    def list_expenditures_by_transaction(self, transaction_id: str) -> list[ExpenditureEntity]:
        return self.db.list_expenditures(transaction_id=transaction_id)

    def list_expenditures_by_account(self, account_id: str) -> list[ExpenditureEntity]:
        return self.db.list_expenditures(account_id=account_id)

    def list_expenditures_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> list[ExpenditureEntity]:
        """List expenditures created within inclusive bounds.

        Raises:
            ValidationError: If a bound is missing or start is after end
        """
        start_date, end_date = validate_date_range(start_date, end_date)
        return self.db.list_expenditures(start_date=start_date, end_date=end_date)

    def update_expenditure(
        self,
        expenditure_id: str,
        particulars: Optional[str] = None,
        bank_account_id: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> ExpenditureEntity:
        """Update expenditure fields. Only supplied fields change.

        Raises:
            NotFoundError: If expenditure doesn't exist
            ValidationError: If a changed field is invalid
            AccountNotFoundError: If the new bank account doesn't exist
        """
        expenditure = self.get_expenditure(expenditure_id)
        changes = {}

        if particulars is not None:
            changes["particulars"] = require_text("Particulars", particulars, MAX_PARTICULARS)

        if bank_account_id is not None and bank_account_id != expenditure.bank_account_id:
            self._verify_account(bank_account_id)
            changes["bank_account_id"] = bank_account_id

        if amount is not None:
            changes["amount"] = validate_amount(amount)

        updated = self.db.update_expenditure(replace(expenditure, **changes))
        logger.info("expenditure_updated", expenditure_id=expenditure_id, fields=sorted(changes))
        return updated

    def delete_expenditure(self, expenditure_id: str) -> None:
        """Delete an expenditure.

        Raises:
            NotFoundError: If expenditure doesn't exist
        """
        self.db.delete_expenditure(expenditure_id)
        logger.info("expenditure_deleted", expenditure_id=expenditure_id)
