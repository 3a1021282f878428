"""Account domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

import structlog

from churchbook.domain.entities import Account as AccountEntity
from churchbook.domain.errors import (
    AccountNotFoundError,
    DuplicateNameError,
    NotFoundError,
    account_not_found,
    duplicate_value,
)
from churchbook.domain.validation import (
    require_text,
    validate_account_type,
    validate_local_share,
)

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)

MAX_ACCOUNT_NAME = 100


class AccountService:
    """Service for managing ledger accounts."""

    def __init__(self, db: "Database"):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        account_name: str,
        account_type: str,
        created_by: str,
        local_share: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> AccountEntity:
        """Create a new, active account.

        Args:
            account_name: Unique account name
            account_type: One of Bank, Expense, Income, Asset, liability
            created_by: ID of the creating user
            local_share: Optional fraction between 0 and 1
            notes: Optional notes

        Returns:
            Created account entity

        Raises:
            ValidationError: If the name or type is invalid
            DuplicateNameError: If account name already exists
        """
        account_name = require_text("Account name", account_name, MAX_ACCOUNT_NAME)
        validate_account_type(account_type)
        local_share = validate_local_share(local_share)

        # Check if account with same name exists
        if self.db.get_account_by_name(account_name) is not None:
            raise DuplicateNameError(duplicate_value("Account", "name", account_name))

        account = self.db.create_account(
            account_name=account_name,
            account_type=account_type,
            created_by=created_by,
            local_share=local_share,
            notes=notes,
        )
        logger.info("account_created", account_id=account.id, account_name=account_name)
        return account

    def get_account(self, account_id: str) -> AccountEntity:
        """Get account by ID.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        try:
            return self.db.get_account(account_id)
        except NotFoundError:
            raise AccountNotFoundError(account_not_found(account_id))

    def list_accounts(self, active_only: bool = False) -> list[AccountEntity]:
        """List accounts alphabetically.

        Args:
            active_only: Only include active accounts

        Returns:
            List of account entities
        """
        return self.db.list_accounts(active_only=active_only)

    def update_account(
        self,
        account_id: str,
        account_name: Optional[str] = None,
        account_type: Optional[str] = None,
        local_share: Optional[Decimal] = None,
        notes: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> AccountEntity:
        """Update account fields. Only supplied fields change.

        Args:
            account_id: Account ID to update
            account_name: Optional new name
            account_type: Optional new type
            local_share: Optional new local share
            notes: Optional new notes
            is_active: Optional active flag (True reactivates a deactivated account)

        Returns:
            Updated account entity

        Raises:
            AccountNotFoundError: If account doesn't exist
            ValidationError: If a changed field is invalid
            DuplicateNameError: If the new name is taken by another account
        """
        account = self.get_account(account_id)
        changes = {}

        if account_name is not None:
            account_name = require_text("Account name", account_name, MAX_ACCOUNT_NAME)
            if account_name != account.account_name:
                # Check for duplicate names (excluding current account)
                existing = self.db.get_account_by_name(account_name)
                if existing is not None and existing.id != account_id:
                    raise DuplicateNameError(duplicate_value("Account", "name", account_name))
            changes["account_name"] = account_name

        if account_type is not None:
            validate_account_type(account_type)
            changes["account_type"] = account_type

        if local_share is not None:
            changes["local_share"] = validate_local_share(local_share)

        if notes is not None:
            changes["notes"] = notes

        if is_active is not None:
            changes["is_active"] = bool(is_active)

        updated = self.db.update_account(replace(account, **changes))
        logger.info("account_updated", account_id=account_id, fields=sorted(changes))
        return updated

    def deactivate_account(self, account_id: str) -> AccountEntity:
        """Deactivate an account. Accounts are never hard-deleted.

        Deactivating an already inactive account succeeds and leaves it
        inactive.

        Raises:
            AccountNotFoundError: If account doesn't exist
        """
        # Verify account exists
        self.get_account(account_id)

        account = self.db.deactivate_account(account_id)
        logger.info("account_deactivated", account_id=account_id)
        return account
