"""Members group domain service."""

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Optional

import structlog

from churchbook.domain.entities import MembersGroup as GroupEntity
from churchbook.domain.errors import (
    DuplicateNameError,
    GroupNotEmptyError,
    GroupNotFoundError,
    NotFoundError,
    duplicate_value,
    group_delete_blocked,
    group_not_found,
)
from churchbook.domain.validation import require_text

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)

MAX_GROUP_NAME = 50


class MembersGroupService:
    """Service for managing member groups."""

    def __init__(self, db: "Database"):
        """Initialize members group service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_group(self, group_name: str, created_by: str, notes: Optional[str] = None) -> GroupEntity:
        """Create a members group.

        Args:
            group_name: Unique group name
            created_by: ID of the creating user
            notes: Optional notes

        Returns:
            Created group entity

        Raises:
            ValidationError: If the name is missing or too long
            DuplicateNameError: If group name already exists
        """
        group_name = require_text("Group name", group_name, MAX_GROUP_NAME)

        if self.db.get_group_by_name(group_name) is not None:
            raise DuplicateNameError(duplicate_value("Group", "name", group_name))

        group = self.db.create_group(group_name=group_name, created_by=created_by, notes=notes)
        logger.info("group_created", group_id=group.id, group_name=group_name)
        return group

    def get_group(self, group_id: str) -> GroupEntity:
        """Get group by ID.

        Raises:
            GroupNotFoundError: If group doesn't exist
        """
        try:
            return self.db.get_group(group_id)
        except NotFoundError:
            raise GroupNotFoundError(group_not_found(group_id))

    def get_group_by_name(self, group_name: str) -> GroupEntity:
        """Get group by exact name.

        Raises:
            GroupNotFoundError: If no group has that name
        """
        group = self.db.get_group_by_name(group_name)
        if group is None:
            raise GroupNotFoundError(f"Group '{group_name}' not found")
        return group

    def list_groups(self) -> list[GroupEntity]:
        return self.db.list_groups()

    def list_groups_with_member_count(self) -> list[dict[str, Any]]:
        """List groups with how many members reference each.

        Returns:
            List of dicts with id, group_name, notes, member_count, created_at, updated_at
        """
        return self.db.list_groups_with_member_count()

    def get_group_member_count(self, group_id: str) -> int:
        """Count members in a group.

        Raises:
            GroupNotFoundError: If group doesn't exist
        """
        # Verify group exists
        self.get_group(group_id)
        return self.db.count_members_in_group(group_id)

    def update_group(
        self,
        group_id: str,
        group_name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> GroupEntity:
        """Update group name and/or notes.

        Raises:
            GroupNotFoundError: If group doesn't exist
            DuplicateNameError: If the new name is taken by another group
        """
        group = self.get_group(group_id)
        changes = {}

        if group_name is not None:
            group_name = require_text("Group name", group_name, MAX_GROUP_NAME)
            if group_name != group.group_name:
                existing = self.db.get_group_by_name(group_name)
                if existing is not None and existing.id != group_id:
                    raise DuplicateNameError(duplicate_value("Group", "name", group_name))
            changes["group_name"] = group_name

        if notes is not None:
            changes["notes"] = notes

        updated = self.db.update_group(replace(group, **changes))
        logger.info("group_updated", group_id=group_id, fields=sorted(changes))
        return updated

    def delete_group(self, group_id: str) -> None:
        """Delete a group that no member references.

        Args:
            group_id: Group ID to delete

        Raises:
            GroupNotFoundError: If group doesn't exist
            GroupNotEmptyError: If at least one member is still in the group
        """
        # Validate group exists
        self.get_group(group_id)

        # Check for members still in the group
        member_count = self.db.count_members_in_group(group_id)
        if member_count > 0:
            raise GroupNotEmptyError(group_delete_blocked(group_id, member_count))

        self.db.delete_group(group_id)
        logger.info("group_deleted", group_id=group_id)
