"""Member domain service."""

from dataclasses import replace
from typing import TYPE_CHECKING, Optional

import structlog

from churchbook.domain.entities import Member as MemberEntity
from churchbook.domain.errors import (
    DuplicateEmailError,
    DuplicatePhoneError,
    GroupNotFoundError,
    MemberNotFoundError,
    NotFoundError,
    ValidationError,
    duplicate_value,
    group_not_found,
    member_not_found,
)
from churchbook.domain.validation import (
    require_text,
    validate_email,
    validate_phone,
)

if TYPE_CHECKING:
    from churchbook.database.base import Database

logger = structlog.get_logger(__name__)

MAX_FULL_NAME = 100


class MemberService:
    """Service for managing church members."""

    def __init__(self, db: "Database"):
        """Initialize member service.

        Args:
            db: Database instance
        """
        self.db = db

    def _verify_group(self, group_id: str) -> None:
        try:
            self.db.get_group(group_id)
        except NotFoundError:
            raise GroupNotFoundError(group_not_found(group_id))

    def create_member(
        self,
        full_name: str,
        phone_number: str,
        created_by: str,
        email: Optional[str] = None,
        notes: Optional[str] = None,
        group_id: Optional[str] = None,
    ) -> MemberEntity:
        """Create a member.

        Args:
            full_name: Member's full name
            phone_number: Unique phone number
            created_by: ID of the creating user
            email: Optional unique email address
            notes: Optional notes
            group_id: Optional group the member belongs to

        Returns:
            Created member entity

        Raises:
            InvalidPhoneError: If the phone number is malformed
            InvalidEmailError: If the email is malformed
            DuplicatePhoneError: If the phone number is already registered
            DuplicateEmailError: If the email is already registered
            GroupNotFoundError: If group_id doesn't resolve
        """
        full_name = require_text("Full name", full_name, MAX_FULL_NAME)
        if not phone_number:
            raise ValidationError("Phone number is required")
        validate_phone(phone_number)
        if email:
            validate_email(email)
        else:
            email = None

        if self.db.get_member_by_phone(phone_number) is not None:
            raise DuplicatePhoneError(duplicate_value("Member", "phone number", phone_number))

        if email is not None and self.db.get_member_by_email(email) is not None:
            raise DuplicateEmailError(duplicate_value("Member", "email", email))

        # Verify group if provided
        if group_id:
            self._verify_group(group_id)
        else:
            group_id = None

        member = self.db.create_member(
            full_name=full_name,
            phone_number=phone_number,
            created_by=created_by,
            email=email,
            notes=notes,
            group_id=group_id,
        )
        logger.info("member_created", member_id=member.id, group_id=group_id)
        return member

    def get_member(self, member_id: str, with_related: bool = False) -> MemberEntity:
        """Get member by ID, optionally with the group loaded.

        Raises:
            MemberNotFoundError: If member doesn't exist
        """
        try:
            return self.db.get_member(member_id, with_related=with_related)
        except NotFoundError:
            raise MemberNotFoundError(member_not_found(member_id))

    def get_member_by_phone(self, phone_number: str) -> MemberEntity:
        """Get member by phone number.

        Raises:
            MemberNotFoundError: If no member has that phone number
        """
        member = self.db.get_member_by_phone(phone_number)
        if member is None:
            raise MemberNotFoundError(f"Member with phone number '{phone_number}' not found")
        return member

    def get_member_by_email(self, email: str) -> MemberEntity:
        """Get member by email.

        Raises:
            MemberNotFoundError: If no member has that email
        """
        member = self.db.get_member_by_email(email)
        if member is None:
            raise MemberNotFoundError(f"Member with email '{email}' not found")
        return member

    def list_members(self) -> list[MemberEntity]:
        return self.db.list_members()

    def list_members_by_group(self, group_id: str) -> list[MemberEntity]:
        """List members of a group.

        Raises:
            GroupNotFoundError: If group doesn't exist
        """
        self._verify_group(group_id)
        return self.db.list_members(group_id=group_id)

    def search_members(self, term: str) -> list[MemberEntity]:
        """Search members by name, phone or email (case-insensitive, contains).

        Raises:
            ValidationError: If the search term is blank
        """
        if term is None or not term.strip():
            raise ValidationError("Search term is required")
        return self.db.search_members(term.strip())

    def update_member(
        self,
        member_id: str,
        full_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
        group_id: Optional[str] = None,
    ) -> MemberEntity:
        """Update member fields. Only supplied fields change.

        An empty-string group_id removes the member from its group and an
        empty-string email clears the email.

        Raises:
            MemberNotFoundError: If member doesn't exist
            ValidationError: If a changed field is invalid
            DuplicatePhoneError: If the new phone number belongs to another member
            DuplicateEmailError: If the new email belongs to another member
            GroupNotFoundError: If the new group doesn't exist
        """
        member = self.get_member(member_id)
        changes = {}

        if full_name is not None:
            changes["full_name"] = require_text("Full name", full_name, MAX_FULL_NAME)

        if phone_number is not None and phone_number != member.phone_number:
            validate_phone(phone_number)
            existing = self.db.get_member_by_phone(phone_number)
            if existing is not None and existing.id != member_id:
                raise DuplicatePhoneError(duplicate_value("Member", "phone number", phone_number))
            changes["phone_number"] = phone_number

        if email == "":
            changes["email"] = None
        elif email is not None and email != member.email:
            validate_email(email)
            existing = self.db.get_member_by_email(email)
            if existing is not None and existing.id != member_id:
                raise DuplicateEmailError(duplicate_value("Member", "email", email))
            changes["email"] = email

        if notes is not None:
            changes["notes"] = notes

        if group_id is not None:
            if group_id == "":
                changes["group_id"] = None
            else:
                self._verify_group(group_id)
                changes["group_id"] = group_id

        updated = self.db.update_member(replace(member, **changes))
        logger.info("member_updated", member_id=member_id, fields=sorted(changes))
        return updated

    def delete_member(self, member_id: str) -> None:
        """Delete a member.

        Raises:
            MemberNotFoundError: If member doesn't exist
        """
        # Verify member exists
        self.get_member(member_id)

        self.db.delete_member(member_id)
        logger.info("member_deleted", member_id=member_id)
