"""Tests for member service."""

import pytest

from churchbook.domain.errors import (
    DuplicateEmailError,
    DuplicatePhoneError,
    GroupNotFoundError,
    InvalidEmailError,
    InvalidPhoneError,
    MemberNotFoundError,
    ValidationError,
)

from conftest import CREATOR


def test_create_member(member_service):
    """Test create member."""
    member = member_service.create_member(
        full_name="John Kamau", phone_number="+254712345678", created_by=CREATOR
    )

    assert member.id
    assert member.full_name == "John Kamau"
    assert member.phone_number == "+254712345678"
    assert member.email is None
    assert member.group_id is None
    assert member.created_by == CREATOR


def test_create_member_round_trip(member_service, sample_group):
    """Test create member round trip."""
    created = member_service.create_member(
        full_name="Mary Achieng",
        phone_number="0722 000 111",
        created_by=CREATOR,
        email="mary@example.com",
        notes="Choir",
        group_id=sample_group.id,
    )

    fetched = member_service.get_member(created.id)
    assert fetched == created


@pytest.mark.parametrize("phone", ["abc", "12345", "+254-712-345-678-999-000", "07123x5678"])
def test_create_member_invalid_phone(member_service, phone):
    """Test create member invalid phone."""
    with pytest.raises(InvalidPhoneError):
        member_service.create_member(full_name="Bad Phone", phone_number=phone, created_by=CREATOR)


def test_invalid_phone_is_validation_error(member_service):
    """Test invalid phone is validation error."""
    with pytest.raises(ValidationError):
        member_service.create_member(full_name="Bad Phone", phone_number="abc", created_by=CREATOR)


def test_create_member_requires_phone(member_service):
    """Test create member requires phone."""
    with pytest.raises(ValidationError, match="Phone number is required"):
        member_service.create_member(full_name="No Phone", phone_number="", created_by=CREATOR)


@pytest.mark.parametrize("phone", ["+254712345678", "(020) 555-1234", "0712 345 678"])
def test_create_member_accepts_phone_formats(member_service, phone):
    """Test create member accepts phone formats."""
    member = member_service.create_member(full_name="Ok Phone", phone_number=phone, created_by=CREATOR)
    assert member.phone_number == phone


def test_create_member_duplicate_phone(member_service, sample_member):
    """Test create member duplicate phone."""
    with pytest.raises(DuplicatePhoneError, match="already exists"):
        member_service.create_member(
            full_name="Someone Else", phone_number=sample_member.phone_number, created_by=CREATOR
        )


def test_create_member_duplicate_email(member_service, sample_member):
    """Test create member duplicate email."""
    with pytest.raises(DuplicateEmailError):
        member_service.create_member(
            full_name="Someone Else",
            phone_number="0700000001",
            created_by=CREATOR,
            email=sample_member.email,
        )


def test_create_member_invalid_email(member_service):
    """Test create member invalid email."""
    with pytest.raises(InvalidEmailError):
        member_service.create_member(
            full_name="Bad Email", phone_number="0700000001", created_by=CREATOR, email="not-an-email"
        )


def test_create_member_empty_email_stored_as_none(member_service):
    """Test create member empty email stored as none."""
    member = member_service.create_member(
        full_name="No Email", phone_number="0700000001", created_by=CREATOR, email=""
    )
    assert member.email is None


def test_members_without_email_do_not_conflict(member_service):
    """Test members without email do not conflict."""
    member_service.create_member(full_name="A", phone_number="0700000001", created_by=CREATOR)
    member_service.create_member(full_name="B", phone_number="0700000002", created_by=CREATOR)
    assert len(member_service.list_members()) == 2


def test_create_member_unknown_group(member_service):
    """Test create member unknown group."""
    with pytest.raises(GroupNotFoundError):
        member_service.create_member(
            full_name="Lost", phone_number="0700000001", created_by=CREATOR, group_id="missing"
        )


def test_get_member_not_found(member_service):
    """Test get member not found."""
    with pytest.raises(MemberNotFoundError):
        member_service.get_member("missing")


def test_get_member_with_group(member_service, sample_member, sample_group):
    """Test get member with group."""
    member = member_service.get_member(sample_member.id, with_related=True)
    assert member.group is not None
    assert member.group.id == sample_group.id
    assert member.group.group_name == "Youth"


def test_get_member_without_related_has_no_group(member_service, sample_member):
    """Test get member without related has no group."""
    assert member_service.get_member(sample_member.id).group is None


def test_get_member_by_phone(member_service, sample_member):
    """Test get member by phone."""
    assert member_service.get_member_by_phone("+254712345678").id == sample_member.id


def test_get_member_by_phone_not_found(member_service):
    """Test get member by phone not found."""
    with pytest.raises(MemberNotFoundError):
        member_service.get_member_by_phone("0700000000")


def test_get_member_by_email(member_service, sample_member):
    """Test get member by email."""
    assert member_service.get_member_by_email("grace@example.com").id == sample_member.id


def test_list_members_alphabetical(member_service):
    """Test list members alphabetical."""
    member_service.create_member(full_name="Zipporah", phone_number="0700000001", created_by=CREATOR)
    member_service.create_member(full_name="Abel", phone_number="0700000002", created_by=CREATOR)

    assert [m.full_name for m in member_service.list_members()] == ["Abel", "Zipporah"]


def test_list_members_by_group(member_service, sample_member, sample_group):
    """Test list members by group."""
    member_service.create_member(full_name="Loner", phone_number="0700000001", created_by=CREATOR)

    members = member_service.list_members_by_group(sample_group.id)
    assert [m.id for m in members] == [sample_member.id]


def test_list_members_by_unknown_group(member_service):
    """Test list members by unknown group."""
    with pytest.raises(GroupNotFoundError):
        member_service.list_members_by_group("missing")


def test_search_members_case_insensitive(member_service, sample_member):
    """Test search members case insensitive."""
    assert [m.id for m in member_service.search_members("GRACE")] == [sample_member.id]
    assert [m.id for m in member_service.search_members("example.com")] == [sample_member.id]
    assert [m.id for m in member_service.search_members("2547")] == [sample_member.id]
    assert member_service.search_members("nobody") == []


def test_search_members_blank_term(member_service):
    """Test search members blank term."""
    with pytest.raises(ValidationError):
        member_service.search_members("   ")


def test_update_member_notes_only(member_service, sample_member):
    """Test update member notes only."""
    updated = member_service.update_member(sample_member.id, notes="x")

    assert updated.notes == "x"
    assert updated.full_name == sample_member.full_name
    assert updated.phone_number == sample_member.phone_number
    assert updated.email == sample_member.email
    assert updated.group_id == sample_member.group_id


def test_update_member_phone_duplicate(member_service, sample_member):
    """Test update member phone duplicate."""
    other = member_service.create_member(full_name="Other", phone_number="0700000001", created_by=CREATOR)

    with pytest.raises(DuplicatePhoneError):
        member_service.update_member(other.id, phone_number=sample_member.phone_number)


def test_update_member_same_phone_allowed(member_service, sample_member):
    """Test update member same phone allowed."""
    updated = member_service.update_member(sample_member.id, phone_number=sample_member.phone_number)
    assert updated.phone_number == sample_member.phone_number


def test_update_member_invalid_phone(member_service, sample_member):
    """Test update member invalid phone."""
    with pytest.raises(InvalidPhoneError):
        member_service.update_member(sample_member.id, phone_number="abc")


def test_update_member_clear_group(member_service, sample_member):
    """Test update member clear group."""
    updated = member_service.update_member(sample_member.id, group_id="")
    assert updated.group_id is None


def test_update_member_clear_email(member_service, sample_member):
    """Test update member clear email."""
    updated = member_service.update_member(sample_member.id, email="")
    assert updated.email is None
    assert member_service.get_member(sample_member.id).email is None

    with pytest.raises(InvalidEmailError):
        member_service.update_member(sample_member.id, email="not-an-email")


def test_update_member_unknown_group(member_service, sample_member):
    """Test update member unknown group."""
    with pytest.raises(GroupNotFoundError):
        member_service.update_member(sample_member.id, group_id="missing")


def test_delete_member(member_service, sample_member):
    """Test delete member."""
    member_service.delete_member(sample_member.id)

    with pytest.raises(MemberNotFoundError):
        member_service.get_member(sample_member.id)


def test_delete_member_not_found(member_service):
    """Test delete member not found."""
    with pytest.raises(MemberNotFoundError):
        member_service.delete_member("missing")
