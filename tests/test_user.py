"""Tests for user service and password hashing."""

import pytest

from churchbook.domain.errors import (
    ACCOUNT_DEACTIVATED,
    INVALID_CREDENTIALS,
    AccountDeactivatedError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidRoleError,
    NotFoundError,
    PersistenceError,
    UnauthorizedError,
    WeakPasswordError,
)
from churchbook.domain.user import hash_password, verify_password


def test_hash_password_is_salted():
    """Test hash password is salted."""
    first = hash_password("Secret123", rounds=4)
    second = hash_password("Secret123", rounds=4)

    assert first != second
    assert first != "Secret123"
    assert verify_password("Secret123", first)
    assert verify_password("Secret123", second)
    assert not verify_password("secret123", first)


def test_verify_password_against_non_bcrypt_value():
    """Test verify password against non bcrypt value."""
    assert verify_password("Secret123", "Secret123") is False


def test_create_user(user_service, sample_user):
    """Test create user."""
    assert sample_user.id
    assert sample_user.username == "treasurer"
    assert sample_user.role == "Treasurer"
    assert sample_user.is_active is True
    assert sample_user.last_login is None
    assert sample_user.password_hash != "Secret123"
    assert verify_password("Secret123", sample_user.password_hash)


def test_user_dict_never_exposes_password(sample_user):
    """Test user dict never exposes password."""
    data = sample_user.to_dict()
    assert "password_hash" not in data
    assert "password" not in data


@pytest.mark.parametrize(
    "password,message",
    [
        ("Short1", "at least 8 characters"),
        ("alllowercase1", "uppercase"),
        ("ALLUPPERCASE1", "lowercase"),
        ("NoDigitsHere", "digit"),
    ],
)
def test_create_user_weak_password(user_service, password, message):
    """Test create user weak password."""
    with pytest.raises(WeakPasswordError, match=message):
        user_service.create_user(
            username="clerk", email="clerk@example.com", password=password, full_name="C", role="Clerk"
        )


def test_create_user_invalid_role(user_service):
    """Test create user invalid role."""
    with pytest.raises(InvalidRoleError):
        user_service.create_user(
            username="clerk", email="clerk@example.com", password="Secret123", full_name="C", role="admin"
        )


def test_create_user_invalid_email(user_service):
    """Test create user invalid email."""
    with pytest.raises(InvalidEmailError):
        user_service.create_user(
            username="clerk", email="clerk", password="Secret123", full_name="C", role="Clerk"
        )


def test_create_user_duplicates(user_service, sample_user):
    """Test create user duplicates."""
    with pytest.raises(DuplicateUsernameError):
        user_service.create_user(
            username="treasurer", email="other@example.com", password="Secret123", full_name="X", role="Clerk"
        )
    with pytest.raises(DuplicateEmailError):
        user_service.create_user(
            username="other", email="treasurer@example.com", password="Secret123", full_name="X", role="Clerk"
        )


def test_get_user_lookups(user_service, sample_user):
    """Test get user lookups."""
    assert user_service.get_user(sample_user.id).username == "treasurer"
    assert user_service.get_user_by_username("treasurer").id == sample_user.id
    assert user_service.get_user_by_email("treasurer@example.com").id == sample_user.id

    with pytest.raises(NotFoundError):
        user_service.get_user("missing")
    with pytest.raises(NotFoundError):
        user_service.get_user_by_username("nobody")


def test_list_users_by_role_and_active(user_service, sample_user):
    """Test list users by role and active."""
    clerk = user_service.create_user(
        username="clerk", email="clerk@example.com", password="Secret123", full_name="C", role="Clerk"
    )
    user_service.deactivate_user(clerk.id)

    assert len(user_service.list_users()) == 2
    assert [u.id for u in user_service.list_users_by_role("Clerk")] == [clerk.id]
    assert [u.id for u in user_service.list_active_users()] == [sample_user.id]

    with pytest.raises(InvalidRoleError):
        user_service.list_users_by_role("Pastor")


def test_authenticate_success_updates_last_login(user_service, sample_user):
    """Test authenticate success updates last login."""
    user = user_service.authenticate("treasurer", "Secret123")

    assert user.id == sample_user.id
    assert user.last_login is not None


def test_authenticate_unknown_user_and_wrong_password_look_the_same(user_service, sample_user):
    """Test authenticate unknown user and wrong password look the same."""
    with pytest.raises(InvalidCredentialsError) as unknown:
        user_service.authenticate("nobody", "Secret123")
    with pytest.raises(InvalidCredentialsError) as wrong:
        user_service.authenticate("treasurer", "Wrong123")

    assert str(unknown.value) == str(wrong.value) == INVALID_CREDENTIALS


def test_authenticate_unknown_user_checks_a_hash(user_service, monkeypatch):
    """Test authenticate runs a bcrypt check even when the username is unknown."""
    import churchbook.domain.user as user_module

    checked = []

    def recording_verify(password, password_hash):
        checked.append(password_hash)
        return verify_password(password, password_hash)

    monkeypatch.setattr(user_module, "verify_password", recording_verify)

    for _ in range(2):
        with pytest.raises(InvalidCredentialsError):
            user_service.authenticate("nobody", "Secret123")

    assert len(checked) == 2
    assert checked[0] == checked[1]
    assert checked[0].startswith("$2")


def test_authenticate_deactivated_user(user_service, sample_user):
    """Test authenticate deactivated user."""
    user_service.deactivate_user(sample_user.id)

    with pytest.raises(AccountDeactivatedError) as excinfo:
        user_service.authenticate("treasurer", "Secret123")
    assert str(excinfo.value) == ACCOUNT_DEACTIVATED
    assert not isinstance(excinfo.value, InvalidCredentialsError)
    assert isinstance(excinfo.value, UnauthorizedError)


def test_authenticate_deactivated_user_wrong_password(user_service, sample_user):
    """Test authenticate deactivated user wrong password."""
    user_service.deactivate_user(sample_user.id)

    with pytest.raises(InvalidCredentialsError):
        user_service.authenticate("treasurer", "Wrong123")


def test_authenticate_survives_last_login_failure(user_service, sample_user, monkeypatch):
    """Test authenticate survives last login failure."""
    def fail(user_id):
        raise PersistenceError("disk full")

    monkeypatch.setattr(user_service.db, "update_last_login", fail)

    user = user_service.authenticate("treasurer", "Secret123")
    assert user.id == sample_user.id
    assert user.last_login is None


def test_update_user_partial(user_service, sample_user):
    """Test update user partial."""
    updated = user_service.update_user(sample_user.id, full_name="Paul O.")

    assert updated.full_name == "Paul O."
    assert updated.username == sample_user.username
    assert updated.email == sample_user.email
    assert updated.role == sample_user.role
    assert updated.password_hash == sample_user.password_hash


def test_update_user_duplicate_username(user_service, sample_user):
    """Test update user duplicate username."""
    clerk = user_service.create_user(
        username="clerk", email="clerk@example.com", password="Secret123", full_name="C", role="Clerk"
    )
    with pytest.raises(DuplicateUsernameError):
        user_service.update_user(clerk.id, username="treasurer")


def test_update_user_reactivate(user_service, sample_user):
    """Test update user reactivate."""
    user_service.deactivate_user(sample_user.id)
    updated = user_service.update_user(sample_user.id, is_active=True)

    assert updated.is_active is True
    assert user_service.authenticate("treasurer", "Secret123").id == sample_user.id


def test_change_password(user_service, sample_user):
    """Test change password."""
    user_service.change_password(sample_user.id, "Secret123", "NewSecret456")

    assert user_service.authenticate("treasurer", "NewSecret456").id == sample_user.id
    with pytest.raises(InvalidCredentialsError):
        user_service.authenticate("treasurer", "Secret123")


def test_change_password_wrong_current(user_service, sample_user):
    """Test change password wrong current."""
    with pytest.raises(InvalidCredentialsError, match="Current password is incorrect"):
        user_service.change_password(sample_user.id, "Wrong123", "NewSecret456")


def test_change_password_weak_new(user_service, sample_user):
    """Test change password weak new."""
    with pytest.raises(WeakPasswordError):
        user_service.change_password(sample_user.id, "Secret123", "weak")


def test_delete_user(user_service, sample_user):
    """Test delete user."""
    user_service.delete_user(sample_user.id)

    with pytest.raises(NotFoundError):
        user_service.get_user(sample_user.id)
    with pytest.raises(NotFoundError):
        user_service.delete_user(sample_user.id)
