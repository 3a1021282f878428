"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(ConflictError):
    """Operation blocked due to dependent domain data."""


class UnauthorizedError(DomainError):
    """Authentication failed."""


class PersistenceError(RuntimeError):
    """Storage-level failure not classified by the domain."""


# Validation
class InvalidAccountTypeError(ValidationError):
    pass


class InvalidTransactionTypeError(ValidationError):
    pass


class InvalidRoleError(ValidationError):
    pass


class InvalidPhoneError(ValidationError):
    pass


class InvalidEmailError(ValidationError):
    pass


class InvalidAmountError(ValidationError):
    pass


class WeakPasswordError(ValidationError):
    """Password does not meet strength requirements."""


# Not found
class AccountNotFoundError(NotFoundError):
    pass


class MemberNotFoundError(NotFoundError):
    pass


class GroupNotFoundError(NotFoundError):
    pass


class TransactionNotFoundError(NotFoundError):
    pass


# Conflicts
class DuplicateNameError(ConflictError):
    pass


class DuplicatePhoneError(ConflictError):
    pass


class DuplicateEmailError(ConflictError):
    pass


class DuplicateUsernameError(ConflictError):
    pass


class DuplicateReferenceError(ConflictError):
    pass


class GroupNotEmptyError(DependencyError):
    pass


# Authentication
class InvalidCredentialsError(UnauthorizedError):
    """Unknown username or wrong password; the two are never distinguished."""


class AccountDeactivatedError(UnauthorizedError):
    pass


def not_found(entity: str, entity_id: str) -> str:
    """Return message for a missing entity by ID."""
    return f"{entity} {entity_id} not found"


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return not_found("Account", account_id)


def member_not_found(member_id: str) -> str:
    """Return message for missing member."""
    return not_found("Member", member_id)


def group_not_found(group_id: str) -> str:
    """Return message for missing members group."""
    return not_found("Group", group_id)


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return not_found("Transaction", transaction_id)


def user_not_found(user_id: str) -> str:
    """Return message for missing user."""
    return not_found("User", user_id)


def duplicate_value(entity: str, field: str, value: str) -> str:
    """Return message for a uniqueness violation."""
    return f"{entity} with {field} '{value}' already exists"


def group_delete_blocked(group_id: str, member_count: int) -> str:
    """Return message when a group still has members."""
    return (
        f"Cannot delete group {group_id}: it has {member_count} "
        f"member{'s' if member_count != 1 else ''}. "
        "Please move or delete them first."
    )


INVALID_CREDENTIALS = "Invalid username or password"
ACCOUNT_DEACTIVATED = "User account is deactivated"
