"""Pure validation rules.

Services call these before touching the database. None of them know about
persistence.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from churchbook.domain.entities import AccountType, TransactionType, UserRole
from churchbook.domain.errors import (
    InvalidAccountTypeError,
    InvalidAmountError,
    InvalidEmailError,
    InvalidPhoneError,
    InvalidRoleError,
    InvalidTransactionTypeError,
    ValidationError,
    WeakPasswordError,
)
from churchbook.utils.time_utils import to_naive_utc

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{7,20}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

ACCOUNT_TYPES = frozenset(t.value for t in AccountType)
TRANSACTION_TYPES = frozenset(t.value for t in TransactionType)
USER_ROLES = frozenset(r.value for r in UserRole)

MIN_PASSWORD_LENGTH = 8

# Amounts are stored as Numeric(12, 2), local shares as Numeric(5, 4).
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")
SHARE_STEP = Decimal("0.0001")


def validate_account_type(account_type: str) -> None:
    """Raise InvalidAccountTypeError unless the type is one of the literal values."""
    if account_type not in ACCOUNT_TYPES:
        raise InvalidAccountTypeError(
            f"Invalid account type '{account_type}'. "
            f"Valid types: {', '.join(t.value for t in AccountType)}"
        )


def validate_transaction_type(transaction_type: str) -> None:
    """Raise InvalidTransactionTypeError unless the type is one of the literal values."""
    if transaction_type not in TRANSACTION_TYPES:
        raise InvalidTransactionTypeError(
            f"Invalid transaction type '{transaction_type}'. "
            f"Valid types: {', '.join(t.value for t in TransactionType)}"
        )


def validate_role(role: str) -> None:
    """Raise InvalidRoleError unless the role is one of the literal values."""
    if role not in USER_ROLES:
        raise InvalidRoleError(
            f"Invalid user role '{role}'. Valid roles: {', '.join(r.value for r in UserRole)}"
        )


def validate_phone(phone_number: str) -> None:
    """Accept an optional leading '+', digits, spaces, hyphens and parentheses (7-20 chars)."""
    if not isinstance(phone_number, str) or not PHONE_PATTERN.match(phone_number):
        raise InvalidPhoneError(f"Invalid phone number format: '{phone_number}'")


def validate_email(email: str) -> None:
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise InvalidEmailError(f"Invalid email format: '{email}'")


def validate_password_strength(password: str) -> None:
    """Validate password meets strength requirements.

    Requirements:
    - Minimum 8 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit

    Raises:
        WeakPasswordError: naming the first rule that failed
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    if not re.search(r"[A-Z]", password):
        raise WeakPasswordError("Password must contain at least one uppercase letter")

    if not re.search(r"[a-z]", password):
        raise WeakPasswordError("Password must contain at least one lowercase letter")

    if not re.search(r"\d", password):
        raise WeakPasswordError("Password must contain at least one digit")


def to_decimal(value: Any, field: str = "amount") -> Decimal:
    """Coerce int/float/str/Decimal into Decimal."""
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid {field}: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidAmountError(f"Invalid {field}: {value!r}")
    if not result.is_finite():
        raise InvalidAmountError(f"Invalid {field}: {value!r}")
    return result


def validate_amount(amount: Any) -> Decimal:
    """Return the amount as Decimal, raising InvalidAmountError unless it is > 0."""
    if amount is None:
        raise InvalidAmountError("Amount is required")
    value = to_decimal(amount)
    if value <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    if value > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount must not exceed {MAX_AMOUNT}")
    if value.quantize(CENT) != value:
        raise InvalidAmountError("Amount must have at most two decimal places")
    return value


def validate_local_share(local_share: Any) -> Optional[Decimal]:
    """Local share is an optional fraction between 0 and 1."""
    if local_share is None:
        return None
    value = to_decimal(local_share, field="local share")
    if value < 0 or value > 1:
        raise ValidationError("Local share must be between 0 and 1")
    if value.quantize(SHARE_STEP) != value:
        raise ValidationError("Local share must have at most four decimal places")
    return value


def require_text(field: str, value: Optional[str], max_length: int) -> str:
    """Validate a required string field and return it stripped of surrounding whitespace."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    value = value.strip()
    check_length(field, value, max_length)
    return value


def check_length(field: str, value: Optional[str], max_length: int) -> None:
    if value is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")


def validate_date_range(
    start: Optional[datetime], end: Optional[datetime]
) -> tuple[datetime, datetime]:
    """Return both bounds as naive UTC. Both are required and start must not be after end."""
    if start is None or end is None:
        raise ValidationError("Both start and end dates are required")
    start = to_naive_utc(start)
    end = to_naive_utc(end)
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return start, end
