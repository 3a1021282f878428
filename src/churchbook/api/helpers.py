"""Request parsing helpers shared by the blueprints."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from flask import current_app, request

from churchbook.domain import (
    AccountService,
    ExpenditureService,
    MemberService,
    MembersGroupService,
    ReceiptService,
    TransactionService,
    TransferService,
    UserService,
)
from churchbook.domain.errors import ValidationError
from churchbook.utils.date_parser import parse_date_range, parse_datetime

DEFAULT_CALLER = "system"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServiceRegistry:
    """Services bound to one gateway, stored on the Flask app."""

    accounts: AccountService
    members: MemberService
    groups: MembersGroupService
    transactions: TransactionService
    receipts: ReceiptService
    expenditures: ExpenditureService
    transfers: TransferService
    users: UserService


def services() -> ServiceRegistry:
    return current_app.extensions["churchbook"]


def json_body() -> dict[str, Any]:
    """Return the request's JSON object.

    Raises:
        ValidationError: If the body is missing or not a JSON object
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_user_id() -> str:
    """Caller identity recorded as created_by.

    Taken from the X-User-ID header; there is no session layer behind it.
    """
    return request.headers.get("X-User-ID", "").strip() or DEFAULT_CALLER


def expand_requested() -> bool:
    return request.args.get("expand", "").strip().lower() in _TRUE_VALUES


def optional_datetime(value: Optional[str], field: str) -> Optional[datetime]:
    """Parse an optional date/datetime body field.

    Raises:
        ValidationError: If the value is present but unparseable
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field}: expected a date string")
    try:
        return parse_datetime(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {e}")


def date_range_args() -> tuple[datetime, datetime]:
    """Read the required start_date/end_date query parameters.

    Raises:
        ValidationError: If either bound is missing or malformed
    """
    try:
        return parse_date_range(request.args.get("start_date"), request.args.get("end_date"))
    except ValueError as e:
        raise ValidationError(str(e))
