"""Transaction routes."""

from flask import Blueprint, jsonify

from churchbook.api.helpers import (
    current_user_id,
    date_range_args,
    expand_requested,
    json_body,
    optional_datetime,
    services,
)

transactions_bp = Blueprint("transactions", __name__)


def _listing(transactions):
    return jsonify([transaction.to_dict() for transaction in transactions]), 200


@transactions_bp.get("")
def list_transactions():
    return _listing(services().transactions.list_transactions())


@transactions_bp.post("")
def create_transaction():
    data = json_body()
    transaction = services().transactions.create_transaction(
        transaction_type=data.get("transaction_type"),
        amount=data.get("amount"),
        debit_account_id=data.get("debit_account_id"),
        created_by=current_user_id(),
        transaction_date=optional_datetime(data.get("transaction_date"), "transaction_date"),
        transaction_ref=data.get("transaction_ref"),
        notes=data.get("notes"),
        member_id=data.get("member_id"),
    )
    return jsonify(transaction.to_dict()), 201


@transactions_bp.get("/<transaction_id>")
def get_transaction(transaction_id: str):
    transaction = services().transactions.get_transaction(
        transaction_id, with_related=expand_requested()
    )
    return jsonify(transaction.to_dict()), 200


@transactions_bp.get("/ref/<transaction_ref>")
def get_transaction_by_ref(transaction_ref: str):
    transaction = services().transactions.get_transaction_by_ref(transaction_ref)
    return jsonify(transaction.to_dict()), 200


@transactions_bp.get("/account/<account_id>")
def list_transactions_by_account(account_id: str):
    return _listing(services().transactions.list_transactions_by_account(account_id))


@transactions_bp.get("/member/<member_id>")
def list_transactions_by_member(member_id: str):
    return _listing(services().transactions.list_transactions_by_member(member_id))


@transactions_bp.get("/type/<transaction_type>")
def list_transactions_by_type(transaction_type: str):
    return _listing(services().transactions.list_transactions_by_type(transaction_type))


@transactions_bp.get("/date-range")
def list_transactions_by_date_range():
    start_date, end_date = date_range_args()
    return _listing(services().transactions.list_transactions_by_date_range(start_date, end_date))


@transactions_bp.put("/<transaction_id>")
def update_transaction(transaction_id: str):
    data = json_body()
    transaction = services().transactions.update_transaction(
        transaction_id,
        transaction_type=data.get("transaction_type"),
        amount=data.get("amount"),
        debit_account_id=data.get("debit_account_id"),
        transaction_date=optional_datetime(data.get("transaction_date"), "transaction_date"),
        transaction_ref=data.get("transaction_ref"),
        notes=data.get("notes"),
        member_id=data.get("member_id"),
    )
    return jsonify(transaction.to_dict()), 200


@transactions_bp.delete("/<transaction_id>")
def delete_transaction(transaction_id: str):
    services().transactions.delete_transaction(transaction_id)
    return "", 204
