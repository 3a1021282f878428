"""Receipt routes."""

from flask import Blueprint, jsonify

from churchbook.api.helpers import date_range_args, expand_requested, json_body, services

receipts_bp = Blueprint("receipts", __name__)


def _listing(receipts):
    return jsonify([receipt.to_dict() for receipt in receipts]), 200


@receipts_bp.get("")
def list_receipts():
    return _listing(services().receipts.list_receipts())


@receipts_bp.post("")
def create_receipt():
    data = json_body()
    receipt = services().receipts.create_receipt(
        transaction_id=data.get("transaction_id"),
        income_account_id=data.get("income_account_id"),
        amount=data.get("amount"),
    )
    return jsonify(receipt.to_dict()), 201


@receipts_bp.get("/<receipt_id>")
def get_receipt(receipt_id: str):
    receipt = services().receipts.get_receipt(receipt_id, with_related=expand_requested())
    return jsonify(receipt.to_dict()), 200


@receipts_bp.get("/transaction/<transaction_id>")
def list_receipts_by_transaction(transaction_id: str):
    return _listing(services().receipts.list_receipts_by_transaction(transaction_id))


@receipts_bp.get("/account/<account_id>")
def list_receipts_by_account(account_id: str):
    return _listing(services().receipts.list_receipts_by_account(account_id))


@receipts_bp.get("/account/<account_id>/total")
def get_total_receipts_by_account(account_id: str):
    total = services().receipts.get_total_receipts_by_account(account_id)
    return jsonify({"account_id": account_id, "total": str(total)}), 200


@receipts_bp.get("/date-range")
def list_receipts_by_date_range():
    start_date, end_date = date_range_args()
    return _listing(services().receipts.list_receipts_by_date_range(start_date, end_date))


@receipts_bp.get("/date-range/<account_id>")
def get_total_receipts_by_date_range(account_id: str):
    start_date, end_date = date_range_args()
    total = services().receipts.get_total_receipts_by_date_range(account_id, start_date, end_date)
    return jsonify({"account_id": account_id, "total": str(total)}), 200


@receipts_bp.put("/<receipt_id>")
def update_receipt(receipt_id: str):
    data = json_body()
    receipt = services().receipts.update_receipt(
        receipt_id,
        income_account_id=data.get("income_account_id"),
        amount=data.get("amount"),
    )
    return jsonify(receipt.to_dict()), 200


@receipts_bp.delete("/<receipt_id>")
def delete_receipt(receipt_id: str):
    services().receipts.delete_receipt(receipt_id)
    return "", 204
