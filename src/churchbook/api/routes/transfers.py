"""Transfer routes."""

from flask import Blueprint, jsonify

from churchbook.api.helpers import date_range_args, expand_requested, json_body, services

transfers_bp = Blueprint("transfers", __name__)


def _listing(transfers):
    return jsonify([transfer.to_dict() for transfer in transfers]), 200


@transfers_bp.get("")
def list_transfers():
    return _listing(services().transfers.list_transfers())


@transfers_bp.post("")
def create_transfer():
    data = json_body()
    transfer = services().transfers.create_transfer(
        transaction_id=data.get("transaction_id"),
        particulars=data.get("particulars"),
        credit_account_id=data.get("credit_account_id"),
        amount=data.get("amount"),
    )
    return jsonify(transfer.to_dict()), 201


@transfers_bp.get("/<transfer_id>")
def get_transfer(transfer_id: str):
    transfer = services().transfers.get_transfer(transfer_id, with_related=expand_requested())
    return jsonify(transfer.to_dict()), 200


@transfers_bp.get("/transaction/<transaction_id>")
def list_transfers_by_transaction(transaction_id: str):
    return _listing(services().transfers.list_transfers_by_transaction(transaction_id))


@transfers_bp.get("/credit-account/<account_id>")
def list_transfers_by_credit_account(account_id: str):
    return _listing(services().transfers.list_transfers_by_credit_account(account_id))


@transfers_bp.get("/credit-account/<account_id>/total")
def get_total_transfers_by_credit_account(account_id: str):
    total = services().transfers.get_total_transfers_by_credit_account(account_id)
    return jsonify({"account_id": account_id, "total": str(total)}), 200


@transfers_bp.get("/date-range")
def list_transfers_by_date_range():
    start_date, end_date = date_range_args()
    return _listing(services().transfers.list_transfers_by_date_range(start_date, end_date))


@transfers_bp.get("/date-range/<account_id>")
def get_total_transfers_by_date_range(account_id: str):
    start_date, end_date = date_range_args()
    total = services().transfers.get_total_transfers_by_date_range(account_id, start_date, end_date)
    return jsonify({"account_id": account_id, "total": str(total)}), 200


@transfers_bp.put("/<transfer_id>")
def update_transfer(transfer_id: str):
    data = json_body()
    transfer = services().transfers.update_transfer(
        transfer_id,
        particulars=data.get("particulars"),
        credit_account_id=data.get("credit_account_id"),
        amount=data.get("amount"),
    )
    return jsonify(transfer.to_dict()), 200


@transfers_bp.delete("/<transfer_id>")
def delete_transfer(transfer_id: str):
    services().transfers.delete_transfer(transfer_id)
    return "", 204
