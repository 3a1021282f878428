"""Expenditure routes."""

from flask import Blueprint, jsonify

from churchbook.api.helpers import date_range_args, expand_requested, json_body, services

expenditures_bp = Blueprint("expenditures", __name__)


def _listing(expenditures):
    return jsonify([expenditure.to_dict() for expenditure in expenditures]), 200


@expenditures_bp.get("")
def list_expenditures():
    return _listing(services().expenditures.list_expenditures())


@expenditures_bp.post("")
def create_expenditure():
    data = json_body()
    expenditure = services().expenditures.create_expenditure(
        transaction_id=data.get("transaction_id"),
        particulars=data.get("particulars"),
        bank_account_id=data.get("bank_account_id"),
        amount=data.get("amount"),
    )
    return jsonify(expenditure.to_dict()), 201


@expenditures_bp.get("/<expenditure_id>")
def get_expenditure(expenditure_id: str):
    expenditure = services().expenditures.get_expenditure(
        expenditure_id, with_related=expand_requested()
    )
    return jsonify(expenditure.to_dict()), 200


@expenditures_bp.get("/transaction/<transaction_id>")
def list_expenditures_by_transaction(transaction_id: str):
    return _listing(services().expenditures.list_expenditures_by_transaction(transaction_id))


@expenditures_bp.get("/account/<account_id>")
def list_expenditures_by_account(account_id: str):
    return _listing(services().expenditures.list_expenditures_by_account(account_id))


@expenditures_bp.get("/date-range")
def list_expenditures_by_date_range():
    start_date, end_date = date_range_args()
    return _listing(services().expenditures.list_expenditures_by_date_range(start_date, end_date))


@expenditures_bp.put("/<expenditure_id>")
def update_expenditure(expenditure_id: str):
    data = json_body()
    expenditure = services().expenditures.update_expenditure(
        expenditure_id,
        particulars=data.get("particulars"),
        bank_account_id=data.get("bank_account_id"),
        amount=data.get("amount"),
    )
    return jsonify(expenditure.to_dict()), 200


@expenditures_bp.delete("/<expenditure_id>")
def delete_expenditure(expenditure_id: str):
    services().expenditures.delete_expenditure(expenditure_id)
    return "", 204
