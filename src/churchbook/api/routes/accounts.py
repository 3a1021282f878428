"""Account routes. Accounts are deactivated, never deleted."""

from flask import Blueprint, jsonify, request

from churchbook.api.helpers import current_user_id, json_body, services

accounts_bp = Blueprint("accounts", __name__)


@accounts_bp.get("")
def list_accounts():
    active_only = request.args.get("active", "").lower() in ("1", "true", "yes")
    accounts = services().accounts.list_accounts(active_only=active_only)
    return jsonify([account.to_dict() for account in accounts]), 200


@accounts_bp.post("")
def create_account():
    data = json_body()
    account = services().accounts.create_account(
        account_name=data.get("account_name"),
        account_type=data.get("account_type"),
        created_by=current_user_id(),
        local_share=data.get("local_share"),
        notes=data.get("notes"),
    )
    return jsonify(account.to_dict()), 201


@accounts_bp.get("/<account_id>")
def get_account(account_id: str):
    account = services().accounts.get_account(account_id)
    return jsonify(account.to_dict()), 200


@accounts_bp.put("/<account_id>")
def update_account(account_id: str):
    data = json_body()
    account = services().accounts.update_account(
        account_id,
        account_name=data.get("account_name"),
        account_type=data.get("account_type"),
        local_share=data.get("local_share"),
        notes=data.get("notes"),
        is_active=data.get("is_active"),
    )
    return jsonify(account.to_dict()), 200


@accounts_bp.delete("/<account_id>")
def deactivate_account(account_id: str):
    account = services().accounts.deactivate_account(account_id)
    return jsonify(account.to_dict()), 200
