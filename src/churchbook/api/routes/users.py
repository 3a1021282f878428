"""User routes, including the placeholder authenticate endpoint."""

from flask import Blueprint, jsonify

from churchbook.api.helpers import json_body, services

users_bp = Blueprint("users", __name__)


def _listing(users):
    return jsonify([user.to_dict() for user in users]), 200


@users_bp.get("")
def list_users():
    return _listing(services().users.list_users())


@users_bp.get("/active")
def list_active_users():
    return _listing(services().users.list_active_users())


@users_bp.get("/role/<role>")
def list_users_by_role(role: str):
    return _listing(services().users.list_users_by_role(role))


@users_bp.post("")
def create_user():
    data = json_body()
    user = services().users.create_user(
        username=data.get("username"),
        email=data.get("email"),
        password=data.get("password"),
        full_name=data.get("full_name"),
        role=data.get("role"),
        phone_number=data.get("phone_number") or "",
    )
    return jsonify(user.to_dict()), 201


@users_bp.post("/authenticate")
def authenticate():
    data = json_body()
    user = services().users.authenticate(data.get("username"), data.get("password"))
    return jsonify(user.to_dict()), 200


@users_bp.get("/<user_id>")
def get_user(user_id: str):
    return jsonify(services().users.get_user(user_id).to_dict()), 200


@users_bp.get("/username/<username>")
def get_user_by_username(username: str):
    return jsonify(services().users.get_user_by_username(username).to_dict()), 200


@users_bp.get("/email/<email>")
def get_user_by_email(email: str):
    return jsonify(services().users.get_user_by_email(email).to_dict()), 200


@users_bp.put("/<user_id>")
def update_user(user_id: str):
    data = json_body()
    user = services().users.update_user(
        user_id,
        username=data.get("username"),
        email=data.get("email"),
        full_name=data.get("full_name"),
        role=data.get("role"),
        phone_number=data.get("phone_number"),
        is_active=data.get("is_active"),
    )
    return jsonify(user.to_dict()), 200


@users_bp.post("/<user_id>/deactivate")
def deactivate_user(user_id: str):
    return jsonify(services().users.deactivate_user(user_id).to_dict()), 200


@users_bp.post("/<user_id>/change-password")
def change_password(user_id: str):
    data = json_body()
    services().users.change_password(
        user_id, data.get("old_password"), data.get("new_password")
    )
    return jsonify({"message": "Password changed"}), 200


@users_bp.delete("/<user_id>")
def delete_user(user_id: str):
    services().users.delete_user(user_id)
    return "", 204
