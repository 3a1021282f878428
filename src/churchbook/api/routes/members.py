"""Member routes."""

from flask import Blueprint, jsonify, request

from churchbook.api.helpers import current_user_id, expand_requested, json_body, services

members_bp = Blueprint("members", __name__)


@members_bp.get("")
def list_members():
    members = services().members.list_members()
    return jsonify([member.to_dict() for member in members]), 200


@members_bp.get("/search")
def search_members():
    members = services().members.search_members(request.args.get("q", ""))
    return jsonify([member.to_dict() for member in members]), 200


@members_bp.post("")
def create_member():
    data = json_body()
    member = services().members.create_member(
        full_name=data.get("full_name"),
        phone_number=data.get("phone_number"),
        created_by=current_user_id(),
        email=data.get("email"),
        notes=data.get("notes"),
        group_id=data.get("group_id"),
    )
    return jsonify(member.to_dict()), 201


@members_bp.get("/<member_id>")
def get_member(member_id: str):
    member = services().members.get_member(member_id, with_related=expand_requested())
    return jsonify(member.to_dict()), 200


@members_bp.get("/phone/<phone_number>")
def get_member_by_phone(phone_number: str):
    member = services().members.get_member_by_phone(phone_number)
    return jsonify(member.to_dict()), 200


@members_bp.get("/email/<email>")
def get_member_by_email(email: str):
    member = services().members.get_member_by_email(email)
    return jsonify(member.to_dict()), 200


@members_bp.get("/group/<group_id>")
def list_members_by_group(group_id: str):
    members = services().members.list_members_by_group(group_id)
    return jsonify([member.to_dict() for member in members]), 200


@members_bp.put("/<member_id>")
def update_member(member_id: str):
    data = json_body()
    member = services().members.update_member(
        member_id,
        full_name=data.get("full_name"),
        phone_number=data.get("phone_number"),
        email=data.get("email"),
        notes=data.get("notes"),
        group_id=data.get("group_id"),
    )
    return jsonify(member.to_dict()), 200


@members_bp.delete("/<member_id>")
def delete_member(member_id: str):
    services().members.delete_member(member_id)
    return "", 204
