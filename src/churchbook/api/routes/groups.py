"""Members group routes."""

from flask import Blueprint, jsonify

from churchbook.api.helpers import current_user_id, json_body, services
from churchbook.utils.time_utils import to_utc_z

groups_bp = Blueprint("groups", __name__)


@groups_bp.get("")
def list_groups():
    groups = services().groups.list_groups()
    return jsonify([group.to_dict() for group in groups]), 200


@groups_bp.get("/with-count")
def list_groups_with_member_count():
    rows = services().groups.list_groups_with_member_count()
    return jsonify([
        {
            **row,
            "created_at": to_utc_z(row["created_at"]),
            "updated_at": to_utc_z(row["updated_at"]),
        }
        for row in rows
    ]), 200


@groups_bp.post("")
def create_group():
    data = json_body()
    group = services().groups.create_group(
        group_name=data.get("group_name"),
        created_by=current_user_id(),
        notes=data.get("notes"),
    )
    return jsonify(group.to_dict()), 201


@groups_bp.get("/<group_id>")
def get_group(group_id: str):
    group = services().groups.get_group(group_id)
    return jsonify(group.to_dict()), 200


@groups_bp.get("/<group_id>/count")
def get_group_member_count(group_id: str):
    count = services().groups.get_group_member_count(group_id)
    return jsonify({"group_id": group_id, "member_count": count}), 200


@groups_bp.get("/name/<group_name>")
def get_group_by_name(group_name: str):
    group = services().groups.get_group_by_name(group_name)
    return jsonify(group.to_dict()), 200


@groups_bp.put("/<group_id>")
def update_group(group_id: str):
    data = json_body()
    group = services().groups.update_group(
        group_id,
        group_name=data.get("group_name"),
        notes=data.get("notes"),
    )
    return jsonify(group.to_dict()), 200


@groups_bp.delete("/<group_id>")
def delete_group(group_id: str):
    services().groups.delete_group(group_id)
    return "", 204
