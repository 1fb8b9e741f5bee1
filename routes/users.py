"""User administration

Admins list, inspect, edit and delete accounts. A user may also read and
edit their own record through /users/<id>.
"""

from flask import request, jsonify
from flask_login import current_user, login_required

from . import main_bp
from auth.decorators import admin_required
from schemas.user import ProfileUpdate
from services.errors import Forbidden
from services.users import delete_user, get_user, list_users, update_user


def _self_or_admin(user_id: int) -> None:
    if current_user.id != user_id and not current_user.is_admin:
        raise Forbidden("Access denied")


@main_bp.route("/users")
@admin_required
def users_index():
    users = list_users(
        role=(request.args.get("role") or "").strip() or None,
        department=(request.args.get("department") or "").strip() or None,
        semester=request.args.get("semester", type=int),
        section=(request.args.get("section") or "").strip() or None,
    )
    return jsonify({"success": True, "count": len(users), "users": [u.to_dict() for u in users]})


@main_bp.route("/users/<int:user_id>")
@login_required
def user_detail(user_id: int):
    _self_or_admin(user_id)
    return jsonify({"success": True, "user": get_user(user_id).to_dict()})


@main_bp.route("/users/<int:user_id>", methods=["PUT"])
@login_required
def user_update(user_id: int):
    _self_or_admin(user_id)
    payload = ProfileUpdate.model_validate(request.get_json(silent=True) or {})
    user = update_user(get_user(user_id), payload.model_dump(exclude_unset=True))
    return jsonify({"success": True, "message": "User updated successfully", "user": user.to_dict()})


@main_bp.route("/users/<int:user_id>", methods=["DELETE"])
@admin_required
def user_delete(user_id: int):
    delete_user(user_id, acting_user=current_user._get_current_object())
    return jsonify({"success": True, "message": "User deleted successfully"})
