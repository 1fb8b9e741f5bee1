from flask import request, jsonify
from flask_login import current_user

from . import main_bp
from auth.decorators import admin_required
from schemas.elective import ElectiveCreate, ElectiveUpdate
from services.catalog import (
    create_elective,
    deactivate_elective,
    elective_payload,
    enrollment_counts,
    get_elective,
    list_electives,
    update_elective,
)
from utils.dates import utcnow


def _wants_inactive() -> bool:
    # only administrators get to see deactivated electives
    flag = (request.args.get("include_inactive") or "").strip().lower()
    return flag in {"1", "true", "yes"} and current_user.is_authenticated and current_user.is_admin


@main_bp.route("/electives")
def electives_index():
    electives = list_electives(
        department=(request.args.get("department") or "").strip() or None,
        semester=request.args.get("semester", type=int),
        category=(request.args.get("category") or "").strip() or None,
        track=(request.args.get("track") or "").strip() or None,
        include_inactive=_wants_inactive(),
    )

    counts = enrollment_counts(e.id for e in electives)
    now = utcnow()
    items = [elective_payload(e, counts.get(e.id, 0), now) for e in electives]

    return jsonify({"success": True, "count": len(items), "electives": items})


@main_bp.route("/electives/<int:elective_id>")
def elective_detail(elective_id: int):
    elective = get_elective(elective_id)
    if not elective.is_active and not (current_user.is_authenticated and current_user.is_admin):
        return jsonify({"success": False, "error": "Elective not found"}), 404
    return jsonify({"success": True, "elective": elective_payload(elective)})


@main_bp.route("/electives", methods=["POST"])
@admin_required
def elective_create():
    payload = ElectiveCreate.model_validate(request.get_json(silent=True) or {})
    elective = create_elective(payload.model_dump(), created_by=current_user.id)
    return jsonify({
        "success": True,
        "message": "Elective created successfully",
        "elective": elective_payload(elective, 0),
    }), 201


@main_bp.route("/electives/<int:elective_id>", methods=["PUT"])
@admin_required
def elective_update(elective_id: int):
    payload = ElectiveUpdate.model_validate(request.get_json(silent=True) or {})
    elective = update_elective(elective_id, payload.model_dump(exclude_unset=True))
    return jsonify({
        "success": True,
        "message": "Elective updated successfully",
        "elective": elective_payload(elective),
    })


@main_bp.route("/electives/<int:elective_id>", methods=["DELETE"])
@admin_required
def elective_delete(elective_id: int):
    deactivate_elective(elective_id)
    return jsonify({"success": True, "message": "Elective deactivated successfully"})
