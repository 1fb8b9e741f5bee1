from flask import request, jsonify
from flask_login import current_user, login_required

from . import main_bp
from auth.decorators import admin_required
from models.category_limit import CategoryLimit
from schemas.category_limit import CategoryLimitUpdate, CategoryLimitUpsert
from services.limits import deactivate_limit, get_limit, update_limit, upsert_limit


@main_bp.route("/elective-limits")
@login_required
def limits_index():
    limits = (
        CategoryLimit.query.filter_by(is_active=True)
        .order_by(
            CategoryLimit.department.asc(),
            CategoryLimit.semester.asc(),
            CategoryLimit.category.asc(),
        )
        .all()
    )
    return jsonify({"success": True, "limits": [l.to_dict() for l in limits]})


@main_bp.route("/elective-limits/<department>/<int:semester>/<category>")
@login_required
def limit_lookup(department: str, semester: int, category: str):
    # Unconfigured tuples fall back to the default limit
    limit, found = get_limit(department, semester, category)
    return jsonify({"success": True, "limit": limit, "found": found})


@main_bp.route("/elective-limits", methods=["POST"])
@admin_required
def limit_upsert():
    payload = CategoryLimitUpsert.model_validate(request.get_json(silent=True) or {})
    row, created = upsert_limit(
        department=payload.department,
        semester=payload.semester,
        category=payload.category,
        max_electives=payload.max_electives,
        created_by=current_user.id,
    )
    body = {"success": True, "limit": row.to_dict()}
    body["created" if created else "updated"] = True
    return jsonify(body), (201 if created else 200)


@main_bp.route("/elective-limits/<int:limit_id>", methods=["PUT"])
@admin_required
def limit_update(limit_id: int):
    payload = CategoryLimitUpdate.model_validate(request.get_json(silent=True) or {})
    row = update_limit(limit_id, payload.max_electives)
    return jsonify({"success": True, "limit": row.to_dict()})


@main_bp.route("/elective-limits/<int:limit_id>", methods=["DELETE"])
@admin_required
def limit_delete(limit_id: int):
    row = deactivate_limit(limit_id)
    return jsonify({"success": True, "limit": row.to_dict()})
