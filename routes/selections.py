"""Selection endpoints

- POST /electives/select/<id> (and the legacy /electives/<id>/select) runs
  admission and stores the selection
- GET  /student/selections lists the caller's own selections
- admin views over every student's selections and status changes
"""

from flask import request, jsonify
from flask_login import current_user, login_required

from . import main_bp
from auth.decorators import admin_required
from schemas.selection import SelectionRequest, StatusUpdate
from services.admission import Rejected, already_selected, evaluate
from services.catalog import get_student, list_selections
from services.errors import CapacityExceeded, DuplicateSelection
from services.selection_writer import commit_admitted, transition
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _rejection_response(decision: Rejected):
    body = {"success": False, "error": decision.message, "reason": decision.kind.value}
    body.update(decision.detail)
    return jsonify(body), decision.status_code


@main_bp.route("/electives/select/<int:elective_id>", methods=["POST"])
@main_bp.route("/electives/<int:elective_id>/select", methods=["POST"])
@login_required
def select_elective(elective_id: int):
    payload = SelectionRequest.model_validate(request.get_json(silent=True) or {})
    student_id = payload.student_id if payload.student_id is not None else current_user.id

    decision = evaluate(student_id, elective_id, payload.semester, caller=current_user)
    if isinstance(decision, Rejected):
        return _rejection_response(decision)

    try:
        selection = commit_admitted(decision)
    except (DuplicateSelection, CapacityExceeded) as exc:
        # State changed between evaluate and commit: report what is true now
        logger.warning("selection race student=%s elective=%s: %s", student_id, elective_id, exc)
        retry = evaluate(student_id, elective_id, payload.semester, caller=current_user)
        if not isinstance(retry, Rejected):
            retry = already_selected()
        return _rejection_response(retry)

    return jsonify({
        "success": True,
        "message": "Elective selected successfully",
        "selection": selection.to_dict(),
    }), 201


@main_bp.route("/student/selections")
@login_required
def my_selections():
    selections = list_selections(
        student_id=current_user.id,
        semester=request.args.get("semester", type=int),
    )
    return jsonify({
        "success": True,
        "count": len(selections),
        "selections": [s.to_dict() for s in selections],
    })


@main_bp.route("/student/selections/<int:student_id>")
@admin_required
def student_selections(student_id: int):
    student = get_student(student_id)
    selections = list_selections(
        student_id=student.id,
        semester=request.args.get("semester", type=int),
    )
    return jsonify({
        "success": True,
        "count": len(selections),
        "selections": [s.to_dict() for s in selections],
    })


@main_bp.route("/student/all-selections")
@admin_required
def all_selections():
    selections = list_selections(semester=request.args.get("semester", type=int))
    return jsonify({
        "success": True,
        "count": len(selections),
        "selections": [s.to_dict(include_student=True) for s in selections],
    })


@main_bp.route("/selections/<int:selection_id>/status", methods=["PUT"])
@admin_required
def selection_status(selection_id: int):
    payload = StatusUpdate.model_validate(request.get_json(silent=True) or {})
    selection = transition(selection_id, payload.status)
    return jsonify({"success": True, "selection": selection.to_dict()})
