from flask import request, jsonify
from flask_login import current_user

from . import main_bp
from auth.decorators import admin_required, student_required
from schemas.feedback import FeedbackCreate
from services.feedback import feedback_for_elective, feedback_for_student, submit_feedback, summarize


@main_bp.route("/electives/feedback", methods=["POST"])
@student_required
def feedback_submit():
    payload = FeedbackCreate.model_validate(request.get_json(silent=True) or {})
    row = submit_feedback(
        current_user,
        payload.elective_id,
        payload.semester,
        payload.feedback.model_dump(),
    )
    return jsonify({
        "success": True,
        "message": "Feedback submitted successfully",
        "feedback": row.to_dict(),
    }), 201


@main_bp.route("/student/feedback")
@student_required
def my_feedback():
    rows = feedback_for_student(current_user.id)
    return jsonify({"success": True, "count": len(rows), "feedback": [r.to_dict() for r in rows]})


@main_bp.route("/electives/<int:elective_id>/feedback")
@admin_required
def elective_feedback(elective_id: int):
    rows = feedback_for_elective(elective_id)
    return jsonify({
        "success": True,
        "summary": summarize(rows),
        "feedback": [r.to_dict() for r in rows],
    })
