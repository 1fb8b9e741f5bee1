from __future__ import annotations

from typing import List

from sqlalchemy.exc import IntegrityError

from extensions import db
from models.feedback import ElectiveFeedback
from models.selection import Selection, STATUS_DROPPED
from models.user import User
from services.catalog import get_elective
from services.errors import InvalidInput
from utils.logging_config import get_logger

logger = get_logger(__name__)

ALREADY_SUBMITTED = "Feedback already submitted for this elective"


def submit_feedback(student: User, elective_id: int, semester: int, body: dict) -> ElectiveFeedback:
    """Store a student's review of an elective they hold or held.

    `body` carries rating, comment, would_recommend and improvements.
    One review per (student, elective); a second attempt is rejected.
    """
    elective = get_elective(elective_id)

    took_it = (
        Selection.query
        .filter(
            Selection.student_id == student.id,
            Selection.elective_id == elective.id,
            Selection.status != STATUS_DROPPED,
        )
        .first()
    )
    if took_it is None:
        raise InvalidInput("You can only give feedback on electives you have selected")

    existing = ElectiveFeedback.query.filter_by(student_id=student.id, elective_id=elective.id).first()
    if existing is not None:
        raise InvalidInput(ALREADY_SUBMITTED)

    row = ElectiveFeedback(
        student_id=student.id,
        elective_id=elective.id,
        semester=semester,
        rating=body["rating"],
        comment=body["comment"],
        would_recommend=body["would_recommend"],
        improvements=body.get("improvements"),
    )
    db.session.add(row)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise InvalidInput(ALREADY_SUBMITTED) from exc

    logger.info("feedback stored student=%s elective=%s rating=%s", student.id, elective.id, row.rating)
    return row


def feedback_for_student(student_id: int) -> List[ElectiveFeedback]:
    return (
        ElectiveFeedback.query
        .filter_by(student_id=student_id)
        .order_by(ElectiveFeedback.submitted_at.desc())
        .all()
    )


def feedback_for_elective(elective_id: int) -> List[ElectiveFeedback]:
    get_elective(elective_id)
    return (
        ElectiveFeedback.query
        .filter_by(elective_id=elective_id)
        .order_by(ElectiveFeedback.submitted_at.desc())
        .all()
    )


def summarize(rows: List[ElectiveFeedback]) -> dict:
    if not rows:
        return {"count": 0, "averageRating": None, "recommendRate": None}
    return {
        "count": len(rows),
        "averageRating": round(sum(r.rating for r in rows) / len(rows), 2),
        "recommendRate": round(sum(1 for r in rows if r.would_recommend) / len(rows), 2),
    }
