from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from extensions import db
from models.elective import Elective
from models.selection import Selection, STATUS_DROPPED
from models.user import User
from services.errors import InvalidInput, NotFound
from utils.dates import days_left, utcnow
from utils.logging_config import get_logger

logger = get_logger(__name__)


def enrollment_counts(elective_ids: Iterable[int]) -> Dict[int, int]:
    """Non-dropped selection count per elective, in one grouped query."""
    ids = list(elective_ids)
    if not ids:
        return {}
    rows = (
        db.session.query(Selection.elective_id, func.count(Selection.id))
        .filter(Selection.elective_id.in_(ids), Selection.status != STATUS_DROPPED)
        .group_by(Selection.elective_id)
        .all()
    )
    counts = {eid: 0 for eid in ids}
    counts.update({eid: int(n) for eid, n in rows})
    return counts


def elective_payload(elective: Elective, enrolled: Optional[int] = None, now=None) -> dict:
    now = now or utcnow()
    data = elective.to_dict(enrolled_count=enrolled)
    expired = elective.deadline is not None and elective.deadline < now
    full = (
        elective.max_enrollment is not None
        and data["enrolledCount"] >= elective.max_enrollment
    )
    data["isExpired"] = expired
    data["canSelect"] = elective.is_active and not expired and not full
    data["daysLeft"] = days_left(elective.deadline, now)
    return data


def list_electives(
    *,
    department: Optional[str] = None,
    semester: Optional[int] = None,
    category: Optional[str] = None,
    track: Optional[str] = None,
    include_inactive: bool = False,
) -> List[Elective]:
    q = Elective.query
    if not include_inactive:
        q = q.filter(Elective.is_active.is_(True))
    if department:
        q = q.filter(Elective.department == department)
    if semester is not None:
        q = q.filter(Elective.semester == semester)
    if track:
        q = q.filter(Elective.track == track)

    electives = q.order_by(Elective.semester.asc(), Elective.name.asc()).all()

    # categories is a JSON list, filter in Python to stay backend-neutral
    if category:
        electives = [e for e in electives if category in (e.categories or [])]
    return electives


def get_elective(elective_id: int) -> Elective:
    elective = db.session.get(Elective, elective_id)
    if elective is None:
        raise NotFound("elective", elective_id)
    return elective


def _resolve_prerequisites(ids: List[int], *, exclude_id: Optional[int] = None) -> List[Elective]:
    wanted = {int(i) for i in ids}
    if exclude_id is not None and exclude_id in wanted:
        raise InvalidInput("An elective cannot be its own prerequisite")
    if not wanted:
        return []
    found = Elective.query.filter(Elective.id.in_(wanted)).all()
    missing = wanted - {e.id for e in found}
    if missing:
        raise InvalidInput(
            "Unknown prerequisite elective id(s): " + ", ".join(str(i) for i in sorted(missing))
        )
    return found


def _ensure_code_free(code: Optional[str], *, exclude_id: Optional[int] = None) -> None:
    if not code:
        return
    q = Elective.query.filter(Elective.code == code)
    if exclude_id is not None:
        q = q.filter(Elective.id != exclude_id)
    if q.first() is not None:
        raise InvalidInput(
            f'An elective with course code "{code}" already exists. '
            "Please use a different course code or leave it empty."
        )


def _commit_or_duplicate(code: Optional[str]) -> None:
    try:
        db.session.commit()
    except IntegrityError as exc:
        # lost a race against another insert with the same code
        db.session.rollback()
        raise InvalidInput(f'An elective with course code "{code}" already exists.') from exc


def create_elective(data: dict, *, created_by: Optional[int] = None) -> Elective:
    """Create an elective from validated ElectiveCreate data (field names, not aliases)."""
    data = dict(data)
    prereq_ids = data.pop("prerequisites", []) or []

    _ensure_code_free(data.get("code"))
    prerequisites = _resolve_prerequisites(prereq_ids)

    elective = Elective(**data, created_by=created_by, is_active=True)
    elective.prerequisites = prerequisites
    db.session.add(elective)
    _commit_or_duplicate(elective.code)

    logger.info("elective created id=%s code=%s", elective.id, elective.code)
    return elective


def update_elective(elective_id: int, changes: dict) -> Elective:
    elective = get_elective(elective_id)
    changes = dict(changes)

    if "prerequisites" in changes:
        prereq_ids = changes.pop("prerequisites") or []
        elective.prerequisites = _resolve_prerequisites(prereq_ids, exclude_id=elective.id)

    if "code" in changes:
        _ensure_code_free(changes["code"], exclude_id=elective.id)

    # explicit null only clears the nullable fields
    required = {"name", "department", "semester", "credits", "categories", "subject_type", "is_active"}
    for key, value in changes.items():
        if value is None and key in required:
            continue
        setattr(elective, key, value)

    _commit_or_duplicate(elective.code)
    logger.info("elective updated id=%s fields=%s", elective.id, sorted(changes))
    return elective


def deactivate_elective(elective_id: int) -> Elective:
    # Soft delete: selections keep pointing at the row
    elective = get_elective(elective_id)
    elective.is_active = False
    db.session.commit()
    logger.info("elective deactivated id=%s", elective.id)
    return elective


def list_selections(
    *,
    student_id: Optional[int] = None,
    semester: Optional[int] = None,
) -> List[Selection]:
    q = Selection.query
    if student_id is not None:
        q = q.filter(Selection.student_id == student_id)
    if semester is not None:
        q = q.filter(Selection.semester == semester)
    return q.order_by(Selection.semester.asc(), Selection.selected_at.asc()).all()


def get_student(student_id: int) -> User:
    student = db.session.get(User, student_id)
    if student is None or not student.is_student:
        raise NotFound("student", student_id)
    return student
