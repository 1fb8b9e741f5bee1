# services/admission.py

"""Selection admission checks.

``evaluate`` decides whether a student may take a seat in an elective for a
semester. It reads only, never writes, and answers with a ``Decision``:
either ``Admitted`` (carrying what the writer needs) or ``Rejected``
(carrying a specific, human-readable reason).

Checks run cheapest and most fundamental first, stopping at the first
failure:

  1. caller identity, student and elective existence, active flag
  2. selection deadline
  3. enrollment cap
  4. duplicate selection (against the stored rows, not client state)
  5. overall selection limit for the student's department/semester
  6. category exclusivity
  7. prerequisites

The overall limit is checked before category exclusivity so that a student
who has used up every slot hears "limit reached" regardless of which
category the new elective belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from extensions import db
from models.elective import Elective
from models.selection import Selection, STATUS_COMPLETED, STATUS_DROPPED
from models.user import User
from services.limits import configured_limits, default_limit
from utils.dates import isoformat, utcnow
from utils.logging_config import get_logger
from utils.semesters import is_valid_semester, semester_bounds

logger = get_logger(__name__)


class RejectionKind(str, Enum):
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    ELECTIVE_INACTIVE = "ElectiveInactive"
    INVALID_SEMESTER = "InvalidSemester"
    DEADLINE_PASSED = "DeadlinePassed"
    CAPACITY_EXCEEDED = "CapacityExceeded"
    ALREADY_SELECTED = "AlreadySelected"
    SELECTION_LIMIT_REACHED = "SelectionLimitReached"
    CATEGORY_ALREADY_FILLED = "CategoryAlreadyFilled"
    PREREQUISITES_NOT_MET = "PrerequisitesNotMet"


# HTTP status for each rejection; anything not listed is a 400
_STATUS_BY_KIND = {
    RejectionKind.FORBIDDEN: 403,
    RejectionKind.NOT_FOUND: 404,
    RejectionKind.ELECTIVE_INACTIVE: 404,
}


@dataclass(frozen=True)
class Admitted:
    student_id: int
    elective_id: int
    semester: int
    categories: Tuple[str, ...]
    track: Optional[str]


@dataclass(frozen=True)
class Rejected:
    kind: RejectionKind
    message: str
    detail: Dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND.get(self.kind, 400)


Decision = Union[Admitted, Rejected]


def _reject(kind: RejectionKind, message: str, **detail: Any) -> Rejected:
    return Rejected(kind=kind, message=message, detail=detail)


def already_selected() -> Rejected:
    return _reject(
        RejectionKind.ALREADY_SELECTED,
        "You have already selected this elective for this semester",
    )


def held_selections(student_id: int, semester: int) -> List[Selection]:
    """Non-dropped selections a student holds in one semester."""
    return (
        Selection.query
        .filter(
            Selection.student_id == student_id,
            Selection.semester == semester,
            Selection.status != STATUS_DROPPED,
        )
        .all()
    )


def _completed_elective_ids(student_id: int) -> set[int]:
    rows = (
        db.session.query(Selection.elective_id)
        .filter(Selection.student_id == student_id, Selection.status == STATUS_COMPLETED)
        .all()
    )
    return {r[0] for r in rows}


def evaluate(
    student_id: int,
    elective_id: int,
    semester: Optional[int] = None,
    *,
    caller: Optional[User] = None,
    now: Optional[datetime] = None,
) -> Decision:
    """Decide whether (student, elective, semester) may become a selection.

    `caller` is the authenticated user. A non-admin caller may only act for
    themselves; a mismatching student id is rejected, never substituted.
    When `semester` is None the elective's own semester is used.
    """
    decision = _evaluate(student_id, elective_id, semester, caller=caller, now=now)
    if isinstance(decision, Rejected):
        logger.info(
            "selection rejected student=%s elective=%s kind=%s",
            student_id, elective_id, decision.kind.value,
        )
    else:
        logger.info(
            "selection admitted student=%s elective=%s semester=%s",
            student_id, elective_id, decision.semester,
        )
    return decision


def _evaluate(student_id, elective_id, semester, *, caller, now) -> Decision:
    now = now or utcnow()

    if caller is not None and not caller.is_admin and caller.id != student_id:
        return _reject(
            RejectionKind.FORBIDDEN,
            "You can only select electives for your own account",
        )

    student = db.session.get(User, student_id)
    if student is None or not student.is_student:
        return _reject(RejectionKind.NOT_FOUND, "Student not found", entity="student")

    # 1. existence + active flag
    elective = db.session.get(Elective, elective_id)
    if elective is None:
        return _reject(RejectionKind.NOT_FOUND, "Elective not found", entity="elective")
    if not elective.is_active:
        return _reject(RejectionKind.ELECTIVE_INACTIVE, "Elective not found or is not active")

    if semester is None:
        semester = elective.semester
    if not is_valid_semester(semester):
        low, high = semester_bounds()
        return _reject(
            RejectionKind.INVALID_SEMESTER,
            f"Semester must be between {low} and {high}",
        )

    # 2. deadline
    if elective.deadline is not None and now > elective.deadline:
        return _reject(
            RejectionKind.DEADLINE_PASSED,
            "Selection deadline has passed",
            deadline=isoformat(elective.deadline),
        )

    # 3. capacity
    if elective.max_enrollment is not None:
        enrolled = elective.enrolled_count
        if enrolled >= elective.max_enrollment:
            return _reject(
                RejectionKind.CAPACITY_EXCEEDED,
                "Elective is full",
                enrolled=enrolled,
                maxEnrollment=elective.max_enrollment,
            )

    # 4. duplicate
    duplicate = (
        Selection.query
        .filter(
            Selection.student_id == student.id,
            Selection.elective_id == elective.id,
            Selection.semester == semester,
            Selection.status != STATUS_DROPPED,
        )
        .first()
    )
    if duplicate is not None:
        return already_selected()

    held = held_selections(student.id, semester)
    limits = configured_limits(student.department, semester)

    # 5. overall limit, only when an administrator configured one
    if limits:
        total = sum(limits.values())
        if len(held) >= total:
            return _reject(
                RejectionKind.SELECTION_LIMIT_REACHED,
                f"You have reached the maximum of {total} electives for semester {semester}",
                limit=total,
            )

    # 6. category exclusivity (a category is filled once its limit is used up).
    # Configured rows are the whole budget for the semester: a category
    # without a row then has no slots. Without any rows each category gets
    # the default.
    categories = list(elective.categories or [])
    for category in categories:
        cap = limits.get(category, 0) if limits else default_limit()
        taken = sum(1 for s in held if category in (s.categories or []))
        if taken >= cap:
            if cap == 0:
                message = f"No electives in the {category} category are offered for semester {semester}"
            else:
                message = f"You have already selected an elective in the {category} category for semester {semester}"
            return _reject(
                RejectionKind.CATEGORY_ALREADY_FILLED,
                message,
                category=category,
                limit=cap,
            )

    # 7. prerequisites
    if elective.prerequisites:
        completed = _completed_elective_ids(student.id)
        missing = [p for p in elective.prerequisites if p.id not in completed]
        if missing:
            names = ", ".join(p.code or p.name for p in missing)
            return _reject(
                RejectionKind.PREREQUISITES_NOT_MET,
                f"You do not meet the prerequisites for this elective: {names}",
                missing=[p.id for p in missing],
            )

    return Admitted(
        student_id=student.id,
        elective_id=elective.id,
        semester=semester,
        categories=tuple(categories),
        track=elective.track,
    )
