from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError

from extensions import db
from models.elective import Elective
from models.selection import (
    Selection,
    STATUS_COMPLETED,
    STATUS_CONFIRMED,
    STATUS_DROPPED,
    STATUS_SELECTED,
    STATUSES,
    TRANSITIONS,
)
from services.admission import Admitted
from services.errors import CapacityExceeded, DuplicateSelection, InvalidInput, InvalidTransition, NotFound
from utils.dates import utcnow
from utils.logging_config import get_logger

logger = get_logger(__name__)


def locked_elective_query(elective_id: int):
    # FOR UPDATE on backends that support it; SQLite already serializes writers
    return (
        db.select(Elective)
        .where(Elective.id == elective_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def commit(
    student_id: int,
    elective_id: int,
    semester: int,
    categories: Iterable[str],
    track: Optional[str],
    *,
    now: Optional[datetime] = None,
) -> Selection:
    """Store an admitted selection.

    Enrollment is counted from the selection rows, so the insert is the only
    write. The elective row is locked first, which queues concurrent commits
    for the same elective; the cap is then checked again after the insert
    inside the same transaction and an overflow rolls back.

    Raises:
        NotFound: the elective does not exist
        DuplicateSelection: the live-selection unique index rejected the row
        CapacityExceeded: the insert pushed the elective over its cap
    """
    elective = db.session.execute(locked_elective_query(elective_id)).scalar_one_or_none()
    if elective is None:
        db.session.rollback()
        raise NotFound("elective", elective_id)

    selection = Selection(
        student_id=student_id,
        elective_id=elective_id,
        semester=semester,
        categories=list(categories),
        track=track,
        status=STATUS_SELECTED,
        selected_at=now or utcnow(),
    )
    db.session.add(selection)

    try:
        db.session.flush()
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning(
            "duplicate selection at commit student=%s elective=%s semester=%s",
            student_id, elective_id, semester,
        )
        raise DuplicateSelection(student_id, elective_id, semester) from exc

    if elective.max_enrollment is not None and elective.enrolled_count > elective.max_enrollment:
        db.session.rollback()
        logger.warning("capacity exceeded at commit elective=%s", elective_id)
        raise CapacityExceeded(elective_id)

    db.session.commit()
    logger.info("selection stored id=%s", selection.id)
    return selection


def commit_admitted(decision: Admitted, *, now: Optional[datetime] = None) -> Selection:
    return commit(
        decision.student_id,
        decision.elective_id,
        decision.semester,
        decision.categories,
        decision.track,
        now=now,
    )


_TIMESTAMP_FIELD = {
    STATUS_CONFIRMED: "confirmed_at",
    STATUS_COMPLETED: "completed_at",
    STATUS_DROPPED: "dropped_at",
}


def transition(selection_id: int, new_status: str, *, now: Optional[datetime] = None) -> Selection:
    """Move a selection forward in its lifecycle.

    selected -> confirmed | dropped, confirmed -> completed | dropped.
    A drop frees the seat at once since enrollment is counted, not stored.
    """
    if new_status not in STATUSES:
        raise InvalidInput(f"Unknown status '{new_status}'")

    selection = db.session.get(Selection, selection_id)
    if selection is None:
        raise NotFound("selection", selection_id)

    if new_status not in TRANSITIONS.get(selection.status, set()):
        raise InvalidTransition(selection.status, new_status)

    selection.status = new_status
    setattr(selection, _TIMESTAMP_FIELD[new_status], now or utcnow())
    db.session.commit()

    logger.info("selection %s -> %s", selection.id, new_status)
    return selection
