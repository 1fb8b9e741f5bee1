from __future__ import annotations

from typing import Dict, Optional, Tuple

from flask import current_app

from extensions import db
from models.category_limit import CategoryLimit
from services.errors import NotFound
from utils.dates import utcnow


def default_limit() -> int:
    return int(current_app.config.get("DEFAULT_CATEGORY_LIMIT", 1))


def get_limit(department: str, semester: int, category: str) -> Tuple[int, bool]:
    """Return (max selections, whether a row was configured)."""
    row = CategoryLimit.query.filter_by(
        department=department,
        semester=semester,
        category=category,
        is_active=True,
    ).first()
    if row is None:
        return default_limit(), False
    return int(row.max_electives), True


def configured_limits(department: Optional[str], semester: int) -> Dict[str, int]:
    # category -> max, only for rows an administrator actually created
    if not department:
        return {}
    rows = CategoryLimit.query.filter_by(
        department=department,
        semester=semester,
        is_active=True,
    ).all()
    return {r.category: int(r.max_electives) for r in rows}


def upsert_limit(
    *,
    department: str,
    semester: int,
    category: str,
    max_electives: int,
    created_by: Optional[int] = None,
) -> Tuple[CategoryLimit, bool]:
    """Create or update the limit for (department, semester, category).

    Returns (row, created). An inactive row is re-activated on update.
    """
    existing = CategoryLimit.query.filter_by(
        department=department,
        semester=semester,
        category=category,
    ).first()
    if existing:
        existing.max_electives = max_electives
        existing.is_active = True
        existing.updated_at = utcnow()
        db.session.commit()
        return existing, False

    row = CategoryLimit(
        department=department,
        semester=semester,
        category=category,
        max_electives=max_electives,
        is_active=True,
        created_by=created_by,
    )
    db.session.add(row)
    db.session.commit()
    return row, True


def _active_limit(limit_id: int) -> CategoryLimit:
    row = db.session.get(CategoryLimit, limit_id)
    if row is None or not row.is_active:
        raise NotFound("limit", limit_id)
    return row


def update_limit(limit_id: int, max_electives: int) -> CategoryLimit:
    row = _active_limit(limit_id)
    row.max_electives = max_electives
    db.session.commit()
    return row


def deactivate_limit(limit_id: int) -> CategoryLimit:
    """Switch a limit off. The row stays so a later upsert revives it."""
    row = _active_limit(limit_id)
    row.is_active = False
    db.session.commit()
    return row
