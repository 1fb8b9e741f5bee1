from __future__ import annotations

from typing import List, Optional

from extensions import db
from models.category_limit import CategoryLimit
from models.elective import Elective
from models.feedback import ElectiveFeedback
from models.selection import Selection
from models.user import User
from services.errors import Forbidden, InvalidInput, NotFound
from utils.logging_config import get_logger

logger = get_logger(__name__)


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("user", user_id)
    return user


def list_users(
    *,
    role: Optional[str] = None,
    department: Optional[str] = None,
    semester: Optional[int] = None,
    section: Optional[str] = None,
) -> List[User]:
    q = User.query
    if role:
        q = q.filter(User.role == role)
    if department:
        q = q.filter(User.department == department)
    if semester is not None:
        q = q.filter(User.semester == semester)
    if section:
        q = q.filter(User.section == section)
    return q.order_by(User.created_at.desc(), User.id.desc()).all()


def update_user(user: User, changes: dict) -> User:
    """Apply ProfileUpdate fields. Nulls are ignored; email and roll number stay unique."""
    changes = {k: v for k, v in changes.items() if v is not None}

    email = changes.get("email")
    if email and email != user.email:
        if User.query.filter(User.email == email, User.id != user.id).first():
            raise InvalidInput("Email already exists.")

    roll = changes.get("roll_number")
    if roll and roll != user.roll_number:
        if User.query.filter(User.roll_number == roll, User.id != user.id).first():
            raise InvalidInput("Roll number already exists.")

    for key, value in changes.items():
        setattr(user, key, value)
    db.session.commit()

    logger.info("user updated id=%s fields=%s", user.id, sorted(changes))
    return user


def delete_user(user_id: int, *, acting_user: User) -> None:
    """Remove an account together with its selections and feedback.

    Children are deleted explicitly so seats are freed even where the
    database does not enforce ON DELETE CASCADE (SQLite by default).
    """
    if user_id == acting_user.id:
        raise Forbidden("You cannot delete your own account")

    user = get_user(user_id)

    Selection.query.filter_by(student_id=user.id).delete(synchronize_session=False)
    ElectiveFeedback.query.filter_by(student_id=user.id).delete(synchronize_session=False)
    Elective.query.filter_by(created_by=user.id).update({"created_by": None}, synchronize_session=False)
    CategoryLimit.query.filter_by(created_by=user.id).update({"created_by": None}, synchronize_session=False)

    # collections may still hold the rows removed above
    db.session.expire(user)
    db.session.delete(user)
    db.session.commit()

    logger.info("user deleted id=%s by=%s", user_id, acting_user.id)
