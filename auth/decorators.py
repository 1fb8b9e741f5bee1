from functools import wraps

from flask import abort
from flask_login import current_user, login_required


def admin_required(view):
    """login_required plus an admin role check (403 otherwise)."""

    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_admin:
            abort(403, description="Admin access required")
        return view(*args, **kwargs)

    return wrapped


def student_required(view):
    """login_required plus a student role check (403 otherwise)."""

    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_user.is_student:
            abort(403, description="Student access required")
        return view(*args, **kwargs)

    return wrapped
