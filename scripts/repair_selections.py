"""
repair_selections.py - Remove selections that point at missing records

After manual database edits (students deleted, electives removed by hand)
selection rows can reference ids that no longer exist. They would still
count toward an elective's enrollment and a student's limits.

What it does:
- Deletes selections whose student row is gone (or is no longer a student)
- Deletes selections whose elective row is gone
- Prints how many rows were removed for each reason

Safety notes:
- This script writes directly to the database.
- Pass --dry-run to only report counts.

Usage:
    python scripts/repair_selections.py [--dry-run]
"""

import os
import sys

# Make project root importable (so `import app` works when running from /scripts)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import create_app  # noqa: E402
from extensions import db  # noqa: E402
from models.elective import Elective  # noqa: E402
from models.selection import Selection  # noqa: E402
from models.user import User, ROLE_STUDENT  # noqa: E402


def repair_selections(dry_run: bool = False) -> dict:
    """Delete orphaned selections. Returns {"missing_student": n, "missing_elective": m}."""
    student_ids = db.select(User.id).where(User.role == ROLE_STUDENT)
    elective_ids = db.select(Elective.id)

    no_student = Selection.query.filter(~Selection.student_id.in_(student_ids))
    no_elective = Selection.query.filter(
        Selection.student_id.in_(student_ids),
        ~Selection.elective_id.in_(elective_ids),
    )

    counts = {
        "missing_student": no_student.count(),
        "missing_elective": no_elective.count(),
    }
    if dry_run:
        db.session.rollback()
        return counts

    no_student.delete(synchronize_session=False)
    no_elective.delete(synchronize_session=False)
    db.session.commit()
    return counts


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        result = repair_selections(dry_run="--dry-run" in sys.argv[1:])
        print(
            f"repair_selections done. orphaned by student: {result['missing_student']}, "
            f"by elective: {result['missing_elective']}"
        )
