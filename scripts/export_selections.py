"""
export_selections.py - Dump the selection roster to a spreadsheet

One row per selection with the student and elective it joins, for the
registrar's office. Dropped selections are included (status column) so the
file doubles as an audit trail.

Output format follows the file extension:
- .csv  -> plain CSV
- .xlsx -> Excel workbook (needs openpyxl)

Usage:
    python scripts/export_selections.py out.csv [--semester N]
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import pandas as pd

# Make project root importable (so `import app` works when running from /scripts)
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app import create_app  # noqa: E402
from extensions import db  # noqa: E402
from models.elective import Elective  # noqa: E402
from models.selection import Selection  # noqa: E402
from models.user import User  # noqa: E402
from utils.dates import isoformat  # noqa: E402

COLUMNS = [
    "selection_id",
    "roll_number",
    "student_name",
    "department",
    "section",
    "semester",
    "elective_code",
    "elective_name",
    "categories",
    "track",
    "status",
    "selected_at",
]


def selections_frame(semester: int | None = None) -> pd.DataFrame:
    q = (
        db.session.query(Selection, User, Elective)
        .join(User, User.id == Selection.student_id)
        .join(Elective, Elective.id == Selection.elective_id)
    )
    if semester is not None:
        q = q.filter(Selection.semester == semester)

    rows = []
    for sel, student, elective in q.all():
        rows.append({
            "selection_id": sel.id,
            "roll_number": student.roll_number,
            "student_name": student.name,
            "department": student.department,
            "section": student.section,
            "semester": sel.semester,
            "elective_code": elective.code,
            "elective_name": elective.name,
            "categories": ", ".join(sel.categories or []),
            "track": sel.track,
            "status": sel.status,
            "selected_at": isoformat(sel.selected_at),
        })

    df = pd.DataFrame(rows, columns=COLUMNS)
    if not df.empty:
        df = df.sort_values(["semester", "roll_number", "elective_code"], na_position="last")
    return df.reset_index(drop=True)


def export_selections(path: str | Path, semester: int | None = None) -> int:
    """Write the roster to `path`; returns the number of rows written."""
    path = Path(path)
    df = selections_frame(semester)

    if path.suffix.lower() == ".xlsx":
        df.to_excel(path, index=False)
    elif path.suffix.lower() == ".csv":
        df.to_csv(path, index=False)
    else:
        raise ValueError(f"Unsupported export format: {path.suffix or '(none)'}")
    return len(df)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export elective selections")
    parser.add_argument("output", help="target .csv or .xlsx file")
    parser.add_argument("--semester", type=int, default=None)
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        n = export_selections(args.output, semester=args.semester)
        print(f"export_selections done. rows: {n} -> {args.output}")
