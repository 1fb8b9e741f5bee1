from __future__ import annotations

from flask import current_app


def semester_bounds() -> tuple[int, int]:
    return (
        int(current_app.config.get("MIN_SEMESTER", 1)),
        int(current_app.config.get("MAX_SEMESTER", 8)),
    )


def is_valid_semester(semester) -> bool:
    # bool is an int subclass, reject it explicitly
    if isinstance(semester, bool) or not isinstance(semester, int):
        return False
    low, high = semester_bounds()
    return low <= semester <= high

