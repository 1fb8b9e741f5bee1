import pytest
from sqlalchemy.dialects import postgresql

from extensions import db
from models.selection import (
    Selection,
    STATUS_COMPLETED,
    STATUS_CONFIRMED,
    STATUS_DROPPED,
    STATUS_SELECTED,
)
from services.admission import Admitted, RejectionKind, evaluate
from services.errors import CapacityExceeded, DuplicateSelection, InvalidInput, InvalidTransition, NotFound
from services.selection_writer import commit, commit_admitted, locked_elective_query, transition

pytestmark = pytest.mark.usefixtures("ctx")


def _live(elective_id):
    return Selection.query.filter(
        Selection.elective_id == elective_id,
        Selection.status != STATUS_DROPPED,
    ).count()


def test_commit_stores_selected_row_and_counts_it(make_student, make_elective):
    student = make_student()
    elective = make_elective(track="AI", categories=["Open"])
    before = elective.enrolled_count

    decision = evaluate(student.id, elective.id, 5)
    selection = commit_admitted(decision)

    assert selection.id is not None
    assert selection.status == STATUS_SELECTED
    assert selection.selected_at is not None
    assert selection.categories == ["Open"]
    assert selection.track == "AI"
    assert elective.enrolled_count == before + 1


def test_concurrent_duplicate_commit_loses(make_student, make_elective):
    student = make_student()
    elective = make_elective(max_enrollment=5)

    # both requests pass evaluation before either writes
    first = evaluate(student.id, elective.id, 5)
    second = evaluate(student.id, elective.id, 5)
    assert isinstance(first, Admitted) and isinstance(second, Admitted)

    commit_admitted(first)
    with pytest.raises(DuplicateSelection):
        commit_admitted(second)

    assert elective.enrolled_count == 1
    assert evaluate(student.id, elective.id, 5).kind is RejectionKind.ALREADY_SELECTED


def test_last_seat_race_rolls_back_overflow(make_student, make_elective):
    elective = make_elective(max_enrollment=1)
    a = make_student()
    b = make_student()

    first = evaluate(a.id, elective.id, 5)
    second = evaluate(b.id, elective.id, 5)

    commit_admitted(first)
    with pytest.raises(CapacityExceeded):
        commit_admitted(second)

    assert _live(elective.id) == 1
    assert Selection.query.filter_by(student_id=b.id).count() == 0


def test_commit_unknown_elective(make_student):
    student = make_student()

    with pytest.raises(NotFound):
        commit(student.id, 4242, 5, ["Open"], None)

    assert Selection.query.count() == 0


def test_confirm_then_complete(make_student, make_elective):
    elective = make_elective()
    selection = commit_admitted(evaluate(make_student().id, elective.id, 5))

    transition(selection.id, STATUS_CONFIRMED)
    assert selection.status == STATUS_CONFIRMED
    assert selection.confirmed_at is not None

    transition(selection.id, STATUS_COMPLETED)
    assert selection.status == STATUS_COMPLETED
    assert selection.completed_at is not None

    # completed still occupies the seat
    assert elective.enrolled_count == 1


def test_drop_frees_the_seat(make_student, make_elective):
    elective = make_elective(max_enrollment=1)
    holder = make_student()
    waiting = make_student()
    selection = commit_admitted(evaluate(holder.id, elective.id, 5))

    assert evaluate(waiting.id, elective.id, 5).kind is RejectionKind.CAPACITY_EXCEEDED

    transition(selection.id, STATUS_DROPPED)

    assert selection.dropped_at is not None
    assert elective.enrolled_count == 0
    assert isinstance(evaluate(waiting.id, elective.id, 5), Admitted)


def test_reselect_after_drop_keeps_history(make_student, make_elective):
    student = make_student()
    elective = make_elective()
    old = commit_admitted(evaluate(student.id, elective.id, 5))
    transition(old.id, STATUS_DROPPED)

    new = commit_admitted(evaluate(student.id, elective.id, 5))

    assert new.id != old.id
    assert Selection.query.filter_by(student_id=student.id).count() == 2
    assert elective.enrolled_count == 1


@pytest.mark.parametrize(
    "steps, bad",
    [
        ([STATUS_DROPPED], STATUS_CONFIRMED),
        ([STATUS_CONFIRMED], STATUS_SELECTED),
        ([STATUS_CONFIRMED, STATUS_COMPLETED], STATUS_DROPPED),
    ],
)
def test_terminal_and_backward_moves_are_refused(make_student, make_elective, steps, bad):
    selection = commit_admitted(evaluate(make_student().id, make_elective().id, 5))

    for step in steps:
        transition(selection.id, step)

    with pytest.raises(InvalidTransition):
        transition(selection.id, bad)


def test_unknown_status_and_selection(make_student, make_elective):
    selection = commit_admitted(evaluate(make_student().id, make_elective().id, 5))

    with pytest.raises(InvalidInput):
        transition(selection.id, "archived")
    with pytest.raises(NotFound):
        transition(9999, STATUS_DROPPED)


def test_counter_matches_rows_after_mixed_operations(make_student, make_elective):
    elective = make_elective(max_enrollment=3)
    students = [make_student() for _ in range(4)]

    stored = []
    for s in students:
        decision = evaluate(s.id, elective.id, 5)
        if isinstance(decision, Admitted):
            stored.append(commit_admitted(decision))

    assert len(stored) == 3
    transition(stored[0].id, STATUS_DROPPED)
    transition(stored[1].id, STATUS_CONFIRMED)
    db.session.expire_all()

    assert elective.enrolled_count == _live(elective.id) == 2


def test_commit_locks_the_elective_row():
    sql = str(locked_elective_query(7).compile(dialect=postgresql.dialect()))

    assert "FOR UPDATE" in sql
    assert "elective" in sql
