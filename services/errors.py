"""Domain exceptions for the elective portal.

Validation failures during admission are *returned* as decisions (see
``services.admission``); these exceptions cover the remaining cases where a
service cannot complete its work.
"""

from __future__ import annotations


class PortalError(Exception):
    """Base exception for all portal errors.

    Attributes:
        status_code: HTTP status the API layer reports for this error
    """

    status_code = 500


class NotFound(PortalError):
    """Raised when a referenced record does not exist.

    Attributes:
        entity: Kind of record that was looked up ("student", "elective", ...)
        entity_id: The id that failed to resolve, when known
    """

    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found")


class Forbidden(PortalError):
    status_code = 403


class InvalidInput(PortalError):
    status_code = 400


class InvalidTransition(PortalError):
    """Raised when a selection status change is not allowed.

    Attributes:
        current: Status the selection is in
        requested: Status that was asked for
    """

    status_code = 400

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change selection status from '{current}' to '{requested}'")


class DuplicateSelection(PortalError):
    """A concurrent request already stored the same (student, elective, semester).

    Transient: the caller should re-evaluate rather than retry the same write.
    """

    status_code = 400

    def __init__(self, student_id: int, elective_id: int, semester: int):
        self.student_id = student_id
        self.elective_id = elective_id
        self.semester = semester
        super().__init__("You have already selected this elective for this semester")


class CapacityExceeded(PortalError):
    """The last seat was taken between evaluation and commit."""

    status_code = 400

    def __init__(self, elective_id: int):
        self.elective_id = elective_id
        super().__init__("Elective is full")
