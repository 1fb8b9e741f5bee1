from extensions import db
from utils.dates import isoformat, utcnow

STATUS_SELECTED = "selected"
STATUS_CONFIRMED = "confirmed"
STATUS_COMPLETED = "completed"
STATUS_DROPPED = "dropped"

STATUSES = (STATUS_SELECTED, STATUS_CONFIRMED, STATUS_COMPLETED, STATUS_DROPPED)

# Allowed forward moves; nothing ever returns to "selected"
TRANSITIONS = {
    STATUS_SELECTED: {STATUS_CONFIRMED, STATUS_DROPPED},
    STATUS_CONFIRMED: {STATUS_COMPLETED, STATUS_DROPPED},
    STATUS_COMPLETED: set(),
    STATUS_DROPPED: set(),
}

_NOT_DROPPED = db.text("status != 'dropped'")


class Selection(db.Model):
    __tablename__ = "selection"

    __table_args__ = (
        # At most one live (non-dropped) claim per student+elective+semester
        db.Index(
            "uq_selection_student_elective_sem",
            "student_id",
            "elective_id",
            "semester",
            unique=True,
            sqlite_where=_NOT_DROPPED,
            postgresql_where=_NOT_DROPPED,
        ),
        db.Index("ix_selection_student_sem", "student_id", "semester"),
    )

    id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )

    elective_id = db.Column(
        db.Integer,
        db.ForeignKey("elective.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    semester = db.Column(db.Integer, nullable=False)

    # Copied from the elective at selection time
    categories = db.Column(db.JSON, nullable=False, default=list)
    track = db.Column(db.String(120), nullable=True)

    status = db.Column(db.String(16), nullable=False, default=STATUS_SELECTED)

    selected_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    confirmed_at = db.Column(db.DateTime, nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True)
    dropped_at = db.Column(db.DateTime, nullable=True)

    student = db.relationship("User", back_populates="selections", lazy=True)
    elective = db.relationship("Elective", back_populates="selections", lazy=True)

    def to_dict(self, include_student: bool = False) -> dict:
        data = {
            "id": self.id,
            "studentId": self.student_id,
            "electiveId": self.elective_id,
            "semester": self.semester,
            "categories": list(self.categories or []),
            "track": self.track,
            "status": self.status,
            "selectedAt": isoformat(self.selected_at),
            "confirmedAt": isoformat(self.confirmed_at),
            "completedAt": isoformat(self.completed_at),
            "droppedAt": isoformat(self.dropped_at),
        }
        if self.elective is not None:
            data["elective"] = {
                "name": self.elective.name,
                "code": self.elective.code,
                "credits": self.elective.credits,
            }
        if include_student and self.student is not None:
            data["student"] = {
                "name": self.student.name,
                "email": self.student.email,
                "rollNumber": self.student.roll_number,
                "department": self.student.department,
                "semester": self.student.semester,
                "section": self.student.section,
            }
        return data

    def __repr__(self) -> str:
        return (
            f"<Selection student={self.student_id} elective={self.elective_id} "
            f"sem={self.semester} {self.status}>"
        )
