from extensions import db
from models.prerequisite import elective_prerequisite
from utils.dates import isoformat, utcnow

SUBJECT_TYPES = ("Theory", "Practical", "Theory+Practical")
DEFAULT_CATEGORIES = ["Departmental"]


class Elective(db.Model):
    __tablename__ = "elective"

    __table_args__ = (
        db.Index("ix_elective_sem_dept", "semester", "department"),
    )

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)

    # Course code is optional, but unique when present (NULLs don't collide)
    code = db.Column(db.String(32), unique=True, nullable=True)

    department = db.Column(db.String(120), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    track = db.Column(db.String(120), nullable=True, index=True)
    credits = db.Column(db.Integer, nullable=False, default=3)

    # One or more of e.g. "Departmental", "Humanities", "Open"
    categories = db.Column(db.JSON, nullable=False, default=lambda: list(DEFAULT_CATEGORIES))

    subject_type = db.Column(db.String(32), nullable=False, default="Theory")
    description = db.Column(db.Text, nullable=True)
    instructor = db.Column(db.String(120), nullable=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)
    deadline = db.Column(db.DateTime, nullable=True)

    # NULL max_enrollment means no cap
    min_enrollment = db.Column(db.Integer, nullable=True)
    max_enrollment = db.Column(db.Integer, nullable=True)

    created_by = db.Column(
        db.Integer,
        db.ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Electives that must be completed before this one
    prerequisites = db.relationship(
        "Elective",
        secondary=elective_prerequisite,
        primaryjoin=id == elective_prerequisite.c.elective_id,
        secondaryjoin=id == elective_prerequisite.c.prereq_elective_id,
        lazy=True,
    )

    selections = db.relationship(
        "Selection",
        back_populates="elective",
        passive_deletes=True,
        lazy="dynamic",
    )

    @property
    def enrolled_count(self) -> int:
        """Number of non-dropped selections. Derived, never stored."""
        # Lazy import to avoid circular imports
        from models.selection import Selection, STATUS_DROPPED

        return (
            Selection.query
            .filter(Selection.elective_id == self.id, Selection.status != STATUS_DROPPED)
            .count()
        )

    def to_dict(self, enrolled_count=None) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "department": self.department,
            "semester": self.semester,
            "track": self.track,
            "credits": self.credits,
            "categories": list(self.categories or []),
            "subjectType": self.subject_type,
            "description": self.description,
            "instructor": self.instructor,
            "isActive": self.is_active,
            "deadline": isoformat(self.deadline),
            "minEnrollment": self.min_enrollment,
            "maxEnrollment": self.max_enrollment,
            "enrolledCount": self.enrolled_count if enrolled_count is None else enrolled_count,
            "prerequisites": [p.id for p in self.prerequisites],
        }

    def __repr__(self) -> str:
        return f"<Elective {self.code or self.id} {self.name}>"
