from extensions import db
from utils.dates import isoformat, utcnow


# A student's review of an elective they took, one per (student, elective)
class ElectiveFeedback(db.Model):
    __tablename__ = "elective_feedback"

    __table_args__ = (
        db.UniqueConstraint("student_id", "elective_id", name="uq_feedback_student_elective"),
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating"),
    )

    id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )
    elective_id = db.Column(
        db.Integer,
        db.ForeignKey("elective.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    semester = db.Column(db.Integer, nullable=False)

    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False)
    would_recommend = db.Column(db.Boolean, nullable=False)
    improvements = db.Column(db.Text, nullable=True)

    submitted_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    student = db.relationship("User", back_populates="feedback", lazy=True)
    elective = db.relationship("Elective", lazy=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "electiveId": self.elective_id,
            "semester": self.semester,
            "feedback": {
                "rating": self.rating,
                "comment": self.comment,
                "wouldRecommend": self.would_recommend,
                "improvements": self.improvements,
            },
            "submittedAt": isoformat(self.submitted_at),
        }

    def __repr__(self) -> str:
        return f"<ElectiveFeedback student={self.student_id} elective={self.elective_id} {self.rating}/5>"
