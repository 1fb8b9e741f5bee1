from extensions import db
from utils.dates import utcnow


# Max selections per (department, semester, category), set by an administrator
class CategoryLimit(db.Model):
    __tablename__ = "category_limit"

    __table_args__ = (
        db.UniqueConstraint(
            "department",
            "semester",
            "category",
            name="uq_category_limit_dept_sem_cat",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    department = db.Column(db.String(120), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(120), nullable=False)

    max_electives = db.Column(db.Integer, nullable=False, default=1)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_by = db.Column(
        db.Integer,
        db.ForeignKey("user.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "department": self.department,
            "semester": self.semester,
            "category": self.category,
            "maxElectives": self.max_electives,
            "isActive": self.is_active,
        }

    def __repr__(self) -> str:
        return f"<CategoryLimit {self.department}/{self.semester}/{self.category}={self.max_electives}>"
