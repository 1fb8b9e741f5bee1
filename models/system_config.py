from extensions import db
from utils.dates import utcnow

MAIN_KEY = "main"


# Single row holding the lists the admin UI offers (departments, sections, ...)
class SystemConfig(db.Model):
    __tablename__ = "system_config"

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(32), unique=True, nullable=False, default=MAIN_KEY)

    departments = db.Column(db.JSON, nullable=False, default=list)
    sections = db.Column(db.JSON, nullable=False, default=list)
    semesters = db.Column(db.JSON, nullable=False, default=list)
    elective_categories = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "departments": list(self.departments or []),
            "sections": list(self.sections or []),
            "semesters": list(self.semesters or []),
            "electiveCategories": list(self.elective_categories or []),
        }
