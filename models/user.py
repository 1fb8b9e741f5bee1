from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from extensions import db
from utils.dates import utcnow

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"


class User(UserMixin, db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(150), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(16), nullable=False, default=ROLE_STUDENT)

    # Student-only profile (admins leave these empty)
    roll_number = db.Column(db.String(32), unique=True, nullable=True)
    department = db.Column(db.String(120), nullable=True, index=True)
    semester = db.Column(db.Integer, nullable=True)
    section = db.Column(db.String(16), nullable=True)
    mobile = db.Column(db.String(20), nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    selections = db.relationship(
        "Selection",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy=True,
    )
    feedback = db.relationship(
        "ElectiveFeedback",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_student(self) -> bool:
        return self.role == ROLE_STUDENT

    def set_password(self, password: str) -> None:
        # use PBKDF2 instead of the default scrypt
        self.password_hash = generate_password_hash(
            password,
            method="pbkdf2:sha256",
            salt_length=16,
        )

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        # password hash never leaves the server
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "rollNumber": self.roll_number,
            "department": self.department,
            "semester": self.semester,
            "section": self.section,
            "mobile": self.mobile,
        }

    def __repr__(self) -> str:
        return f"<User {self.email}>"
