from app import app
from extensions import db
import models  # noqa: F401
from models.user import User, ROLE_ADMIN, ROLE_STUDENT
from models.elective import Elective
from models.category_limit import CategoryLimit

DEFAULT_ADMIN_EMAIL = "admin@college.edu"
DEFAULT_ADMIN_PASSWORD = "admin123"  # change after first login
DEPARTMENT = "Computer Science"


def ensure_admin() -> User:
    admin = User.query.filter_by(role=ROLE_ADMIN).first()
    if admin is not None:
        print(f"Admin already present: {admin.email}")
        return admin

    admin = User(name="System Administrator", email=DEFAULT_ADMIN_EMAIL, role=ROLE_ADMIN)
    admin.set_password(DEFAULT_ADMIN_PASSWORD)
    db.session.add(admin)
    db.session.flush()
    print(f"Created default admin {DEFAULT_ADMIN_EMAIL}")
    return admin


def main():
    with app.app_context():
        db.create_all()
        admin = ensure_admin()

        if Elective.query.count():
            db.session.commit()
            print("Electives already seeded, skipping catalog")
            return

# ----------------------------------------------------------------------------------------------------------------
#   ELECTIVES - semester 5, one per category, plus a capped one with a prerequisite
# ----------------------------------------------------------------------------------------------------------------

        ml = Elective(
            name="Machine Learning",
            code="CS501",
            department=DEPARTMENT,
            semester=5,
            track="AI",
            credits=4,
            categories=["Departmental"],
            max_enrollment=60,
            created_by=admin.id,
        )
        dl = Elective(
            name="Deep Learning",
            code="CS601",
            department=DEPARTMENT,
            semester=6,
            track="AI",
            credits=4,
            categories=["Departmental"],
            max_enrollment=40,
            created_by=admin.id,
        )
        ethics = Elective(
            name="Professional Ethics",
            code="HS501",
            department=DEPARTMENT,
            semester=5,
            track="Humanities",
            credits=2,
            categories=["Humanities"],
            created_by=admin.id,
        )
        iot = Elective(
            name="Internet of Things",
            code="OE501",
            department=DEPARTMENT,
            semester=5,
            track="Systems",
            credits=3,
            categories=["Open"],
            max_enrollment=30,
            created_by=admin.id,
        )
        db.session.add_all([ml, dl, ethics, iot])
        db.session.flush()  # get IDs for prerequisites

        # DL after ML
        dl.prerequisites = [ml]

# ----------------------------------------------------------------------------------------------------------------
#   LIMITS - one elective per category in semester 5
# ----------------------------------------------------------------------------------------------------------------

        db.session.add_all([
            CategoryLimit(department=DEPARTMENT, semester=5, category=c, max_electives=1, created_by=admin.id)
            for c in ("Departmental", "Humanities", "Open")
        ])

        student = User(
            name="Demo Student",
            email="student@college.edu",
            role=ROLE_STUDENT,
            roll_number="CS2021001",
            department=DEPARTMENT,
            semester=5,
            section="A",
        )
        student.set_password("student123")
        db.session.add(student)

        db.session.commit()
        print("Seeded demo electives, limits and student")


if __name__ == "__main__":
    main()
