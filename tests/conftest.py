"""
Elective portal - test configuration and fixtures

The app fixture does NOT keep an application context pushed: Flask-Login
caches the current user on ``g``, so every client request must run in its
own context. Tests that touch the database directly use ``ctx`` or an
explicit ``with app.app_context():`` block.
"""
from datetime import timedelta
import itertools

import pytest

from app import create_app
from auth.tokens import issue_token
from config import TestConfig
from extensions import db
import models  # noqa: F401
from models.category_limit import CategoryLimit
from models.elective import Elective
from models.user import User, ROLE_ADMIN, ROLE_STUDENT
from utils.dates import utcnow

DEPARTMENT = "Computer Science"

_seq = itertools.count(1)


@pytest.fixture
def app():
    """Fresh app + in-memory schema per test"""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Push an app context for service-level tests"""
    with app.app_context():
        yield


@pytest.fixture
def make_student():
    def _make(**overrides) -> User:
        n = next(_seq)
        fields = dict(
            name=f"Student {n}",
            email=f"student{n}@college.edu",
            role=ROLE_STUDENT,
            roll_number=f"CS{n:05d}",
            department=DEPARTMENT,
            semester=5,
            section="A",
        )
        fields.update(overrides)
        user = User(**fields)
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_admin():
    def _make(**overrides) -> User:
        n = next(_seq)
        fields = dict(name=f"Admin {n}", email=f"admin{n}@college.edu", role=ROLE_ADMIN)
        fields.update(overrides)
        user = User(**fields)
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def make_elective():
    def _make(**overrides) -> Elective:
        n = next(_seq)
        fields = dict(
            name=f"Elective {n}",
            code=f"EL{n:03d}",
            department=DEPARTMENT,
            semester=5,
            track="General",
            credits=3,
            categories=["Departmental"],
            is_active=True,
        )
        fields.update(overrides)
        prerequisites = fields.pop("prerequisites", [])
        elective = Elective(**fields)
        elective.prerequisites = list(prerequisites)
        db.session.add(elective)
        db.session.commit()
        return elective

    return _make


@pytest.fixture
def make_limit():
    def _make(category: str, max_electives: int = 1, *, department=DEPARTMENT, semester=5) -> CategoryLimit:
        row = CategoryLimit(
            department=department,
            semester=semester,
            category=category,
            max_electives=max_electives,
        )
        db.session.add(row)
        db.session.commit()
        return row

    return _make


def auth_headers(user: User) -> dict:
    """Bearer header for a user (needs an app context)"""
    return {"Authorization": f"Bearer {issue_token(user)}"}


def past(days: int = 1):
    return utcnow() - timedelta(days=days)


def future(days: int = 1):
    return utcnow() + timedelta(days=days)
