import pytest

from extensions import db
from models.elective import Elective
from models.feedback import ElectiveFeedback
from models.selection import Selection
from models.user import User

from conftest import auth_headers


@pytest.fixture
def people(app, make_student, make_admin, make_elective):
    with app.app_context():
        student = make_student(section="A")
        other = make_student(section="B", roll_number="CS99999")
        admin = make_admin()
        elective = make_elective(max_enrollment=1)
        db.session.add(Selection(student_id=student.id, elective_id=elective.id, semester=5, categories=["Departmental"]))
        db.session.add(ElectiveFeedback(
            student_id=student.id, elective_id=elective.id, semester=5,
            rating=4, comment="ok", would_recommend=True,
        ))
        db.session.commit()
        return {
            "student_id": student.id,
            "other_id": other.id,
            "admin_id": admin.id,
            "elective_id": elective.id,
            "student": auth_headers(student),
            "admin": auth_headers(admin),
        }


def test_profile_update(client, people):
    resp = client.put(
        "/api/auth/profile",
        json={"name": "Renamed", "section": "C", "mobile": "9876543210", "role": "admin"},
        headers=people["student"],
    )

    assert resp.status_code == 200
    user = resp.get_json()["user"]
    assert user["name"] == "Renamed"
    assert user["section"] == "C"
    assert user["mobile"] == "9876543210"
    assert user["role"] == "student"


def test_profile_update_keeps_identifiers_unique(client, people):
    resp = client.put("/api/auth/profile", json={"rollNumber": "CS99999"}, headers=people["student"])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Roll number already exists."

    resp = client.put("/api/auth/profile", json={"semester": 9}, headers=people["student"])
    assert resp.status_code == 400

    assert client.put("/api/auth/profile", json={"name": "x"}).status_code == 401


def test_admin_lists_users_with_filters(client, people):
    resp = client.get("/api/users", headers=people["admin"])
    assert resp.status_code == 200
    assert resp.get_json()["count"] == 3

    students = client.get("/api/users?role=student&section=B", headers=people["admin"]).get_json()["users"]
    assert [u["id"] for u in students] == [people["other_id"]]
    assert "password_hash" not in students[0]

    assert client.get("/api/users", headers=people["student"]).status_code == 403


def test_user_detail_is_self_or_admin(client, people):
    own = client.get(f"/api/users/{people['student_id']}", headers=people["student"])
    assert own.status_code == 200

    assert client.get(f"/api/users/{people['other_id']}", headers=people["student"]).status_code == 403
    assert client.get(f"/api/users/{people['other_id']}", headers=people["admin"]).status_code == 200
    assert client.get("/api/users/9999", headers=people["admin"]).status_code == 404


def test_admin_edits_a_user(client, people):
    resp = client.put(f"/api/users/{people['other_id']}", json={"semester": 6}, headers=people["admin"])
    assert resp.get_json()["user"]["semester"] == 6

    resp = client.put(f"/api/users/{people['other_id']}", json={"semester": 7}, headers=people["student"])
    assert resp.status_code == 403


def test_delete_user_frees_seats(app, client, people):
    resp = client.delete(f"/api/users/{people['student_id']}", headers=people["admin"])

    assert resp.status_code == 200
    with app.app_context():
        assert db.session.get(User, people["student_id"]) is None
        assert Selection.query.count() == 0
        assert ElectiveFeedback.query.count() == 0
        assert db.session.get(Elective, people["elective_id"]).enrolled_count == 0

    assert client.delete(f"/api/users/{people['student_id']}", headers=people["admin"]).status_code == 404


def test_delete_rules(client, people):
    assert client.delete(f"/api/users/{people['admin_id']}", headers=people["admin"]).status_code == 403
    assert client.delete(f"/api/users/{people['other_id']}", headers=people["student"]).status_code == 403
