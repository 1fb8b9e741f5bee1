import pytest

from extensions import db
from models.selection import Selection

from conftest import auth_headers, future, past


@pytest.fixture
def users(app, make_student, make_admin):
    with app.app_context():
        return {
            "student": auth_headers(make_student()),
            "admin": auth_headers(make_admin()),
        }


def test_listing_carries_derived_fields(app, client, make_student, make_elective):
    with app.app_context():
        open_one = make_elective(name="Machine Learning", max_enrollment=2, deadline=future(3))
        closed = make_elective(name="Cloud Computing", deadline=past())
        db.session.add(Selection(
            student_id=make_student().id, elective_id=open_one.id, semester=5, categories=["Departmental"],
        ))
        db.session.commit()
        open_id, closed_id = open_one.id, closed.id

    resp = client.get("/api/electives")

    assert resp.status_code == 200
    items = {e["id"]: e for e in resp.get_json()["electives"]}
    assert items[open_id]["enrolledCount"] == 1
    assert items[open_id]["canSelect"] is True
    assert items[open_id]["isExpired"] is False
    assert items[open_id]["daysLeft"] >= 2
    assert items[closed_id]["isExpired"] is True
    assert items[closed_id]["canSelect"] is False
    assert items[closed_id]["daysLeft"] <= 0


def test_listing_filters(app, client, make_elective):
    with app.app_context():
        make_elective(categories=["Humanities"], semester=6)
        make_elective(categories=["Departmental", "Open"], track="AI")
        make_elective(is_active=False)

    electives = client.get("/api/electives").get_json()["electives"]
    assert len(electives) == 2

    by_category = client.get("/api/electives?category=Open").get_json()["electives"]
    assert [e["track"] for e in by_category] == ["AI"]

    by_semester = client.get("/api/electives?semester=6").get_json()["electives"]
    assert by_semester[0]["categories"] == ["Humanities"]


def test_only_admins_see_inactive(app, client, users, make_elective):
    with app.app_context():
        hidden_id = make_elective(is_active=False).id

    student_view = client.get("/api/electives?include_inactive=1", headers=users["student"])
    admin_view = client.get("/api/electives?include_inactive=1", headers=users["admin"])

    assert student_view.get_json()["count"] == 0
    assert admin_view.get_json()["count"] == 1
    assert client.get(f"/api/electives/{hidden_id}", headers=users["student"]).status_code == 404
    assert client.get(f"/api/electives/{hidden_id}", headers=users["admin"]).status_code == 200


def test_admin_creates_elective(client, users):
    resp = client.post(
        "/api/electives",
        json={
            "name": "Deep Learning",
            "code": "cs602",
            "department": "Computer Science",
            "semester": 6,
            "category": "Departmental",
            "maxEnrollment": 40,
            "deadline": "2030-01-31T18:30:00+05:30",
        },
        headers=users["admin"],
    )

    assert resp.status_code == 201
    elective = resp.get_json()["elective"]
    assert elective["code"] == "CS602"
    assert elective["categories"] == ["Departmental"]
    assert elective["enrolledCount"] == 0
    assert elective["deadline"] == "2030-01-31T13:00:00Z"


def test_blank_code_is_stored_as_null(client, users):
    for _ in range(2):
        resp = client.post(
            "/api/electives",
            json={"name": "Ethics", "code": "undefined", "department": "Humanities", "semester": 5},
            headers=users["admin"],
        )
        assert resp.status_code == 201
        assert resp.get_json()["elective"]["code"] is None


def test_duplicate_code_rejected(app, client, users, make_elective):
    with app.app_context():
        make_elective(code="CS601")

    resp = client.post(
        "/api/electives",
        json={"name": "Copy", "code": "cs601", "department": "Computer Science", "semester": 6},
        headers=users["admin"],
    )

    assert resp.status_code == 400
    assert "CS601" in resp.get_json()["error"]


def test_unknown_prerequisite_rejected(client, users):
    resp = client.post(
        "/api/electives",
        json={"name": "Advanced", "department": "Computer Science", "semester": 6, "prerequisites": [404]},
        headers=users["admin"],
    )

    assert resp.status_code == 400
    assert "404" in resp.get_json()["error"]


def test_bad_subject_type_rejected(client, users):
    resp = client.post(
        "/api/electives",
        json={"name": "Lab", "department": "Computer Science", "semester": 6, "subjectType": "Seminar"},
        headers=users["admin"],
    )
    assert resp.status_code == 400


def test_students_cannot_manage_electives(app, client, users, make_elective):
    with app.app_context():
        eid = make_elective().id

    assert client.post("/api/electives", json={}, headers=users["student"]).status_code == 403
    assert client.put(f"/api/electives/{eid}", json={}, headers=users["student"]).status_code == 403
    assert client.delete(f"/api/electives/{eid}", headers=users["student"]).status_code == 403
    assert client.post("/api/electives", json={}).status_code == 401


def test_update_and_deactivate(app, client, users, make_elective):
    with app.app_context():
        base_id = make_elective(code="CS501").id
        eid = make_elective(max_enrollment=10).id

    resp = client.put(
        f"/api/electives/{eid}",
        json={"maxEnrollment": 25, "prerequisites": [base_id], "name": None},
        headers=users["admin"],
    )
    assert resp.status_code == 200
    elective = resp.get_json()["elective"]
    assert elective["maxEnrollment"] == 25
    assert elective["prerequisites"] == [base_id]
    assert elective["name"]

    resp = client.put(f"/api/electives/{eid}", json={"prerequisites": [eid]}, headers=users["admin"])
    assert resp.status_code == 400

    resp = client.delete(f"/api/electives/{eid}", headers=users["admin"])
    assert resp.status_code == 200
    ids = [e["id"] for e in client.get("/api/electives").get_json()["electives"]]
    assert eid not in ids

    assert client.delete("/api/electives/9999", headers=users["admin"]).status_code == 404
