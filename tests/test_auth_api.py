from models.user import User


REGISTRATION = {
    "name": "Asha Rao",
    "email": "Asha.Rao@College.edu",
    "password": "secret123",
    "rollNumber": "CS21001",
    "department": "Computer Science",
    "semester": 5,
    "section": "B",
}


def test_register_returns_token_and_student(app, client):
    resp = client.post("/api/auth/register", json=REGISTRATION)

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "asha.rao@college.edu"
    assert body["user"]["role"] == "student"
    assert body["user"]["rollNumber"] == "CS21001"

    with app.app_context():
        assert User.query.count() == 1


def test_register_ignores_role_in_body(client):
    resp = client.post("/api/auth/register", json={**REGISTRATION, "role": "admin"})

    assert resp.status_code == 201
    assert resp.get_json()["user"]["role"] == "student"


def test_duplicate_email_or_roll_number(client):
    client.post("/api/auth/register", json=REGISTRATION)

    resp = client.post("/api/auth/register", json={**REGISTRATION, "rollNumber": "CS21002"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Email already exists."

    resp = client.post("/api/auth/register", json={**REGISTRATION, "email": "other@college.edu"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Roll number already exists."


def test_register_validation(client):
    resp = client.post("/api/auth/register", json={**REGISTRATION, "password": "123"})
    assert resp.status_code == 400
    assert resp.get_json()["error"].startswith("password")

    resp = client.post("/api/auth/register", json={**REGISTRATION, "semester": 11})
    assert resp.status_code == 400


def test_login_and_me(client):
    client.post("/api/auth/register", json=REGISTRATION)

    resp = client.post("/api/auth/login", json={"email": "asha.rao@college.edu", "password": "secret123"})
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["name"] == "Asha Rao"


def test_wrong_password(client):
    client.post("/api/auth/register", json=REGISTRATION)

    resp = client.post("/api/auth/login", json={"email": REGISTRATION["email"], "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "Invalid email or password."}


def test_me_requires_a_valid_token(app, client):
    assert client.get("/api/auth/me").status_code == 401

    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Access denied. Authentication required."


def test_health(client):
    assert client.get("/api/health").get_json()["status"] == "OK"
