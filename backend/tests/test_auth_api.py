from models.log import Log
from models.users import User

REGISTRATION = {
    "username": "panelhopper",
    "email": "hopper@example.com",
    "password": "hunter2",
    "full_name": "Pat Hopper",
    "address": "12 Gutter Lane",
    "phone": "555-0101",
}


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Server is running", "data": None}


def test_register_forces_customer_role_and_active_status(client, db_session):
    res = client.post("/api/auth/register", json={**REGISTRATION, "role": "admin", "status": "blocked"})

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["data"]["user"]["role"] == "customer"
    assert "password" not in body["data"]["user"]

    user = db_session.query(User).filter(User.email == REGISTRATION["email"]).one()
    assert user.role == "customer"
    assert user.status == "active"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['data']['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == REGISTRATION["email"]


def test_register_rejects_duplicate_email_and_username(client, make_user):
    make_user(email="hopper@example.com")
    res = client.post("/api/auth/register", json=REGISTRATION)
    assert res.status_code == 400
    assert res.json()["message"] == "Email already registered"

    make_user(username="otherhopper")
    res = client.post("/api/auth/register", json={**REGISTRATION, "email": "new@example.com", "username": "otherhopper"})
    assert res.status_code == 400
    assert res.json()["message"] == "Username already taken"


def test_login_returns_token_and_public_user(client, make_user):
    user = make_user(email="a@b.com", password="right")

    res = client.post("/api/auth/login", json={"email": "a@b.com", "password": "right"})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["token"]
    assert data["user"] == {
        "id": str(user.id),
        "username": user.username,
        "email": "a@b.com",
        "full_name": user.full_name,
        "role": "customer",
    }


def test_login_with_wrong_password_is_unauthorized(client, make_user):
    make_user(email="a@b.com", password="right")

    res = client.post("/api/auth/login", json={"email": "a@b.com", "password": "wrong"})

    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Invalid email or password", "data": None}


def test_login_for_unknown_email_is_unauthorized(client):
    res = client.post("/api/auth/login", json={"email": "ghost@b.com", "password": "x"})
    assert res.status_code == 401


def test_blocked_user_is_forbidden_whatever_the_password(client, make_user):
    make_user(email="a@b.com", password="right", status="blocked")

    for password in ("right", "wrong"):
        res = client.post("/api/auth/login", json={"email": "a@b.com", "password": password})
        assert res.status_code == 403
        assert res.json()["message"] == "Your account has been blocked"


def test_failed_login_is_audited(client, make_user, db_session):
    make_user(email="a@b.com", password="right")

    client.post("/api/auth/login", json={"email": "a@b.com", "password": "wrong"})

    entry = db_session.query(Log).filter(Log.action == "LOGIN").one()
    assert entry.status == "FAIL"
    assert entry.meta["email"] == "a@b.com"


def test_me_requires_a_token(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["message"] == "Missing authorization token"


def test_me_rejects_an_invalid_token(client):
    res = client.get("/api/auth/me", headers={"Authorization": "Bearer abc.def.ghi"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid token"


def test_me_for_deleted_user_is_not_found(client, make_user, auth_header, db_session):
    user = make_user()
    header = auth_header(user)
    db_session.delete(user)
    db_session.commit()

    res = client.get("/api/auth/me", headers=header)
    assert res.status_code == 404


def test_change_password(client, make_user, auth_header):
    user = make_user(email="a@b.com", password="old")
    header = auth_header(user)

    res = client.put("/api/auth/change-password", headers=header,
                     json={"current_password": "nope", "new_password": "new"})
    assert res.status_code == 401
    assert res.json()["message"] == "Current password is incorrect"

    res = client.put("/api/auth/change-password", headers=header,
                     json={"current_password": "old", "new_password": "new"})
    assert res.status_code == 200

    res = client.post("/api/auth/login", json={"email": "a@b.com", "password": "new"})
    assert res.status_code == 200
