import uuid

from fastapi.testclient import TestClient
from jose.exceptions import ExpiredSignatureError

from fittrack.main import app

client = TestClient(app)
PASSWORD = "StrongPassw0rd!"


def _register(**overrides):
    tag = uuid.uuid4().hex[:8]
    body = {"username": f"user_{tag}", "email": f"{tag}@fittrack.io", "name": "Ada", "password": PASSWORD}
    body.update(overrides)
    return client.post("/auth/register", json=body), body


def _login(email, password=PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


def _headers(email):
    token = _login(email).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def test_register_login_me():
    r, body = _register(current_weight=82.0)
    assert r.status_code == 201, r.text
    user = r.json()
    assert user["email"] == body["email"] and user["username"] == body["username"]
    assert user["current_weight"] == 82.0
    assert user["goal_weight"] == 70.0
    assert "password" not in user and "password_hash" not in user

    login = _login(body["email"])
    assert login.status_code == 200
    data = login.json()
    assert data["token_type"] == "bearer" and data["user"]["id"] == user["id"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200 and me.json()["id"] == user["id"]


def test_register_rejects_weak_password():
    r, _ = _register(password="short")
    assert r.status_code == 422
    r, _ = _register(password="alllowercaseletters1!")
    assert r.status_code == 422


def test_register_duplicate_email_conflicts():
    r, body = _register()
    assert r.status_code == 201
    dup, _ = _register(email=body["email"])
    assert dup.status_code == 409
    assert dup.json()["error"] == "conflict" and dup.json()["field"] == "email"


def test_login_wrong_password_and_unknown_email():
    _, body = _register()
    bad = _login(body["email"], "WrongPassw0rd!")
    assert bad.status_code == 401
    assert bad.json()["detail"] == "invalid credentials"
    assert _login(f"{uuid.uuid4().hex[:8]}@fittrack.io").status_code == 401


def test_me_requires_token():
    assert client.get("/auth/me").status_code == 401
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401 and r.json()["detail"] == "Not authenticated"


def test_expired_token(monkeypatch):
    _, body = _register()
    headers = _headers(body["email"])

    def expired(_token):
        raise ExpiredSignatureError("Signature has expired")

    monkeypatch.setattr("fittrack.deps.auth.token_user_id", expired)
    r = client.get("/auth/me", headers=headers)
    assert r.status_code == 401 and r.json()["detail"] == "Token expired"


def test_get_and_patch_own_profile():
    r, body = _register()
    uid = r.json()["id"]
    headers = _headers(body["email"])

    got = client.get(f"/users/{uid}", headers=headers)
    assert got.status_code == 200 and got.json()["name"] == "Ada"

    patched = client.patch(f"/users/{uid}", json={"goal_weight": 65.5, "height_inches": 4}, headers=headers)
    assert patched.status_code == 200
    assert patched.json()["goal_weight"] == 65.5
    assert patched.json()["height_inches"] == 4
    assert patched.json()["height_feet"] == 5


def test_other_users_profile_is_forbidden():
    a, _ = _register()
    _, b_body = _register()
    headers = _headers(b_body["email"])
    uid = a.json()["id"]
    assert client.get(f"/users/{uid}", headers=headers).status_code == 403
    assert client.patch(f"/users/{uid}", json={"name": "Mallory"}, headers=headers).status_code == 403


def test_token_carries_user_id_and_username():
    from fittrack.security import create_access_token, decode_token, token_user_id

    token = create_access_token(42, username="ada")
    claims = decode_token(token)
    assert claims["sub"] == "42" and claims["usr"] == "ada"
    assert token_user_id(token) == 42


def test_token_past_expiry_is_rejected():
    import pytest
    from fittrack.security import create_access_token, decode_token

    with pytest.raises(ExpiredSignatureError):
        decode_token(create_access_token(1, expires_minutes=-1))
