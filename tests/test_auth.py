from fastapi.testclient import TestClient

from fintrack.core.security import get_current_user, hash_password, verify_password


def test_password_hashing():
    stored = hash_password("s3cret!")
    assert verify_password("s3cret!", stored)
    assert not verify_password("wrong", stored)
    assert not verify_password("s3cret!", "garbage")


def test_register_token_me(app):
    # Exercise the real bearer-token dependency.
    app.dependency_overrides.pop(get_current_user)
    client = TestClient(app)

    resp = client.post(
        "/auth/register",
        json={"fullName": "Lee Park", "email": "Lee@Example.com", "password": "hunter22"},
    )
    assert resp.status_code == 201
    assert resp.json()["email"] == "lee@example.com"

    dup = client.post(
        "/auth/register",
        json={"fullName": "Lee Park", "email": "lee@example.com", "password": "hunter22"},
    )
    assert dup.status_code == 409

    bad = client.post("/auth/token", data={"username": "lee@example.com", "password": "nope"})
    assert bad.status_code == 401

    token = client.post(
        "/auth/token", data={"username": "lee@example.com", "password": "hunter22"}
    ).json()
    assert token["token_type"] == "bearer"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token['access_token']}"})
    assert me.status_code == 200
    assert me.json()["fullName"] == "Lee Park"

    assert client.get("/dashboard/summary").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"}).status_code == 401
