from services.jwt_handler import verify_token
from services.password_hashing import hash_pin


def test_login_creates_user_once(client, store):
    first = client.post("/auth/login", json={"username": "  billions_fan "})
    second = client.post("/auth/login", json={"username": "BILLIONS_FAN"})

    assert first.status_code == 200
    assert first.json()["created"] is True
    assert first.json()["user"]["username"] == "billions_fan"

    assert second.status_code == 200
    assert second.json()["created"] is False
    assert second.json()["user"]["id"] == first.json()["user"]["id"]
    assert len(store.users) == 1


def test_login_returns_usable_token(client):
    response = client.post("/auth/login", json={"username": "ana"})
    token = response.json()["access_token"]

    assert verify_token(token)["id"] == response.json()["user"]["id"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["username"] == "ana"
    assert "hashed_pin" not in me.json()["user"]


def test_login_rejects_bad_usernames(client):
    assert client.post("/auth/login", json={"username": "   "}).status_code == 422
    assert client.post("/auth/login", json={"username": "a" * 33}).status_code == 422
    assert client.post("/auth/login", json={"username": "<script>"}).status_code == 422


def test_guest_login(client, store):
    response = client.post("/auth/guest")

    assert response.status_code == 200
    assert response.json()["user"]["username"].startswith("Guest_")
    assert len(store.users) == 1


def test_register_then_login_with_pin(client, store):
    registered = client.post("/auth/register", json={"username": "ana", "pin": "4821"})
    assert registered.status_code == 201
    assert registered.json()["user"]["has_pin"] is True

    assert client.post("/auth/login", json={"username": "ana"}).status_code == 401
    assert (
        client.post("/auth/login", json={"username": "ana", "pin": "0000"}).status_code
        == 401
    )

    response = client.post("/auth/login", json={"username": "ana", "pin": "4821"})
    assert response.status_code == 200
    assert response.json()["created"] is False
    assert len(store.users) == 1


def test_register_existing_username(client, make_user):
    make_user("ana")

    response = client.post("/auth/register", json={"username": "ANA", "pin": "4821"})

    assert response.status_code == 409


def test_register_pin_must_be_digits(client):
    response = client.post("/auth/register", json={"username": "ana", "pin": "12ab"})
    assert response.status_code == 422


def test_guest_skips_pin_protected_names(client, store, monkeypatch):
    store.create_user(None, "Guest_1", hash_pin("1234"))
    names = iter(["Guest_1", "Guest_2"])
    monkeypatch.setattr(
        "app.authentication.main.generate_guest_name", lambda: next(names)
    )

    response = client.post("/auth/guest")

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "Guest_2"


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code in (401, 403)
    bad = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 403
