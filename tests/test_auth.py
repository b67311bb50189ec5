from datetime import datetime, timedelta, timezone
from http import HTTPStatus

from app.core.config import jwt_settings
from app.db.repositories.users import UserRepository
from app.security.tokens import JWTSettings, create_access_token

from conftest import API, bearer


def test_register_returns_user_without_password(client):
    resp = client.post(f"{API}/auth/register", json={"email": "a@x.com", "password": "secret1"})
    assert resp.status_code == HTTPStatus.CREATED
    body = resp.json()
    assert body["email"] == "a@x.com"
    assert isinstance(body["id"], int)
    assert "password" not in body and "hashedPassword" not in body


def test_register_duplicate_email_is_rejected(client):
    payload = {"email": "a@x.com", "password": "secret1"}
    assert client.post(f"{API}/auth/register", json=payload).status_code == HTTPStatus.CREATED

    resp = client.post(f"{API}/auth/register", json=payload)
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json()["detail"] == "Email already registered"


def test_concurrent_duplicate_registration_is_rejected(client, monkeypatch):
    # les deux requêtes passent la vérification préalable : seule la contrainte UNIQUE tranche
    monkeypatch.setattr(UserRepository, "get_by_email", lambda self, email: None)
    payload = {"email": "a@x.com", "password": "secret1"}
    assert client.post(f"{API}/auth/register", json=payload).status_code == HTTPStatus.CREATED

    resp = client.post(f"{API}/auth/register", json=payload)
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json() == {"detail": "Email already registered"}

    # la session a été remise en état après l'échec
    other = client.post(f"{API}/auth/register", json={"email": "b@x.com", "password": "secret1"})
    assert other.status_code == HTTPStatus.CREATED


def test_register_rejects_empty_fields(client):
    for payload in (
        {"email": "", "password": "secret1"},
        {"email": "a@x.com", "password": ""},
        {"email": "   ", "password": "secret1"},
        {"email": "a@x.com"},
    ):
        resp = client.post(f"{API}/auth/register", json=payload)
        assert resp.status_code == HTTPStatus.BAD_REQUEST, payload


def test_login_returns_bearer_token(client, signup):
    headers, user_id = signup("a@x.com", "secret1")
    resp = client.get(f"{API}/auth/me", headers=headers)
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["id"] == user_id
    assert resp.json()["email"] == "a@x.com"


def test_wrong_password_and_unknown_email_fail_identically(client, signup):
    signup("a@x.com", "secret1")

    wrong_pw = client.post(f"{API}/auth/login", json={"email": "a@x.com", "password": "nope"})
    unknown = client.post(f"{API}/auth/login", json={"email": "ghost@x.com", "password": "nope"})

    assert wrong_pw.status_code == unknown.status_code == HTTPStatus.UNAUTHORIZED
    assert wrong_pw.json() == unknown.json() == {"detail": "Invalid credentials"}


def test_missing_token_is_401(client):
    resp = client.get(f"{API}/todos")
    assert resp.status_code == HTTPStatus.UNAUTHORIZED
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_malformed_authorization_header_is_401(client, alice):
    token = alice[0]["Authorization"].split(" ", 1)[1]
    for value in (f"Token {token}", "Bearer", token):
        resp = client.get(f"{API}/todos", headers={"Authorization": value})
        assert resp.status_code == HTTPStatus.UNAUTHORIZED, value
        assert resp.json() == {"detail": "Not authenticated"}


def test_expired_token_is_401(client, alice):
    _, user_id = alice
    past = datetime.now(timezone.utc) - timedelta(days=1)
    token = create_access_token(user_id=user_id, email="alice@x.com", settings=jwt_settings, now=past)
    resp = client.get(f"{API}/todos", headers=bearer(token))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_token_signed_with_another_key_is_401(client, alice):
    _, user_id = alice
    forged = create_access_token(user_id=user_id, email="alice@x.com", settings=JWTSettings(secret="other", issuer=jwt_settings.issuer))
    resp = client.get(f"{API}/todos", headers=bearer(forged))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_token_for_unknown_user_is_401(client):
    token = create_access_token(user_id=999, email="ghost@x.com", settings=jwt_settings)
    resp = client.get(f"{API}/todos", headers=bearer(token))
    assert resp.status_code == HTTPStatus.UNAUTHORIZED
    assert resp.json() == {"detail": "Not authenticated"}
