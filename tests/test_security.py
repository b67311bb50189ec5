import pytest

from app.security.password import hash_password, verify_password
from app.security.tokens import (
    JWTSettings,
    TokenError,
    create_access_token,
    decode_token,
    user_id_from_token,
)

SETTINGS = JWTSettings(secret="unit-secret", issuer="todo-api")


def test_password_hash_is_salted_and_verifiable():
    first = hash_password("secret1")
    second = hash_password("secret1")
    assert first != "secret1"
    assert first != second
    assert verify_password("secret1", first)
    assert not verify_password("secret2", first)


def test_access_token_carries_user_id():
    token = create_access_token(user_id=42, email="a@x.com", settings=SETTINGS)
    decoded = decode_token(token, SETTINGS)
    assert decoded["sub"] == "42"
    assert decoded["typ"] == "access"
    assert decoded["exp"] > decoded["iat"]
    assert user_id_from_token(token, SETTINGS) == 42


def test_token_from_another_issuer_is_rejected():
    token = create_access_token(
        user_id=1, email="a@x.com", settings=JWTSettings(secret="unit-secret", issuer="someone-else")
    )
    with pytest.raises(TokenError):
        decode_token(token, SETTINGS)


def test_garbage_token_is_rejected():
    with pytest.raises(TokenError):
        user_id_from_token("not.a.jwt", SETTINGS)
