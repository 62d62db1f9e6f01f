import hashlib
from datetime import timedelta
from uuid import uuid4

from jose import jwt

from config import ApplicationConfig
from src.api.utils.jwt import generate_session_token, verify_session_token
from src.app.services.password import hash_password, validate_password, verify_password
from src.app.services.reset_secret import (
    generate_reset_secret,
    hash_reset_secret,
    match_reset_secret,
)


def test_session_token_carries_user_id_and_thirty_day_expiry():
    user_id = uuid4()

    claims = verify_session_token(generate_session_token(user_id))

    assert claims["id"] == str(user_id)
    assert claims["jti"]
    assert claims["exp"] - claims["iat"] == int(timedelta(days=30).total_seconds())


def test_session_token_unique_per_issue():
    user_id = uuid4()

    first = verify_session_token(generate_session_token(user_id))
    second = verify_session_token(generate_session_token(user_id))

    assert first["jti"] != second["jti"]


def test_tampered_session_token_rejected():
    token = generate_session_token(uuid4())
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    assert verify_session_token(tampered) is None


def test_session_token_signed_with_other_secret_rejected():
    forged = jwt.encode({"id": str(uuid4())}, "not-the-secret", algorithm="HS256")

    assert verify_session_token(forged) is None


def test_session_token_without_user_id_rejected():
    token = jwt.encode(
        {"sub": "someone"}, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )

    assert verify_session_token(token) is None


def test_garbage_session_token_rejected():
    assert verify_session_token("not-a-jwt") is None


def test_reset_secret_hash_is_sha256_of_plaintext():
    plaintext, token_hash = generate_reset_secret()

    assert len(bytes.fromhex(plaintext)) == 20
    assert token_hash == hashlib.sha256(plaintext.encode()).hexdigest()
    assert hash_reset_secret(plaintext) == token_hash


def test_reset_secrets_are_random():
    assert generate_reset_secret()[0] != generate_reset_secret()[0]


def test_match_reset_secret():
    plaintext, token_hash = generate_reset_secret()

    assert match_reset_secret(plaintext, token_hash)
    assert not match_reset_secret(plaintext + "0", token_hash)
    assert not match_reset_secret("", token_hash)
    assert not match_reset_secret(plaintext, None)


def test_password_hash_round_trip():
    password_hash = hash_password("secret1")

    assert password_hash != "secret1"
    assert verify_password("secret1", password_hash)
    assert not verify_password("secret2", password_hash)
    assert not verify_password("secret1", "not-a-bcrypt-hash")


def test_validate_password_length():
    assert validate_password("secret").is_ok()
    assert validate_password("short").error.code == "VALIDATION_ERROR"
