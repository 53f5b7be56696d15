"""Password hashing and session tokens."""

from datetime import timedelta

import pytest

from journey_planner.models import User, UserRole
from journey_planner.services.auth.exceptions import InvalidSessionToken
from journey_planner.services.auth.security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)


def make_user(**overrides) -> User:
    data = {
        "id": 7,
        "username": "dispatcher",
        "password_hash": "",
        "full_name": "Night Dispatcher",
        "role": UserRole.ADMIN,
        "must_change_password": True,
    }
    data.update(overrides)
    return User(**data)


def test_hash_and_verify_password():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_passwords_longer_than_72_bytes_are_truncated():
    hashed = hash_password("a" * 72 + "tail")

    assert verify_password("a" * 72 + "different tail", hashed)


def test_verify_password_with_malformed_hash_is_false():
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_session_token_round_trip():
    token = create_session_token(make_user())

    session_user = decode_session_token(token)

    assert session_user.id == 7
    assert session_user.username == "dispatcher"
    assert session_user.is_admin
    assert session_user.must_change_password


def test_regular_user_is_not_admin():
    session_user = decode_session_token(create_session_token(make_user(role=UserRole.USER)))

    assert not session_user.is_admin


def test_expired_session_token_is_rejected():
    token = create_session_token(make_user(), expires_in=timedelta(seconds=-5))

    with pytest.raises(InvalidSessionToken):
        decode_session_token(token)


def test_tampered_session_token_is_rejected():
    token = create_session_token(make_user())
    header, payload, signature = token.split(".")

    with pytest.raises(InvalidSessionToken):
        decode_session_token(f"{header}.{payload}.{signature[::-1]}")


def test_garbage_session_token_is_rejected():
    with pytest.raises(InvalidSessionToken):
        decode_session_token("not-a-token")
