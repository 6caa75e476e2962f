"""Credential verification shared by REST dependencies and the socket handshake."""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.auth import (
    Principal, create_token_for, extract_bearer, hash_password, verify_credential, verify_password
)
from app.core.errors import AuthenticationError
from app.schemas.schemas import UserRole


def test_valid_token_yields_principal():
    principal = verify_credential(create_token_for(7, "HR", "hr7@acme.io"))

    assert principal == Principal(id=7, role=UserRole.hr, email="hr7@acme.io")
    assert principal.identity_group == "user-7"


def test_missing_token_rejected():
    with pytest.raises(AuthenticationError) as exc:
        verify_credential(None)
    assert exc.value.message == "No token provided"
    assert exc.value.http_status == 401


def test_expired_token_rejected():
    token = create_token_for(1, "USER", expires_delta=timedelta(seconds=-5))
    with pytest.raises(AuthenticationError):
        verify_credential(token)


def test_token_signed_with_other_secret_rejected():
    token = jwt.encode({"sub": "1", "role": "USER"}, "not-the-secret", algorithm="HS256")
    with pytest.raises(AuthenticationError):
        verify_credential(token)


def test_garbage_token_rejected():
    with pytest.raises(AuthenticationError):
        verify_credential("not.a.jwt")


def test_token_with_unknown_role_rejected():
    with pytest.raises(AuthenticationError):
        verify_credential(create_token_for(3, "ADMIN"))


def test_lowercase_role_claim_accepted():
    assert verify_credential(create_token_for(3, "user")).role == UserRole.user


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc", "abc"),
    ("bearer  abc ", "abc"),
    ("Basic abc", None),
    ("Bearer ", None),
    (None, None),
])
def test_extract_bearer(header, expected):
    assert extract_bearer(header) == expected


def test_password_hashing():
    hashed = hash_password("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("wrong", hashed)


# ============================================================
# HTTP DEPENDENCIES
# ============================================================

def test_protected_route_without_header(client):
    response = client.get("/api/jobs/hr/my-jobs")

    assert response.status_code == 401
    assert response.json()["message"] == "Access denied. No token provided."
    assert response.headers["www-authenticate"] == "Bearer"


def test_protected_route_with_expired_token(client, hr):
    token = create_token_for(hr.user.id, "HR", expires_delta=timedelta(seconds=-5))
    response = client.get("/api/jobs/hr/my-jobs", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["code"] == "AUTHENTICATION_ERROR"


def test_wrong_role_is_forbidden(client, seeker):
    response = client.get("/api/jobs/hr/my-jobs", headers=seeker.headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "Access denied. HR role required.",
        "code": "AUTHORIZATION_ERROR",
    }
