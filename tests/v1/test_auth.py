"""Tests for authentication endpoints."""

import pytest
from fastapi import status
from jose import jwt

from article_feeds.core.settings import settings
from tests.factories import TEST_PASSWORD


def _register_payload(**overrides) -> dict:
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": "+15551234567",
        "dob": "1990-12-10",
        "password": "analytical-engine",
        "preferences": ["technology", "space", "technology"],
    }
    payload.update(overrides)
    return payload


def test_register_returns_user_and_token(client) -> None:
    response = client.post("/api/v1/auth/register", json=_register_payload())

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "ada@example.com"
    assert data["user"]["preferences"] == ["technology", "space"]

    claims = jwt.decode(
        data["access_token"], settings.secret_key, algorithms=[settings.jwt_algorithm]
    )
    assert claims["sub"] == str(data["user"]["id"])


def test_register_duplicate_email_or_phone(client) -> None:
    client.post("/api/v1/auth/register", json=_register_payload())

    same_email = client.post(
        "/api/v1/auth/register", json=_register_payload(phone="+15550000000")
    )
    same_phone = client.post(
        "/api/v1/auth/register", json=_register_payload(email="other@example.com")
    )

    assert same_email.status_code == status.HTTP_400_BAD_REQUEST
    assert same_phone.status_code == status.HTTP_400_BAD_REQUEST
    assert same_email.json()["detail"] == "User already exists"


def test_register_short_password(client) -> None:
    response = client.post("/api/v1/auth/register", json=_register_payload(password="short"))

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.parametrize("email", ["@@@", "ada.example.com", "ada@", "@example.com"])
def test_register_rejects_malformed_email(client, email) -> None:
    response = client.post("/api/v1/auth/register", json=_register_payload(email=email))

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_register_strips_email_whitespace(client) -> None:
    response = client.post(
        "/api/v1/auth/register", json=_register_payload(email="  ada@example.com ")
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["email"] == "ada@example.com"


def test_login_with_email_and_phone(client, test_user) -> None:
    by_email = client.post(
        "/api/v1/auth/login",
        json={"email_or_phone": test_user.email, "password": TEST_PASSWORD},
    )
    by_phone = client.post(
        "/api/v1/auth/login",
        json={"email_or_phone": test_user.phone, "password": TEST_PASSWORD},
    )

    assert by_email.status_code == status.HTTP_200_OK
    assert by_phone.status_code == status.HTTP_200_OK
    assert by_email.json()["user"]["id"] == test_user.id


def test_login_wrong_password(client, test_user) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email_or_phone": test_user.email, "password": "wrong-password"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid credentials"


def test_login_unknown_user(client) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email_or_phone": "ghost@example.com", "password": TEST_PASSWORD},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_logout(client) -> None:
    response = client.post("/api/v1/auth/logout")

    assert response.status_code == status.HTTP_200_OK


def test_protected_route_requires_token(client) -> None:
    response = client.get("/api/v1/users/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_protected_route_rejects_bad_token(client) -> None:
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Invalid token"
