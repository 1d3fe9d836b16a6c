"""
Integration tests for /api/auth: register, login and /me through the real ASGI stack.

Coverage:
  - register 201, duplicate 400, missing fields 400
  - login 200 shape (no password hash), identical 400 body for both failure kinds
  - /me: 401 variants with their machine-readable messages, 200 echoing claims
"""

from __future__ import annotations

import unittest

import pytest
from fastapi.testclient import TestClient

REGISTER = "/api/auth/register"
LOGIN = "/api/auth/login"
ME = "/api/auth/me"


class AuthRoutesTestCase(unittest.TestCase):
    @pytest.fixture(autouse=True)
    def _bind_client(self, client: TestClient, register_and_login) -> None:
        self.client = client
        self.register_and_login = register_and_login


class TestRegisterRoute(AuthRoutesTestCase):
    def test_register_created(self) -> None:
        resp = self.client.post(
            REGISTER,
            json={"username": "dora", "email": "dora@example.com", "password": "pw-dora"},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json(), {"message": "User registered successfully"})

    def test_register_duplicate_email(self) -> None:
        body = {"username": "dora", "email": "dora@example.com", "password": "pw-dora"}
        self.client.post(REGISTER, json=body)
        resp = self.client.post(
            REGISTER,
            json={"username": "dora2", "email": "DORA@example.com", "password": "pw"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "User already exists")

    def test_register_missing_fields(self) -> None:
        resp = self.client.post(REGISTER, json={"username": "dora"})
        self.assertEqual(resp.status_code, 400)
        data = resp.json()
        self.assertIs(data["success"], False)
        self.assertEqual(data["message"], "All fields required")
        self.assertEqual({e["field"] for e in data["errors"]}, {"email", "password"})

    def test_register_without_body(self) -> None:
        resp = self.client.post(REGISTER)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid request data")


class TestLoginRoute(AuthRoutesTestCase):
    def test_login_returns_token_and_summary(self) -> None:
        token, user = self.register_and_login("erin", "erin@example.com", "erin-pass")
        self.assertTrue(token)
        self.assertEqual(set(user), {"id", "username", "email", "role"})
        self.assertEqual(user["username"], "erin")
        self.assertEqual(user["role"], "user")

    def test_failures_are_indistinguishable(self) -> None:
        self.register_and_login("erin", "erin@example.com", "erin-pass")
        wrong_pw = self.client.post(LOGIN, json={"email": "erin@example.com", "password": "nope"})
        unknown = self.client.post(
            LOGIN, json={"email": "ghost@example.com", "password": "erin-pass"}
        )
        self.assertEqual(wrong_pw.status_code, 400)
        self.assertEqual(unknown.status_code, 400)
        self.assertEqual(wrong_pw.json(), unknown.json())
        self.assertEqual(unknown.json(), {"success": False, "message": "Invalid credentials"})


class TestMeRoute(AuthRoutesTestCase):
    def test_missing_header(self) -> None:
        resp = self.client.get(ME)
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "NO_AUTH_HEADER")
        self.assertEqual(resp.headers["www-authenticate"], "Bearer")

    def test_malformed_header(self) -> None:
        resp = self.client.get(ME, headers={"Authorization": "Token abc"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "MALFORMED_AUTH_HEADER")

    def test_invalid_token(self) -> None:
        resp = self.client.get(ME, headers={"Authorization": "Bearer abc.def.ghi"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "TOKEN_INVALID_OR_EXPIRED")

    def test_me_echoes_claims(self) -> None:
        token, user = self.register_and_login("fay", "fay@example.com", "fay-pass")
        resp = self.client.get(ME, headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200, resp.text)
        claims = resp.json()["user"]
        self.assertEqual(claims["id"], user["id"])
        self.assertEqual(claims["role"], "user")
        self.assertEqual(claims["exp"] - claims["iat"], 3600)
