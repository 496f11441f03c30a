"""
HairBook Backend — Registration & Login API Tests
===================================================

What:  POST /api/register and POST /api/login end to end (HTTP → SQLite).

What we test:
    ✅ Register → 200; second register with the same email → 400
    ✅ Missing fields / empty body → 400 "All fields are required"
    ✅ Login returns a token and the public user (no password digest)
    ✅ Unknown email and wrong password return the identical 400 body
    ✅ Error bodies carry code and request_id
"""

import pytest

REGISTRATION = {"name": "Ana", "email": "ana@x.com", "phone": "555", "password": "pw"}


class TestRegisterEndpoint:

    @pytest.mark.asyncio
    async def test_register_then_duplicate(self, test_client):
        response = await test_client.post("/api/register", json=REGISTRATION)
        assert response.status_code == 200
        assert response.json() == {"message": "User registered successfully"}

        response = await test_client.post("/api/register", json=REGISTRATION)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Email already registered"
        assert body["code"] == "duplicate_email"

    @pytest.mark.asyncio
    async def test_missing_phone(self, test_client):
        payload = {k: v for k, v in REGISTRATION.items() if k != "phone"}
        response = await test_client.post("/api/register", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required"
        assert response.json()["details"] == {"missing": ["phone"]}

    @pytest.mark.asyncio
    async def test_empty_body(self, test_client):
        response = await test_client.post("/api/register")
        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required"

    @pytest.mark.asyncio
    async def test_register_does_not_log_in(self, test_client):
        response = await test_client.post("/api/register", json=REGISTRATION)
        assert "token" not in response.json()

    @pytest.mark.asyncio
    async def test_wrong_type_is_bad_request(self, test_client):
        response = await test_client.post(
            "/api/register", json={**REGISTRATION, "name": {"first": "Ana"}}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


class TestLoginEndpoint:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client):
        await test_client.post("/api/register", json=REGISTRATION)

        response = await test_client.post(
            "/api/login", json={"email": "ana@x.com", "password": "pw"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token"].count(".") == 2
        assert body["user"] == {
            "name": "Ana",
            "email": "ana@x.com",
            "phone": "555",
            "role": "user",
        }

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_are_indistinguishable(self, test_client):
        await test_client.post("/api/register", json=REGISTRATION)

        unknown = await test_client.post(
            "/api/login", json={"email": "nobody@x.com", "password": "pw"}
        )
        wrong = await test_client.post(
            "/api/login", json={"email": "ana@x.com", "password": "nope"}
        )

        assert unknown.status_code == wrong.status_code == 400
        unknown_body = {k: v for k, v in unknown.json().items() if k != "request_id"}
        wrong_body = {k: v for k, v in wrong.json().items() if k != "request_id"}
        assert unknown_body == wrong_body
        assert unknown_body["error"] == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, test_client):
        response = await test_client.post("/api/login", json={"email": "ana@x.com"})
        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.post(
            "/api/login",
            json={"email": "nobody@x.com", "password": "pw"},
            headers={"X-Request-ID": "abc12345"},
        )
        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"
