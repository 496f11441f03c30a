"""
HairBook Backend — Booking API Tests
======================================

What we test:
    ✅ Create → 200 "Booking created", status defaults to 'pending'
    ✅ Listing is latest-date-first and only ever shows the caller's bookings
    ✅ Owner cannot be chosen through the request body
    ✅ Missing details or NaN/Infinity price → 400; price 0 is accepted
    ✅ No / malformed / expired / foreign-key tokens → 401
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from app.services.token_service import TokenService


def _booking(hairdresser="Marta", date="2024-06-01T10:00:00Z", price=25.0):
    return {"hairdresserName": hairdresser, "date": date, "price": price}


class TestCreateBooking:

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_client, register_and_login):
        headers = await register_and_login()

        response = await test_client.post("/api/bookings", json=_booking(), headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Booking created"}

        response = await test_client.get("/api/bookings", headers=headers)
        assert response.status_code == 200
        bookings = response.json()
        assert len(bookings) == 1
        booking = bookings[0]
        assert booking["hairdresserName"] == "Marta"
        assert booking["status"] == "pending"
        assert booking["price"] == 25.0
        assert booking["date"].startswith("2024-06-01T10:00:00")
        assert {"id", "userId", "createdAt"} <= booking.keys()

    @pytest.mark.asyncio
    async def test_price_zero_is_valid(self, test_client, register_and_login):
        headers = await register_and_login()
        response = await test_client.post(
            "/api/bookings", json=_booking(price=0), headers=headers
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity"])
    async def test_non_finite_price_rejected(self, test_client, register_and_login, price):
        headers = await register_and_login()
        body = (
            '{"hairdresserName": "Marta", "date": "2024-06-01T10:00:00Z", '
            f'"price": {price}}}'
        )

        response = await test_client.post(
            "/api/bookings",
            content=body,
            headers={**headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
        assert (await test_client.get("/api/bookings", headers=headers)).json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["hairdresserName", "date", "price"])
    async def test_missing_detail_rejected(self, test_client, register_and_login, field):
        headers = await register_and_login()
        payload = _booking()
        del payload[field]

        response = await test_client.post("/api/bookings", json=payload, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "All booking details are required"

    @pytest.mark.asyncio
    async def test_owner_in_body_is_ignored(self, test_client, register_and_login):
        alice = await register_and_login(email="a@x.com")
        bob = await register_and_login(email="b@x.com")
        bob_bookings = await test_client.get("/api/bookings", headers=bob)
        assert bob_bookings.json() == []

        payload = {**_booking(), "userId": str(uuid4()), "user_id": str(uuid4())}
        await test_client.post("/api/bookings", json=payload, headers=alice)

        alice_bookings = (await test_client.get("/api/bookings", headers=alice)).json()
        assert len(alice_bookings) == 1
        assert alice_bookings[0]["userId"] not in (payload["userId"], payload["user_id"])
        assert (await test_client.get("/api/bookings", headers=bob)).json() == []


class TestListBookings:

    @pytest.mark.asyncio
    async def test_latest_date_first(self, test_client, register_and_login):
        headers = await register_and_login()
        for name, date in [
            ("D2", "2024-06-02T10:00:00Z"),
            ("D1", "2024-06-01T10:00:00Z"),
            ("D3", "2024-06-03T10:00:00Z"),
        ]:
            await test_client.post(
                "/api/bookings", json=_booking(hairdresser=name, date=date), headers=headers
            )

        response = await test_client.get("/api/bookings", headers=headers)

        assert [b["hairdresserName"] for b in response.json()] == ["D3", "D2", "D1"]

    @pytest.mark.asyncio
    async def test_each_user_sees_only_their_own(self, test_client, register_and_login):
        alice = await register_and_login(email="a@x.com")
        bob = await register_and_login(email="b@x.com")
        await test_client.post("/api/bookings", json=_booking("Marta"), headers=alice)
        await test_client.post("/api/bookings", json=_booking("Luis"), headers=bob)

        alice_list = (await test_client.get("/api/bookings", headers=alice)).json()
        bob_list = (await test_client.get("/api/bookings", headers=bob)).json()

        assert [b["hairdresserName"] for b in alice_list] == ["Marta"]
        assert [b["hairdresserName"] for b in bob_list] == ["Luis"]

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client, register_and_login):
        headers = await register_and_login()
        response = await test_client.get("/api/bookings", headers=headers)
        assert response.status_code == 200
        assert response.json() == []


class TestBookingAuthGate:

    @pytest.mark.asyncio
    async def test_no_token(self, test_client):
        response = await test_client.get("/api/bookings")
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_no_token_on_create_skips_body_checks(self, test_client):
        response = await test_client.post("/api/bookings", json={})
        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "authorization",
        ["Bearer not-a-jwt", "Basic dXNlcjpwdw==", "Bearer", "token-without-scheme"],
    )
    async def test_malformed_header(self, test_client, authorization):
        response = await test_client.get(
            "/api/bookings", headers={"Authorization": authorization}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, test_client, app):
        issued_at = datetime.now(timezone.utc) - timedelta(days=8)
        token = app.state.token_service.issue(uuid4(), "user", now=issued_at)

        response = await test_client.get(
            "/api/bookings", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret(self, test_client):
        forged = TokenService("some-other-secret-long-enough-for-hs256").issue(uuid4(), "user")
        response = await test_client.get(
            "/api/bookings", headers={"Authorization": f"Bearer {forged}"}
        )
        assert response.status_code == 401
