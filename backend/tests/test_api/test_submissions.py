"""Tests for the submissions view and administrator corrections."""

import pytest
from httpx import AsyncClient

from alloggiati.models.booking import Booking

pytestmark = pytest.mark.asyncio


def _guest(first_name: str, last_name: str) -> dict:
    return {
        "firstName": first_name,
        "lastName": last_name,
        "address": "Via Roma 1, Milano",
        "documentType": "Carta d'identità",
        "documentNumber": "AB123",
        "stayDuration": 2,
    }


async def _submit(client: AsyncClient, headers: dict, booking: Booking, main: tuple, extras: list[tuple] = ()) -> list:
    created = await client.post(
        "/api/v1/guests/drafts",
        json={
            "booking_id": str(booking.id),
            "mainGuest": _guest(*main),
            "additionalGuests": [_guest(*e) for e in extras],
        },
        headers=headers,
    )
    assert created.status_code == 201, created.text
    finalized = await client.post(f"/api/v1/guests/finalize/{booking.id}", headers=headers)
    assert finalized.status_code == 200, finalized.text
    return created.json()["guest_ids"]


# ---------------------------------------------------------------------------
# GET /api/v1/submissions
# ---------------------------------------------------------------------------


class TestListSubmissions:
    async def test_user_sees_own_groups_only(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict, make_booking
    ) -> None:
        b1 = await make_booking(room_number="101")
        b2 = await make_booking(room_number="102")
        await _submit(client, auth_headers, b1, ("Mario", "Rossi"), [("Laura", "Bianchi")])
        await _submit(client, other_headers, b2, ("Luca", "Verdi"))

        response = await client.get("/api/v1/submissions", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        group = data["items"][str(b1.id)]
        assert group["booking"]["room_number"] == "101"
        assert group["guests"][0]["is_main_guest"] is True
        assert group["submitted_by"] is None

    async def test_admin_sees_everyone_with_names(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict, admin_headers: dict, make_booking
    ) -> None:
        b1 = await make_booking(room_number="101")
        b2 = await make_booking(room_number="102")
        await _submit(client, auth_headers, b1, ("Mario", "Rossi"))
        await _submit(client, other_headers, b2, ("Luca", "Verdi"))

        data = (await client.get("/api/v1/submissions", headers=admin_headers)).json()

        assert data["total"] == 2
        assert data["items"][str(b1.id)]["submitted_by"] == "Front Desk"
        assert data["items"][str(b2.id)]["submitted_by"] == "Night Shift"

    async def test_empty(self, client: AsyncClient, auth_headers: dict) -> None:
        response = await client.get("/api/v1/submissions", headers=auth_headers)
        assert response.json() == {"items": {}, "total": 0}


# ---------------------------------------------------------------------------
# PUT /api/v1/submissions/guests/{guest_id}
# ---------------------------------------------------------------------------


class TestCorrectSubmittedGuest:
    async def test_admin_can_correct(
        self, client: AsyncClient, auth_headers: dict, admin_headers: dict, test_booking: Booking
    ) -> None:
        ids = await _submit(client, auth_headers, test_booking, ("Mario", "Rossi"))

        response = await client.put(
            f"/api/v1/submissions/guests/{ids[0]}",
            json={"address": "Corso Italia 5, Torino"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["address"] == "Corso Italia 5, Torino"
        assert data["status"] == "submitted"

    async def test_owner_cannot_correct(
        self, client: AsyncClient, auth_headers: dict, test_booking: Booking
    ) -> None:
        ids = await _submit(client, auth_headers, test_booking, ("Mario", "Rossi"))
        response = await client.put(
            f"/api/v1/submissions/guests/{ids[0]}",
            json={"address": "Corso Italia 5, Torino"},
            headers=auth_headers,
        )
        assert response.status_code == 403
        assert response.json()["redirect_to"] == "/submissions"
