"""Seed the database with staff accounts and sample bookings.

Creates an administrator, a front-desk user and a handful of active bookings
so the registration flow can be tried end to end.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
from datetime import date, timedelta

from sqlalchemy import delete

from alloggiati.auth.credentials import hash_password
from alloggiati.database import Base, async_session_factory, engine
from alloggiati.models.booking import BOOKING_ACTIVE, Booking
from alloggiati.models.guest import Guest
from alloggiati.models.profile import ROLE_ADMIN, ROLE_USER, Profile

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

PROFILES = [
    {"email": "admin@hotelmiramare.it", "password": "admin1234", "full_name": "Giulia Conti", "role": ROLE_ADMIN},
    {"email": "reception@hotelmiramare.it", "password": "reception1234", "full_name": "Marco Esposito", "role": ROLE_USER},
]

# (code, holder, room, days from today until check-in, nights)
BOOKINGS = [
    ("BK-1001", "Mario Rossi", "101", 0, 3),
    ("BK-1002", "Anna Ferrari", "102", 1, 2),
    ("BK-1003", "Luca Bianchi", "201", 2, 7),
    ("BK-1004", "Sofia Romano", "202", 5, 4),
    ("BK-1005", "Hans Müller", "301", 7, 10),
]


async def seed() -> None:
    """Reset the sample data and insert it again."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        # Clear previous sample data, guests first because of the foreign keys
        await session.execute(delete(Guest))
        await session.execute(delete(Booking))
        await session.execute(delete(Profile).where(Profile.email.in_([p["email"] for p in PROFILES])))
        await session.flush()

        for data in PROFILES:
            session.add(
                Profile(
                    email=data["email"],
                    hashed_password=hash_password(data["password"]),
                    full_name=data["full_name"],
                    role=data["role"],
                )
            )
            print(f"Created {data['role']}: {data['email']} / {data['password']}")

        today = date.today()
        for code, holder, room, offset, nights in BOOKINGS:
            check_in = today + timedelta(days=offset)
            session.add(
                Booking(
                    code=code,
                    guest_name=holder,
                    room_number=room,
                    check_in_date=check_in,
                    check_out_date=check_in + timedelta(days=nights),
                    status=BOOKING_ACTIVE,
                )
            )
        await session.commit()

    print(f"Created {len(BOOKINGS)} active bookings")
    print("Done. Log in at /api/v1/auth/login")


if __name__ == "__main__":
    asyncio.run(seed())
