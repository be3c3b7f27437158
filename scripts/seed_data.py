"""Seed the database with a demo tenant: rooms in every pricing mode, seasonal
rates and add-ons of every pricing type.

The tables must exist; the script creates them when they don't.

Run:
    python -m scripts.seed_data
"""

import asyncio
import sys
import uuid
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add the project root to the path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

from stayquote.database import Base, async_session_factory, engine
from stayquote.models import Addon, Booking, Room, SeasonalRate

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

DEMO_TENANT_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")

ROOMS = [
    {
        "name": "Garden Cottage",
        "description": "Self-catering cottage for up to four, priced per unit.",
        "room_code": "GC-1",
        "max_guests": 4,
        "base_price_per_night": Decimal("1200.00"),
        "pricing_mode": "per_unit",
    },
    {
        "name": "Bush Tent",
        "description": "Safari tent, every guest pays the nightly rate.",
        "room_code": "BT-1",
        "max_guests": 3,
        "base_price_per_night": Decimal("650.00"),
        "pricing_mode": "per_person",
        "child_price_per_night": Decimal("300.00"),
        "child_free_until_age": 3,
        "child_age_limit": 12,
    },
    {
        "name": "Lodge Suite",
        "description": "Rate covers the first adult; extra adults and children pay less.",
        "room_code": "LS-1",
        "max_guests": 4,
        "base_price_per_night": Decimal("2000.00"),
        "pricing_mode": "per_person_sharing",
        "additional_person_rate": Decimal("800.00"),
        "child_price_per_night": Decimal("400.00"),
        "child_free_until_age": 2,
        "child_age_limit": 16,
    },
]


def _seasonal_rates(year: int) -> list[dict]:
    """Festive and peak rates for ``year``; peak outranks festive where they overlap."""
    return [
        {
            "name": "Festive Season",
            "start_date": date(year, 12, 15),
            "end_date": date(year + 1, 1, 5),
            "multiplier": Decimal("1.5"),
            "priority": 1,
        },
        {
            "name": "New Year Peak",
            "start_date": date(year, 12, 30),
            "end_date": date(year + 1, 1, 1),
            "multiplier": Decimal("2"),
            "priority": 2,
        },
        {
            "name": "Winter Special",
            "start_date": date(year, 6, 1),
            "end_date": date(year, 8, 31),
            "multiplier": Decimal("0.8"),
            "priority": 0,
        },
    ]


ADDONS = [
    {
        "name": "Airport Transfer",
        "addon_type": "service",
        "price": Decimal("450.00"),
        "pricing_type": "per_booking",
        "max_quantity": 2,
    },
    {
        "name": "Daily Housekeeping",
        "addon_type": "service",
        "price": Decimal("150.00"),
        "pricing_type": "per_night",
    },
    {
        "name": "Game Drive",
        "addon_type": "experience",
        "price": Decimal("550.00"),
        "pricing_type": "per_guest",
    },
    {
        "name": "Breakfast",
        "addon_type": "product",
        "price": Decimal("120.00"),
        "pricing_type": "per_guest_per_night",
    },
]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the database with the demo tenant.

    Idempotent: everything belonging to the demo tenant is deleted first.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        for model in (Booking, SeasonalRate, Addon, Room):
            await session.execute(delete(model).where(model.tenant_id == DEMO_TENANT_ID))
        await session.flush()

        print(f"✅ Cleared demo tenant {DEMO_TENANT_ID}")

        # ------------------------------------------------------------------
        # 1. Rooms and their seasonal rates
        # ------------------------------------------------------------------
        year = date.today().year
        created_rooms: list[Room] = []
        rate_count = 0
        for room_data in ROOMS:
            room = Room(tenant_id=DEMO_TENANT_ID, **room_data)
            session.add(room)
            await session.flush()
            created_rooms.append(room)
            print(f"   🛏  {room.name} — {room.pricing_mode} (R{room.base_price_per_night}/night)")

            for rate_data in _seasonal_rates(year):
                multiplier = rate_data["multiplier"]
                session.add(
                    SeasonalRate(
                        tenant_id=DEMO_TENANT_ID,
                        room_id=room.id,
                        name=rate_data["name"],
                        start_date=rate_data["start_date"],
                        end_date=rate_data["end_date"],
                        price_per_night=(room.base_price_per_night * multiplier).quantize(Decimal("0.01")),
                        priority=rate_data["priority"],
                    )
                )
                rate_count += 1

        await session.flush()
        print(f"✅ Created {len(created_rooms)} rooms and {rate_count} seasonal rates")

        # ------------------------------------------------------------------
        # 2. Add-ons (game drives only with the tent)
        # ------------------------------------------------------------------
        tent = next(room for room in created_rooms if room.pricing_mode == "per_person")
        for addon_data in ADDONS:
            available = [str(tent.id)] if addon_data["addon_type"] == "experience" else []
            session.add(Addon(tenant_id=DEMO_TENANT_ID, available_for_rooms=available, **addon_data))

        await session.flush()
        await session.commit()

        print(f"✅ Created {len(ADDONS)} add-ons")
        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Tenant:         {DEMO_TENANT_ID}")
        print(f"   Rooms:          {len(created_rooms)}")
        print(f"   Seasonal rates: {rate_count}")
        print(f"   Add-ons:        {len(ADDONS)}")
        print("=" * 60)
        print(f"🎉 Done! Try GET /api/v1/public/{DEMO_TENANT_ID}/rooms/{created_rooms[0].id}/pricing")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
