"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 3 sample drivers
  - a handful of locations around Lyon for each driver
  - a few rides per driver (done, and one still under way)
"""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from journal.domain.entities import Ride, Stop
from journal.domain.enums import TrafficCondition
from journal.infrastructure.database import async_session_factory, engine
from journal.infrastructure.models import DriverModel
from journal.infrastructure.repositories import (
    DriverRepository,
    LocationRepository,
    RideRepository,
)

DRIVERS = ["camille", "louis", "ines"]

LOCATIONS = [
    {"name": "Home", "latitude": 45.7640, "longitude": 4.8357},
    {"name": "Office", "latitude": 45.7602, "longitude": 4.8596},
    {"name": "Gym", "latitude": 45.7485, "longitude": 4.8467},
    {"name": "Grandparents", "latitude": 45.4397, "longitude": 4.3872},
]

# (departure, arrival or None, duration, distance km, traffic, comment)
RIDES = [
    ("Home", "Office", timedelta(minutes=25), 6, TrafficCondition.HEAVY, None),
    ("Office", "Gym", timedelta(minutes=15), 3, TrafficCondition.NORMAL, None),
    ("Gym", "Home", timedelta(minutes=12), 3, TrafficCondition.CALM, None),
    (
        "Home",
        "Grandparents",
        timedelta(hours=1, minutes=5),
        62,
        TrafficCondition.JAMMED,
        "Roadworks on the A47",
    ),
    ("Grandparents", None, None, None, TrafficCondition.NORMAL, None),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(select(func.count()).select_from(DriverModel))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        drivers = DriverRepository(session)
        locations = LocationRepository(session)
        rides = RideRepository(session)

        for index, pseudonym in enumerate(DRIVERS):
            driver = await drivers.create(pseudonym)

            by_name = {}
            for loc in LOCATIONS:
                model = await locations.create_new_location_for(driver, **loc)
                by_name[loc["name"]] = model.id

            moment = datetime(2026, 9, 1, 8, tzinfo=timezone.utc) + timedelta(days=index)
            odometer = 42_000 + 1_000 * index
            for start, end, duration, distance, traffic, comment in RIDES:
                departure = Stop(
                    moment=moment,
                    odometer_value=odometer,
                    location_id=by_name[start],
                )
                arrival = None
                if end is not None:
                    moment += duration
                    odometer += distance
                    arrival = Stop(
                        moment=moment,
                        odometer_value=odometer,
                        location_id=by_name[end],
                    )
                await rides.create_ride_for(
                    driver,
                    Ride(
                        departure=departure,
                        arrival=arrival,
                        traffic_condition=traffic,
                        comment=comment,
                    ),
                )
                moment += timedelta(hours=3)

            print(
                f"  Created driver {pseudonym!r} with "
                f"{len(LOCATIONS)} locations and {len(RIDES)} rides"
            )

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
