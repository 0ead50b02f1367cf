"""
Repository Pattern -- abstracts DB access so the routes stay DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work). Lookups that
fail raise the domain errors from ``journal.domain.exceptions``; the API
layer turns those into HTTP statuses.

Location and ride repositories are scoped to a driver: every operation takes
the owning ``DriverModel`` and never sees another driver's rows.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import DriverModel, LocationModel, RideModel, StopModel
from journal.domain.entities import MAX_INTEGER, Ride, Stop
from journal.domain.exceptions import (
    DriverAlreadyExists,
    DriverNotFound,
    InvalidRide,
    LocationInUse,
    LocationNameTaken,
    LocationNotFound,
    RideNotFound,
)

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def _parse_identifier(identifier) -> Optional[int]:
    """Identifiers come straight from the URI; anything but a plain in-range number matches nothing."""
    if isinstance(identifier, int):
        value = identifier
    elif isinstance(identifier, str) and _DIGITS.fullmatch(identifier):
        value = int(identifier)
    else:
        return None
    if not 1 <= value <= MAX_INTEGER:
        return None
    return value


class DriverRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, pseudonym: str) -> DriverModel:
        driver = await self.session.get(DriverModel, pseudonym)
        if driver is None:
            raise DriverNotFound(pseudonym)
        return driver

    async def find_all(self) -> list[DriverModel]:
        result = await self.session.execute(
            select(DriverModel).order_by(DriverModel.pseudonym)
        )
        return list(result.scalars().all())

    async def _exists(self, pseudonym: str) -> bool:
        return await self.session.get(DriverModel, pseudonym) is not None

    async def create(self, pseudonym: str) -> DriverModel:
        if await self._exists(pseudonym):
            logger.warning("Rejected duplicate driver %r", pseudonym)
            raise DriverAlreadyExists(pseudonym)
        driver = DriverModel(pseudonym=pseudonym)
        self.session.add(driver)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Inserted concurrently after the existence check.
            logger.warning("Rejected duplicate driver %r", pseudonym)
            raise DriverAlreadyExists(pseudonym) from exc
        logger.info("Created driver %r", pseudonym)
        return driver

    async def update(self, pseudonym: str) -> DriverModel:
        """Full replacement; the pseudonym is the identity, so only existence changes the outcome."""
        driver = await self.find_by_id(pseudonym)
        logger.info("Updated driver %r", pseudonym)
        return driver

    async def delete_by_id(self, pseudonym: str) -> None:
        """Delete the driver with its rides (and their stops), then its locations."""
        driver = await self.find_by_id(pseudonym)

        rides = await self.session.execute(
            select(RideModel).where(RideModel.driver_pseudonym == pseudonym)
        )
        for ride in rides.scalars().all():
            await self.session.delete(ride)
        await self.session.flush()

        await self.session.execute(
            delete(LocationModel).where(LocationModel.driver_pseudonym == pseudonym)
        )
        await self.session.delete(driver)
        await self.session.flush()
        logger.info("Deleted driver %r", pseudonym)


class LocationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _name_taken(
        self, driver: DriverModel, name: str, exclude_id: Optional[int] = None
    ) -> bool:
        query = select(LocationModel.id).where(
            LocationModel.driver_pseudonym == driver.pseudonym,
            LocationModel.name == name,
        )
        if exclude_id is not None:
            query = query.where(LocationModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.first() is not None

    async def create_new_location_for(
        self,
        driver: DriverModel,
        *,
        name: str,
        latitude: float,
        longitude: float,
    ) -> LocationModel:
        if await self._name_taken(driver, name):
            logger.warning(
                "Rejected duplicate location %r for driver %r", name, driver.pseudonym
            )
            raise LocationNameTaken(name)
        location = LocationModel(
            name=name,
            latitude=latitude,
            longitude=longitude,
            driver_pseudonym=driver.pseudonym,
        )
        self.session.add(location)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.warning(
                "Rejected duplicate location %r for driver %r", name, driver.pseudonym
            )
            raise LocationNameTaken(name) from exc
        logger.info(
            "Created location %d (%r) for driver %r",
            location.id,
            name,
            driver.pseudonym,
        )
        return location

    async def find_location_for(self, driver: DriverModel, identifier) -> LocationModel:
        location_id = _parse_identifier(identifier)
        if location_id is None:
            raise LocationNotFound(identifier)
        result = await self.session.execute(
            select(LocationModel).where(
                LocationModel.id == location_id,
                LocationModel.driver_pseudonym == driver.pseudonym,
            )
        )
        location = result.scalar_one_or_none()
        if location is None:
            raise LocationNotFound(identifier)
        return location

    async def find_all_locations_for(self, driver: DriverModel) -> list[LocationModel]:
        result = await self.session.execute(
            select(LocationModel)
            .where(LocationModel.driver_pseudonym == driver.pseudonym)
            .order_by(LocationModel.id)
        )
        return list(result.scalars().all())

    async def update_location_for(
        self,
        driver: DriverModel,
        identifier,
        *,
        name: str,
        latitude: float,
        longitude: float,
    ) -> LocationModel:
        location = await self.find_location_for(driver, identifier)
        if await self._name_taken(driver, name, exclude_id=location.id):
            logger.warning(
                "Rejected rename of location %d to %r for driver %r",
                location.id,
                name,
                driver.pseudonym,
            )
            raise LocationNameTaken(name)
        location_id = location.id
        location.name = name
        location.latitude = latitude
        location.longitude = longitude
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.warning(
                "Rejected rename of location %d to %r for driver %r",
                location_id,
                name,
                driver.pseudonym,
            )
            raise LocationNameTaken(name) from exc
        logger.info("Updated location %d for driver %r", location.id, driver.pseudonym)
        return location

    async def is_referenced(self, location: LocationModel) -> bool:
        result = await self.session.execute(
            select(func.count())
            .select_from(StopModel)
            .where(StopModel.location_id == location.id)
        )
        return (result.scalar() or 0) > 0

    async def delete_location_for(self, driver: DriverModel, identifier) -> None:
        location = await self.find_location_for(driver, identifier)
        if await self.is_referenced(location):
            logger.warning(
                "Rejected deletion of location %d still referenced by a stop",
                location.id,
            )
            raise LocationInUse(identifier)
        await self.session.delete(location)
        await self.session.flush()
        logger.info("Deleted location %d for driver %r", location.id, driver.pseudonym)


class RideRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.locations = LocationRepository(session)

    async def _stop_model(self, driver: DriverModel, stop: Stop) -> StopModel:
        location = await self.locations.find_location_for(driver, stop.location_id)
        return StopModel(
            moment=stop.moment,
            odometer_value=stop.odometer_value,
            location=location,
        )

    async def _replace_stop(
        self, driver: DriverModel, current: Optional[StopModel], stop: Stop
    ) -> StopModel:
        if current is None:
            return await self._stop_model(driver, stop)
        current.location = await self.locations.find_location_for(
            driver, stop.location_id
        )
        current.moment = stop.moment
        current.odometer_value = stop.odometer_value
        return current

    async def create_ride_for(self, driver: DriverModel, ride: Ride) -> RideModel:
        if not ride.is_valid():
            raise InvalidRide("Arrival must be after departure in time and odometer")
        model = RideModel(
            driver_pseudonym=driver.pseudonym,
            departure=await self._stop_model(driver, ride.departure),
            arrival=(
                await self._stop_model(driver, ride.arrival) if ride.is_done() else None
            ),
            traffic_condition=ride.traffic_condition,
            comment=ride.comment,
        )
        self.session.add(model)
        await self.session.flush()
        logger.info(
            "Created ride %d for driver %r (done=%s)",
            model.id,
            driver.pseudonym,
            ride.is_done(),
        )
        return model

    async def find_ride_for(self, driver: DriverModel, identifier) -> RideModel:
        ride_id = _parse_identifier(identifier)
        if ride_id is None:
            raise RideNotFound(identifier)
        result = await self.session.execute(
            select(RideModel).where(
                RideModel.id == ride_id,
                RideModel.driver_pseudonym == driver.pseudonym,
            )
        )
        ride = result.scalar_one_or_none()
        if ride is None:
            raise RideNotFound(identifier)
        return ride

    async def find_all_rides_for(self, driver: DriverModel) -> list[RideModel]:
        result = await self.session.execute(
            select(RideModel)
            .join(StopModel, RideModel.departure_id == StopModel.id)
            .where(RideModel.driver_pseudonym == driver.pseudonym)
            .order_by(StopModel.moment, RideModel.id)
        )
        return list(result.scalars().all())

    async def update_ride_for(
        self, driver: DriverModel, identifier, ride: Ride
    ) -> RideModel:
        model = await self.find_ride_for(driver, identifier)
        if not ride.is_valid():
            raise InvalidRide("Arrival must be after departure in time and odometer")
        model.departure = await self._replace_stop(
            driver, model.departure, ride.departure
        )
        if ride.is_done():
            model.arrival = await self._replace_stop(driver, model.arrival, ride.arrival)
        else:
            model.arrival = None
        model.traffic_condition = ride.traffic_condition
        model.comment = ride.comment
        await self.session.flush()
        logger.info("Updated ride %d for driver %r", model.id, driver.pseudonym)
        return model

    async def delete_ride_for(self, driver: DriverModel, identifier) -> None:
        model = await self.find_ride_for(driver, identifier)
        await self.session.delete(model)
        await self.session.flush()
        logger.info("Deleted ride %d for driver %r", model.id, driver.pseudonym)
