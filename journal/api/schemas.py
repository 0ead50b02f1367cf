"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from journal.domain.entities import MAX_INTEGER, Ride, Stop
from journal.domain.enums import TrafficCondition


# ── Requests ──────────────────────────────────────────────────────────


class DriverRequest(BaseModel):
    pseudonym: str = Field(..., min_length=1, max_length=64)


class LocationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class StopRequest(BaseModel):
    moment: datetime
    odometer_value: int = Field(..., ge=0, le=MAX_INTEGER)
    location_id: int = Field(..., ge=1, le=MAX_INTEGER)

    @field_validator("moment")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Naive and aware moments must stay comparable.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_entity(self) -> Stop:
        return Stop(
            moment=self.moment,
            odometer_value=self.odometer_value,
            location_id=self.location_id,
        )


class RideRequest(BaseModel):
    departure: StopRequest
    arrival: Optional[StopRequest] = None
    traffic_condition: TrafficCondition = TrafficCondition.NORMAL
    comment: Optional[str] = Field(
        None,
        max_length=2000,
        description="Difficulties the driver encountered during the ride.",
    )

    def to_entity(self) -> Ride:
        return Ride(
            departure=self.departure.to_entity(),
            arrival=self.arrival.to_entity() if self.arrival else None,
            traffic_condition=self.traffic_condition,
            comment=self.comment,
        )


# ── Responses ─────────────────────────────────────────────────────────


class DriverResponse(BaseModel):
    pseudonym: str

    model_config = {"from_attributes": True}


class LocationResponse(BaseModel):
    id: int
    name: str
    latitude: float
    longitude: float

    model_config = {"from_attributes": True}


class StopResponse(BaseModel):
    id: int
    moment: datetime
    odometer_value: int
    location: LocationResponse

    model_config = {"from_attributes": True}


class RideResponse(BaseModel):
    """The owning driver is left out; it is already part of the URI."""

    id: int
    departure: StopResponse
    arrival: Optional[StopResponse] = None
    traffic_condition: TrafficCondition
    comment: Optional[str] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"
