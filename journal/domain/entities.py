"""
Domain entities with business logic.

A ``Ride`` goes from its departure ``Stop`` to an optional arrival ``Stop``.
Setting the arrival is the only transition and it is terminal: a ride with
an arrival is *done*. A done ride is *valid* only when the arrival is later
than the departure both in time and on the odometer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import TrafficCondition

# Upper bound of the Integer columns (ids, odometer) on every supported database.
MAX_INTEGER = 2**31 - 1


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class Stop:
    moment: datetime
    odometer_value: int
    location_id: Optional[int] = None
    id: Optional[int] = None

    def is_after(self, other: Stop) -> bool:
        return self.moment > other.moment


@dataclass
class Ride:
    departure: Stop
    arrival: Optional[Stop] = None
    traffic_condition: TrafficCondition = TrafficCondition.NORMAL
    comment: Optional[str] = None
    id: Optional[int] = None

    @property
    def departure_moment(self) -> datetime:
        return self.departure.moment

    def is_done(self) -> bool:
        """A ride is done once the driver has reached the arrival stop."""
        return self.arrival is not None

    def is_valid(self) -> bool:
        if not self.is_done():
            return True
        return (
            self.arrival.is_after(self.departure)
            and self.arrival.odometer_value > self.departure.odometer_value
        )
