"""
SQLAlchemy ORM models.

Tables
------
* ``drivers``    -- journal users, keyed by pseudonym
* ``locations``  -- named points owned by a driver
* ``stops``      -- timestamped, odometer-stamped visits to a location
* ``rides``      -- journeys from a departure stop to an optional arrival stop

Constraints
-----------
* ``uq_locations_driver_name``: a name is unique within one driver's locations.
* ``uq_rides_departure_arrival_driver``: the (departure, arrival, driver) triple.
* ``stops.location_id`` is a plain foreign key without cascade so a location
  cannot silently disappear from under a stop.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from journal.domain.enums import TrafficCondition


class DriverModel(Base):
    __tablename__ = "drivers"

    pseudonym = Column(String(64), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class LocationModel(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    driver_pseudonym = Column(
        String(64), ForeignKey("drivers.pseudonym"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("driver_pseudonym", "name", name="uq_locations_driver_name"),
        Index("idx_locations_driver", "driver_pseudonym"),
    )


class StopModel(Base):
    __tablename__ = "stops"

    id = Column(Integer, primary_key=True, autoincrement=True)
    moment = Column(DateTime(timezone=True), nullable=False)
    odometer_value = Column(Integer, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)

    location = relationship(LocationModel, lazy="selectin")

    __table_args__ = (Index("idx_stops_location", "location_id"),)


class RideModel(Base):
    __tablename__ = "rides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    departure_id = Column(Integer, ForeignKey("stops.id"), nullable=False)
    arrival_id = Column(Integer, ForeignKey("stops.id"), nullable=True)
    driver_pseudonym = Column(
        String(64), ForeignKey("drivers.pseudonym"), nullable=False
    )
    traffic_condition = Column(
        Enum(TrafficCondition),
        default=TrafficCondition.NORMAL,
        nullable=False,
    )
    comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # A ride owns its stops: replacing or deleting the ride removes them.
    departure = relationship(
        StopModel,
        foreign_keys=[departure_id],
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="selectin",
    )
    arrival = relationship(
        StopModel,
        foreign_keys=[arrival_id],
        cascade="all, delete-orphan",
        single_parent=True,
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint(
            "departure_id",
            "arrival_id",
            "driver_pseudonym",
            name="uq_rides_departure_arrival_driver",
        ),
        Index("idx_rides_driver", "driver_pseudonym"),
    )

