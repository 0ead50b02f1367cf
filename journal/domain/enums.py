"""Domain enumerations."""

import enum


class TrafficCondition(str, enum.Enum):
    CALM = "CALM"
    NORMAL = "NORMAL"
    HEAVY = "HEAVY"
    JAMMED = "JAMMED"
