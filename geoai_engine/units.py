"""
Unit Normalizer
===============

Converts a distance with a free-form unit token into kilometers.

Design:
- Static alias table (auditable, testable), no fuzzy matching
- Case-insensitive; surrounding whitespace, inner spaces and a trailing
  period are ignored ("Kilo Meters." == "kilometers")
- Missing unit means kilometers
- Unknown tokens raise UnrecognizedUnit so the caller asks the user
"""

import math
import re
from enum import Enum
from numbers import Real
from typing import Any, Dict, Optional

from geoai_engine.errors import InvalidMagnitude, UnrecognizedUnit
from geoai_engine.logging import LogEvent, create_logger

logger = create_logger("units")


class DistanceUnit(str, Enum):
    """Canonical distance units."""
    KM = "km"
    M = "m"
    CM = "cm"
    MM = "mm"


# 1 m = 0.001 km, 1 cm = 0.00001 km, 1 mm = 0.000001 km
UNITS_PER_KM: Dict[DistanceUnit, float] = {
    DistanceUnit.KM: 1.0,
    DistanceUnit.M: 1_000.0,
    DistanceUnit.CM: 100_000.0,
    DistanceUnit.MM: 1_000_000.0,
}

UNIT_ALIASES: Dict[str, DistanceUnit] = {
    # kilometers
    "km": DistanceUnit.KM,
    "kms": DistanceUnit.KM,
    "k": DistanceUnit.KM,
    "klick": DistanceUnit.KM,
    "klicks": DistanceUnit.KM,
    "kilometer": DistanceUnit.KM,
    "kilometers": DistanceUnit.KM,
    "kilometre": DistanceUnit.KM,
    "kilometres": DistanceUnit.KM,
    "kilometr": DistanceUnit.KM,
    "kilometrs": DistanceUnit.KM,
    "kilomter": DistanceUnit.KM,
    "kilomters": DistanceUnit.KM,
    "kilomete": DistanceUnit.KM,
    "kilomiter": DistanceUnit.KM,
    "kilomiters": DistanceUnit.KM,
    "killometer": DistanceUnit.KM,
    "killometers": DistanceUnit.KM,
    "killometre": DistanceUnit.KM,
    "killometres": DistanceUnit.KM,
    "kilometeres": DistanceUnit.KM,
    # meters
    "m": DistanceUnit.M,
    "mtr": DistanceUnit.M,
    "mtrs": DistanceUnit.M,
    "mts": DistanceUnit.M,
    "meter": DistanceUnit.M,
    "meters": DistanceUnit.M,
    "metre": DistanceUnit.M,
    "metres": DistanceUnit.M,
    "metr": DistanceUnit.M,
    "metrs": DistanceUnit.M,
    "meteres": DistanceUnit.M,
    "metter": DistanceUnit.M,
    "metters": DistanceUnit.M,
    "meeter": DistanceUnit.M,
    "meeters": DistanceUnit.M,
    "mter": DistanceUnit.M,
    "mters": DistanceUnit.M,
    # centimeters
    "cm": DistanceUnit.CM,
    "cms": DistanceUnit.CM,
    "centimeter": DistanceUnit.CM,
    "centimeters": DistanceUnit.CM,
    "centimetre": DistanceUnit.CM,
    "centimetres": DistanceUnit.CM,
    "centimter": DistanceUnit.CM,
    "centimters": DistanceUnit.CM,
    "centimetr": DistanceUnit.CM,
    "centimetrs": DistanceUnit.CM,
    "centimeteres": DistanceUnit.CM,
    "centimenter": DistanceUnit.CM,
    "centimenters": DistanceUnit.CM,
    "sentimeter": DistanceUnit.CM,
    "sentimeters": DistanceUnit.CM,
    # millimeters
    "mm": DistanceUnit.MM,
    "mms": DistanceUnit.MM,
    "millimeter": DistanceUnit.MM,
    "millimeters": DistanceUnit.MM,
    "millimetre": DistanceUnit.MM,
    "millimetres": DistanceUnit.MM,
    "milimeter": DistanceUnit.MM,
    "milimeters": DistanceUnit.MM,
    "milimetre": DistanceUnit.MM,
    "milimetres": DistanceUnit.MM,
    "millimter": DistanceUnit.MM,
    "millimters": DistanceUnit.MM,
    "milimter": DistanceUnit.MM,
    "milimters": DistanceUnit.MM,
    "millimetr": DistanceUnit.MM,
    "millimetrs": DistanceUnit.MM,
}

_DISTANCE_RE = re.compile(
    r"^\s*(?P<value>[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)\s*(?P<unit>.*?)\s*$"
)


def _alias_key(raw_unit: str) -> str:
    return "".join(raw_unit.lower().split()).rstrip(".")


def resolve_unit(raw_unit: Optional[str]) -> DistanceUnit:
    """
    Map a unit token to its canonical unit.

    Absent or blank tokens resolve to kilometers.

    Raises:
        UnrecognizedUnit: If the token is not in UNIT_ALIASES
    """
    if raw_unit is None or not str(raw_unit).strip():
        return DistanceUnit.KM

    unit = UNIT_ALIASES.get(_alias_key(str(raw_unit)))
    if unit is None:
        logger.warning(
            event=LogEvent.UNIT_UNRECOGNIZED,
            message=f"Unrecognized unit '{raw_unit}'",
            metadata={'unit': raw_unit},
        )
        raise UnrecognizedUnit(str(raw_unit))
    return unit


def normalize(raw_value: Any, raw_unit: Optional[str] = None) -> float:
    """
    Convert ``raw_value raw_unit`` into kilometers.

    Args:
        raw_value: Distance magnitude (int or float, > 0)
        raw_unit: Unit token or alias; None means kilometers

    Returns:
        Finite, positive distance in kilometers

    Raises:
        InvalidMagnitude: If the value is not a finite number > 0
        UnrecognizedUnit: If the unit token is unknown
    """
    if isinstance(raw_value, bool) or not isinstance(raw_value, Real):
        raise InvalidMagnitude(raw_value)

    value = float(raw_value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidMagnitude(raw_value)

    unit = resolve_unit(raw_unit)
    distance_km = value / UNITS_PER_KM[unit]

    if not math.isfinite(distance_km) or distance_km <= 0:
        raise InvalidMagnitude(raw_value)

    logger.debug(
        event=LogEvent.UNIT_NORMALIZED,
        message=f"{raw_value} {unit.value} -> {distance_km} km",
        metadata={'value': value, 'unit': unit.value, 'km': distance_km},
    )
    return distance_km


def parse_distance(expression: str) -> float:
    """
    Parse a distance expression such as ``"5km"``, ``"250 metres"`` or ``"3"``.

    Returns:
        Distance in kilometers

    Raises:
        InvalidMagnitude: If no leading number is present or it is not > 0
        UnrecognizedUnit: If the trailing unit token is unknown
    """
    match = _DISTANCE_RE.match(expression or "")
    if match is None:
        raise InvalidMagnitude(expression)
    return normalize(float(match.group("value")), match.group("unit") or None)
