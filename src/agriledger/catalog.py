"""Canonical catalog definitions — single source of truth.

All closed enumerations and field limits for data submissions live here.
No other module should define its own copy of these sets.
"""

from __future__ import annotations

from enum import Enum


class CropType(str, Enum):
    WHEAT = "wheat"
    CORN = "corn"
    RICE = "rice"
    SOYBEAN = "soybean"


class DataType(str, Enum):
    NDVI = "ndvi"
    AERIAL = "aerial"
    THERMAL = "thermal"


class SensorType(str, Enum):
    DRONE = "drone"
    SATELLITE = "satellite"
    GROUND = "ground"


class DataFormat(str, Enum):
    GEOJSON = "geojson"
    TIFF = "tiff"
    JPEG = "jpeg"


# Field limits
MAX_HASH_LENGTH = 64
MAX_METADATA_LENGTH = 500
MAX_LOCATION_LENGTH = 100
MAX_RESOLUTION = 10000
LAT_RANGE = (-90, 90)
LON_RANGE = (-180, 180)

# Registry defaults
DEFAULT_MAX_DATA_ENTRIES = 10000
DEFAULT_UPLOAD_FEE = 100

# Reserved principal that can never receive fees
BURN_ADDRESS = "SP000000000000000000002Q6VF78"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """List the string values of a catalog enumeration, in declaration order."""
    return [member.value for member in enum_cls]


def parse_member(enum_cls: type[Enum], value: object) -> Enum | None:
    """Resolve a member or its string value to a catalog member.

    Returns None when the value is not part of the enumeration.
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None
