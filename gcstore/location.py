"""Locations where a bucket may store its objects."""

from __future__ import annotations

from enum import Enum
from typing import Union


class NALocation(str, Enum):
    """Single regions in North America."""

    MONTREAL = "NORTHAMERICA-NORTHEAST1"
    IOWA = "US-CENTRAL1"
    SOUTH_CAROLINA = "US-EAST1"
    NORTHERN_VIRGINIA = "US-EAST4"
    OREGON = "US-WEST1"
    LOS_ANGELES = "US-WEST2"


class SALocation(str, Enum):
    """Single regions in South America."""

    SAO_PAULO = "SOUTHAMERICA-EAST1"


class EuropeLocation(str, Enum):
    """Single regions in Europe."""

    FINLAND = "EUROPE-NORTH1"
    BELGIUM = "EUROPE-WEST1"
    LONDON = "EUROPE-WEST2"
    FRANKFURT = "EUROPE-WEST3"
    NETHERLANDS = "EUROPE-WEST4"
    ZURICH = "EUROPE-WEST6"


class AsiaLocation(str, Enum):
    """Single regions in Asia."""

    TAIWAN = "ASIA-EAST1"
    HONG_KONG = "ASIA-EAST2"
    TOKYO = "ASIA-NORTHEAST1"
    OSAKA = "ASIA-NORTHEAST2"
    MUMBAI = "ASIA-SOUTH1"
    SINGAPORE = "ASIA-SOUTHEAST1"


class AusLocation(str, Enum):
    """Single regions in Australia."""

    SYDNEY = "AUSTRALIA-SOUTHEAST1"


class MultiRegion(str, Enum):
    """Multi-region storage options."""

    ASIA = "ASIA"
    EU = "EU"
    US = "US"


class DualRegion(str, Enum):
    """Dual-region storage options."""

    EUR4 = "EUR4"
    NAM4 = "NAM4"


Location = Union[
    NALocation,
    SALocation,
    EuropeLocation,
    AsiaLocation,
    AusLocation,
    MultiRegion,
    DualRegion,
]

_VARIANTS = (
    NALocation,
    SALocation,
    EuropeLocation,
    AsiaLocation,
    AusLocation,
    MultiRegion,
    DualRegion,
)


def parse_location(value: str) -> Location:
    """Return the location member whose wire name is ``value``."""
    for variant in _VARIANTS:
        try:
            return variant(value)
        except ValueError:
            continue
    raise ValueError(f"unknown location: {value!r}")


def default_location() -> Location:
    """The location used when none is given: South Carolina."""
    return NALocation.SOUTH_CAROLINA