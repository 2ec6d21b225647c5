"""
Location providers used to re-evaluate a visit's location from its IP.

The stored location of a visit is derived from its full IP. After masking,
the location is looked up again with the masked IP so that it is no more
precise than the address it is kept next to.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional


__all__ = [
    'LOCATION_COLUMNS',
    'UNKNOWN_COUNTRY',
    'LocationProvider',
    'DisabledLocationProvider',
    'StaticLocationProvider',
    'location_values',
]


UNKNOWN_COUNTRY = 'xx'

# log_visit column -> provider result key
LOCATION_COLUMNS = {
    'location_country': 'country_code',
    'location_region': 'region_code',
    'location_city': 'city_name',
    'location_latitude': 'latitude',
    'location_longitude': 'longitude',
}


class LocationProvider(ABC):
    """Resolves an IP address to a location."""

    @abstractmethod
    def get_location(self, ip: Optional[str]) -> Dict:
        """Return a dict with any of the LOCATION_COLUMNS result keys."""
        pass


class DisabledLocationProvider(LocationProvider):
    """Provider used when no geolocation database is configured."""

    def get_location(self, ip: Optional[str]) -> Dict:
        return {}


class StaticLocationProvider(LocationProvider):
    """Looks locations up in a fixed ``{ip: location}`` mapping."""

    def __init__(self, locations: Dict[str, Dict]):
        self.locations = dict(locations)

    def get_location(self, ip: Optional[str]) -> Dict:
        return self.locations.get(ip, {})


def location_values(location: Dict) -> Dict:
    """Map a provider result onto log_visit location columns."""
    values = {
        column: location.get(key)
        for column, key in LOCATION_COLUMNS.items()
    }
    country = values['location_country']
    values['location_country'] = country.lower() if country else UNKNOWN_COUNTRY
    return values
