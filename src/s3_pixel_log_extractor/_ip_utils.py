"""Various utility functions for handling IP address related tasks."""

import pydantic
import requests

from ._config import CURRENT_IP_URL, GEO_IP_URL_TEMPLATE, REQUEST_TIMEOUT_IN_SECONDS
from ._exceptions import GeoLookupFailure
from ._models import GeoRecord


def get_current_ip_address() -> str:
    """
    Fetch the public IP address the operator is currently seen from.

    Requested once per run so that the operator's own visits to the pixel can be excluded.
    """
    response = requests.get(url=CURRENT_IP_URL, timeout=REQUEST_TIMEOUT_IN_SECONDS)
    response.raise_for_status()

    return response.text.strip()


def get_geo_record(ip_address: str) -> GeoRecord:
    """Look up the geolocation attributes of an IP address; any failure is raised as a GeoLookupFailure."""
    url = GEO_IP_URL_TEMPLATE.format(ip_address=ip_address)
    try:
        response = requests.get(url=url, timeout=REQUEST_TIMEOUT_IN_SECONDS)
        response.raise_for_status()
        details = response.json()
    except (requests.RequestException, ValueError) as exception:
        raise GeoLookupFailure(f"Error fetching geolocation for {ip_address}: {exception}") from exception

    if not isinstance(details, dict):
        raise GeoLookupFailure(f"Unexpected geolocation response for {ip_address}: {details!r}")

    try:
        return GeoRecord.model_validate({"ip": ip_address, **details})
    except pydantic.ValidationError as exception:
        raise GeoLookupFailure(f"Unexpected geolocation fields for {ip_address}: {exception}") from exception
