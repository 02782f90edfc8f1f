"""Country facts from the REST Countries API."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from trailblazer.tools.http import HTTPClient
from trailblazer.tools.results import FetchResult
from trailblazer.utils.exceptions import (
    BadRequestError,
    ExternalServiceError,
    NotFoundError,
    TrailblazerError,
)

logger = logging.getLogger(__name__)

COUNTRY_PLACEHOLDER = {"message": "Destination details unavailable."}


def _joined(values) -> Optional[str]:
    return ", ".join(str(v) for v in values or []) or None


def _common_name(country: Dict[str, Any]) -> Optional[str]:
    name = country.get("name")
    common = name.get("common") if isinstance(name, dict) else None
    return common if isinstance(common, str) else None


def prepare_country_details(country: Dict[str, Any]) -> Dict[str, Any]:
    """
    Project a REST Countries record onto the destination columns.

    List-valued fields are flattened to comma separated text.
    """
    currencies = ", ".join(
        f"{info.get('name')} ({info.get('symbol') or code})"
        for code, info in (country.get("currencies") or {}).items()
    )
    car = country.get("car") or {}
    return {
        "common_name": _common_name(country),
        "official_name": (country.get("name") or {}).get("official"),
        "capital_city": (country.get("capital") or [None])[0],
        "currencies": currencies or None,
        "languages": _joined((country.get("languages") or {}).values()),
        "region": country.get("region"),
        "subregion": country.get("subregion"),
        "population": country.get("population") or 0,
        "timezones": _joined(country.get("timezones")),
        "flag": (country.get("flags") or {}).get("svg"),
        "google_maps": (country.get("maps") or {}).get("googleMaps"),
        "car_side": car.get("side"),
        "car_signs": _joined(car.get("signs")),
        "start_of_week": country.get("startOfWeek"),
        "independent": bool(country.get("independent")),
        "un_member": bool(country.get("unMember")),
        "alt_spellings": _joined(country.get("altSpellings")),
        "borders": _joined(country.get("borders")),
    }


class CountriesClient(HTTPClient):
    """Client for restcountries.com (public, no credential)."""

    service_name = "REST Countries"

    async def _search(self, name: str) -> List[Dict[str, Any]]:
        """GET /name/{name}; the body must be a list of country objects."""
        payload = await self.get_json(f"{self.base_url}/name/{quote(name, safe='')}")
        if not isinstance(payload, list) or not all(isinstance(c, dict) for c in payload):
            raise ExternalServiceError(f"{self.service_name} returned an unexpected payload")
        return payload

    async def get_country(self, country_name: str) -> Dict[str, Any]:
        """
        Fetch the raw record whose common name matches exactly (case-insensitive).

        Raises:
            BadRequestError: If the name is blank
            NotFoundError: If nothing matches exactly
            ExternalServiceError: On transport failures or a malformed body
        """
        name = (country_name or "").strip()
        if not name:
            raise BadRequestError("Country name is required.")

        logger.info(f"Looking up country: {name}")
        for country in await self._search(name):
            if (_common_name(country) or "").lower() == name.lower():
                return country

        raise NotFoundError(f'No exact match found for "{name}".')

    async def lookup(self, country_name: str) -> Dict[str, Any]:
        """Direct lookup returning the destination projection."""
        country = await self.get_country(country_name)
        try:
            return prepare_country_details(country)
        except (AttributeError, TypeError, IndexError) as e:
            raise ExternalServiceError(
                f"{self.service_name} returned a malformed record: {e}"
            ) from e

    async def lookup_safely(self, country_name: str) -> FetchResult:
        """Like ``lookup`` but failures come back as the placeholder."""
        try:
            return FetchResult.success(await self.lookup(country_name))
        except TrailblazerError as e:
            logger.error(f"Failed to fetch destination data for {country_name!r}: {e.message}")
            return FetchResult.unavailable(dict(COUNTRY_PLACEHOLDER), e.message)

    async def search_countries(self, partial_name: str, limit: int = 10) -> List[str]:
        """
        Common names of countries matching a partial name, for autocomplete.

        Raises:
            BadRequestError: If the query is blank
        """
        query = (partial_name or "").strip()
        if not query:
            raise BadRequestError("Search query is required.")

        try:
            results = await self._search(query)
        except NotFoundError:
            return []

        names = sorted({_common_name(c) for c in results} - {None})
        return names[:limit]
