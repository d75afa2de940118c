"""
Yelp Fusion business search client.
Fetches nearby restaurants and normalizes them into Restaurant models.
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential
)

from core.config import settings
from core.exceptions import ExternalServiceError
from models.restaurant import Restaurant

logger = logging.getLogger(__name__)


class YelpClient:
    """Thin wrapper over the Yelp Fusion /businesses/search endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_host: Optional[str] = None,
        search_path: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key if api_key is not None else settings.YELP_API_KEY
        self.api_host = (api_host or settings.YELP_API_HOST).rstrip("/")
        self.search_path = search_path or settings.YELP_SEARCH_PATH
        self.timeout = timeout or settings.YELP_TIMEOUT
        self.session = session or requests.Session()

    @retry(
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        wait=wait_exponential(min=1, max=8),
        stop=stop_after_attempt(3),
        reraise=True
    )
    def _get(self, path: str, params: Dict[str, Any]) -> requests.Response:
        return self.session.get(
            f"{self.api_host}{path}",
            headers={"Authorization": f"Bearer {self.api_key}"},
            params=params,
            timeout=self.timeout
        )

    def search_by_location(
        self,
        lat: float,
        lon: float,
        term: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Search businesses around a coordinate.

        Args:
            lat: Latitude
            lon: Longitude
            term: Search term, defaults to settings.YELP_SEARCH_TERM
            limit: Max results, defaults to settings.YELP_SEARCH_LIMIT

        Returns:
            Raw business dicts in API order

        Raises:
            ExternalServiceError: If the request fails or the payload is malformed
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "term": term or settings.YELP_SEARCH_TERM,
            "limit": limit or settings.YELP_SEARCH_LIMIT
        }

        try:
            response = self._get(self.search_path, params)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise ExternalServiceError(f"Yelp search failed: {e}") from e
        except ValueError as e:
            raise ExternalServiceError("Yelp returned invalid JSON") from e

        businesses = payload.get("businesses") if isinstance(payload, dict) else None
        if not isinstance(businesses, list):
            raise ExternalServiceError("Yelp response has no 'businesses' list")

        logger.info("Yelp returned %d businesses near (%s, %s)", len(businesses), lat, lon)
        return businesses


def restaurant_from_business(business: Dict[str, Any]) -> Restaurant:
    """
    Convert a Yelp business dict into an (unsaved) Restaurant.

    Raises:
        ExternalServiceError: If the business has no id
    """
    if not isinstance(business, dict) or not business.get("id"):
        raise ExternalServiceError("Yelp business without id")

    location = business.get("location") or {}
    coordinates = business.get("coordinates") or {}
    categories = business.get("categories") or []

    return Restaurant(
        business_id=business["id"],
        name=business.get("name"),
        categories=",".join(
            c.get("title", "") for c in categories if isinstance(c, dict) and c.get("title")
        ),
        city=location.get("city"),
        state=location.get("state"),
        stars=_to_float(business.get("rating")),
        full_address=", ".join(location.get("display_address") or []),
        latitude=_to_float(coordinates.get("latitude")),
        longitude=_to_float(coordinates.get("longitude")),
        image_url=business.get("image_url"),
        url=business.get("url")
    )


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
