"""ZIP code to city/state lookup (Zippopotam.us)."""

import httpx
import structlog

from errors import NotFound, ValidationFailed
from validators import validate_zip

logger = structlog.get_logger(__name__)


def _unavailable() -> ValidationFailed:
    message = "Could not verify ZIP code right now"
    return ValidationFailed([{"field": "zip_code", "message": message}], detail=message)


class ZipLookup:
    def __init__(
        self,
        base_url: str = "https://api.zippopotam.us/us",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def lookup(self, zip_code: str) -> dict:
        """Return ``{zip_code, city, state}`` for a US ZIP; ZIP+4 is reduced to 5 digits."""
        zip_code = (zip_code or "").strip()
        if not validate_zip(zip_code):
            raise ValidationFailed(
                [{"field": "zip_code", "message": "ZIP code must be 12345 or 12345-6789"}],
                detail="ZIP code must be 12345 or 12345-6789",
            )
        zip5 = zip_code[:5]

        try:
            response = self._client.get(f"{self.base_url}/{zip5}")
        except httpx.HTTPError as e:
            logger.warning("zip_lookup_unavailable", zip_code=zip5, error=str(e))
            raise _unavailable() from e

        if response.status_code == 404:
            raise NotFound(f"No city found for ZIP code {zip5}")
        if response.is_error:
            logger.warning("zip_lookup_failed", zip_code=zip5, status_code=response.status_code)
            raise _unavailable()

        try:
            places = response.json().get("places") or []
        except ValueError as e:
            logger.warning("zip_lookup_bad_response", zip_code=zip5)
            raise _unavailable() from e
        if not places:
            raise NotFound(f"No city found for ZIP code {zip5}")
        place = places[0]
        return {
            "zip_code": zip5,
            "city": place.get("place name"),
            "state": place.get("state abbreviation"),
        }
