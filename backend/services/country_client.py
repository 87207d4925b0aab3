"""Client for the REST Countries API (https://restcountries.com)."""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from config import settings
from models.country import Country
from services.errors import UpstreamError

logger = logging.getLogger(__name__)

_dataset_adapter = TypeAdapter(list[Country])


class RestCountriesClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = (base_url or settings.country_base_url).rstrip("/")
        self._timeout = (timeout_ms or settings.time_out) / 1000
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self) -> list[Country]:
        """Fetch and validate the full country dataset.

        Raises UpstreamError on timeout, transport failure, a non-2xx status,
        or a payload that is not a list of valid countries. A single invalid
        element rejects the whole response.
        """
        url = f"{self._base_url}/all"
        logger.debug("Fetching countries from %s", url)

        try:
            response = await self._get_client().get(url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Timed out after {self._timeout}s calling {url}") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Upstream returned {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Upstream returned invalid JSON: {e}") from e

        if not isinstance(payload, list):
            raise UpstreamError(
                f"Invalid data format from API: expected a list, got {type(payload).__name__}"
            )

        try:
            countries = _dataset_adapter.validate_python(payload)
        except ValidationError as e:
            raise UpstreamError(
                f"Invalid data format from API: {e.error_count()} validation error(s)"
            ) from e

        logger.debug("Fetched %d countries", len(countries))
        return countries
