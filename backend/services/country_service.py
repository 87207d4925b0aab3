import asyncio
import logging
import unicodedata
from typing import Protocol

from models.aggregates import CountryPage, LanguageSummary, RegionSummary, Statistics
from models.country import Country, CountryView
from models.query import CountryQuery
from services.cache_service import TTLCache, cache
from services.country_client import RestCountriesClient
from services.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

CACHE_KEY = "countries"


class CountryFetcher(Protocol):
    async def fetch(self) -> list[Country]: ...


def sort_key(name: str) -> tuple[str, str]:
    """Collation key approximating locale order: accents and case are
    ignored first, then the raw name breaks ties."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def aggregate_languages(countries: list[Country]) -> dict[str, LanguageSummary]:
    """Group countries by every language name they declare. Insertion order
    follows the first appearance of each language in the dataset."""
    languages: dict[str, LanguageSummary] = {}
    for c in countries:
        for language in c.languages.values():
            if not language:
                continue
            summary = languages.setdefault(language, LanguageSummary())
            summary.countries.append(c.common_name)
            summary.total_speakers += c.population
    return languages


class CountryService:
    def __init__(self, cache: TTLCache, fetcher: CountryFetcher):
        self._cache = cache
        self._fetcher = fetcher
        self._lock = asyncio.Lock()

    def is_cached(self) -> bool:
        return self._cache.get(CACHE_KEY) is not None

    async def fetch_countries(self) -> list[Country]:
        cached = self._cache.get(CACHE_KEY)
        if cached is not None:
            logger.debug("Returning cached data")
            return cached

        # Concurrent misses wait here so only one of them calls upstream
        async with self._lock:
            cached = self._cache.get(CACHE_KEY)
            if cached is not None:
                logger.debug("Returning data cached by a concurrent request")
                return cached

            try:
                countries = await self._fetcher.fetch()
            except UpstreamError as e:
                logger.error("Error fetching countries: %s", e, exc_info=e)
                raise UpstreamError("Error fetching countries data") from e

            logger.debug("Storing %d countries in cache", len(countries))
            self._cache.set(CACHE_KEY, countries)
            return countries

    async def search(self, query: CountryQuery) -> CountryPage:
        logger.debug("Searching countries: %s", query.model_dump(exclude_none=True))
        countries = await self.fetch_countries()

        if query.region:
            region = query.region.casefold()
            countries = [c for c in countries if c.region.casefold() == region]

        if query.min_population is not None:
            countries = [c for c in countries if c.population >= query.min_population]

        # sorted() copies, the cached list stays in upstream order
        ordered = sorted(countries, key=lambda c: sort_key(c.common_name))

        start = (query.page - 1) * query.limit
        page = ordered[start:start + query.limit]

        return CountryPage(
            total=len(ordered),
            page=query.page,
            limit=query.limit,
            data=[CountryView.from_country(c) for c in page],
        )

    async def get_by_name(self, name: str) -> CountryView:
        logger.debug("Fetching country by name: %s", name)
        countries = await self.fetch_countries()
        wanted = name.casefold()
        country = next((c for c in countries if c.common_name.casefold() == wanted), None)
        if country is None:
            logger.warning("Country not found: %s", name)
            raise NotFoundError("The specified country could not be found")
        return CountryView.from_country(country)

    async def get_regions(self) -> dict[str, RegionSummary]:
        countries = await self.fetch_countries()
        regions: dict[str, RegionSummary] = {}
        for c in countries:
            summary = regions.setdefault(c.region, RegionSummary())
            summary.countries.append(c.common_name)
            summary.total_population += c.population
        logger.debug("Aggregated %d regions", len(regions))
        return regions

    async def get_languages(self) -> dict[str, LanguageSummary]:
        languages = aggregate_languages(await self.fetch_countries())
        logger.debug("Aggregated %d languages", len(languages))
        return languages

    async def get_statistics(self) -> Statistics:
        countries = await self.fetch_countries()
        if not countries:
            return Statistics(total_countries=0)

        # max()/min() keep the first of equal elements
        largest = max(countries, key=lambda c: c.area)
        smallest = min(countries, key=lambda c: c.population)

        languages = aggregate_languages(countries)
        most_spoken = None
        if languages:
            most_spoken = max(languages, key=lambda name: languages[name].total_speakers)

        return Statistics(
            total_countries=len(countries),
            largest_country_by_area=largest.common_name,
            smallest_country_by_population=smallest.common_name,
            most_spoken_language=most_spoken,
        )


_client: RestCountriesClient | None = None
_service: CountryService | None = None


def get_country_service() -> CountryService:
    global _client, _service
    if _service is None:
        _client = RestCountriesClient()
        _service = CountryService(cache, _client)
    return _service


async def close_country_service() -> None:
    global _client, _service
    if _client is not None:
        await _client.close()
    _client = None
    _service = None
