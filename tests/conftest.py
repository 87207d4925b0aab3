# tests/conftest.py
import pytest
from unittest.mock import AsyncMock

from models.country import Country
from services.cache_service import TTLCache
from services.country_service import CountryService


def make_country(name, region="Europe", population=0, area=0.0, languages=None,
                 borders=None, latlng=None) -> Country:
    return Country.model_validate({
        "name": {"common": name, "official": name},
        "region": region,
        "population": population,
        "area": area,
        "languages": languages or {},
        "borders": borders or [],
        "latlng": latlng or [],
    })


@pytest.fixture
def countries() -> list[Country]:
    """A small dataset in upstream (unsorted) order."""
    return [
        make_country("Switzerland", "Europe", 8654622, 41284,
                     {"fra": "French", "gsw": "Swiss German", "ita": "Italian", "roh": "Romansh"},
                     ["AUT", "FRA", "ITA", "LIE", "DEU"], [47.0, 8.0]),
        make_country("France", "Europe", 67000000, 551695, {"fra": "French"},
                     ["AND", "BEL", "DEU", "ITA", "LUX", "MCO", "ESP", "CHE"], [46.0, 2.0]),
        make_country("Japan", "Asia", 125836021, 377930, {"jpn": "Japanese"}, [], [36.0, 138.0]),
        make_country("Germany", "Europe", 83783942, 357022, {"deu": "German"},
                     ["AUT", "BEL", "CZE", "DNK", "FRA", "LUX", "NLD", "POL", "CHE"], [51.0, 9.0]),
        make_country("Antarctica", "Antarctic", 1000, 14000000, {}, [], [-90.0, 0.0]),
        make_country("Brazil", "Americas", 212559409, 8515767, {"por": "Portuguese"},
                     ["ARG", "BOL", "COL"], [-10.0, -55.0]),
        make_country("Italy", "Europe", 60244639, 301340, {"ita": "Italian"},
                     ["AUT", "FRA", "SMR", "SVN", "CHE", "VAT"], [42.83, 12.83]),
        make_country("Åland Islands", "Europe", 29458, 1580, {"swe": "Swedish"}, [], [60.116667, 19.9]),
    ]


@pytest.fixture
def fetcher(countries):
    """Upstream fetcher mock returning the sample dataset."""
    mock = AsyncMock()
    mock.fetch.return_value = countries
    return mock


@pytest.fixture
def cache():
    return TTLCache(ttl=600, max_entries=10)


@pytest.fixture
def service(cache, fetcher):
    return CountryService(cache, fetcher)
