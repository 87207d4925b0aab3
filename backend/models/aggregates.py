from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.country import CountryView


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CountryPage(_CamelModel):
    total: int
    page: int
    limit: int
    data: list[CountryView] = []


class RegionSummary(_CamelModel):
    countries: list[str] = []
    total_population: int = 0


class LanguageSummary(_CamelModel):
    countries: list[str] = []
    total_speakers: int = 0


class Statistics(_CamelModel):
    total_countries: int
    largest_country_by_area: str | None = None
    smallest_country_by_population: str | None = None
    most_spoken_language: str | None = None
