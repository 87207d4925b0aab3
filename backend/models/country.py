from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CountryName(BaseModel):
    common: str = Field(min_length=1)
    official: str = ""


class Country(BaseModel):
    """A country record as served by the upstream data source."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: CountryName
    region: str
    population: int = Field(ge=0)
    area: float = 0.0
    languages: dict[str, str] = {}
    borders: list[str] = []
    latlng: list[float] = []

    @field_validator("population", "area", mode="before")
    @classmethod
    def must_be_number(cls, v, info):
        if v is None and info.field_name == "area":
            return 0.0
        # bool is an int subclass and numeric strings would pass lax mode
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"{info.field_name} must be a number")
        return v

    @field_validator("languages", "borders", "latlng", mode="before")
    @classmethod
    def null_as_default(cls, v, info):
        # Upstream sends null for missing optional fields on some territories
        if v is None:
            return {"languages": {}, "borders": [], "latlng": []}[info.field_name]
        return v

    @property
    def common_name(self) -> str:
        return self.name.common


class CountryView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    common_name: str
    population: int
    languages: dict[str, str] = {}
    latlng: list[float] = []
    borders: list[str] = []

    @classmethod
    def from_country(cls, country: Country) -> "CountryView":
        return cls(
            common_name=country.common_name,
            population=country.population,
            languages=dict(country.languages),
            latlng=list(country.latlng),
            borders=list(country.borders),
        )
