from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CountryQuery(BaseModel):
    """Search parameters for the country listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    region: str | None = Field(default=None, description="Region to filter by, e.g. Europe")
    min_population: int | None = Field(default=None, ge=0, description="Minimum population")
    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    limit: int = Field(default=10, ge=1, description="Items per page")
