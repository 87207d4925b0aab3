from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.aggregates import CountryPage, LanguageSummary, RegionSummary, Statistics
from models.country import CountryView
from models.query import CountryQuery
from services.country_service import CountryService, get_country_service

router = APIRouter(tags=["countries"])

limiter = Limiter(key_func=get_remote_address)

Service = Annotated[CountryService, Depends(get_country_service)]


def only_query_params(*allowed: str):
    """Dependency rejecting query parameters the route does not declare."""

    async def check(request: Request) -> None:
        unknown = [k for k in request.query_params if k not in allowed]
        if unknown:
            raise HTTPException(
                status_code=400, detail=f"Unknown query parameter(s): {', '.join(unknown)}"
            )

    return Depends(check)


NO_QUERY = [only_query_params()]


@router.get(
    "/countries",
    response_model=CountryPage,
    dependencies=[only_query_params("region", "minPopulation", "page", "limit")],
    summary="Retrieve a list of countries based on search criteria",
)
@limiter.limit(settings.rate_limit)
async def list_countries(
    request: Request,
    service: Service,
    region: Annotated[str | None, Query(description="Region to filter by, e.g. Europe")] = None,
    min_population: Annotated[int | None, Query(alias="minPopulation", ge=0)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = 10,
):
    """Countries matching the filters, sorted alphabetically by name and paginated."""
    query = CountryQuery(region=region, min_population=min_population, page=page, limit=limit)
    return await service.search(query)


@router.get(
    "/countries/{name}",
    response_model=CountryView,
    dependencies=NO_QUERY,
    summary="Retrieve details of a country by name",
    responses={404: {"description": "The specified country could not be found"}},
)
@limiter.limit(settings.rate_limit)
async def get_country(request: Request, name: str, service: Service):
    return await service.get_by_name(name)


@router.get(
    "/regions",
    response_model=dict[str, RegionSummary],
    dependencies=NO_QUERY,
    summary="Retrieve regions with their countries and total population",
)
@limiter.limit(settings.rate_limit)
async def list_regions(request: Request, service: Service):
    return await service.get_regions()


@router.get(
    "/languages",
    response_model=dict[str, LanguageSummary],
    dependencies=NO_QUERY,
    summary="Retrieve languages with the countries that speak them",
)
@limiter.limit(settings.rate_limit)
async def list_languages(request: Request, service: Service):
    return await service.get_languages()


@router.get(
    "/statistics",
    response_model=Statistics,
    dependencies=NO_QUERY,
    summary="Retrieve global statistics about countries",
)
@limiter.limit(settings.rate_limit)
async def get_statistics(request: Request, service: Service):
    return await service.get_statistics()
