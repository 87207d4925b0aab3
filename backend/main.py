from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import health, countries
from services.country_service import close_country_service
from services.errors import NotFoundError, UpstreamError
from utils.logging_config import setup_logging

logger = setup_logging()

app = FastAPI(
    title="Country Insights API",
    description="Cached search, aggregation and statistics over the REST Countries API",
    version="1.0.0",
    docs_url="/documentation",
)

app.state.limiter = countries.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    # Cause is logged by the service, clients only get a generic message
    return JSONResponse(status_code=500, content={"detail": "Error fetching countries data"})


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "Country Insights API",
        "version": "1.0.0",
        "endpoints": [
            "/health",
            "/api/countries",
            "/api/countries/{name}",
            "/api/regions",
            "/api/languages",
            "/api/statistics",
        ],
    }


@app.on_event("startup")
async def startup():
    logger.info("Country Insights API is running")


@app.on_event("shutdown")
async def shutdown():
    await close_country_service()
