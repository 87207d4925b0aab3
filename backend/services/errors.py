class CountryServiceError(Exception):
    """Base class for failures raised by the country pipeline."""


class UpstreamError(CountryServiceError):
    """The country data source was unreachable, too slow, or returned bad data."""


class NotFoundError(CountryServiceError):
    """No country matched the requested name."""
