"""Exception classes for the image fetch client."""

from .types import ImageSource


class ImageError(Exception):
    """Base image fetch exception."""

    def __init__(self, message: str, provider: str | None = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class TransportError(ImageError):
    """Every retry strategy raised; wraps the last exception."""

    def __init__(self, url: str, last_error: Exception, attempts: int):
        self.url = url
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(f"Request to {url} failed after {attempts} attempts: {last_error}")


class HttpStatusError(ImageError):
    """Provider answered with a non-2xx status. Not retried."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} from {url}")


class ParseError(ImageError):
    """Response body is not valid JSON."""

    pass


class MissingFieldError(ImageError):
    """Response parsed but held no usable image URL."""

    pass


class RelayError(ImageError):
    """Every CORS relay endpoint failed."""

    def __init__(self, url: str, errors: list[Exception]):
        self.url = url
        self.errors = errors
        details = "; ".join(str(e) for e in errors) or "no relay endpoints configured"
        super().__init__(f"All relays failed for {url}: {details}")


class FetchCancelledError(ImageError):
    """Fetch aborted through its cancel event."""

    pass


class ProviderFetchError(ImageError):
    """Facade wrapper adding provider context to a downstream failure.

    The typed cause stays available as `error` (and as `__cause__`).
    """

    def __init__(self, source: ImageSource, error: ImageError):
        self.source = source
        self.error = error
        super().__init__(f"Failed to fetch from {source.value}: {error}", provider=source.value)
