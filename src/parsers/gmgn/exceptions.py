"""Errors raised by GmgnClient. The screening pipeline treats any of them as
"document unavailable"."""


class GmgnError(Exception):
    pass


class CloudflareBlockedError(GmgnError):
    """403 from Cloudflare, or the circuit breaker is open."""


class GmgnRateLimitError(GmgnError):
    """HTTP 429."""


class GmgnApiError(GmgnError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
