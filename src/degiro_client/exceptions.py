from typing import Any, Optional
import requests


class DegiroError(Exception):
    """Base error for every failure raised by this client."""


class AuthenticationError(DegiroError):
    """Login rejected, no session cookie, or client used before login."""


class HTTPError(DegiroError, requests.exceptions.HTTPError):
    """
    Non-success HTTP status returned by a DEGIRO endpoint.

    The message is the first vendor error text when the body carries an
    ``errors`` list, otherwise ``"<status> - <reason>"``.
    """

    def __init__(
        self,
        message: str,
        *,
        response: Optional[requests.Response] = None,
        payload: Any = None
    ) -> None:
        super().__init__(message, response=response)
        self.payload = payload


class DataShapeError(DegiroError, ValueError):
    """A successful response is missing expected fields."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class ParseError(DegiroError, ValueError):
    """Vendor date text in an unrecognized format."""


class QuoteTimeoutError(DegiroError, TimeoutError):
    """The quotecast poll kept returning heartbeat-only frames."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class OrderRejectedError(DegiroError):
    """The vendor did not report success for an order operation."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload
