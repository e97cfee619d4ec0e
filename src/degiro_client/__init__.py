from .auth import SessionManager
from .client import DegiroClient
from .config import DegiroConfig
from .constants import Actions, OrderTypes, ProductTypes, Sort, TimeTypes
from .exceptions import (
    AuthenticationError,
    DataShapeError,
    DegiroError,
    HTTPError,
    OrderRejectedError,
    ParseError,
    QuoteTimeoutError,
)
from .models import Order, RoutingUrls, Session

__all__ = [
    "Actions",
    "AuthenticationError",
    "DataShapeError",
    "DegiroClient",
    "DegiroConfig",
    "DegiroError",
    "HTTPError",
    "Order",
    "OrderRejectedError",
    "OrderTypes",
    "ParseError",
    "ProductTypes",
    "QuoteTimeoutError",
    "RoutingUrls",
    "Session",
    "SessionManager",
    "Sort",
    "TimeTypes",
]
