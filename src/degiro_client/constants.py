from enum import Enum, IntEnum


BASE_TRADER_URL = "https://trader.degiro.nl"
QUOTECAST_URL = "https://degiro.quotecast.vwdservices.com/CORS"
QUOTECAST_VERSION = "1.0.20170315"


class Actions(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderTypes(IntEnum):
    LIMITED = 0
    STOP_LIMITED = 1
    MARKET = 2
    STOP_LOSS = 3


class TimeTypes(IntEnum):
    DAY = 1
    # Good-till-cancelled
    PERMANENT = 3


class ProductTypes:
    """Product type ids accepted by the product lookup endpoint."""

    ALL = None
    SHARES = 1
    BONDS = 2
    FUTURES = 7
    OPTIONS = 8
    INVESTMENT_FUNDS = 13
    LEVERAGED_PRODUCTS = 14
    ETFS = 131
    CFDS = 535
    WARRANTS = 536


class Sort(str, Enum):
    ASC = "asc"
    DESC = "desc"
