from .account import AccountAPI
from .products import ProductsAPI
from .quotecast import QuotecastAPI
from .trading import TradingAPI

__all__ = ["AccountAPI", "ProductsAPI", "QuotecastAPI", "TradingAPI"]
