from typing import Any, Dict, Optional

from .auth import SessionManager
from .config import DegiroConfig
from .endpoints import AccountAPI, ProductsAPI, QuotecastAPI, TradingAPI
from .models import Session


class DegiroClient:
    """
    Central entry point for all DEGIRO API modules.
    Aggregates sub-clients such as AccountAPI, TradingAPI, etc., and
    exposes their operations directly.
    """

    def __init__(
        self,
        config: Optional[DegiroConfig] = None,
        *,
        session_manager: Optional[SessionManager] = None,
    ):
        if session_manager is None:
            session_manager = SessionManager(
                config if config is not None else DegiroConfig.from_env()
            )
        self.session_manager = session_manager

        # Sub-clients share the same SessionManager instance
        self.account = AccountAPI(session_manager)
        self.products = ProductsAPI(session_manager)
        self.trading = TradingAPI(session_manager)
        self.quotes = QuotecastAPI(session_manager)

    @property
    def session(self) -> Session:
        return self.session_manager.session

    # Session
    def login(self) -> Session:
        return self.session_manager.login()

    def resume(self) -> Session:
        return self.session_manager.resume()

    def update_config(self):
        return self.session_manager.update_config()

    def get_client_info(self) -> Dict:
        return self.session_manager.get_client_info()

    # Account data
    def get_data(self, options: Optional[Dict[str, Any]] = None, label="Data"):
        return self.account.get_data(options, label)

    def get_cash_funds(self) -> Dict:
        return self.account.get_cash_funds()

    def get_portfolio(self) -> Dict:
        return self.account.get_portfolio()

    def get_orders(self) -> Dict:
        return self.account.get_orders()

    def get_tasks(self) -> Dict:
        return self.account.get_tasks()

    def get_orders_history(self, from_date, to_date) -> Dict:
        return self.account.get_orders_history(from_date, to_date)

    def get_transactions(self, from_date, to_date, group_by_order=False):
        return self.account.get_transactions(from_date, to_date, group_by_order)

    # Products
    def search_product(self, **kwargs) -> Dict:
        return self.products.search_product(**kwargs)

    def get_products_by_ids(self, ids) -> Dict:
        return self.products.get_products_by_ids(ids)

    # Orders
    def check_order(self, order):
        return self.trading.check_order(order)

    def confirm_order(self, checked):
        return self.trading.confirm_order(checked)

    def set_order(self, **kwargs) -> Dict:
        return self.trading.set_order(**kwargs)

    def delete_order(self, order_id) -> bool:
        return self.trading.delete_order(order_id)

    # Quotes
    def get_ask_bid_price(self, issue_id, strict: Optional[bool] = None):
        return self.quotes.get_ask_bid_price(issue_id, strict=strict)
