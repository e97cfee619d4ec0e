from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import Actions, OrderTypes, TimeTypes


@dataclass
class Session:
    """State written by the login -> config -> client info bootstrap."""

    id: Optional[str] = None
    account: Optional[int] = None
    user_token: Optional[int] = None
    client_info: Optional[Dict[str, Any]] = None


@dataclass
class RoutingUrls:
    """Per-session base URLs of the DEGIRO sub-services."""

    pa_url: Optional[str] = None
    product_search_url: Optional[str] = None
    product_types_url: Optional[str] = None
    reporting_url: Optional[str] = None
    trading_url: Optional[str] = None
    vwd_quotecast_service_url: Optional[str] = None

    # Vendor config key -> attribute
    CONFIG_KEYS = {
        "paUrl": "pa_url",
        "productSearchUrl": "product_search_url",
        "productTypesUrl": "product_types_url",
        "reportingUrl": "reporting_url",
        "tradingUrl": "trading_url",
        "vwdQuotecastServiceUrl": "vwd_quotecast_service_url",
    }

    def update(self, data: Dict[str, Any]) -> None:
        for key, attr in self.CONFIG_KEYS.items():
            setattr(self, attr, data.get(key))


@dataclass
class Order:
    """
    An order as sent to ``checkOrder`` and ``order/<confirmationId>``.

    Raises
    ------
    ValueError
        If ``size`` is not positive, a limited or stop-limited order has no
        ``price``, or a stop-loss or stop-limited order has no
        ``stop_price``.
    """

    buy_sell: Actions
    order_type: OrderTypes
    product_id: str
    size: float
    time_type: TimeTypes = TimeTypes.DAY
    price: Optional[float] = None
    stop_price: Optional[float] = None

    def __post_init__(self) -> None:
        self.buy_sell = Actions(self.buy_sell)
        self.order_type = OrderTypes(self.order_type)
        self.time_type = TimeTypes(self.time_type)
        self.product_id = str(self.product_id)

        if self.size is None or self.size <= 0:
            raise ValueError("Order size must be positive.")

        if (
            self.order_type in (OrderTypes.LIMITED, OrderTypes.STOP_LIMITED)
            and self.price is None
        ):
            raise ValueError(
                f"`price` is required for {self.order_type.name} orders."
            )

        if (
            self.order_type in (OrderTypes.STOP_LOSS, OrderTypes.STOP_LIMITED)
            and self.stop_price is None
        ):
            raise ValueError(
                f"`stop_price` is required for {self.order_type.name} orders."
            )

    def to_payload(self) -> Dict[str, Any]:
        """Vendor JSON body; unset optional fields are left out."""
        payload = {
            "buySell": self.buy_sell.value,
            "orderType": int(self.order_type),
            "productId": self.product_id,
            "size": self.size,
            "timeType": int(self.time_type),
            "price": self.price,
            "stopPrice": self.stop_price,
        }
        payload = {k: v for k, v in payload.items() if v is not None}
        return payload
