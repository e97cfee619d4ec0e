from typing import Any, Dict, Optional

from ..base_client import BaseAPIClient
from ..constants import Actions, OrderTypes, TimeTypes
from ..exceptions import DataShapeError, OrderRejectedError
from ..models import Order


JSON_UTF8 = {"Content-Type": "application/json;charset=UTF-8"}


class TradingAPI(BaseAPIClient):
    """
    Order placement and cancellation.

    Placing an order is two calls: ``checkOrder`` validates it and returns
    a confirmation id, then ``order/<confirmationId>`` places it.
    """

    def _order_url(self, path: str) -> str:
        return (
            f"{self.url('trading_url')}v5/{path}"
            f";jsessionid={self.session.id}"
        )

    def check_order(self, order: Order) -> Dict[str, Any]:
        """
        Validate an order without placing it.

        Returns
        -------
        dict
            ``{"order": order, "confirmation_id": str}``.

        Raises
        ------
        DataShapeError
            If the response carries no ``data.confirmationId``.
        """
        payload = self.make_request(
            url=self._order_url("checkOrder"),
            method="POST",
            headers=dict(JSON_UTF8),
            params=self.account_params(),
            json_body=order.to_payload(),
            operation="checkOrder",
        )

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not data.get("confirmationId"):
            raise DataShapeError(f"Bad result: {payload}", payload)

        return {"order": order, "confirmation_id": data["confirmationId"]}

    def confirm_order(self, checked: Dict[str, Any]) -> Dict[str, Any]:
        """
        Place an order previously validated by `check_order`.

        Parameters
        ----------
        checked : dict
            The value returned by `check_order`.

        Returns
        -------
        dict
            ``{"order_id": str}``.

        Raises
        ------
        DataShapeError
            If the response carries no ``data.orderId``.
        """
        order = checked["order"]
        confirmation_id = checked["confirmation_id"]

        payload = self.make_request(
            url=self._order_url(f"order/{confirmation_id}"),
            method="POST",
            headers=dict(JSON_UTF8),
            params=self.account_params(),
            json_body=order.to_payload(),
            operation="confirmOrder",
        )

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or "orderId" not in data:
            raise DataShapeError(f"Bad result: {payload}", payload)

        return {"order_id": data["orderId"]}

    def set_order(
        self,
        *,
        buy_sell: Actions,
        order_type: OrderTypes,
        product_id: str,
        size: float,
        time_type: TimeTypes = TimeTypes.DAY,
        price: Optional[float] = None,
        stop_price: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Check and place an order.

        A failed confirmation after a successful check is not rolled back;
        the check step has no effect on the vendor side.

        Parameters
        ----------
        buy_sell : Actions
            BUY or SELL.
        order_type : OrderTypes
            LIMITED, STOP_LIMITED, MARKET or STOP_LOSS.
        product_id : str
            Vendor product id.
        size : float
            Number of units.
        time_type : TimeTypes
            DAY (default) or PERMANENT.
        price : float, optional
            Required for LIMITED and STOP_LIMITED orders.
        stop_price : float, optional
            Required for STOP_LOSS and STOP_LIMITED orders.

        Returns
        -------
        dict
            ``{"order_id": str}``.

        Raises
        ------
        ValueError
            If the order is incomplete (see `Order`).
        """
        order = Order(
            buy_sell=buy_sell,
            order_type=order_type,
            product_id=product_id,
            size=size,
            time_type=time_type,
            price=price,
            stop_price=stop_price,
        )
        return self.confirm_order(self.check_order(order))

    def delete_order(self, order_id: str) -> bool:
        """
        Cancel an open order.

        Returns
        -------
        bool
            True when the vendor reports ``status == 0`` and
            ``statusText == "success"``.

        Raises
        ------
        OrderRejectedError
            For any other status.
        """
        payload = self.make_request(
            url=self._order_url(f"order/{order_id}"),
            method="DELETE",
            headers=dict(JSON_UTF8),
            params=self.account_params(),
            operation="deleteOrder",
        )

        if (
            isinstance(payload, dict)
            and payload.get("status") == 0
            and payload.get("statusText") == "success"
        ):
            return True

        raise OrderRejectedError(
            f"Could not delete order {order_id}: {payload}", payload
        )
