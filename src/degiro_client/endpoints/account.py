from typing import Any, Dict, List, Optional, Union
from datetime import date, datetime

from ..base_client import BaseAPIClient, expect_section
from ..exceptions import DataShapeError
from ..utils import format_report_date, parse_order_date, rows_to_dict


DateLike = Union[str, date, datetime]


def _is_record(record: Any) -> bool:
    """A vendor record is ``{..., "value": [{"name": ..., "value": ...}]}``."""
    if not isinstance(record, dict):
        return False
    rows = record.get("value", [])
    return isinstance(rows, list) and all(
        isinstance(row, dict) and "name" in row for row in rows
    )


def _value_list(data: Any, key: str) -> Optional[List[Any]]:
    """Records under ``data[key].value``, or None if malformed."""
    section = data.get(key) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        return None
    records = section.get("value")
    if not isinstance(records, list) or not all(map(_is_record, records)):
        return None
    return records


def _process_orders(
    records: List[Dict[str, Any]],
    now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """Flatten ``{id, value: [{name, value}]}`` records, parsing ``date``."""
    result = []
    for record in records:
        order = {"id": record.get("id")}
        for row in record.get("value", []):
            if row["name"] == "date":
                order["date"] = parse_order_date(row["value"], now=now)
            else:
                order[row["name"]] = row.get("value")
        result.append(order)
    return result


class AccountAPI(BaseAPIClient):
    """
    Provides access to DEGIRO account data.

    Covers the trading ``update`` endpoint (cash funds, portfolio, orders)
    and the reporting and client-task endpoints. Inherits from
    `BaseAPIClient` to share the session and HTTP handling.
    """

    def get_data(
        self,
        options: Optional[Dict[str, Any]] = None,
        label: str = "Data"
    ) -> Dict:
        """
        Query the trading ``update`` endpoint.

        Parameters
        ----------
        options : dict, optional
            Sections to fetch, e.g. ``{"portfolio": 0}``. The value is the
            last update id known to the caller; 0 fetches everything.
        label : str
            Name of the section, used in log lines.

        Returns
        -------
        dict
            Raw vendor JSON, one key per requested section.

        Raises
        ------
        DataShapeError
            If the response is not a JSON object.
        """
        url = (
            f"{self.url('trading_url')}v5/update/{self.session.account}"
            f";jsessionid={self.session.id}"
        )

        data = self.make_request(
            url=url,
            params=dict(options or {}),
            operation=f"get{label}",
        )
        if not isinstance(data, dict):
            raise DataShapeError(f"Bad result: {data}", data)
        return data

    def get_cash_funds(self) -> Dict:
        """
        Retrieve cash funds per currency.

        Returns
        -------
        dict
            ``{"cashFunds": [...]}``, one dict per currency, with the
            ``handling`` and ``currencyCode`` fields removed.

        Raises
        ------
        DataShapeError
            If ``cashFunds.value`` is missing, not a list, or holds a
            malformed record.
        """
        data = self.get_data({"cashFunds": 0}, "CashFunds")
        funds = _value_list(data, "cashFunds")
        if funds is None:
            raise DataShapeError(f"Bad result: {data}", data)

        cash_funds = []
        for entry in funds:
            fields = rows_to_dict(entry.get("value", []))
            fields.pop("handling", None)
            fields.pop("currencyCode", None)
            cash_funds.append(fields)

        return {"cashFunds": cash_funds}

    def get_portfolio(self) -> Dict:
        """
        Retrieve portfolio positions.

        Returns
        -------
        dict
            ``{"portfolio": [...]}`` with the vendor position records
            (``{id, name, isAdded, value: [{name, value}]}``) unchanged.

        Raises
        ------
        DataShapeError
            If ``portfolio.value`` is missing, not a list, or holds a
            malformed record.
        """
        data = self.get_data({"portfolio": 0}, "Portfolio")
        positions = _value_list(data, "portfolio")
        if positions is None:
            raise DataShapeError(f"Bad result: {data}", data)

        return {"portfolio": positions}

    def get_orders(self) -> Dict:
        """
        Retrieve open orders and today's cancelled and completed orders.

        Returns
        -------
        dict
            ``openOrders``, ``cancelledOrders`` and ``completedOrders``,
            each a list of flat dicts. ``date`` is a `datetime`.

        Raises
        ------
        DataShapeError
            If any of the three sections is missing, not a list, or holds
            a malformed record.
        ParseError
            If a ``date`` field has an unexpected format.
        """
        data = self.get_data(
            {"orders": 0, "historicalOrders": 0, "transactions": 0},
            "OrdersLatest",
        )

        open_orders = _value_list(data, "orders")
        cancelled = _value_list(data, "historicalOrders")
        completed = _value_list(data, "transactions")

        if open_orders is None or cancelled is None or completed is None:
            raise DataShapeError(f"Bad result: {data}", data)

        return {
            "openOrders": _process_orders(open_orders),
            "cancelledOrders": _process_orders(cancelled),
            "completedOrders": _process_orders(completed),
        }

    def get_tasks(self) -> Dict:
        """
        Retrieve pending client tasks (e.g. documents to sign).

        Raises
        ------
        DataShapeError
            If ``data`` is missing or not a list.
        """
        payload = self.make_request(
            url=f"{self.url('pa_url')}clienttasks",
            params=self.account_params(),
            operation="getTasks",
        )
        expect_section(payload, "data", list)
        return payload

    def get_orders_history(
        self,
        from_date: DateLike,
        to_date: DateLike
    ) -> Dict:
        """
        Retrieve the order history between two dates.

        Parameters
        ----------
        from_date, to_date : str or date
            ``dd/mm/YYYY`` strings, ISO strings, or date objects.

        Returns
        -------
        dict
            Raw vendor JSON, rows under ``data``.

        Raises
        ------
        DataShapeError
            If ``data`` is missing or not a list.
        """
        params = {
            "intAccount": self.session.account,
            "fromDate": format_report_date(from_date),
            "toDate": format_report_date(to_date),
            "sessionId": self.session.id,
        }

        payload = self.make_request(
            url=f"{self.url('reporting_url')}v4/order-history",
            params=params,
            operation="getOrdersHistory",
        )
        expect_section(payload, "data", list)
        return payload

    def get_transactions(
        self,
        from_date: DateLike,
        to_date: DateLike,
        group_by_order: bool = False
    ) -> Dict:
        """
        Retrieve executed transactions between two dates.

        Parameters
        ----------
        from_date, to_date : str or date
            ``dd/mm/YYYY`` strings, ISO strings, or date objects.
        group_by_order : bool
            Merge partial fills of one order into a single row.

        Returns
        -------
        dict
            Raw vendor JSON, rows under ``data``.

        Raises
        ------
        DataShapeError
            If ``data`` is missing or not a list.
        """
        params = {
            "intAccount": self.session.account,
            "fromDate": format_report_date(from_date),
            "toDate": format_report_date(to_date),
            "groupTransactionsByOrder": "true" if group_by_order else "false",
            "sessionId": self.session.id,
        }

        payload = self.make_request(
            url=f"{self.url('reporting_url')}v4/transactions",
            params=params,
            operation="getTransactions",
        )
        expect_section(payload, "data", list)
        return payload
