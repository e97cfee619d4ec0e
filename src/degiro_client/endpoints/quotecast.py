from typing import Any, Dict, List, Optional

from ..base_client import BaseAPIClient, get_logger
from ..constants import (
    BASE_TRADER_URL,
    QUOTECAST_URL,
    QUOTECAST_VERSION,
)
from ..exceptions import (
    AuthenticationError,
    DataShapeError,
    QuoteTimeoutError,
)
from ..utils import lc_first


QUOTE_FIELDS = ("BidPrice", "AskPrice", "LastPrice", "LastTime")


def is_heartbeat(rows: List[Dict[str, Any]]) -> bool:
    """A poll holding a single ``{"m": "h"}`` row carries no data yet."""
    return (
        len(rows) == 1
        and isinstance(rows[0], dict)
        and rows[0].get("m") == "h"
    )


def parse_quote_rows(
    issue_id: str,
    rows: List[Dict[str, Any]]
) -> Dict[str, Any]:
    """
    Rebuild a price snapshot from quotecast rows.

    ``a_req`` rows bind a numeric stream key to ``<issue_id>.<Field>``;
    ``un`` (numeric) and ``us`` (string) rows carry ``[key, value]``
    updates. Field names are returned lower-camel-cased, e.g.
    ``bidPrice``. A subscribed field with no update maps to ``None``.
    """
    prefix = f"{issue_id}."
    keys: Dict[Any, str] = {}
    prices: Dict[str, Any] = {}

    for row in rows:
        if not isinstance(row, dict):
            continue
        kind = row.get("m")
        values = row.get("v") or []

        if kind == "a_req":
            if len(values) >= 2 and str(values[0]).startswith(prefix):
                name = lc_first(str(values[0])[len(prefix):])
                keys[values[1]] = name
                prices[name] = None

        elif kind in ("un", "us"):
            if len(values) >= 2 and values[0] in keys:
                prices[keys[values[0]]] = values[1]

    return prices


class QuotecastAPI(BaseAPIClient):
    """
    Bid/ask prices from the vwd quotecast push service.

    Each lookup opens a quotecast session, subscribes to the four price
    fields of one vwd issue id and polls once. Heartbeat-only polls are
    retried with a fresh session, `max_attempts` times in total.
    """

    max_attempts = 3

    def __init__(self, session_manager):
        super().__init__(session_manager)
        self.quote_logger = get_logger("degiro.quotecast")

    def request_session(self) -> str:
        """
        Open a quotecast session for the logged-in user.

        Returns
        -------
        str
            The quotecast session id.

        Raises
        ------
        AuthenticationError
            If the user token is unknown (client info not loaded).
        DataShapeError
            If the response carries no ``sessionId``.
        """
        if self.session.user_token is None:
            raise AuthenticationError(
                "Missing user token: call login() first."
            )

        payload = self.make_request(
            url=f"{QUOTECAST_URL}/request_session",
            method="POST",
            headers={"Origin": BASE_TRADER_URL},
            params={
                "version": QUOTECAST_VERSION,
                "userToken": self.session.user_token,
            },
            json_body={"referrer": BASE_TRADER_URL},
            operation="requestVwdSession",
        )

        if not isinstance(payload, dict) or not payload.get("sessionId"):
            raise DataShapeError(f"Bad result: {payload}", payload)

        return payload["sessionId"]

    def _subscribe_and_poll(
        self,
        vwd_session: str,
        issue_id: str
    ) -> List[Dict[str, Any]]:
        url = f"{QUOTECAST_URL}/{vwd_session}"
        control = "".join(f"req({issue_id}.{f});" for f in QUOTE_FIELDS)

        self.make_request(
            url=url,
            method="POST",
            headers={"Origin": BASE_TRADER_URL},
            json_body={"controlData": control},
            operation="subscribeVwd",
            require_json=False,
        )

        rows = self.make_request(
            url=url,
            operation="getAskBidPrice",
        )

        if not isinstance(rows, list):
            raise DataShapeError(f"Bad result: {rows}", rows)

        return rows

    def get_ask_bid_price(
        self,
        issue_id: str,
        strict: Optional[bool] = None
    ) -> Dict[str, Any]:
        """
        Retrieve the latest bid, ask and last price for a vwd issue id.

        Parameters
        ----------
        issue_id : str
            The product's ``vwdId``.
        strict : bool, optional
            Fail when any of the four fields is absent. Defaults to the
            ``strict_quotes`` config option.

        Returns
        -------
        dict
            Subset of ``bidPrice``, ``askPrice``, ``lastPrice`` and
            ``lastTime`` (all four when `strict`).

        Raises
        ------
        QuoteTimeoutError
            If every attempt returned a heartbeat-only poll.
        DataShapeError
            If a poll is not a list, or `strict` and a field is missing.
        """
        if strict is None:
            strict = self.session_manager.config.strict_quotes

        issue_id = str(issue_id)
        rows: List[Dict[str, Any]] = []

        for attempt in range(1, self.max_attempts + 1):
            rows = self._subscribe_and_poll(self.request_session(), issue_id)
            if not is_heartbeat(rows):
                break
            self.quote_logger.info(
                f"Heartbeat only for {issue_id} "
                f"(attempt {attempt}/{self.max_attempts})."
            )
        else:
            raise QuoteTimeoutError(
                f"Tried {self.max_attempts} times to get data, "
                f"but nothing was returned: {rows}",
                rows,
            )

        prices = parse_quote_rows(issue_id, rows)

        if strict:
            missing = [
                lc_first(f) for f in QUOTE_FIELDS if lc_first(f) not in prices
            ]
            if missing:
                raise DataShapeError(
                    f"Couldn't find all requested info ({', '.join(missing)}):"
                    f" {rows}",
                    rows,
                )

        return prices
