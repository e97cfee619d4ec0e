from degiro_client.auth import SessionManager
from degiro_client.config import DegiroConfig
from unittest.mock import MagicMock
import pytest


@pytest.fixture
def session_manager():
    """
    Provide a SessionManager with a bootstrapped session and routing URLs.
    """
    sm = SessionManager(DegiroConfig(username="user", password="secret"))
    sm.session.id = "SID123"
    sm.session.account = 1234567
    sm.session.user_token = 42
    sm.urls.update({
        "paUrl": "https://trader.degiro.nl/pa/secure/",
        "productSearchUrl": "https://trader.degiro.nl/product_search/secure/",
        "productTypesUrl": "https://trader.degiro.nl/product_types/secure/",
        "reportingUrl": "https://trader.degiro.nl/reporting/secure/",
        "tradingUrl": "https://trader.degiro.nl/trading/secure/",
        "vwdQuotecastServiceUrl": "https://trader.degiro.nl/vwd/",
    })
    return sm


def make_response(
    payload=None,
    status_code=200,
    reason="OK",
    cookies=None,
    json_error=False,
    text="",
):
    """Build a mocked requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.reason = reason
    resp.headers = {"Content-Type": "application/json"}
    resp.cookies = cookies if cookies is not None else {}
    resp.text = text
    if json_error:
        resp.json.side_effect = ValueError("No JSON")
    else:
        resp.json.return_value = payload
    return resp
