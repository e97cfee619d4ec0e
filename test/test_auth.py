from degiro_client.auth import SessionManager
from degiro_client.config import DegiroConfig
from degiro_client.exceptions import AuthenticationError, DataShapeError
from unittest.mock import patch
from conftest import make_response
import pytest


CONFIG_DATA = {
    "data": {
        "paUrl": "https://trader.degiro.nl/pa/secure/",
        "productSearchUrl": "https://trader.degiro.nl/product_search/secure/",
        "productTypesUrl": "https://trader.degiro.nl/product_types/secure/",
        "reportingUrl": "https://trader.degiro.nl/reporting/secure/",
        "tradingUrl": "https://trader.degiro.nl/trading/secure/",
        "vwdQuotecastServiceUrl": "https://trader.degiro.nl/vwd/",
    }
}

CLIENT_DATA = {"data": {"intAccount": 7654321, "id": 99, "firstName": "A"}}


def login_ok(session_id="SID-NEW"):
    return make_response(
        {"status": 0, "statusText": "success"},
        cookies={"JSESSIONID": session_id},
    )


@patch("degiro_client.base_client.requests.request")
def test_login_bootstraps_session(mock_request):
    mock_request.side_effect = [
        login_ok(),
        make_response(CONFIG_DATA),
        make_response(CLIENT_DATA),
    ]

    sm = SessionManager(DegiroConfig(username="u", password="p"))
    session = sm.login()

    assert session.id == "SID-NEW"
    assert session.account == 7654321
    assert session.user_token == 99
    assert session.client_info == CLIENT_DATA["data"]
    assert sm.urls.trading_url == "https://trader.degiro.nl/trading/secure/"

    login_call, config_call, client_call = mock_request.call_args_list
    assert login_call.args == (
        "POST", "https://trader.degiro.nl/login/secure/login"
    )
    assert login_call.kwargs["json"]["username"] == "u"
    assert "oneTimePassword" not in login_call.kwargs["json"]
    assert config_call.kwargs["headers"] == {"Cookie": "JSESSIONID=SID-NEW;"}
    assert client_call.args[1] == "https://trader.degiro.nl/pa/secure/client"
    assert client_call.kwargs["params"] == {"sessionId": "SID-NEW"}


@patch("degiro_client.base_client.requests.request")
def test_login_with_one_time_password(mock_request):
    mock_request.side_effect = [
        login_ok(),
        make_response(CONFIG_DATA),
        make_response(CLIENT_DATA),
    ]

    sm = SessionManager(
        DegiroConfig(username="u", password="p", one_time_password="123456")
    )
    sm.login()

    login_call = mock_request.call_args_list[0]
    assert login_call.args[1].endswith("/login/secure/login/totp")
    assert login_call.kwargs["json"]["oneTimePassword"] == "123456"


@patch("degiro_client.base_client.requests.request")
def test_login_without_cookie_fails(mock_request):
    mock_request.return_value = make_response({"status": 0}, cookies={})

    sm = SessionManager(DegiroConfig(username="u", password="p"))
    with pytest.raises(AuthenticationError, match="no session cookie"):
        sm.login()

    mock_request.assert_called_once()


@patch("degiro_client.base_client.requests.request")
def test_login_vendor_status_fails(mock_request):
    mock_request.return_value = make_response(
        {"status": 3, "statusText": "badCredentials"},
        cookies={"JSESSIONID": "X"},
    )

    sm = SessionManager(DegiroConfig(username="u", password="bad"))
    with pytest.raises(AuthenticationError, match="badCredentials"):
        sm.login()


@patch("degiro_client.base_client.requests.request")
def test_login_http_error_becomes_authentication_error(mock_request):
    mock_request.return_value = make_response(
        {"errors": [{"text": "Invalid credentials"}]},
        status_code=400,
        reason="Bad Request",
    )

    sm = SessionManager(DegiroConfig(username="u", password="bad"))
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        sm.login()


@patch("degiro_client.base_client.requests.request")
def test_resume_skips_login(mock_request):
    mock_request.side_effect = [
        make_response(CONFIG_DATA),
        make_response(CLIENT_DATA),
    ]

    sm = SessionManager(DegiroConfig(session_id="OLD"))
    session = sm.resume()

    assert session.id == "OLD"
    assert session.account == 7654321
    assert mock_request.call_count == 2


def test_resume_without_session_id():
    sm = SessionManager(DegiroConfig())
    with pytest.raises(AuthenticationError, match="No session id"):
        sm.resume()


@patch("degiro_client.base_client.requests.request")
def test_update_config_bad_shape(mock_request):
    mock_request.return_value = make_response({"nope": 1})

    sm = SessionManager(DegiroConfig(session_id="S"))
    with pytest.raises(DataShapeError):
        sm.update_config()


@patch("degiro_client.base_client.requests.request")
def test_get_client_info_bad_shape(mock_request, session_manager):
    mock_request.return_value = make_response({"data": {"id": 1}})

    with pytest.raises(DataShapeError):
        session_manager.get_client_info()

    assert session_manager.session.account == 1234567


def test_get_client_info_requires_config():
    sm = SessionManager(DegiroConfig(session_id="S"))
    with pytest.raises(AuthenticationError):
        sm.get_client_info()
