from typing import Any, Dict, Optional, Tuple
import requests
import logging
import json

from .exceptions import DataShapeError, HTTPError


def get_logger(name: str) -> logging.Logger:
    """
    Return a `degiro.*` logger with a single console handler attached.

    The level is set once, when the handler is attached. Request/response
    traces are gated per client by the ``debug`` argument of
    `send_request` and `check_success`, so clients with different
    ``debug`` settings can share a logger.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
    return logger


def expect_section(
    payload: Any,
    key: str,
    kind: type
) -> Any:
    """
    Return ``payload[key]``, checking it has type `kind`.

    Raises
    ------
    DataShapeError
        If `payload` is not a dict, `key` is missing, or its value is not
        a `kind`.
    """
    section = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(section, kind):
        raise DataShapeError(f"Bad result: {payload}", payload)
    return section


def check_success(
    response: requests.Response,
    operation: str,
    logger: logging.Logger,
    require_json: bool = True,
    debug: bool = False
) -> Any:
    """
    Decode a DEGIRO response and fail on non-success statuses.

    Parameters
    ----------
    response : requests.Response
        Raw HTTP response.
    operation : str
        Operation name used in log lines and error messages.
    logger : logging.Logger
        Logger receiving the response trace.
    require_json : bool
        When false, a 2xx body that is not JSON yields ``None``.
    debug : bool
        Write the status, headers and body to `logger` at DEBUG.

    Returns
    -------
    Any
        The decoded JSON body, or ``None`` (see `require_json`).

    Raises
    ------
    HTTPError
        If the status is not 2xx. The message is the first vendor error
        text when available, else ``"<status> - <reason>"``.
    DataShapeError
        If a 2xx response body is not valid JSON.
    """
    try:
        payload = response.json()
        is_json = True
    except ValueError:
        payload = None
        is_json = False

    if debug:
        logger.debug(
            "%s response status: %s - %s - %s",
            operation,
            "success" if response.ok else "error",
            response.status_code,
            response.reason,
        )
        logger.debug(
            "%s response header: %s", operation, dict(response.headers or {})
        )
        logger.debug(
            "%s response body: %s",
            operation,
            json.dumps(payload) if is_json else response.text,
        )

    if not response.ok:
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors and isinstance(errors, list) and isinstance(errors[0], dict):
            message = errors[0].get("text") or str(errors[0])
        else:
            message = f"{response.status_code} - {response.reason}"
        raise HTTPError(message, response=response, payload=payload)

    if not is_json and require_json:
        raise DataShapeError(
            f"{operation}: response body is not JSON", response.text
        )

    return payload


def send_request(
    method: str,
    url: str,
    *,
    operation: str,
    logger: logging.Logger,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    json_body: Any = None,
    timeout: Optional[float] = None,
    logged_body: Any = None,
    require_json: bool = True,
    debug: bool = False,
) -> Tuple[requests.Response, Any]:
    """
    Issue one HTTP exchange and return the response with its decoded body.

    With ``debug`` the request and response are traced at DEBUG.
    ``logged_body`` replaces ``json_body`` in that trace, so secrets can
    be masked.
    """
    if debug:
        logger.debug(
            "%s request url: %s %s %s", operation, method, url, params or ""
        )
        if headers:
            logger.debug(
                "%s request header: %s", operation, json.dumps(headers)
            )
        if json_body is not None:
            shown = logged_body if logged_body is not None else json_body
            logger.debug("%s request body: %s", operation, json.dumps(shown))

    response = requests.request(
        method,
        url,
        params=params,
        headers=headers,
        json=json_body,
        timeout=timeout,
    )

    return response, check_success(
        response, operation, logger, require_json, debug
    )


class BaseAPIClient:
    """
    Base HTTP client for DEGIRO endpoints.

    Sub-clients share one `SessionManager`, which owns the session id,
    account id and routing URLs written during login. Intended for
    inheritance by specific API clients (e.g., AccountAPI, TradingAPI).
    """

    def __init__(
        self,
        session_manager
    ):
        self.session_manager = session_manager

    @property
    def session(self):
        return self.session_manager.session

    @property
    def logger(self) -> logging.Logger:
        return self.session_manager.http_logger

    def url(self, name: str) -> str:
        """Routing URL `name`, failing if the session is not bootstrapped."""
        return self.session_manager.require_url(name)

    def account_params(self) -> Dict[str, Any]:
        """Query parameters identifying the account and session."""
        return {
            "intAccount": self.session.account,
            "sessionId": self.session.id,
        }

    def make_request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
        operation: str = "request",
        require_json: bool = True,
    ) -> Any:
        """
        Execute a request against a DEGIRO endpoint.

        Parameters
        ----------
        url : str
            Full endpoint URL.
        method : str
            HTTP verb.
        headers : dict, optional
            HTTP headers.
        params : dict, optional
            Query parameters for the request.
        json_body : Any, optional
            Body serialized as JSON.
        operation : str
            Name used in log lines and error messages.
        require_json : bool
            Fail if a 2xx body is not JSON.

        Returns
        -------
        Any
            Parsed JSON response.
        """
        _, payload = send_request(
            method,
            url,
            operation=operation,
            logger=self.logger,
            params=params,
            headers=headers,
            json_body=json_body,
            timeout=self.session_manager.config.timeout,
            require_json=require_json,
            debug=self.session_manager.config.debug,
        )
        return payload
