from typing import Any, Dict, Optional
from threading import Lock

from .base_client import get_logger, send_request
from .config import DegiroConfig
from .constants import BASE_TRADER_URL
from .exceptions import AuthenticationError, DataShapeError, HTTPError
from .models import RoutingUrls, Session


class SessionManager:
    """
    Owns the DEGIRO session and the routing URLs it unlocks.

    Responsibilities:
    - Log in and capture the JSESSIONID cookie.
    - Fetch the per-session routing URLs ("config").
    - Fetch the client info holding the account id and user token.
    - Serialize the bootstrap so two threads cannot interleave a re-login.
    """

    # Guards the login -> config -> client info chain.
    _lock = Lock()

    def __init__(
        self,
        config: Optional[DegiroConfig] = None
    ) -> None:
        self.config = config if config is not None else DegiroConfig()
        self.session = Session(
            id=self.config.session_id,
            account=self.config.account,
        )
        self.urls = RoutingUrls()
        self.logger = get_logger("degiro.auth")
        self.http_logger = get_logger("degiro.http")

    def require_url(self, name: str) -> str:
        """
        Return routing URL `name`.

        Raises
        ------
        AuthenticationError
            If `update_config` has not populated it yet.
        """
        value = getattr(self.urls, name)
        if not value:
            raise AuthenticationError(
                f"Missing routing URL `{name}`: call login() first."
            )
        return value

    def login(self) -> Session:
        """
        Log in, then load the routing URLs and the client info.

        Uses the ``/totp`` sub-endpoint when a one-time password is
        configured.

        Returns
        -------
        Session
            The populated session.

        Raises
        ------
        AuthenticationError
            If the vendor rejects the credentials, reports a non-zero
            status, or sets no JSESSIONID cookie.
        """
        url = f"{BASE_TRADER_URL}/login/secure/login"
        body = {
            "username": self.config.username,
            "password": self.config.password,
            "isRedirectToMobile": False,
            "loginButtonUniversal": "",
            "queryParams": {"reason": "session_expired"},
        }

        if self.config.one_time_password:
            if self.config.debug:
                self.logger.debug("Using two-factor login.")
            url += "/totp"
            body["oneTimePassword"] = self.config.one_time_password

        with SessionManager._lock:
            self._send_login(url, body)
            self._bootstrap()

        return self.session

    def resume(self) -> Session:
        """
        Reuse an existing session id without logging in.

        Raises
        ------
        AuthenticationError
            If no session id is configured.
        """
        if not self.session.id:
            raise AuthenticationError("No session id to resume.")

        with SessionManager._lock:
            self._bootstrap()

        return self.session

    def _send_login(
        self,
        url: str,
        body: Dict[str, Any]
    ) -> None:
        masked = dict(body, password="********")
        if "oneTimePassword" in masked:
            masked["oneTimePassword"] = "******"

        try:
            response, payload = send_request(
                "POST",
                url,
                operation="login",
                logger=self.http_logger,
            debug=self.config.debug,
                headers={"Content-Type": "application/json"},
                json_body=body,
                timeout=self.config.timeout,
                logged_body=masked,
            )
        except (HTTPError, DataShapeError) as e:
            raise AuthenticationError(f"Login failed: {e}") from e

        status = payload.get("status") if isinstance(payload, dict) else None
        if status not in (None, 0):
            raise AuthenticationError(
                f"Login failed: {payload.get('statusText', status)}"
            )

        session_id = response.cookies.get("JSESSIONID")
        if not session_id:
            raise AuthenticationError("Login failed: no session cookie.")

        self.session.id = session_id
        self.logger.info("Login ok.")

    def _bootstrap(self) -> None:
        self.update_config()
        self.get_client_info()

    def update_config(self) -> RoutingUrls:
        """
        Fetch the routing URLs bound to the current session.

        Raises
        ------
        DataShapeError
            If the response carries no ``data`` object.
        """
        url = f"{BASE_TRADER_URL}/login/secure/config"
        headers = {"Cookie": f"JSESSIONID={self.session.id};"}

        _, payload = send_request(
            "GET",
            url,
            operation="config",
            logger=self.http_logger,
            debug=self.config.debug,
            headers=headers,
            timeout=self.config.timeout,
        )

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise DataShapeError(f"Bad result: {payload}", payload)

        self.urls.update(data)
        return self.urls

    def get_client_info(self) -> Dict[str, Any]:
        """
        Fetch client info and store the account id and user token.

        Returns
        -------
        dict
            The vendor ``data`` object (``intAccount``, ``id``, names,
            addresses and so on).

        Raises
        ------
        DataShapeError
            If ``data.intAccount`` or ``data.id`` is missing.
        """
        url = f"{self.require_url('pa_url')}client"

        _, payload = send_request(
            "GET",
            url,
            operation="getClientInfo",
            logger=self.http_logger,
            debug=self.config.debug,
            params={"sessionId": self.session.id},
            timeout=self.config.timeout,
        )

        data = payload.get("data") if isinstance(payload, dict) else None
        if (
            not isinstance(data, dict)
            or "intAccount" not in data
            or "id" not in data
        ):
            raise DataShapeError(f"Bad result: {payload}", payload)

        self.session.account = data["intAccount"]
        self.session.user_token = data["id"]
        self.session.client_info = data
        return data
