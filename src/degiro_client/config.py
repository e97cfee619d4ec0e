from dataclasses import dataclass, fields
from typing import Optional
import os

from dotenv import load_dotenv


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class DegiroConfig:
    """
    Credentials and client options.

    Attributes
    ----------
    username, password : str, optional
        DEGIRO web trader credentials.
    one_time_password : str, optional
        TOTP code; switches login to the two-factor endpoint.
    session_id : str, optional
        Existing JSESSIONID to resume instead of logging in.
    account : int, optional
        Account id (``intAccount``). Overwritten by the client info
        returned after login.
    debug : bool
        Log every request and response at DEBUG level.
    timeout : float, optional
        Per-request timeout in seconds. ``None`` waits indefinitely.
    strict_quotes : bool
        Default for ``get_ask_bid_price(strict=...)``.
    """

    username: Optional[str] = None
    password: Optional[str] = None
    one_time_password: Optional[str] = None
    session_id: Optional[str] = None
    account: Optional[int] = None
    debug: bool = False
    timeout: Optional[float] = None
    strict_quotes: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "DegiroConfig":
        """
        Build a config from ``DEGIRO_*`` environment variables.

        A ``.env`` file in the working directory is loaded first. Keyword
        arguments that are not ``None`` take precedence over the
        environment.

        Raises
        ------
        ValueError
            If ``DEGIRO_ACCOUNT`` or ``DEGIRO_TIMEOUT`` is not numeric, or
            an unknown override is passed.
        """
        load_dotenv()

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(
                f"Unknown config option(s): {', '.join(sorted(unknown))}"
            )

        account = os.getenv("DEGIRO_ACCOUNT")
        timeout = os.getenv("DEGIRO_TIMEOUT")

        try:
            account = int(account) if account else None
        except ValueError:
            raise ValueError(f"DEGIRO_ACCOUNT must be an integer: {account}")

        try:
            timeout = float(timeout) if timeout else None
        except ValueError:
            raise ValueError(f"DEGIRO_TIMEOUT must be a number: {timeout}")

        values = {
            "username": os.getenv("DEGIRO_USER"),
            "password": os.getenv("DEGIRO_PASS"),
            "one_time_password": os.getenv("DEGIRO_ONE_TIME_PASS"),
            "session_id": os.getenv("DEGIRO_SID"),
            "account": account,
            "debug": _env_flag("DEGIRO_DEBUG"),
            "timeout": timeout,
            "strict_quotes": _env_flag("DEGIRO_STRICT_QUOTES"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**values)
