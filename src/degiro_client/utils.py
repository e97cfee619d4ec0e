from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Union
import re

from dateutil.parser import isoparse

from .exceptions import ParseError


_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_DAY_MONTH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})$")


def lc_first(text: str) -> str:
    """Return `text` with its first character lower-cased."""
    return text[:1].lower() + text[1:]


def rows_to_dict(rows: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Fold vendor ``[{"name": ..., "value": ...}]`` rows into a dict."""
    return {row["name"]: row.get("value") for row in rows}


def parse_order_date(
    text: str,
    now: Optional[datetime] = None
) -> datetime:
    """
    Parse the ``date`` field of an order record.

    The vendor sends either a bare time (``"14:30"``) for records of the
    current day, or a day/month pair (``"05/03"``) for older ones.

    Parameters
    ----------
    text : str
        Raw vendor value.
    now : datetime, optional
        Reference "today". Defaults to ``datetime.now()``.

    Returns
    -------
    datetime
        A bare time resolves to today at that time with zero seconds. A
        day/month pair resolves to midnight of that day in the current
        year, or the previous year when the month lies after the current
        month.

    Raises
    ------
    ParseError
        If the text matches neither format or names an impossible date.
    """
    if now is None:
        now = datetime.now()

    if not isinstance(text, str):
        raise ParseError(f"Unexpected date format: {text!r}")

    value = text.strip()

    match = _TIME_RE.match(value)
    if match:
        hour, minute = (int(g) for g in match.groups())
        try:
            return now.replace(
                hour=hour, minute=minute, second=0, microsecond=0
            )
        except ValueError as e:
            raise ParseError(f"Invalid time: {text!r}") from e

    match = _DAY_MONTH_RE.match(value)
    if match:
        day, month = (int(g) for g in match.groups())
        year = now.year - 1 if month > now.month else now.year
        try:
            return datetime(year, month, day)
        except ValueError as e:
            raise ParseError(f"Invalid day/month: {text!r}") from e

    raise ParseError(f"Unexpected date format: {text!r}")


def format_report_date(value: Union[str, date, datetime]) -> str:
    """
    Normalize a reporting query date to ``dd/mm/YYYY``.

    Strings already containing ``/`` are passed through untouched; other
    strings are read as ISO 8601.
    """
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")

    if isinstance(value, str):
        if "/" in value:
            return value
        try:
            return isoparse(value).strftime("%d/%m/%Y")
        except ValueError:
            raise ValueError(f"Invalid date format: {value}")

    raise TypeError(f"Unsupported date value: {value!r}")
