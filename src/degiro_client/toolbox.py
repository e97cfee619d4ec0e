from typing import Any, Dict, List
import pandas as pd

from .utils import rows_to_dict


def portfolio_to_dataframe(
    portfolio: List[Dict[str, Any]]
) -> pd.DataFrame:
    """
    Convert portfolio position records into a pandas DataFrame.

    Each input record is a vendor position as returned by
    ``get_portfolio()["portfolio"]``:
    ``{"id": ..., "value": [{"name": ..., "value": ...}, ...]}``.

    The function:
    1. Folds each record's name/value rows into one row.
    2. Keeps the record ``id`` as the first column.
    3. Coerces ``size``, ``price`` and ``value`` to floats when present.

    Parameters
    ----------
    portfolio : list of dict
        Raw position records.

    Returns
    -------
    pandas.DataFrame
        One row per position. Columns follow the vendor field names.
    """
    records = []
    for position in portfolio:
        row = rows_to_dict(position.get("value", []))
        row["id"] = position.get("id", row.get("id"))
        records.append(row)

    df = pd.DataFrame(records)
    if df.empty:
        return df

    df = df[["id"] + [c for c in df.columns if c != "id"]]

    for col in ("size", "price", "value"):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")

    return df


def orders_to_dataframe(
    orders: List[Dict[str, Any]]
) -> pd.DataFrame:
    """
    Convert flat order dicts (as returned by ``get_orders()``) into a
    DataFrame with ``date`` as a datetime64 column, sorted newest first.
    """
    df = pd.DataFrame(orders)
    if df.empty:
        return df

    if "date" in df.columns:
        df["date"] = pd.to_datetime(df["date"])
        df = df.sort_values("date", ascending=False).reset_index(drop=True)

    return df
