"""
harvest/loader.py  —  Read holdings from a CSV or JSON file

Expected columns / keys (camelCase names from the web app export also work):

  id, name, ticker, quantity, buy_price, current_price, buy_date

Every row is checked with harvest.validation before anything is returned;
all problems are reported together in one HoldingValidationError.
"""

import logging
import math
from datetime import date
from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd

from harvest.models import Holding
from harvest.validation import HoldingValidationError, validate_holding

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name", "ticker", "quantity", "buy_price", "current_price", "buy_date"]

_ALIASES = {
    "stockName":     "name",
    "stock_name":    "name",
    "tickerSymbol":  "ticker",
    "ticker_symbol": "ticker",
    "symbol":        "ticker",
    "qty":           "quantity",
    "buyPrice":      "buy_price",
    "currentPrice":  "current_price",
    "buyDate":       "buy_date",
}


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix == ".json":
        return pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    raise ValueError(f"Unsupported file type '{suffix}' (expected .csv or .json).")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _to_number(value: Any) -> Any:
    """'1,250.50' → 1250.5, '10' → 10. Unparseable text is returned as-is for validation to flag."""
    if _is_blank(value):
        return None
    try:
        n = float(str(value).replace(",", "").replace("₹", "").strip())
    except ValueError:
        return value
    return int(n) if n.is_integer() else n


def _to_text(value: Any) -> str:
    return "" if _is_blank(value) else str(value).strip()


def load_holdings(path: Union[str, Path],
                  as_of: Optional[date] = None) -> List[Holding]:
    """
    Load and validate holdings. With as_of set, buy dates after it are rejected.
    Raises HoldingValidationError listing every bad row, ValueError for an
    unsupported file type, OSError if the file cannot be read.
    """
    path = Path(path)
    df   = _read_frame(path)
    if df.empty:
        logger.info("No holdings in %s", path)
        return []

    df = df.rename(columns=_ALIASES)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise HoldingValidationError([f"{path.name}: missing column(s) {', '.join(missing)}."])

    holdings: List[Holding] = []
    errors:   List[str]     = []

    for i, row in enumerate(df.to_dict(orient="records"), 1):
        price_cur = _to_number(row["current_price"])
        price_buy = _to_number(row["buy_price"])
        buy_date  = row["buy_date"]
        holding = Holding(
            id=_to_text(row.get("id")) or f"holding_{i}",
            name=_to_text(row["name"]),
            ticker=_to_text(row["ticker"]).upper(),
            quantity=_to_number(row["quantity"]),
            buy_price=float(price_buy) if isinstance(price_buy, int) else price_buy,
            current_price=float(price_cur) if isinstance(price_cur, int) else price_cur,
            buy_date=buy_date.strip() if isinstance(buy_date, str) else buy_date,
        )
        row_errors = validate_holding(holding, as_of)
        if row_errors:
            errors += [f"Row {i} ({holding.ticker or '?'}): {e}" for e in row_errors]
            continue
        holdings.append(holding)

    if errors:
        logger.warning("%d problem(s) in %s", len(errors), path)
        raise HoldingValidationError(errors)

    logger.info("Loaded %d holdings from %s", len(holdings), path)
    return holdings
