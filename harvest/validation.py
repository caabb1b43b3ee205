"""
harvest/validation.py  —  Input validation rules

All validate_* functions return a list of error strings (empty = valid).
The ensure_* / parse_* helpers are used at the boundary of the calculators
and raise HoldingValidationError instead, so bad input never turns into NaN
or a negative invested value further down.
"""

import math
import numbers
import re
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Union

from harvest.models import Holding

# Tickers that look obviously wrong (NSE/BSE symbols: RELIANCE, M&M, BAJAJ-AUTO, TCS.NS)
_BAD_TICKER_CHARS = re.compile(r'[^A-Z0-9.&\-]')
_MAX_TICKER_LEN   = 20
_MIN_TICKER_LEN   = 1

# ISO-8601 date forms besides YYYY-MM-DD (basic, ordinal, week)
_BASIC_DATE       = re.compile(r'\d{8}')
_ORDINAL_DATE     = re.compile(r'(\d{4})-?(\d{3})')
_WEEK_DATE        = re.compile(r'(\d{4})-?W(\d{2})(?:-?(\d))?')
_DATE_TIME_SEP    = re.compile(r'[T ]')

# Typo guards, not hard limits
_MAX_PRICE        = 10_000_000.0   # ₹1 crore per share
_MAX_QUANTITY     = 1_000_000_000


class HoldingValidationError(ValueError):
    """Raised when a holding cannot be evaluated. `errors` lists every problem found."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _parse_iso_calendar_date(raw: str) -> date:
    """Calendar, ordinal or week date, extended or basic form. Raises ValueError."""
    m = _WEEK_DATE.fullmatch(raw)
    if m:
        year, week, day = m.groups()
        return date.fromisocalendar(int(year), int(week), int(day or 1))
    m = _ORDINAL_DATE.fullmatch(raw)
    if m:
        year, day_of_year = int(m.group(1)), int(m.group(2))
        d = date(year, 1, 1) + timedelta(days=day_of_year - 1)
        if day_of_year < 1 or d.year != year:
            raise ValueError(f"day {day_of_year} is out of range for {year}")
        return d
    if _BASIC_DATE.fullmatch(raw):
        return datetime.strptime(raw, "%Y%m%d").date()
    return date.fromisoformat(raw)


def parse_date(value: Union[date, datetime, str]) -> date:
    """
    Normalise a date, datetime or ISO-8601 string to a calendar date.

    Accepts calendar ("2024-01-15", "20240115"), ordinal ("2024-015") and week
    ("2024-W03-1") dates, optionally followed by a time part such as
    "T10:30:00Z" or " 08:00:00+05:30". Only the calendar date is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise HoldingValidationError(
            [f"Expected a date or ISO date string, got {type(value).__name__}."])

    # The time part never changes the calendar day (no timezone conversion)
    raw = _DATE_TIME_SEP.split(value.strip(), 1)[0]
    try:
        return _parse_iso_calendar_date(raw)
    except ValueError:
        raise HoldingValidationError(
            [f"'{value}' is not a valid ISO-8601 date (e.g. 2024-01-15)."]) from None


def validate_ticker(ticker: str) -> List[str]:
    errors = []
    t = ticker.strip().upper()
    if not t:
        errors.append("Ticker symbol cannot be empty.")
        return errors
    if len(t) < _MIN_TICKER_LEN:
        errors.append(f"Ticker is too short (minimum {_MIN_TICKER_LEN} character).")
    if len(t) > _MAX_TICKER_LEN:
        errors.append(f"Ticker '{t}' is too long (max {_MAX_TICKER_LEN} characters). "
                      f"Check the format, e.g. 'INFY', 'M&M', 'TCS.NS'.")
    if _BAD_TICKER_CHARS.search(t):
        errors.append(f"Ticker '{t}' contains invalid characters. "
                      f"Only letters, numbers, '&', dots and hyphens are allowed.")
    if t.startswith('.') or t.endswith('.') or t.startswith('-') or t.endswith('-'):
        errors.append(f"Ticker '{t}' cannot start or end with '.' or '-'.")
    return errors


def validate_name(name: str) -> List[str]:
    errors = []
    n = name.strip()
    if not n:
        errors.append("Please enter a name for this holding.")
    elif len(n) > 100:
        errors.append("Name is too long (max 100 characters).")
    return errors


def _is_number(x) -> bool:
    # Decimal is not registered as numbers.Real but is the usual type for prices
    return not isinstance(x, bool) and isinstance(x, (numbers.Real, Decimal))


def _is_finite(x) -> bool:
    return x.is_finite() if isinstance(x, Decimal) else math.isfinite(x)


def validate_amounts(quantity, buy_price, current_price) -> List[str]:
    errors = []

    # Quantity checks
    if not _is_number(quantity):
        errors.append(f"Quantity must be a number, got {quantity!r}.")
    elif not _is_finite(quantity) or quantity <= 0:
        errors.append("Quantity must be greater than zero.")
    elif quantity != int(quantity):
        errors.append(f"Quantity {quantity} must be a whole number of shares.")

    # Price checks (zero is allowed: bonus / gifted shares have no cost)
    for label, price in (("Buy price", buy_price), ("Current price", current_price)):
        if not _is_number(price):
            errors.append(f"{label} must be a number, got {price!r}.")
        elif not _is_finite(price):
            errors.append(f"{label} is not a finite number.")
        elif price < 0:
            errors.append(f"{label} cannot be negative.")

    return errors


def ensure_valid_amounts(holding: Holding) -> None:
    errors = validate_amounts(holding.quantity, holding.buy_price, holding.current_price)
    if errors:
        raise HoldingValidationError(
            [f"{holding.ticker or holding.id}: {e}" for e in errors])


def validate_buy_date(buy_date, as_of: Optional[date] = None) -> List[str]:
    try:
        d = parse_date(buy_date)
    except HoldingValidationError as e:
        return e.errors
    if as_of is not None and d > as_of:
        return [f"Buy date {d} is after the evaluation date {as_of}."]
    return []


def validate_sanity(quantity, buy_price, current_price) -> List[str]:
    """Typo guards for data entry. These never block a calculation."""
    errors = []
    if _is_number(quantity) and _is_finite(quantity) and quantity > _MAX_QUANTITY:
        errors.append(f"Quantity {quantity:,.0f} seems extremely large. "
                      f"Please double-check.")
    for label, price in (("Buy price", buy_price), ("Current price", current_price)):
        if _is_number(price) and _is_finite(price) and price > _MAX_PRICE:
            errors.append(f"{label} ₹{price:,.2f} seems unusually high. "
                          f"Please double-check.")
    return errors


def validate_holding(holding: Holding, as_of: Optional[date] = None) -> List[str]:
    """Every rule for one holding, in form order."""
    errors = []
    errors += validate_name(holding.name or "")
    errors += validate_ticker(holding.ticker or "")
    amount_errors = validate_amounts(holding.quantity, holding.buy_price,
                                     holding.current_price)
    errors += amount_errors or validate_sanity(holding.quantity, holding.buy_price,
                                               holding.current_price)
    errors += validate_buy_date(holding.buy_date, as_of)
    return errors
