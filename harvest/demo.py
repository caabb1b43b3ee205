"""
harvest/demo.py  —  Demo portfolio

Five winners and four losers. With an evaluation date in early 2026 the
losers hold ₹88,000 of unrealised loss, mostly short-term.
"""

from typing import List

from harvest.models import Holding

_DEMO = [
    # id,        name,                  ticker,      qty, buy,  current, buy date
    ("stock_1", "Infosys",             "INFY",      100, 1400, 1720, "2023-01-15"),
    ("stock_2", "Reliance Industries", "RELIANCE",   50, 2200, 2550, "2025-08-01"),
    ("stock_3", "TCS",                 "TCS",        80, 3100, 3480, "2023-03-20"),
    ("stock_4", "HDFC Bank",           "HDFCBANK",  150, 1500, 1630, "2024-05-10"),
    ("stock_5", "ICICI Bank",          "ICICIBANK", 120,  900, 1020, "2023-07-05"),
    ("stock_6", "Wipro",               "WIPRO",     200,  450,  385, "2025-10-15"),
    ("stock_7", "Paytm",               "PAYTM",     300,  880,  720, "2025-11-01"),
    ("stock_8", "Zomato",              "ZOMATO",    400,  125,   95, "2025-12-05"),
    ("stock_9", "Tech Mahindra",       "TECHM",     100, 1200, 1050, "2024-06-20"),
]


def demo_holdings() -> List[Holding]:
    """A fresh list each call, so callers may edit it freely."""
    return [
        Holding(id=i, name=n, ticker=t, quantity=q,
                buy_price=float(b), current_price=float(c), buy_date=d)
        for i, n, t, q, b, c, d in _DEMO
    ]
