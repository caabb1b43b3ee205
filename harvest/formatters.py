"""
harvest/formatters.py  —  Rupee formatting with Indian digit grouping

  1234567.5  →  ₹12,34,567.50      (format_currency)
  1234567.5  →  ₹12.35L            (format_large_number)
"""


def _group_indian(digits: str) -> str:
    """'12345678' → '1,23,45,678' : last three digits, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_currency(amount: float, show_decimals: bool = True) -> str:
    decimals = 2 if show_decimals else 0
    text = f"{abs(amount):.{decimals}f}"
    whole, _, frac = text.partition(".")
    grouped = _group_indian(whole) + (f".{frac}" if frac else "")
    # "-0.00" after rounding is still zero
    sign = "-" if amount < 0 and float(text) != 0 else ""
    return f"{sign}₹{grouped}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def format_large_number(num: float) -> str:
    """Lakhs and crores: ₹1.50Cr, ₹12.35L, ₹4.5K, else whole rupees."""
    if num >= 10_000_000:
        return f"₹{num / 10_000_000:.2f}Cr"
    if num >= 100_000:
        return f"₹{num / 100_000:.2f}L"
    if num >= 1_000:
        return f"₹{num / 1_000:.1f}K"
    return format_currency(num, show_decimals=False)


def format_with_sign(amount: float) -> str:
    formatted = format_currency(abs(amount))
    if amount > 0:
        return f"+{formatted}"
    if amount < 0:
        return f"-{formatted}"
    return formatted
