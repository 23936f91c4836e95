import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

DEFAULT_SYMBOL = "₦"

_NOISE_RE = re.compile(r"[^\d.,\-]")


def parse_amount(raw: Any, symbol: Optional[str] = None) -> Optional[Decimal]:
    """Read a money value; ``symbol`` is removed first so symbols like ``"Rs."`` leave no stray dot."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, (int, float)):
        try:
            d = Decimal(str(raw))
        except InvalidOperation:
            return None
        return d if d.is_finite() else None

    s = str(raw).strip()
    if symbol:
        s = s.removeprefix(symbol.strip())
    s = _NOISE_RE.sub("", s)
    if not s:
        return None
    if s.count(",") == 1 and "." not in s and len(s.split(",")[1]) != 3:
        s = s.replace(",", ".")
    else:
        s = s.replace(",", "")
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    return d if d.is_finite() else None


def format_currency(amount: Any, symbol: str = DEFAULT_SYMBOL) -> str:
    """Render an amount as ``"₦1,200"`` or ``"₦1,200.50"``; bad input gives ``"₦0"``."""
    value = parse_amount(amount, symbol=symbol)
    if value is None:
        return f"{symbol}0"

    value = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    formatted = f"{value:,.2f}"
    if formatted.endswith(".00"):
        formatted = formatted[:-3]
    if formatted in ("-0", "0"):
        formatted = "0"
    return f"{symbol}{formatted}"
