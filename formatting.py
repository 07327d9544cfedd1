# formatting.py
"""
Display formatting for valuation worksheet cells.

The worksheet has no column types, so the field name decides how a value is
shown. Rules are checked top to bottom; the first rule whose keywords match
the (lower-cased) field name AND whose renderer can parse the value wins.
Anything left over is shown as trimmed text.

    "Adjusted PGI", "123456.7"  ->  "$123,457"
    "Cap Rate",     "0.065"     ->  "6.50%"
    "Cap Rate",     "6.5"       ->  "6.50%"
    "Owner Name",   "Acme LLC"  ->  "Acme LLC"
"""

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Callable, NamedTuple, Optional

CURRENCY_KEYWORDS = ("adjusted pgi", "egi", "noi", "final mv / unit", "market value")
PERCENT_KEYWORDS = ("v/c", "% exp", "cap rate")

# enough precision to quantize any float exactly
_CTX = Context(prec=400, rounding=ROUND_HALF_UP)
_WHOLE = Decimal("1")
_CENTS = Decimal("0.01")

_NUMBER_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NOT_MONEY_RE = re.compile(r"[^0-9.\-]")


def cell_text(v: Any) -> str:
    """Render a raw cell the way the worksheet shows it (12.0 -> '12', True -> 'true')."""
    if v is None:
        return ""
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def parse_number(text: str) -> Optional[float]:
    """Leading numeric prefix of text ('6.5%' -> 6.5); None when there is none."""
    m = _NUMBER_PREFIX_RE.match(text or "")
    if not m:
        return None
    num = float(m.group(1))
    return num if math.isfinite(num) else None


def format_currency(text: str) -> Optional[str]:
    num = parse_number(_NOT_MONEY_RE.sub("", text))
    if num is None:
        return None
    q = _CTX.quantize(Decimal(num), _WHOLE)
    if q == 0:
        q = Decimal(0)
    return f"${q:,}"


def format_percentage(text: str) -> Optional[str]:
    num = parse_number(text)
    if num is None:
        return None
    # values under 1 are stored as ratios (0.065 == 6.5%)
    if num < 1:
        num = num * 100
    q = _CTX.quantize(Decimal(num), _CENTS)
    return f"{q:f}%"


class FieldRule(NamedTuple):
    kind: str
    keywords: tuple
    render: Callable[[str], Optional[str]]

    def matches(self, field_name: str) -> bool:
        name = (field_name or "").lower()
        return any(k in name for k in self.keywords)


FIELD_RULES = (
    FieldRule("currency", CURRENCY_KEYWORDS, format_currency),
    FieldRule("percentage", PERCENT_KEYWORDS, format_percentage),
)


def classify_field(field_name: Any) -> str:
    name = cell_text(field_name)
    for rule in FIELD_RULES:
        if rule.matches(name):
            return rule.kind
    return "literal"


def format_field_value(field_name: Any, value: Any) -> str:
    if value is None or (isinstance(value, str) and value == ""):
        return ""

    name = cell_text(field_name)
    text = cell_text(value).strip()
    for rule in FIELD_RULES:
        if not rule.matches(name):
            continue
        out = rule.render(text)
        if out is not None:
            return out
    return text
