# utils.py
import re

from errors import InvalidPinFormat

# Cook County PIN helpers
# Formats accepted:
#   - "18-36-205-071-0000"
#   - "18362050710000"
# Dashes may sit anywhere; nothing else is stripped.

_PIN_DIGITS = 14
_PIN_UNDASHED_RE = re.compile(r"[0-9]{14}")


def undashed_pin(pin: str) -> str:
    """Return the 14-digit PIN or '' if invalid."""
    if pin is None:
        return ""
    d = str(pin).replace("-", "")
    return d if _PIN_UNDASHED_RE.fullmatch(d) else ""


def is_valid_pin(pin: str) -> bool:
    """Exactly 14 digits once dashes are removed."""
    return len(undashed_pin(pin)) == _PIN_DIGITS


def format_pin(pin14: str) -> str:
    return f"{pin14[0:2]}-{pin14[2:4]}-{pin14[4:7]}-{pin14[7:10]}-{pin14[10:14]}"


def normalize_pin(pin: str) -> str:
    """Return dashed XX-XX-XXX-XXX-XXXX or '' if invalid."""
    d = undashed_pin(pin)
    if not d:
        return ""
    return format_pin(d)


def parse_pin(pin: str) -> tuple[str, str]:
    """
    Strict variant used by the analysis flow.
    Returns (undashed, dashed) or raises InvalidPinFormat.
    """
    d = undashed_pin(pin)
    if not d:
        raise InvalidPinFormat(pin)
    return d, format_pin(d)
