# worksheet.py
"""
Locate a PIN in the Assessor's township valuation workbook
(<year>.T<township>.PublicModel.xlsx) and turn its row into an ordered
field/value table.

The workbook has moved around over the years, so several URLs are tried in
order. Each attempt comes back as an envelope:

    {"_status": "ok" | "no_match" | "error", "_meta": {...}, "normalized": {...}}

and the first "ok" wins. A miss everywhere is a normal outcome: the caller
gets table=None plus the last failure reason.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests

from fetchers import WORKSHEET_TIMEOUT, _now_iso, fetch_bytes, read_workbook
from formatting import cell_text, format_field_value

S3_REPORTS_BASE = "https://prodassets.cookcountyassessoril.gov/s3fs-public/reports"
SITE_REPORTS_BASE = "https://www.cookcountyassessoril.gov/sites/default/files/valuation-reports"

# Property-type sheets, in search order
PROPERTY_SHEETS = (
    "Multifamily",
    "Hotels",
    "Industrials",
    "Comm517",
    "NursingHomes",
    "GasStations",
    "Specials",
    "Condos",
)

PIN_NOT_FOUND = "PIN not found in valuation worksheet"

_KEY_PIN_STRIP_RE = re.compile(r"[-\s]")

Workbook = Dict[str, List[List[Any]]]


def worksheet_urls(year: Any, township_number: int) -> List[str]:
    return [
        f"{S3_REPORTS_BASE}/{year}.T{township_number}.PublicModel.xlsx",
        f"{S3_REPORTS_BASE}/{year}-T{township_number}-PublicModel.xlsx",
        f"{SITE_REPORTS_BASE}/{year}.T{township_number}.PublicModel.xlsx",
    ]


def key_pin_matches(cell: Any, pin14: str, pin_dash: str) -> bool:
    """Column 0 is the KeyPIN; it shows up dashed, undashed, or as a number."""
    if cell is None:
        return False
    s = cell_text(cell).strip()
    return _KEY_PIN_STRIP_RE.sub("", s) == pin14 or s == pin_dash


def find_pin_row(
    rows: Sequence[Sequence[Any]],
    pin14: str,
    pin_dash: str,
    header_index: int = 0,
) -> Optional[Tuple[int, Sequence[Any]]]:
    """Index and row of the first data row (after the header) whose KeyPIN matches."""
    for j in range(header_index + 1, len(rows)):
        row = rows[j]
        if not row:
            continue
        if key_pin_matches(row[0], pin14, pin_dash):
            return j, row
    return None


def build_valuation_table(header: Sequence[Any], row: Sequence[Any]) -> List[Dict[str, str]]:
    table = []
    for k in range(min(len(header), len(row))):
        field = header[k]
        # only absent headers are skipped; a blank-looking "   " header still shows up as ""
        if field is None or field == "":
            continue
        table.append({
            "field": cell_text(field).strip(),
            "value": format_field_value(field, row[k]),
        })
    return table


def search_workbook(
    workbook: Workbook,
    pin14: str,
    pin_dash: str,
    sheets: Sequence[str] = PROPERTY_SHEETS,
) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"sheets_available": list(workbook.keys()), "sheets_searched": []}
    print(f"Available sheets: {', '.join(workbook.keys())}", flush=True)

    for name in sheets:
        if name not in workbook:
            continue
        rows = workbook[name]
        # blank rows are kept as [] so indexes stay spreadsheet row numbers - 1
        header_index = next((i for i, r in enumerate(rows) if r), None)
        if header_index is None:
            continue
        meta["sheets_searched"].append(name)
        print(f"Searching in '{name}' sheet... ({len(rows)} rows)", flush=True)

        hit = find_pin_row(rows, pin14, pin_dash, header_index)
        if hit is None:
            continue

        j, row = hit
        print(f"✅ Found PIN at row {j + 1} in '{name}'", flush=True)
        table = build_valuation_table(rows[header_index], row)
        return {
            "_status": "ok",
            "_meta": {**meta, "sheet": name, "row": j + 1},
            "normalized": {"sheet": name, "table": table},
        }

    print(f"⚠️ PIN not found in any sheet (tried {pin14} and {pin_dash})", flush=True)
    return {
        "_status": "no_match",
        "_meta": {**meta, "error": PIN_NOT_FOUND},
        "normalized": {"sheet": None, "table": None},
    }


def _attempt_url(
    url: str,
    pin14: str,
    pin_dash: str,
    fetch: Callable[..., bytes],
    read: Callable[[bytes], Workbook],
    timeout: float,
) -> Dict[str, Any]:
    meta = {"source": "VALUATION_WORKSHEET", "url": url, "pin": pin14, "fetched_at": _now_iso()}
    try:
        blob = fetch(url, timeout=timeout)
    except requests.RequestException as e:
        return {"_status": "error", "_meta": {**meta, "error": str(e)}, "normalized": {}}

    print(f"✅ Worksheet downloaded ({len(blob)} bytes)", flush=True)
    try:
        workbook = read(blob)
    except Exception as e:
        # CDN error pages come back 200 as HTML; anything openpyxl can't open is a miss
        return {"_status": "error", "_meta": {**meta, "error": f"Unreadable workbook: {e}"}, "normalized": {}}

    found = search_workbook(workbook, pin14, pin_dash)
    return {**found, "_meta": {**meta, **found["_meta"]}}


def locate_valuation_table(
    pin14: str,
    pin_dash: str,
    year: Any,
    township_number: int,
    *,
    fetch: Callable[..., bytes] = fetch_bytes,
    read: Callable[[bytes], Workbook] = read_workbook,
    timeout: float = WORKSHEET_TIMEOUT,
) -> Dict[str, Any]:
    """
    Try each worksheet URL in order, stopping at the first one that has the PIN.

    Returns {"table", "sheet", "url", "error", "attempts"}; table is None when
    no location produced a match, and error then holds the most recent reason.
    """
    result: Dict[str, Any] = {"table": None, "sheet": None, "url": None, "error": None, "attempts": []}

    for i, url in enumerate(worksheet_urls(year, township_number), start=1):
        print(f"Attempt {i}: {url}", flush=True)
        env = _attempt_url(url, pin14, pin_dash, fetch, read, timeout)
        result["attempts"].append({"_status": env["_status"], **env["_meta"]})

        if env["_status"] == "ok":
            norm = env["normalized"]
            print(f"✅ Created valuation table with {len(norm['table'])} fields from '{norm['sheet']}' sheet", flush=True)
            result.update(table=norm["table"], sheet=norm["sheet"], url=url, error=None)
            return result

        result["error"] = env["_meta"].get("error")
        if env["_status"] == "error":
            print(f"❌ Attempt {i} failed: {result['error']}", flush=True)

    print("⚠️ Could not locate PIN in valuation worksheet; report will be generated without it", flush=True)
    print(f"   Last error: {result['error']}", flush=True)
    return result
