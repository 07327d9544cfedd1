# fetchers.py
"""
Thin adapters for the two remote sources the analysis uses:

  * the Assessor "current year assessment values" datalet (HTML), scraped
    for Total MV / Total AV;
  * the township commercial valuation workbook (XLSX), read into plain
    rows for the worksheet search in worksheet.py.
"""

import os
import re
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Callable, Dict, List, Tuple

import pandas as _pd
import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from errors import UpstreamFetchFailure
from utils import format_pin

# ---------------- config ----------------
VALUES_BASE = "https://assessorpropertydetails.cookcountyil.gov/datalets/datalet.aspx"
ASSESSOR_JUR = os.getenv("ASSESSOR_JUR", "016")

ASSESSMENT_TIMEOUT = float(os.getenv("ASSESSMENT_TIMEOUT", "15"))
WORKSHEET_TIMEOUT = float(os.getenv("WORKSHEET_TIMEOUT", "30"))

# the datalet pages reject obvious bots, so look like a browser
DEFAULT_UA = os.getenv(
    "SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
)
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_MV_RE = re.compile(r"Total\s+MV[:\s]*\$?\s*([0-9,]+)", re.IGNORECASE)
_AV_RE = re.compile(r"Total\s+AV[:\s]*\$?\s*([0-9,]+)", re.IGNORECASE)


def _now_iso() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def _retrying_session(
    total: int = 2,
    backoff_factor: float = 0.4,
    status_forcelist: Tuple[int, ...] = (502, 503, 504),
    allowed_methods: Tuple[str, ...] = ("HEAD", "GET", "OPTIONS"),
) -> requests.Session:
    """
    Requests session with retry/backoff for idempotent GETs.
    Only used for the (large, CDN-hosted) workbooks.
    """
    sess = requests.Session()
    retry = Retry(
        total=total,
        read=total,
        connect=total,
        status=total,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=set(allowed_methods),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    sess.mount("http://", adapter)
    sess.mount("https://", adapter)
    sess.headers.update({"User-Agent": DEFAULT_UA})
    return sess


# ---------------- Document fetcher ----------------
def fetch_text(url: str, timeout: float = ASSESSMENT_TIMEOUT) -> str:
    """GET a page and return its text. Raises requests.RequestException on network/timeout/non-2xx."""
    r = requests.get(url, headers={"User-Agent": DEFAULT_UA}, timeout=timeout)
    r.raise_for_status()
    return r.text


def fetch_bytes(url: str, timeout: float = WORKSHEET_TIMEOUT) -> bytes:
    """GET a binary document (workbook). Same failure contract as fetch_text."""
    with _retrying_session() as sess:
        r = sess.get(url, headers={"Accept": XLSX_MIME}, timeout=timeout)
        r.raise_for_status()
        return r.content


# ---------------- Assessment extractor ----------------
def assessment_url(pin14: str, taxyr: Any, jur: str = ASSESSOR_JUR) -> str:
    return (
        f"{VALUES_BASE}?mode=curyear_asmt_values&UseSearch=no"
        f"&pin={pin14}&jur={jur}&taxyr={taxyr}&LMparent=896"
    )


def page_text(html: str) -> str:
    soup = BeautifulSoup(html or "", "html.parser")
    body = soup.body or soup
    return body.get_text()


def _match_amount(pattern: re.Pattern, text: str) -> int:
    m = pattern.search(text or "")
    if not m:
        return 0
    digits = m.group(1).replace(",", "")
    return int(digits) if digits else 0


def extract_assessment_values(text: str) -> Dict[str, int]:
    """
    Pull 'Total MV' and 'Total AV' out of free page text.
    A missing label is reported as 0, not as an error.
    """
    return {
        "marketValue": _match_amount(_MV_RE, text),
        "assessedValue": _match_amount(_AV_RE, text),
    }


def fetch_current_assessment(
    pin14: str,
    taxyr: Any,
    *,
    fetch: Callable[..., str] = fetch_text,
    timeout: float = ASSESSMENT_TIMEOUT,
) -> Dict[str, Any]:
    url = assessment_url(pin14, taxyr)
    meta = {"source": "ASSR_CURYEAR_VALUES", "url": url, "pin": pin14, "taxyr": str(taxyr), "fetched_at": _now_iso()}
    print(f"URL: {url}", flush=True)

    try:
        html = fetch(url, timeout=timeout)
    except requests.RequestException as e:
        print(f"❌ Error scraping current values for {format_pin(pin14)}: {e}", flush=True)
        raise UpstreamFetchFailure(format_pin(pin14), str(e), url=url) from e

    values = extract_assessment_values(page_text(html))
    if values["marketValue"]:
        print(f"Current Total MV: ${values['marketValue']:,}", flush=True)
    if values["assessedValue"]:
        print(f"Current Total AV: ${values['assessedValue']:,}", flush=True)

    return {"_status": "ok", "_meta": meta, "normalized": values}


# ---------------- Tabular document reader ----------------
def _is_missing(v) -> bool:
    if v is None or (isinstance(v, str) and v == ""):
        return True
    try:
        return bool(_pd.isna(v))
    except (TypeError, ValueError):
        return False


def _frame_rows(df: _pd.DataFrame) -> List[List[Any]]:
    rows: List[List[Any]] = []
    for values in df.itertuples(index=False, name=None):
        row = [None if _is_missing(v) else v for v in values]
        while row and row[-1] is None:
            row.pop()
        # blank rows stay as [] so row positions match the sheet
        rows.append(row)
    while rows and not rows[-1]:
        rows.pop()
    return rows


def read_workbook(blob: bytes) -> Dict[str, List[List[Any]]]:
    """
    Read every sheet of an XLSX into raw rows (no header inference).
    Keys keep the workbook's sheet order; cells are str/int/float/None.
    Text such as "N/A" or "None" is kept as text; only empty cells are None.
    """
    frames = _pd.read_excel(
        BytesIO(blob),
        sheet_name=None,
        header=None,
        dtype=object,
        engine="openpyxl",
        keep_default_na=False,
        na_filter=False,
    )
    return {str(name): _frame_rows(df) for name, df in frames.items()}
