from io import BytesIO

import pandas as pd
import pytest

ASSESSMENT_HTML = """
<html>
  <head><title>Current Year Assessment Values</title></head>
  <body>
    <table id="Values">
      <tr><td>Tax Year</td><td>2025</td></tr>
      <tr><td>Total MV:</td><td>$1,234,567</td></tr>
      <tr><td>Total AV</td><td>$45,000</td></tr>
    </table>
  </body>
</html>
"""


def make_xlsx(sheets: dict) -> bytes:
    """Write {sheet name: rows} to real XLSX bytes (no header row added)."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as xw:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(xw, sheet_name=name, header=False, index=False)
    return buf.getvalue()


@pytest.fixture
def valuation_header():
    return ["KeyPIN", "Address", "", "Adjusted PGI", "EGI", "% Exp", "NOI", "Cap Rate", "Final MV / Unit", "Market Value"]


@pytest.fixture
def valuation_row():
    return ["10-10-101-010-0000", "100 Main St", "ignored", 123456.7, "$98,765.49", 0.35, 64197, 0.065, 150000, 1000000]


@pytest.fixture
def assessment_pages():
    """Fake assessor pages keyed by undashed PIN."""
    return {
        "10101010100000": "<body>Total MV $200,000 Total AV $20,000</body>",
        "10101010110000": "<body>Total MV: $300,000 Total AV: $30,000</body>",
    }


@pytest.fixture
def xlsx():
    return make_xlsx


@pytest.fixture
def assessment_html():
    return ASSESSMENT_HTML
