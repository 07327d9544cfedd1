import json

import pytest

import orchestrator
from errors import UpstreamFetchFailure
from scripts.analyze_pins import main


@pytest.fixture
def offline(monkeypatch):
    def fake_assessment(pin14, year):
        if pin14 == "99999999999999":
            raise UpstreamFetchFailure("99-99-999-999-9999", "timed out")
        return {"_status": "ok", "normalized": {"marketValue": 100000, "assessedValue": 10000}}

    monkeypatch.setattr(orchestrator, "fetch_current_assessment", fake_assessment)
    monkeypatch.setattr(orchestrator, "locate_valuation_table", lambda *a: {"table": None, "error": "miss"})


def _last_json(out: str) -> dict:
    start = out.rindex("\n{") + 1 if "\n{" in out else out.index("{")
    return json.loads(out[start:])


def test_cli_prints_result(offline, capsys):
    code = main(["--township", "niles", "--year", "2025", "--tax-rate", "8", "--eq-factor", "1.05",
                 "--delay", "0", "10101010100000"])
    assert code == 0
    data = _last_json(capsys.readouterr().out)
    assert data["current"]["estimatedTaxes"] == 840


def test_cli_bad_pin_exit_code(offline, capsys):
    code = main(["--township", "niles", "--year", "2025", "--tax-rate", "8", "--eq-factor", "1", "123"])
    assert code == 2
    assert _last_json(capsys.readouterr().out)["error"] == "Invalid PIN format: 123"


def test_cli_upstream_exit_code(offline, capsys):
    code = main(["--township", "niles", "--year", "2025", "--tax-rate", "8", "--eq-factor", "1",
                 "--delay", "0", "99999999999999"])
    assert code == 1
