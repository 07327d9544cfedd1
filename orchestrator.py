# orchestrator.py
import os
import time
from typing import Any, Callable, Dict, Optional, Sequence

from errors import InvalidInput
from fetchers import fetch_current_assessment
from taxes import tax_summary
from townships import get_township
from utils import parse_pin
from worksheet import locate_valuation_table

# polite pause between PIN page hits (the datalet site throttles bursts)
PIN_DELAY_SECONDS = float(os.getenv("PIN_DELAY_SECONDS", "0.5"))


def _require_pins(pins: Optional[Sequence[Any]]) -> None:
    if not pins or not isinstance(pins, (list, tuple)):
        raise InvalidInput("Please provide at least one PIN")


def analyze_pins(
    pins: Optional[Sequence[Any]],
    township: str,
    year: Any,
    tax_rate: float,
    eq_factor: float,
    *,
    fetch_assessment: Optional[Callable[..., Dict[str, Any]]] = None,
    locate: Optional[Callable[..., Dict[str, Any]]] = None,
    sleep: Optional[Callable[[float], None]] = None,
    delay: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Combined current assessment + tax estimate for a batch of PINs.

    PINs are processed one at a time, in order. A failed assessor fetch for
    any PIN aborts the whole batch (UpstreamFetchFailure). The valuation
    worksheet is looked up once, for the first PIN only; not finding it
    leaves valuationTable as None.
    """
    fetch_assessment = fetch_assessment or fetch_current_assessment
    locate = locate or locate_valuation_table
    sleep = sleep or time.sleep
    delay = PIN_DELAY_SECONDS if delay is None else delay

    _require_pins(pins)
    town = get_township(township)
    parsed = [parse_pin(p) for p in pins]

    print(f"🔎 Starting analysis: {len(parsed)} PIN(s), township={town.name}, year={year}, "
          f"taxRate={tax_rate}%, eqFactor={eq_factor}", flush=True)

    total_mv = 0
    total_av = 0
    pin_results = []

    for i, (pin14, pin_dash) in enumerate(parsed):
        print(f"\n=== Processing PIN: {pin_dash} ===", flush=True)
        res = fetch_assessment(pin14, year)
        values = res.get("normalized", {})
        mv = int(values.get("marketValue") or 0)
        av = int(values.get("assessedValue") or 0)

        total_mv += mv
        total_av += av
        pin_results.append({
            "pin": pin_dash,
            "current": {"marketValue": mv, "assessedValue": av},
        })

        if i < len(parsed) - 1 and delay > 0:
            sleep(delay)

    print("\n=== TOTALS FOR ALL PINs ===", flush=True)
    print(f"Total Current MV: ${total_mv:,}", flush=True)
    print(f"Total Current AV: ${total_av:,}", flush=True)

    # worksheet lookup is by the first PIN only
    first14, first_dash = parsed[0]
    print(f"\n=== Downloading Valuation Worksheet (looking for {first_dash}) ===", flush=True)
    valuation = locate(first14, first_dash, year, town.number)

    taxes = tax_summary(total_av, total_mv, tax_rate, eq_factor)

    return {
        "success": True,
        "pins": pin_results,
        "township": town.name,
        "year": year,
        "taxRate": tax_rate,
        "eqFactor": eq_factor,
        "current": {
            "marketValue": total_mv,
            "assessedValue": total_av,
            "estimatedTaxes": taxes["estimatedTaxes"],
            "levelOfAssessment": taxes["levelOfAssessment"],
        },
        "valuationTable": valuation.get("table"),
        "valuationSheet": valuation.get("sheet"),
        "valuationSource": valuation.get("url"),
        "valuationError": valuation.get("error") if valuation.get("table") is None else None,
    }
