# taxes.py
# Tax estimate from the combined current assessment.
#   estimated tax = AV x (rate / 100) x equalization factor
#   level of assessment = AV / MV

import math

# typical Cook County commercial level when no market value was scraped
DEFAULT_LEVEL_OF_ASSESSMENT = 0.10


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def estimate_taxes(assessed_value: float, tax_rate: float, eq_factor: float) -> int:
    return _round_half_up(assessed_value * (tax_rate / 100) * eq_factor)


def level_of_assessment(assessed_value: float, market_value: float) -> float:
    if market_value > 0:
        return assessed_value / market_value
    return DEFAULT_LEVEL_OF_ASSESSMENT


def tax_summary(assessed_value: int, market_value: int, tax_rate: float, eq_factor: float) -> dict:
    taxes = estimate_taxes(assessed_value, tax_rate, eq_factor)
    loa = level_of_assessment(assessed_value, market_value)
    print("=== Tax Calculation ===", flush=True)
    print(f"Current: ${assessed_value:,} x {tax_rate}% x {eq_factor} = ${taxes:,}", flush=True)
    print(f"Level of Assessment: {loa * 100:.2f}%", flush=True)
    return {"estimatedTaxes": taxes, "levelOfAssessment": loa}
