import pytest

from taxes import DEFAULT_LEVEL_OF_ASSESSMENT, estimate_taxes, level_of_assessment, tax_summary


def test_estimate_taxes():
    assert estimate_taxes(100000, 8, 1.05) == 8400
    assert estimate_taxes(50000, 10, 1.0) == 5000
    assert estimate_taxes(0, 8.5, 3.0) == 0


def test_estimate_taxes_rounds_half_up():
    # 25 * 10% * 1.0 = 2.5
    assert estimate_taxes(25, 10, 1.0) == 3
    assert estimate_taxes(24, 10, 1.0) == 2


def test_level_of_assessment():
    assert level_of_assessment(50000, 500000) == pytest.approx(0.10)
    assert level_of_assessment(20000, 80000) == pytest.approx(0.25)


def test_level_of_assessment_falls_back_without_market_value():
    assert level_of_assessment(12345, 0) == 0.10
    assert DEFAULT_LEVEL_OF_ASSESSMENT == 0.10


def test_tax_summary():
    out = tax_summary(50000, 500000, 10, 1.0)
    assert out == {"estimatedTaxes": 5000, "levelOfAssessment": pytest.approx(0.1)}
