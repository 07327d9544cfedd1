import pytest

from errors import InvalidInput, InvalidPinFormat
from utils import is_valid_pin, normalize_pin, parse_pin, undashed_pin


def test_undashed_and_normalized_forms():
    assert undashed_pin("12-34-567-890-1234") == "12345678901234"
    assert normalize_pin("12345678901234") == "12-34-567-890-1234"
    assert normalize_pin("12-34-567-890-1234") == "12-34-567-890-1234"


@pytest.mark.parametrize("raw", ["00000000000000", "18362050710000", "99999999999999", "10101010110000"])
def test_dashed_form_strips_back_to_input(raw):
    pin14, dashed = parse_pin(raw)
    assert pin14 == raw
    assert dashed.replace("-", "") == raw
    assert [len(g) for g in dashed.split("-")] == [2, 2, 3, 3, 4]


def test_dashes_anywhere_are_ignored():
    assert parse_pin("1-2345678901234-") == ("12345678901234", "12-34-567-890-1234")


@pytest.mark.parametrize("raw", [
    "",
    "1234567890123",
    "123456789012345",
    "12-34-567-890-123X",
    "12 34 567 890 1234",
    "12.34.567.890.1234",
    "１２３４５６７８９０１２３４",
    None,
])
def test_bad_pins_raise(raw):
    with pytest.raises(InvalidPinFormat) as ei:
        parse_pin(raw)
    assert isinstance(ei.value, InvalidInput)
    assert "Invalid PIN format" in str(ei.value)
    assert not is_valid_pin(raw)
    assert normalize_pin(raw) == ""
