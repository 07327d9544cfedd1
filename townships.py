# townships.py
# Cook County townships that publish a commercial valuation model.
# The report number is the "T<n>" in the worksheet file name,
# e.g. 2025.T24.PublicModel.xlsx is Niles.

from types import MappingProxyType
from typing import NamedTuple

from errors import UnknownJurisdiction


class Township(NamedTuple):
    key: str
    name: str
    number: int


_TOWNSHIP_ROWS = (
    ("norwood-park", "Norwood Park", 26),
    ("evanston", "Evanston", 17),
    ("new-trier", "New Trier", 23),
    ("elk-grove", "Elk Grove", 16),
    ("maine", "Maine", 22),
    ("northfield", "Northfield", 25),
    ("barrington", "Barrington", 10),
    ("leyden", "Leyden", 20),
    ("wheeling", "Wheeling", 38),
    ("palatine", "Palatine", 29),
    ("schaumburg", "Schaumburg", 35),
    ("niles", "Niles", 24),
    ("hanover", "Hanover", 18),
)

TOWNSHIPS = MappingProxyType({key: Township(key, name, num) for key, name, num in _TOWNSHIP_ROWS})


def get_township(key: str) -> Township:
    town = TOWNSHIPS.get(key) if isinstance(key, str) else None
    if town is None:
        raise UnknownJurisdiction(key)
    return town
