# partner_comp/utils/money.py

from decimal import Decimal, ROUND_HALF_DOWN, ROUND_HALF_UP
from typing import Optional, Union

Number = Union[int, float]


def num_or_zero(value: Optional[Number]) -> float:
    """Return ``value`` as a float, treating None and NaN as zero.

    Every optional numeric read in the engine goes through here so the
    absence-as-zero policy lives in one place.
    """
    if value is None:
        return 0.0
    value = float(value)
    if value != value:  # NaN from pandas-loaded rosters
        return 0.0
    return value


def round_half_up(value: Number, places: int = 0) -> float:
    """Round like the dashboard's Math.round: halves go toward +infinity.

    2.5 rounds to 3 and -2.5 rounds to -2, not to even.
    """
    quantum = Decimal(1).scaleb(-places)
    d = Decimal(str(value))
    # A negative tie rounds toward zero, which is toward +infinity
    rounding = ROUND_HALF_UP if d >= 0 else ROUND_HALF_DOWN
    return float(d.quantize(quantum, rounding=rounding))
