from .date_utils import days_in_year, is_leap_year, portion_to_day
from .money import num_or_zero, round_half_up

__all__ = [
    "days_in_year",
    "is_leap_year",
    "portion_to_day",
    "num_or_zero",
    "round_half_up",
]
