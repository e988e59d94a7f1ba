# partner_comp/utils/date_utils.py

"""Calendar helpers for pro-ration, benefit waiting periods and payroll."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from dateutil.relativedelta import relativedelta

from partner_comp.utils.money import round_half_up


@dataclass(frozen=True)
class PayPeriod:
    """One biweekly pay period and the date it is paid."""

    period_start: date
    period_end: date
    pay_date: date


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_to_date(day_of_year: int, year: int) -> date:
    """Day 1 is Jan 1. Days past the end of the year roll into the next one."""
    return date(year, 1, 1) + timedelta(days=day_of_year - 1)


def date_to_day(d: date, year: int) -> int:
    return (d - date(year, 1, 1)).days + 1


def portion_to_day(portion_of_year: float, year: int) -> int:
    """
    Convert a start/transition portion of the year into a day of year.

    0 maps to Jan 1 (day 1); 1 maps to the first day after the year ends.
    """
    return max(1, int(round_half_up(portion_of_year * days_in_year(year))) + 1)


def benefit_start_day(start_day: int, year: int) -> int:
    """
    Day of year on which a new hire's benefits begin.

    Starting on the first of any month other than February gives benefits from
    the first of the following month. Any other start waits 30 days and then
    begins on the first of the month after that mark. A start date that pushes
    benefits into the next calendar year returns ``days_in_year(year) + 1``.
    """
    after_year = days_in_year(year) + 1
    start = day_to_date(start_day, year)

    if start.day == 1 and start.month != 2:
        begins = start + relativedelta(months=1)
    else:
        thirty_day_mark = start + timedelta(days=30)
        if thirty_day_mark.year > year:
            return after_year
        begins = (thirty_day_mark + relativedelta(months=1)).replace(day=1)

    if begins.year > year:
        return after_year
    return date_to_day(begins, year)


def count_business_days(start: date, end: date) -> int:
    """Count Monday-Friday days in the inclusive range [start, end]."""
    count = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


def pay_periods_for_year(
    year: int,
    reference_period_end: date,
    reference_pay_date: date,
    period_days: int = 14,
) -> List[PayPeriod]:
    """
    Build the biweekly pay periods that can be paid during ``year``.

    The schedule is anchored on a known period end / pay date pair. Periods
    are stepped back until one ends on or before Jan 14 of ``year``, then
    collected forward until the pay date passes Jan 31 of the next year.
    """
    step = timedelta(days=period_days)
    period_end = reference_period_end
    pay_date = reference_pay_date

    while period_end > date(year, 1, 14):
        period_end -= step
        pay_date -= step

    last_pay_date = date(year + 1, 1, 31)
    periods: List[PayPeriod] = []
    while pay_date <= last_pay_date:
        periods.append(
            PayPeriod(
                period_start=period_end - timedelta(days=period_days - 1),
                period_end=period_end,
                pay_date=pay_date,
            )
        )
        period_end += step
        pay_date += step
    return periods
