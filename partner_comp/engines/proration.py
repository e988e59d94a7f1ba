# partner_comp/engines/proration.py
"""
Time-based helpers used by the compensation engine: how much of the year a
physician spent as an employee or as a partner, a partner's FTE weight, the
prior-year W2 pay that lands in this year for employee-to-partner
transitions, and the trailing shared-MD default for retirees.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.engines.payroll import employer_payroll_taxes
from partner_comp.schema.physician import Physician, PhysicianType
from partner_comp.utils.date_utils import (
    count_business_days,
    day_to_date,
    pay_periods_for_year,
    portion_to_day,
)
from partner_comp.utils.money import num_or_zero, round_half_up

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52


@dataclass(frozen=True)
class DelayedW2Payment:
    """Prior-year W2 earnings paid out in the current year."""

    amount: float
    taxes: float
    period_details: str = ""


NO_DELAYED_W2 = DelayedW2Payment(amount=0.0, taxes=0.0)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def employee_portion_of_year(physician: Physician) -> float:
    """Fraction of the year spent in employee status, in [0, 1]."""
    ptype = physician.physician_type
    if ptype is PhysicianType.EMPLOYEE:
        return 1.0
    if ptype is PhysicianType.NEW_EMPLOYEE:
        # Works from the start date to year end
        return _clamp(1.0 - num_or_zero(physician.start_portion_of_year), 0.0, 1.0)
    if ptype is PhysicianType.EMPLOYEE_TO_TERMINATE:
        # Works from Jan 1 to the termination date; unset means the full year
        if physician.terminate_portion_of_year is None:
            return 1.0
        return _clamp(num_or_zero(physician.terminate_portion_of_year), 0.0, 1.0)
    if ptype is PhysicianType.EMPLOYEE_TO_PARTNER:
        return _clamp(num_or_zero(physician.employee_portion_of_year), 0.0, 1.0)
    # partner, partnerToRetire
    return 0.0


def partner_portion_of_year(physician: Physician) -> float:
    """Fraction of the year spent in partner status, in [0, 1]."""
    ptype = physician.physician_type
    if ptype is PhysicianType.PARTNER:
        return 1.0
    if ptype is PhysicianType.EMPLOYEE_TO_PARTNER:
        return 1.0 - employee_portion_of_year(physician)
    if ptype is PhysicianType.PARTNER_TO_RETIRE:
        return _clamp(num_or_zero(physician.partner_portion_of_year), 0.0, 1.0)
    # employee, newEmployee, employeeToTerminate
    return 0.0


def partner_fte_weight(
    physician: Physician, settings: Optional[EngineSettings] = None
) -> float:
    """
    Time weight for splitting the partner pool.

    Weeks off are taken out of the partner working period, so a partner who
    retires mid-year loses their vacation from the weeks actually worked.
    Returned as a fraction of a full 52-week year; never negative.
    """
    settings = settings or DEFAULT_SETTINGS
    portion = partner_portion_of_year(physician)
    if portion == 0:
        return 0.0

    weeks_off = _clamp(num_or_zero(physician.weeks_off), 0.0, settings.max_weeks_off)
    partner_weeks = portion * WEEKS_PER_YEAR
    return max(0.0, partner_weeks - weeks_off) / WEEKS_PER_YEAR


def delayed_w2_payment(
    physician: Physician, year: int, settings: Optional[EngineSettings] = None
) -> DelayedW2Payment:
    """
    W2 pay for work done as an employee in the prior year but paid in ``year``.

    Only employee-to-partner transitions carry a delayed payment. Pay periods
    that straddle Jan 1 (or sit wholly in December) and are paid on or after
    the transition date contribute their prior-year business days at the
    physician's hourly rate. Amount and employer taxes are rounded to whole
    dollars.
    """
    if physician.physician_type is not PhysicianType.EMPLOYEE_TO_PARTNER:
        return NO_DELAYED_W2

    settings = settings or DEFAULT_SETTINGS
    override = settings.delayed_w2_override(physician.name, year)
    if override is not None:
        logger.debug(f"[W2] Using delayed W2 override for {physician.name} in {year}")
        return DelayedW2Payment(
            amount=override.amount,
            taxes=override.taxes,
            period_details=override.period_details,
        )

    schedule = settings.pay_schedule
    transition_day = portion_to_day(num_or_zero(physician.employee_portion_of_year), year)
    transition_date = day_to_date(transition_day, year)
    hourly_rate = num_or_zero(physician.salary) / schedule.annual_work_hours
    prior_year_end = date(year - 1, 12, 31)

    total_work_days = 0
    details = []
    periods = pay_periods_for_year(
        year,
        schedule.reference_period_end,
        schedule.reference_pay_date,
        schedule.period_days,
    )
    for period in periods:
        if period.pay_date < transition_date:
            continue
        if period.period_start.year >= year and period.period_end.year >= year:
            continue

        start_in_prior = period.period_start if period.period_start.year < year else date(year, 1, 1)
        end_in_prior = period.period_end if period.period_end.year < year else prior_year_end
        if start_in_prior > prior_year_end:
            continue

        work_days = count_business_days(start_in_prior, end_in_prior)
        total_work_days += work_days
        details.append(
            f"{start_in_prior.month}/{start_in_prior.day}-{end_in_prior.month}/{end_in_prior.day} "
            f"(paid {period.pay_date.month}/{period.pay_date.day}, {work_days} work days)"
        )

    amount = total_work_days * schedule.hours_per_day * hourly_rate
    taxes = employer_payroll_taxes(amount, year, settings)
    return DelayedW2Payment(
        amount=round_half_up(amount),
        taxes=round_half_up(taxes),
        period_details=", ".join(details),
    )


def default_trailing_md_amount(
    physician: Physician, settings: Optional[EngineSettings] = None
) -> float:
    """Trailing shared-MD dollars for a retiree without an explicit amount."""
    settings = settings or DEFAULT_SETTINGS
    return settings.trailing_md_amounts.get(physician.name, settings.default_trailing_md_amount)


def trailing_md_amount(
    physician: Physician, settings: Optional[EngineSettings] = None
) -> float:
    if physician.trailing_shared_md_amount is not None:
        return num_or_zero(physician.trailing_shared_md_amount)
    return default_trailing_md_amount(physician, settings)
