# partner_comp/engines/payroll.py
"""
Employer-side cost of W2 physicians and staff: payroll taxes, benefit
premiums with annual growth, and the fully loaded cost of one employee.
"""

import logging
from typing import Optional

from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.schema.physician import Physician, PhysicianType
from partner_comp.utils.date_utils import benefit_start_day, days_in_year, portion_to_day
from partner_comp.utils.money import num_or_zero, round_half_up

logger = logging.getLogger(__name__)

# Standard support staff: (hourly rate, hours per week, receives benefits)
STANDARD_STAFF = (
    (31.25, 40, True),
    (27.00, 32, False),
    (23.00, 20, False),
)


def social_security_wage_base(year: int, settings: Optional[EngineSettings] = None) -> float:
    """Wage base for the year, falling back to the latest configured year."""
    settings = settings or DEFAULT_SETTINGS
    bases = settings.social_security_wage_bases
    if year in bases:
        return bases[year]
    return bases[max(bases)]


def employer_payroll_taxes(
    annual_wages: float, year: int, settings: Optional[EngineSettings] = None
) -> float:
    """
    Employer payroll taxes on W2 wages for a WA State medical practice.

    Federal: FUTA, Social Security (to the wage base), Medicare. The
    employee-paid additional Medicare tax is not an employer cost.
    State: WA SUTA, paid family leave (to the SS wage base), state disability,
    and the Washington rate.
    """
    settings = settings or DEFAULT_SETTINGS
    rates = settings.tax_rates
    wages = num_or_zero(annual_wages)
    ss_wage_base = social_security_wage_base(year, settings)

    federal = (
        min(wages, rates.federal_unemployment_wage_base) * rates.federal_unemployment_rate
        + min(wages, ss_wage_base) * rates.social_security_rate
        + wages * rates.medicare_rate
    )
    state = (
        min(wages, rates.wa_unemployment_wage_base) * rates.wa_unemployment_rate
        + min(wages, ss_wage_base) * rates.wa_family_leave_rate
        + wages * rates.wa_state_disability_rate
        + wages * rates.washington_rate
    )
    return federal + state


def benefit_costs_for_year(
    year: int, growth_rate: float, settings: Optional[EngineSettings] = None
) -> float:
    """Annual medical, dental and vision premiums for one employee.

    Premiums are quoted for the base year; later years grow by ``growth_rate``
    (a fraction) compounded annually. Earlier years use the base-year cost.
    """
    settings = settings or DEFAULT_SETTINGS
    base_cost = settings.benefits.annual_total
    years_of_growth = year - settings.benefits.base_year
    if years_of_growth <= 0:
        return base_cost
    return base_cost * (1 + num_or_zero(growth_rate)) ** years_of_growth


def new_employee_benefit_portion(physician: Physician, year: int) -> float:
    """Share of the year a new hire carries benefits after the waiting period."""
    start_day = portion_to_day(num_or_zero(physician.start_portion_of_year), year)
    begins = benefit_start_day(start_day, year)
    total_days = days_in_year(year)
    if begins > total_days:
        return 0.0
    return max(0, total_days - begins + 1) / total_days


def employee_total_cost(
    physician: Physician,
    year: int,
    growth_rate: float,
    settings: Optional[EngineSettings] = None,
) -> float:
    """
    Fully loaded employer cost: salary + benefits + payroll taxes + bonus.

    The salary is used as given; callers pro-rate it for partial years before
    calling. New hires only carry benefits from their benefit start day.
    """
    settings = settings or DEFAULT_SETTINGS
    salary = num_or_zero(physician.salary)
    bonus = num_or_zero(physician.bonus_amount)

    benefits = 0.0
    if physician.receives_benefits:
        yearly = benefit_costs_for_year(year, growth_rate, settings)
        if physician.physician_type is PhysicianType.NEW_EMPLOYEE:
            benefits = yearly * new_employee_benefit_portion(physician, year)
        else:
            benefits = yearly

    taxes = employer_payroll_taxes(salary, year, settings)
    return salary + benefits + taxes + bonus


def default_non_md_employment_costs(
    year: int, settings: Optional[EngineSettings] = None
) -> float:
    """Staff employment cost of the standard three-person support team, rounded."""
    settings = settings or DEFAULT_SETTINGS
    total = 0.0
    for hourly_rate, hours_per_week, has_benefits in STANDARD_STAFF:
        wages = hourly_rate * hours_per_week * 52
        total += wages + employer_payroll_taxes(wages, year, settings)
        if has_benefits:
            total += settings.benefits.annual_total
    return round_half_up(total)
