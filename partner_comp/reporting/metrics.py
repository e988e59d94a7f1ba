# partner_comp/reporting/metrics.py
"""
Tabular views of engine output and the roster-level cost figures the
planning dashboard shows alongside it.
"""

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.engines.compensation import (
    compute_compensation_with_retired,
    medical_director_pools,
)
from partner_comp.engines.payroll import (
    benefit_costs_for_year,
    employer_payroll_taxes,
    new_employee_benefit_portion,
)
from partner_comp.engines.proration import delayed_w2_payment, employee_portion_of_year
from partner_comp.scenario import Scenario
from partner_comp.schema.financials import FiscalYearParams
from partner_comp.schema.physician import EMPLOYEE_TYPES, Physician, PhysicianType
from partner_comp.schema.results import BREAKDOWN_FIELDS, CompensationResult
from partner_comp.utils.money import num_or_zero, round_half_up

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["year", "id", "name", "type", "comp", *BREAKDOWN_FIELDS]


def results_to_frame(
    results: Sequence[CompensationResult], year: Optional[int] = None
) -> pd.DataFrame:
    """
    Flatten engine results into one row per physician.

    Breakdown components that do not apply to a row are NaN.
    """
    rows = []
    for r in results:
        row = {"year": year, "id": r.id, "name": r.name, "type": r.type.value, "comp": r.comp}
        row.update(r.breakdown.as_dict())
        rows.append(row)
    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    if year is None:
        df = df.drop(columns="year")
    return df


def compensation_table(
    scenario: Scenario,
    settings: Optional[EngineSettings] = None,
    exclude_w2_from_comp: bool = False,
) -> pd.DataFrame:
    """
    Multi-year comparison: physicians down the side, years across the top.

    Rows are keyed by physician id with a ``name`` column (the latest name
    seen), so two physicians sharing a display name stay apart. Runs the
    retired-inclusive variant so prior-year retirees still show their buyout
    and trailing MD. Physicians absent in a year are NaN.
    """
    frames = []
    for fy in scenario.years:
        if fy.year is None:
            logger.warning("[REPORT] Skipping a scenario year with no year number")
            continue
        results = compute_compensation_with_retired(
            fy.physicians,
            fy.year,
            fy,
            scenario.growth_rate(fy),
            exclude_w2_from_comp=exclude_w2_from_comp,
            settings=settings,
        )
        frames.append(results_to_frame(results, year=fy.year))

    if not frames:
        logger.warning("[REPORT] Scenario has no computable years. Returning empty table.")
        return pd.DataFrame()

    combined = pd.concat(frames, ignore_index=True)
    table = combined.pivot_table(
        index="id", columns="year", values="comp", aggfunc="sum", sort=False
    )
    table.columns.name = None
    names = combined.drop_duplicates("id", keep="last").set_index("id")["name"]
    table.insert(0, "name", table.index.map(names))
    return table


def total_income(params: FiscalYearParams, settings: Optional[EngineSettings] = None) -> float:
    """Therapy + shared MD + PRCS MD (only with a director) + consulting."""
    shared, prcs = medical_director_pools(params, settings)
    return (
        num_or_zero(params.therapy_income)
        + shared
        + prcs
        + num_or_zero(params.consulting_services_agreement)
    )


def guaranteed_payments(physicians: Sequence[Physician]) -> float:
    """Total buyouts owed to retiring partners, rounded to whole dollars."""
    total = sum(
        num_or_zero(p.buyout_cost)
        for p in physicians
        if p.physician_type is PhysicianType.PARTNER_TO_RETIRE
    )
    return round_half_up(total)


def employee_cost_breakdown(
    physicians: Sequence[Physician],
    year: int,
    growth_rate: float,
    settings: Optional[EngineSettings] = None,
) -> Dict[str, float]:
    """
    Salary, benefits and employer payroll taxes across employed physicians.

    Partial-year salaries are pro-rated; an employee-to-partner's benefits
    are pro-rated by their employee portion and their delayed W2 is added
    to salary and taxes. Each total is rounded to whole dollars.
    """
    settings = settings or DEFAULT_SETTINGS
    total_salary = 0.0
    total_benefits = 0.0
    total_taxes = 0.0

    for p in physicians:
        if p.physician_type not in EMPLOYEE_TYPES:
            continue
        portion = employee_portion_of_year(p)
        if portion <= 0:
            continue

        salary = num_or_zero(p.salary)
        if p.physician_type is not PhysicianType.EMPLOYEE:
            salary *= portion

        benefits = 0.0
        if p.receives_benefits:
            yearly = benefit_costs_for_year(year, growth_rate, settings)
            if p.physician_type is PhysicianType.NEW_EMPLOYEE:
                benefits = yearly * new_employee_benefit_portion(p, year)
            elif p.physician_type is PhysicianType.EMPLOYEE_TO_PARTNER:
                benefits = yearly * portion
            else:
                benefits = yearly

        if p.physician_type is PhysicianType.EMPLOYEE_TO_PARTNER:
            delayed = delayed_w2_payment(p, year, settings)
            total_salary += delayed.amount
            total_taxes += delayed.taxes

        total_salary += salary
        total_benefits += benefits
        total_taxes += employer_payroll_taxes(salary, year, settings)

    return {
        "total_salary": round_half_up(total_salary),
        "total_benefits": round_half_up(total_benefits),
        "total_payroll_taxes": round_half_up(total_taxes),
    }
