# partner_comp/engines/compensation.py
"""
Partner profit-sharing engine: allocates one fiscal year's distributable pool
across the physician roster.

Methodology, in order:
  1. Split the roster into partner-like and employee-like physicians
     (employee-to-partner transitions are in both).
  2. Total employee cost on pro-rated salaries (wages + benefits + taxes).
  3. Buyouts owed to every retiring partner, worked this year or not.
  4. Delayed W2 (amount + taxes) for employee-to-partner transitions.
  5. Medical director allocations: trailing fixed-dollar carve-outs for
     prior-year retirees, absolute percentages of the shared pool for the
     other partners, and the whole PRCS pool to the designated director.
  6. Additional-days dollars passed straight through to partners.
  7-8. Total income and total costs.
  9-10. Base pool and distributable pool, each floored at zero.
  11. Partner FTE weights; a zero total divides by 1 so every share is 0.
  12-14. Partner rows, then employee-only rows, each in roster order.

Invariant: with no direct allocations, partner comp sums to
max(0, total income - total costs).
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.engines.payroll import employee_total_cost
from partner_comp.engines.proration import (
    DelayedW2Payment,
    delayed_w2_payment,
    employee_portion_of_year,
    partner_fte_weight,
    trailing_md_amount,
)
from partner_comp.schema.financials import FiscalYearParams
from partner_comp.schema.physician import (
    EMPLOYEE_ONLY_TYPES,
    EMPLOYEE_TYPES,
    PARTNER_TYPES,
    Physician,
    PhysicianType,
)
from partner_comp.schema.results import (
    CompensationBreakdown,
    CompensationResult,
    CompensationSummary,
)
from partner_comp.utils.money import num_or_zero

logger = logging.getLogger(__name__)

SummaryHook = Callable[[CompensationSummary], None]


def _prorated_employee_cost(
    physician: Physician, year: int, benefit_growth_rate: float, settings: EngineSettings
) -> float:
    """Employer cost of the employee portion of the year; 0 if there is none."""
    portion = employee_portion_of_year(physician)
    if portion <= 0:
        return 0.0
    # Benefits and taxes are computed on the pro-rated salary, not the annual one
    prorated = physician.model_copy(update={"salary": num_or_zero(physician.salary) * portion})
    return employee_total_cost(prorated, year, benefit_growth_rate, settings)


def medical_director_pools(
    financial_params: FiscalYearParams, settings: Optional[EngineSettings] = None
) -> Tuple[float, float]:
    """
    Shared and PRCS medical-director income for the year.

    Unset pools fall back to the contract defaults in ``settings``. The PRCS
    pool is 0 unless a director is designated.
    """
    settings = settings or DEFAULT_SETTINGS
    fy = financial_params
    shared = (
        num_or_zero(fy.medical_director_hours)
        if fy.medical_director_hours is not None
        else settings.default_md_shared_pool
    )
    if not fy.prcs_director_physician_id:
        return shared, 0.0
    prcs = (
        num_or_zero(fy.prcs_medical_director_hours)
        if fy.prcs_medical_director_hours is not None
        else settings.default_md_prcs_pool
    )
    return shared, prcs


def _medical_director_allocations(
    partners: Sequence[Physician],
    shared_pool: float,
    prcs_pool: float,
    prcs_director_id: Optional[str],
) -> Dict[str, float]:
    """Per-partner shared + PRCS MD dollars, keyed by physician id."""
    allocations: Dict[str, float] = {}
    for partner in partners:
        if partner.is_prior_year_retiree:
            continue
        pct = num_or_zero(partner.medical_director_hours_percentage)
        if partner.has_medical_director_hours and pct:
            # Absolute share of the whole pool, not of what the retirees leave
            allocations[partner.id] = (pct / 100) * shared_pool

    if prcs_director_id and prcs_pool > 0:
        allocations[prcs_director_id] = allocations.get(prcs_director_id, 0.0) + prcs_pool
    return allocations


def _emit_summary(summary: CompensationSummary, on_summary: Optional[SummaryHook]) -> None:
    logger.debug(f"[COMP] Calculation completed: {summary.as_dict()}")
    if on_summary is None:
        return
    try:
        on_summary(summary)
    except Exception:
        logger.exception("[COMP] Summary hook raised; computed results are unaffected")


def compute_compensation(
    physicians: Sequence[Physician],
    year: int,
    financial_params: FiscalYearParams,
    benefit_growth_rate: float,
    include_retired: bool = False,
    exclude_w2_from_comp: bool = False,
    settings: Optional[EngineSettings] = None,
    on_summary: Optional[SummaryHook] = None,
) -> List[CompensationResult]:
    """
    Calculate every physician's compensation for one fiscal year.

    Args:
        physicians: Roster for the year; output preserves its order within
            the partner group and the employee group.
        year: Calendar year, used for pro-ration, taxes and pay periods.
        financial_params: Income, costs and MD budgets for the year.
        benefit_growth_rate: Annual benefit cost growth as a fraction.
        include_retired: Keep prior-year retirees with zero FTE weight.
        exclude_w2_from_comp: Report an employee-to-partner's W2 salary and
            delayed W2 in the breakdown without adding them to ``comp``.
        settings: Engine settings; defaults to DEFAULT_SETTINGS.
        on_summary: Optional instrumentation hook receiving the run's
            CompensationSummary. It cannot change the results.

    Returns:
        Partner results (type normalized to partner) followed by
        employee-only results.
    """
    settings = settings or DEFAULT_SETTINGS
    fy = financial_params

    # === STEP 1: Partition roster ===
    partners = [p for p in physicians if p.physician_type in PARTNER_TYPES]
    employees = [p for p in physicians if p.physician_type in EMPLOYEE_TYPES]

    # === STEP 2: Employee costs ===
    total_employee_costs = sum(
        (_prorated_employee_cost(e, year, benefit_growth_rate, settings) for e in employees),
        0.0,
    )

    # === STEP 3: Buyouts, owed whether or not the partner worked this year ===
    total_buyout_costs = sum(
        (
            num_or_zero(p.buyout_cost)
            for p in partners
            if p.physician_type is PhysicianType.PARTNER_TO_RETIRE
        ),
        0.0,
    )

    # === STEP 4: Delayed W2 for employee-to-partner transitions ===
    delayed_payments: Dict[str, DelayedW2Payment] = {}
    total_delayed_w2_costs = 0.0
    for p in physicians:
        if p.physician_type is PhysicianType.EMPLOYEE_TO_PARTNER:
            delayed = delayed_w2_payment(p, year, settings)
            delayed_payments[p.id] = delayed
            total_delayed_w2_costs += delayed.amount + delayed.taxes

    # === STEP 5: Medical director allocations ===
    shared_md_pool, prcs_md_pool = medical_director_pools(fy, settings)

    # Fixed-dollar carve-outs, part of the same 100% as the partner percentages
    trailing_md_total = sum(
        (trailing_md_amount(p, settings) for p in partners if p.is_prior_year_retiree),
        0.0,
    )
    md_allocations = _medical_director_allocations(
        partners, shared_md_pool, prcs_md_pool, fy.prcs_director_physician_id
    )
    total_md_allocations = sum(md_allocations.values(), 0.0) + trailing_md_total

    # === STEP 6: Additional days worked ===
    additional_days: Dict[str, float] = {}
    for p in partners:
        amount = num_or_zero(p.additional_days_worked)
        if amount > 0:
            additional_days[p.id] = amount
    total_additional_days = sum(additional_days.values(), 0.0)

    # === STEP 7: Total income ===
    therapy_income = num_or_zero(fy.therapy_income)
    consulting_income = num_or_zero(fy.consulting_services_agreement)
    total_income = therapy_income + shared_md_pool + prcs_md_pool + consulting_income

    # === STEP 8: Total costs ===
    total_costs = (
        num_or_zero(fy.non_employment_costs)
        + num_or_zero(fy.non_md_employment_costs)
        + num_or_zero(fy.misc_employment_costs)
        + num_or_zero(fy.locum_costs)
        + total_employee_costs
        + total_buyout_costs
        + total_delayed_w2_costs
    )

    # === STEPS 9-10: Pools, each floored independently ===
    base_pool = max(0.0, total_income - total_costs)
    pool = max(0.0, base_pool - total_md_allocations - total_additional_days)

    # === STEP 11: FTE weights ===
    partner_weights = [(p, partner_fte_weight(p, settings)) for p in partners]
    raw_total_weight = sum((w for _, w in partner_weights), 0.0)
    # Zero weight divides by 1: every share is 0 rather than NaN
    total_weight = raw_total_weight or 1.0

    _emit_summary(
        CompensationSummary(
            year=year,
            therapy_income=therapy_income,
            md_shared_income=shared_md_pool,
            md_prcs_income=prcs_md_pool,
            consulting_income=consulting_income,
            total_income=total_income,
            non_employment_costs=num_or_zero(fy.non_employment_costs),
            non_md_employment_costs=num_or_zero(fy.non_md_employment_costs),
            misc_employment_costs=num_or_zero(fy.misc_employment_costs),
            locum_costs=num_or_zero(fy.locum_costs),
            employee_costs=total_employee_costs,
            buyout_costs=total_buyout_costs,
            delayed_w2_costs=total_delayed_w2_costs,
            total_costs=total_costs,
            md_allocations=total_md_allocations,
            trailing_md_total=trailing_md_total,
            additional_days_allocations=total_additional_days,
            base_pool=base_pool,
            pool=pool,
            total_weight=raw_total_weight,
            partner_count=len(partners),
            employee_count=len(employees),
        ),
        on_summary,
    )

    results: List[CompensationResult] = []

    # === STEP 12: Partner rows ===
    for p, weight in partner_weights:
        is_retiring = p.physician_type is PhysicianType.PARTNER_TO_RETIRE
        if is_retiring and weight == 0 and not include_retired:
            continue

        fte_share = (weight / total_weight) * pool
        additional_days_allocation = additional_days.get(p.id, 0.0)
        buyout = num_or_zero(p.buyout_cost) if is_retiring else 0.0

        if p.is_prior_year_retiree:
            # Paid through the trailing carve-out instead
            md_allocation = 0.0
            trailing_md = trailing_md_amount(p, settings)
        else:
            md_allocation = md_allocations.get(p.id, 0.0)
            trailing_md = 0.0

        if p.physician_type is PhysicianType.EMPLOYEE_TO_PARTNER:
            w2_salary = num_or_zero(p.salary) * employee_portion_of_year(p)
            delayed_w2 = delayed_payments[p.id].amount
        else:
            w2_salary = 0.0
            delayed_w2 = 0.0

        comp = fte_share + md_allocation + additional_days_allocation + buyout + trailing_md
        if not exclude_w2_from_comp:
            comp += w2_salary + delayed_w2

        results.append(
            CompensationResult(
                id=p.id,
                name=p.name,
                type=PhysicianType.PARTNER,
                comp=comp,
                breakdown=CompensationBreakdown(
                    fte_share=fte_share,
                    md_allocation=md_allocation,
                    additional_days_allocation=additional_days_allocation,
                    buyout=buyout,
                    delayed_w2=delayed_w2,
                    trailing_md=trailing_md,
                    w2_salary=w2_salary,
                ),
            )
        )

    # === STEP 13: Employee-only rows ===
    for e in physicians:
        if e.physician_type not in EMPLOYEE_ONLY_TYPES:
            continue
        portion = 1.0 if e.physician_type is PhysicianType.EMPLOYEE else employee_portion_of_year(e)
        w2_salary = num_or_zero(e.salary) * portion
        results.append(
            CompensationResult(
                id=e.id,
                name=e.name,
                type=e.physician_type,
                comp=w2_salary,
                breakdown=CompensationBreakdown(w2_salary=w2_salary),
            )
        )

    return results


def compute_compensation_with_retired(
    physicians: Sequence[Physician],
    year: int,
    financial_params: FiscalYearParams,
    benefit_growth_rate: float,
    exclude_w2_from_comp: bool = False,
    settings: Optional[EngineSettings] = None,
    on_summary: Optional[SummaryHook] = None,
) -> List[CompensationResult]:
    """Same as compute_compensation, but zero-weight prior-year retirees are kept.

    Used for multi-year tables where a retiree's buyout and trailing MD still
    need a row.
    """
    return compute_compensation(
        physicians,
        year,
        financial_params,
        benefit_growth_rate,
        include_retired=True,
        exclude_w2_from_comp=exclude_w2_from_comp,
        settings=settings,
        on_summary=on_summary,
    )
