# partner_comp/schema/results.py
"""Output records produced by the compensation engine."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from partner_comp.schema.physician import PhysicianType

BREAKDOWN_FIELDS = (
    "fte_share",
    "md_allocation",
    "additional_days_allocation",
    "buyout",
    "delayed_w2",
    "trailing_md",
    "w2_salary",
)


@dataclass(frozen=True)
class CompensationBreakdown:
    """Components of a physician's total; None means not applicable."""

    fte_share: Optional[float] = None
    md_allocation: Optional[float] = None
    additional_days_allocation: Optional[float] = None
    buyout: Optional[float] = None
    delayed_w2: Optional[float] = None
    trailing_md: Optional[float] = None
    w2_salary: Optional[float] = None

    def as_dict(self) -> Dict[str, float]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class CompensationResult:
    """Final compensation for one physician in one year."""

    id: str
    name: str
    type: PhysicianType
    comp: float
    breakdown: CompensationBreakdown = field(default_factory=CompensationBreakdown)


@dataclass(frozen=True)
class CompensationSummary:
    """Aggregate figures from one engine run, for logging and instrumentation."""

    year: int
    therapy_income: float
    md_shared_income: float
    md_prcs_income: float
    consulting_income: float
    total_income: float
    non_employment_costs: float
    non_md_employment_costs: float
    misc_employment_costs: float
    locum_costs: float
    employee_costs: float
    buyout_costs: float
    delayed_w2_costs: float
    total_costs: float
    md_allocations: float
    trailing_md_total: float
    additional_days_allocations: float
    base_pool: float
    pool: float
    total_weight: float
    partner_count: int
    employee_count: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
