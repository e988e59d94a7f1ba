from .financials import FiscalYearParams
from .physician import (
    EMPLOYEE_ONLY_TYPES,
    EMPLOYEE_TYPES,
    PARTNER_TYPES,
    Physician,
    PhysicianType,
)
from .results import (
    BREAKDOWN_FIELDS,
    CompensationBreakdown,
    CompensationResult,
    CompensationSummary,
)

__all__ = [
    "FiscalYearParams",
    "EMPLOYEE_ONLY_TYPES",
    "EMPLOYEE_TYPES",
    "PARTNER_TYPES",
    "Physician",
    "PhysicianType",
    "BREAKDOWN_FIELDS",
    "CompensationBreakdown",
    "CompensationResult",
    "CompensationSummary",
]
