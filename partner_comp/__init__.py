from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.engines.compensation import (
    compute_compensation,
    compute_compensation_with_retired,
)
from partner_comp.schema import (
    CompensationBreakdown,
    CompensationResult,
    CompensationSummary,
    FiscalYearParams,
    Physician,
    PhysicianType,
)

__all__ = [
    'DEFAULT_SETTINGS',
    'EngineSettings',
    'compute_compensation',
    'compute_compensation_with_retired',
    'CompensationBreakdown',
    'CompensationResult',
    'CompensationSummary',
    'FiscalYearParams',
    'Physician',
    'PhysicianType',
]
