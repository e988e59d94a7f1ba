# partner_comp/config/models.py
"""
Pydantic models for validating engine settings loaded from YAML files
(e.g., settings.yaml). Defaults reproduce the practice's standing contract
terms and WA State payroll rates, so an empty file is a valid configuration.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

# --- Low-level Reusable Models ---


class TaxRates(BaseModel):
    """Employer payroll tax rates for a WA State practice with < 50 employees."""

    federal_unemployment_rate: float = Field(0.006, ge=0.0, description="FUTA rate")
    federal_unemployment_wage_base: float = Field(7000, ge=0.0)
    social_security_rate: float = Field(0.062, ge=0.0)
    medicare_rate: float = Field(0.0145, ge=0.0)
    wa_unemployment_rate: float = Field(0.009, ge=0.0, description="WA SUTA rate")
    wa_unemployment_wage_base: float = Field(72800, ge=0.0)
    wa_family_leave_rate: float = Field(
        0.00658, ge=0.0, description="WA FLI, applied up to the SS wage base"
    )
    wa_state_disability_rate: float = Field(0.00255, ge=0.0, description="WA SDI on all wages")
    washington_rate: float = Field(0.0003, ge=0.0, description="Washington rate on all wages")


class BenefitRates(BaseModel):
    """Monthly per-employee benefit premiums and the year they are quoted for."""

    monthly_medical: float = Field(722.81, ge=0.0)
    monthly_dental: float = Field(57.12, ge=0.0)
    monthly_vision: float = Field(6.44, ge=0.0)
    base_year: int = 2025

    @property
    def annual_total(self) -> float:
        return (self.monthly_medical + self.monthly_dental + self.monthly_vision) * 12


class PaySchedule(BaseModel):
    """Biweekly payroll anchor: a known period end and the date it was paid."""

    reference_period_end: date = date(2024, 12, 13)
    reference_pay_date: date = date(2024, 12, 20)
    period_days: int = Field(14, gt=0)
    hours_per_day: float = Field(8.0, gt=0.0)
    annual_work_hours: float = Field(2080.0, gt=0.0, description="52 weeks x 5 days x 8 hours")


class DelayedW2Override(BaseModel):
    """A hand-reconciled delayed W2 figure that replaces the computed one."""

    name: str
    year: int
    amount: float = Field(..., ge=0.0)
    taxes: float = Field(..., ge=0.0)
    period_details: str = "manual override"


# --- Top-level settings ---


class EngineSettings(BaseModel):
    """Everything the compensation engine and its helpers can be tuned with."""

    default_md_shared_pool: float = Field(
        97200, ge=0.0, description="Shared MD income when a year leaves it unset (contract maximum)"
    )
    default_md_prcs_pool: float = Field(
        50000, ge=0.0, description="PRCS MD income when a director is set but the amount is not"
    )
    max_weeks_off: float = Field(24, ge=0.0)
    default_trailing_md_amount: float = Field(
        0.0, ge=0.0, description="Trailing shared MD for retirees with no explicit or per-name amount"
    )
    trailing_md_amounts: Dict[str, float] = Field(
        default_factory=dict, description="Per-name trailing shared MD defaults for retirees"
    )
    delayed_w2_overrides: List[DelayedW2Override] = Field(default_factory=list)
    social_security_wage_bases: Dict[int, float] = Field(
        default_factory=lambda: {
            2025: 176100,
            2026: 183600,
            2027: 190800,
            2028: 198900,
            2029: 207000,
            2030: 215400,
        }
    )
    tax_rates: TaxRates = Field(default_factory=TaxRates)
    benefits: BenefitRates = Field(default_factory=BenefitRates)
    pay_schedule: PaySchedule = Field(default_factory=PaySchedule)

    @model_validator(mode='after')
    def check_wage_bases(self) -> 'EngineSettings':
        """At least one Social Security wage base is needed for the fallback lookup."""
        if not self.social_security_wage_bases:
            raise ValueError("social_security_wage_bases must contain at least one year")
        return self

    def delayed_w2_override(self, name: str, year: int) -> Optional[DelayedW2Override]:
        for override in self.delayed_w2_overrides:
            if override.name == name and override.year == year:
                return override
        return None


DEFAULT_SETTINGS = EngineSettings()
