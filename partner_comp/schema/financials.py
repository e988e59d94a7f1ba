# partner_comp/schema/financials.py
"""Fiscal-year financial parameters, one record per projected year."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from partner_comp.schema.physician import Physician


class FiscalYearParams(BaseModel):
    """
    Income, costs and medical-director budgets for one fiscal year.

    ``medical_director_hours`` and ``prcs_medical_director_hours`` are dollar
    pools despite the names (kept for parity with the dashboard export). When
    unset they fall back to the configured contract defaults; the PRCS pool
    only applies when ``prcs_director_physician_id`` names a physician.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    year: Optional[int] = None
    therapy_income: Optional[float] = Field(None, ge=0.0)
    non_employment_costs: Optional[float] = Field(None, ge=0.0)
    non_md_employment_costs: Optional[float] = Field(None, ge=0.0)
    misc_employment_costs: Optional[float] = Field(None, ge=0.0)
    locum_costs: Optional[float] = Field(None, ge=0.0)
    medical_director_hours: Optional[float] = Field(None, ge=0.0)
    prcs_medical_director_hours: Optional[float] = Field(None, ge=0.0)
    consulting_services_agreement: Optional[float] = Field(None, ge=0.0)
    prcs_director_physician_id: Optional[str] = None
    benefit_growth_rate: Optional[float] = Field(
        None, description="Annual benefit cost growth as a fraction; unset uses the scenario rate"
    )
    physicians: List[Physician] = Field(default_factory=list)

    @field_validator("prcs_director_physician_id", mode="before")
    @classmethod
    def coerce_director_id(cls, value):
        if value is None or value == "":
            return None
        return str(value)
