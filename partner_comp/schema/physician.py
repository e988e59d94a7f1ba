# partner_comp/schema/physician.py
"""
Roster models: the six physician types and the per-year physician record.

A physician's ``type`` is the discriminant every engine step branches on.
The type sets below are the single definition of which variants count as
partner-like and employee-like; ``employeeToPartner`` belongs to both because
its employee and partner portions of the year are costed separately.
"""

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PhysicianType(str, Enum):
    """Employment status of a physician for one fiscal year."""

    PARTNER = "partner"
    EMPLOYEE = "employee"
    EMPLOYEE_TO_PARTNER = "employeeToPartner"
    PARTNER_TO_RETIRE = "partnerToRetire"
    NEW_EMPLOYEE = "newEmployee"
    EMPLOYEE_TO_TERMINATE = "employeeToTerminate"


PARTNER_TYPES = frozenset({
    PhysicianType.PARTNER,
    PhysicianType.EMPLOYEE_TO_PARTNER,
    PhysicianType.PARTNER_TO_RETIRE,
})

EMPLOYEE_TYPES = frozenset({
    PhysicianType.EMPLOYEE,
    PhysicianType.EMPLOYEE_TO_PARTNER,
    PhysicianType.NEW_EMPLOYEE,
    PhysicianType.EMPLOYEE_TO_TERMINATE,
})

# Employee-like types that never hold a partner share
EMPLOYEE_ONLY_TYPES = EMPLOYEE_TYPES - PARTNER_TYPES


class Physician(BaseModel):
    """One physician's configuration for one fiscal year.

    Numeric fields are optional; the engine reads every one of them through
    ``num_or_zero`` so an unset field behaves as 0. Field names accept both
    snake_case and the dashboard's camelCase spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=False,
    )

    id: str
    name: str
    physician_type: PhysicianType = Field(alias="type")
    salary: Optional[float] = Field(None, ge=0.0)
    weeks_off: Optional[float] = Field(
        None,
        ge=0.0,
        validation_alias=AliasChoices("weeks_off", "weeksOff", "weeksVacation"),
    )
    receives_benefits: bool = False
    receives_bonuses: bool = False
    bonus_amount: Optional[float] = Field(None, ge=0.0)
    has_medical_director_hours: bool = False
    medical_director_hours_percentage: Optional[float] = Field(None, ge=0.0, le=100.0)
    additional_days_worked: Optional[float] = Field(
        None, ge=0.0, description="Internal locum days, already converted to dollars"
    )
    employee_portion_of_year: Optional[float] = Field(None, ge=0.0, le=1.0)
    partner_portion_of_year: Optional[float] = Field(None, ge=0.0, le=1.0)
    start_portion_of_year: Optional[float] = Field(None, ge=0.0, le=1.0)
    terminate_portion_of_year: Optional[float] = Field(None, ge=0.0, le=1.0)
    buyout_cost: Optional[float] = Field(None, ge=0.0)
    trailing_shared_md_amount: Optional[float] = Field(None, ge=0.0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        # Spreadsheet rosters hand us integer ids
        return str(value) if value is not None else value

    @property
    def is_partner_like(self) -> bool:
        return self.physician_type in PARTNER_TYPES

    @property
    def is_employee_like(self) -> bool:
        return self.physician_type in EMPLOYEE_TYPES

    @property
    def is_prior_year_retiree(self) -> bool:
        """Retiring partner who did no partner work this year (portion 0 or unset)."""
        return (
            self.physician_type is PhysicianType.PARTNER_TO_RETIRE
            and not self.partner_portion_of_year
        )
