from .metrics import (
    compensation_table,
    employee_cost_breakdown,
    guaranteed_payments,
    results_to_frame,
    total_income,
)

__all__ = [
    "compensation_table",
    "employee_cost_breakdown",
    "guaranteed_payments",
    "results_to_frame",
    "total_income",
]
