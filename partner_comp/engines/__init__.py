"""
Engines package for the partner compensation model.

This package contains the compensation engine and the payroll, pro-ration
and medical-director helpers it is built on.
"""

from .compensation import compute_compensation, compute_compensation_with_retired

__all__ = ["compute_compensation", "compute_compensation_with_retired"]
