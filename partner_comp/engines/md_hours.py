# partner_comp/engines/md_hours.py
"""
Caller-side helpers for shared medical-director percentages.

The engine trusts whatever percentages it is given. These helpers build an
even split and report when the percentages plus the retirees' trailing
carve-outs do not add up to the whole shared pool.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.engines.proration import partner_portion_of_year, trailing_md_amount
from partner_comp.schema.physician import Physician
from partner_comp.utils.money import num_or_zero

logger = logging.getLogger(__name__)


def even_md_percentages(physicians: Sequence[Physician]) -> List[Physician]:
    """Spread 100% of the shared pool by each physician's partner portion of year."""
    total_portion = sum(partner_portion_of_year(p) for p in physicians)

    updated = []
    for p in physicians:
        portion = partner_portion_of_year(p)
        pct = (portion / total_portion) * 100 if total_portion > 0 and portion > 0 else 0.0
        updated.append(
            p.model_copy(
                update={
                    "medical_director_hours_percentage": pct,
                    "has_medical_director_hours": pct > 0,
                }
            )
        )
    return updated


def check_md_percentages(
    physicians: Sequence[Physician],
    shared_pool: Optional[float] = None,
    settings: Optional[EngineSettings] = None,
    tolerance: float = 0.01,
) -> List[str]:
    """
    Return warnings when the shared MD pool would be under- or over-allocated.

    Active partners' percentages and the prior-year retirees' trailing
    dollars (as a share of ``shared_pool``) should total 100%.
    """
    settings = settings or DEFAULT_SETTINGS
    pool = settings.default_md_shared_pool if shared_pool is None else num_or_zero(shared_pool)

    active_pct = sum(
        num_or_zero(p.medical_director_hours_percentage)
        for p in physicians
        if p.is_partner_like and p.has_medical_director_hours and not p.is_prior_year_retiree
    )
    trailing = sum(trailing_md_amount(p, settings) for p in physicians if p.is_prior_year_retiree)

    warnings: List[str] = []
    if pool <= 0:
        if trailing > 0:
            warnings.append(
                f"Trailing MD amounts total ${trailing:,.2f} but the shared MD pool is empty"
            )
        return warnings

    trailing_pct = trailing / pool * 100
    total_pct = active_pct + trailing_pct
    if not np.isclose(total_pct, 100.0, atol=tolerance):
        direction = "over" if total_pct > 100 else "under"
        warnings.append(
            f"Shared MD pool is {direction}-allocated: partners {active_pct:.2f}% + "
            f"trailing {trailing_pct:.2f}% = {total_pct:.2f}%"
        )

    for message in warnings:
        logger.warning(f"[MD] {message}")
    return warnings
