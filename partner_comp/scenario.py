# partner_comp/scenario.py
"""
Scenario files: a named set of projected fiscal years, each with its own
roster and financial parameters.

A scenario YAML may name a parent with ``extends:``; the child is deep-merged
over the parent. Lists (``years``, ``physicians``) are replaced whole, not
merged element by element.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import pandas as pd
import yaml
from pydantic import BaseModel, Field, ValidationError

from partner_comp.schema.financials import FiscalYearParams
from partner_comp.schema.physician import Physician

logger = logging.getLogger(__name__)

__all__ = ['Scenario', 'ScenarioLoadError', 'load_scenario', 'load_roster_csv']


class ScenarioLoadError(Exception):
    """Raised when a scenario or roster file cannot be read or validated."""

    pass


class Scenario(BaseModel):
    name: str = "scenario"
    benefit_growth_rate: float = Field(0.05, description="Fraction; years without their own rate use it")
    years: List[FiscalYearParams] = Field(default_factory=list)

    def year(self, year: int) -> Optional[FiscalYearParams]:
        for fy in self.years:
            if fy.year == year:
                return fy
        return None

    def growth_rate(self, fy: FiscalYearParams) -> float:
        """Benefit growth for one year: its own rate if set, else the scenario's."""
        if fy.benefit_growth_rate is not None:
            return fy.benefit_growth_rate
        return self.benefit_growth_rate


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    """
    for key, val in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            base[key] = deep_merge(base[key], val)
        else:
            base[key] = deepcopy(val)
    return base


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ScenarioLoadError(f"Scenario file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ScenarioLoadError(f"Error parsing scenario file {path}") from e
    if not isinstance(cfg, dict):
        raise ScenarioLoadError(f"Scenario file {path} did not parse into a dictionary")
    return cfg


def _resolve(path: str, seen: Set[str]) -> Dict[str, Any]:
    real = os.path.realpath(path)
    if real in seen:
        raise ScenarioLoadError(f"Circular extends detected at '{path}'")
    seen.add(real)

    cfg = _read_yaml(path)
    parent = cfg.pop('extends', None)
    if not parent:
        return cfg
    parent_fp = os.path.join(os.path.dirname(path), parent)
    if not os.path.exists(parent_fp):
        raise ScenarioLoadError(f"Parent scenario '{parent}' not found for {path}")
    return deep_merge(_resolve(parent_fp, seen), cfg)


def load_scenario(path: Union[str, Path]) -> Scenario:
    """
    Load a scenario from a YAML file, resolving any ``extends`` chain.

    Raises:
        ScenarioLoadError: On a missing file or parent, bad YAML, a circular
            ``extends`` chain, or a document that fails validation.
    """
    path = str(path)
    logger.info(f"Loading scenario from {path}")
    raw = _resolve(path, set())
    raw.setdefault('name', os.path.splitext(os.path.basename(path))[0])

    try:
        scenario = Scenario(**raw)
    except ValidationError as e:
        raise ScenarioLoadError(f"Scenario {path} failed validation: {e}") from e

    logger.info(f"Loaded scenario '{scenario.name}' with {len(scenario.years)} year(s)")
    return scenario


def load_roster_csv(path: Union[str, Path]) -> List[Physician]:
    """
    Read a roster exported as CSV, one physician per row.

    Empty cells become None so they follow the engine's absent-as-zero rule.
    Column names may be snake_case or the dashboard's camelCase.
    """
    try:
        df = pd.read_csv(path, dtype={'id': str})
    except FileNotFoundError as e:
        raise ScenarioLoadError(f"Roster file not found: {path}") from e

    df = df.astype(object).where(pd.notna(df), None)
    try:
        roster = [
            Physician(**{k: v for k, v in row.items() if v is not None})
            for row in df.to_dict(orient='records')
        ]
    except ValidationError as e:
        raise ScenarioLoadError(f"Roster {path} failed validation: {e}") from e

    logger.info(f"Loaded {len(roster)} physician(s) from {path}")
    return roster
