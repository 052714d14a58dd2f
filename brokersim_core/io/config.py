from __future__ import annotations

import dataclasses
import json
import math
from pathlib import Path
from typing import Any, Dict, Optional, Union

from brokersim_core.domain.models import MAX_HORIZON_YEARS, MIN_HORIZON_YEARS, SimulationInput
from brokersim_core.services.scenario import EDITABLE_FIELDS

MIN_EXCHANGE_RATE = 0.01

DEFAULT_INPUT: Dict[str, Any] = {
    "monthly_contribution": 10000.0,
    "exchange_rate": 17.5,
    "annual_return_pct": 7.0,
    "horizon_years": 1,
}


def clamp_input(
    monthly_contribution: float,
    exchange_rate: float,
    annual_return_pct: float,
    horizon_years: Optional[Union[int, float, str]],
) -> SimulationInput:
    """
    Clamps raw user values into a valid input: contribution >= 0,
    exchange rate >= 0.01, years an integer in [1, 1000]. Blank years
    fall back to 1.
    """
    return SimulationInput(
        monthly_contribution=max(0.0, _real("monthly_contribution", monthly_contribution)),
        exchange_rate=max(MIN_EXCHANGE_RATE, _real("exchange_rate", exchange_rate)),
        annual_return_pct=_real("annual_return_pct", annual_return_pct),
        horizon_years=_clamp_years(horizon_years),
    )


def clamp_changes(base: SimulationInput, changes: Dict[str, Any]) -> SimulationInput:
    """Applies `changes` on top of `base` with the same clamping as a fresh input."""
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown input fields: {sorted(unknown)}")
    return clamp_input(**{**dataclasses.asdict(base), **changes})


def _real(name: str, raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"{name} must be a number, got {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _clamp_years(raw: Optional[Union[int, float, str]]) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return MIN_HORIZON_YEARS
    years = _real("horizon_years", raw)
    if not math.isfinite(years):
        raise ValueError(f"horizon_years must be finite, got {raw!r}")
    return min(max(int(years), MIN_HORIZON_YEARS), MAX_HORIZON_YEARS)


def load_simulation_input(path: str | Path) -> SimulationInput:
    data = _read_json(path)
    return clamp_input(
        monthly_contribution=data.get("monthly_contribution", DEFAULT_INPUT["monthly_contribution"]),
        exchange_rate=data.get("exchange_rate", DEFAULT_INPUT["exchange_rate"]),
        annual_return_pct=data.get("annual_return_pct", DEFAULT_INPUT["annual_return_pct"]),
        horizon_years=data.get("horizon_years", DEFAULT_INPUT["horizon_years"]),
    )


def load_changes(path: str | Path) -> Dict[str, Any]:
    data = _read_json(path)
    unknown = set(data) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown input fields in {path}: {sorted(unknown)}")
    return data


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data
