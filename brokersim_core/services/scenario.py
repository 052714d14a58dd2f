from __future__ import annotations

import dataclasses
from typing import Any

from brokersim_core.domain.models import SimulationInput

EDITABLE_FIELDS = frozenset(f.name for f in dataclasses.fields(SimulationInput))


def apply_changes(inp: SimulationInput, **changes: Any) -> SimulationInput:
    """
    Returns a new input with the given fields replaced. The new input is
    validated on construction; `inp` itself is left as it was.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown input fields: {sorted(unknown)}")
    return dataclasses.replace(inp, **changes)
