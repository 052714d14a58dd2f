from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from brokersim_core.domain.models import Broker, HorizonSummary, SimulationResult
from brokersim_core.services.summary import summarize


def _rows(result: SimulationResult) -> List[Dict[str, float]]:
    rows = []
    for snap in result.snapshots:
        row: Dict[str, float] = {"month": snap.month, "invested": snap.total_invested}
        for broker in Broker:
            row[broker.value] = snap.value(broker)
        for broker in Broker:
            row[f"{broker.value}Fees"] = snap.fees(broker)
        rows.append(row)
    return rows


def result_to_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per month: invested, value per broker, then fees per broker."""
    columns = ["month", "invested"]
    columns += [b.value for b in Broker]
    columns += [f"{b.value}Fees" for b in Broker]
    return pd.DataFrame(_rows(result), columns=columns)


def summary_to_json(summary: HorizonSummary) -> Dict[str, Any]:
    return {
        "months": summary.months,
        "total_invested": summary.total_invested,
        "final_value": {b.value: v for b, v in summary.final_value.items()},
        "total_fees": {b.value: v for b, v in summary.total_fees.items()},
        "fee_drag": {b.value: v for b, v in summary.fee_drag.items()},
        "ranking": [b.value for b in summary.ranking],
    }


def result_to_json(result: SimulationResult) -> Dict[str, Any]:
    return {
        "input": dataclasses.asdict(result.input),
        "snapshots": _rows(result),
        "summary": summary_to_json(summarize(result)),
    }


def save_result(result: SimulationResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".csv":
        result_to_frame(result).to_csv(path, index=False)
    else:
        with path.open("w", encoding="utf-8") as f:
            json.dump(result_to_json(result), f, indent=2)
    return path
