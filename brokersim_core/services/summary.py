from __future__ import annotations

import numpy as np

from brokersim_core.domain.models import Broker, HorizonSummary, SimulationResult


def summarize(result: SimulationResult) -> HorizonSummary:
    """
    Totals at the end of the horizon: fees paid, final value and how far each
    broker ends below the raw invested amount.
    """
    final = result.final
    brokers = list(Broker)
    values = np.array([final.value(b) for b in brokers], dtype=float)

    # stable sort keeps enumeration order on ties
    order = np.argsort(-values, kind="stable")
    ranking = [brokers[i] for i in order]

    return HorizonSummary(
        months=final.month,
        total_invested=final.total_invested,
        final_value={b: final.value(b) for b in brokers},
        total_fees={b: final.fees(b) for b in brokers},
        fee_drag={b: final.total_invested - final.value(b) for b in brokers},
        ranking=ranking,
    )
