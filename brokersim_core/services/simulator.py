from __future__ import annotations

import logging
import math
from typing import Dict, List

from brokersim_core.domain.models import (
    Broker,
    BrokerPosition,
    MonthSnapshot,
    SimulationInput,
    SimulationResult,
)
from brokersim_core.services.fees import monthly_fee

logger = logging.getLogger(__name__)


def monthly_return_rate(annual_return_pct: float) -> float:
    """Equivalent monthly compounding rate for a nominal annual return in percent."""
    return math.pow(1 + annual_return_pct / 100, 1 / 12) - 1


def simulate(inp: SimulationInput) -> SimulationResult:
    """
    Month-by-month growth of the contribution, net of each broker's fees.

    Contributions are converted to USD, fees and growth are accumulated in USD
    and every snapshot is reported back in MXN. Running per-broker state is
    carried across months, which performs the same float operations in the
    same order as re-walking from month 0 for every month.
    """
    rate = monthly_return_rate(inp.annual_return_pct)
    growth = 1 + rate
    contribution_usd = inp.monthly_contribution / inp.exchange_rate
    logger.debug(
        "Simulating %d months: contribution_usd=%.6f monthly_rate=%.8f",
        inp.months,
        contribution_usd,
        rate,
    )

    value_usd: Dict[Broker, float] = {b: 0.0 for b in Broker}
    fees_usd: Dict[Broker, float] = {b: 0.0 for b in Broker}
    snapshots: List[MonthSnapshot] = []

    for month in range(1, inp.months + 1):
        per_broker = {}
        for broker in Broker:
            fee = monthly_fee(broker, contribution_usd)
            fees_usd[broker] += fee
            value_usd[broker] = (value_usd[broker] + contribution_usd - fee) * growth
            per_broker[broker] = BrokerPosition(
                accumulated_value=value_usd[broker] * inp.exchange_rate,
                accumulated_fees=fees_usd[broker] * inp.exchange_rate,
            )
        snapshots.append(
            MonthSnapshot(
                month=month,
                total_invested=inp.monthly_contribution * month,
                per_broker=per_broker,
            )
        )

    return SimulationResult(input=inp, snapshots=snapshots)


def simulate_reference(inp: SimulationInput) -> SimulationResult:
    """
    Quadratic variant: every month is recomputed from month 0.
    Used to check `simulate` against.
    """
    rate = monthly_return_rate(inp.annual_return_pct)
    snapshots: List[MonthSnapshot] = []

    for month in range(1, inp.months + 1):
        per_broker = {}
        for broker in Broker:
            total_value = 0.0
            total_fees = 0.0
            for _ in range(month):
                contribution_usd = inp.monthly_contribution / inp.exchange_rate
                fee = monthly_fee(broker, contribution_usd)
                total_fees += fee
                total_value = (total_value + contribution_usd - fee) * (1 + rate)
            per_broker[broker] = BrokerPosition(
                accumulated_value=total_value * inp.exchange_rate,
                accumulated_fees=total_fees * inp.exchange_rate,
            )
        snapshots.append(
            MonthSnapshot(
                month=month,
                total_invested=inp.monthly_contribution * month,
                per_broker=per_broker,
            )
        )

    return SimulationResult(input=inp, snapshots=snapshots)
