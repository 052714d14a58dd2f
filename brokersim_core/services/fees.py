from __future__ import annotations

from typing import Dict, List

from brokersim_core.domain.models import Broker

BROKERAGE_RATE = 0.0025
IBKR_RATE = 0.0035
IBKR_MAX_RATE = 0.01
# Annual 500 fee spread over 12 months. Added to the USD accumulator as-is,
# so the final MXN conversion scales it by the exchange rate.
ACTINVER_FIXED_MONTHLY_FEE = 500 / 12


def monthly_fee(broker: Broker, amount: float) -> float:
    """
    Fee in USD charged by `broker` on a monthly contribution of `amount` USD.
    """
    if broker is Broker.GBM:
        return amount * BROKERAGE_RATE
    if broker is Broker.ACTINVER:
        return amount * BROKERAGE_RATE + ACTINVER_FIXED_MONTHLY_FEE
    if broker is Broker.IBKR:
        return min(amount * IBKR_RATE, amount * IBKR_MAX_RATE)
    raise ValueError(f"No fee rule for broker: {broker!r}")


# Only the flat rules above enter the simulation; tiers are informational.
FEE_SCHEDULES: Dict[Broker, List[str]] = {
    Broker.GBM: [
        "Brokerage fee by amount traded over the last 3 months:",
        "  0 - 1,000,000 MXN: 0.25%",
        "  1,000,001 - 3,000,000 MXN: 0.20%",
        "  3,000,001 - 5,000,000 MXN: 0.15%",
        "  5,000,001 - 10,000,000 MXN: 0.125%",
        "  over 10,000,000 MXN: 0.10%",
        "No annual fee",
        "No inactivity fee",
    ],
    Broker.ACTINVER: [
        "Brokerage fee by amount traded over the last 30 days:",
        "  0 - 1,000,000 MXN: 0.25%",
        "  1,000,001 - 5,000,000 MXN: 0.20%",
        "  5,000,001 - 10,000,000 MXN: 0.15%",
        "  over 10,000,000 MXN: 0.10%",
        "Annual fee: 500 MXN",
        "Minimum balance fee: 100 MXN monthly when the balance is under 5,000 MXN",
        "Indeval custody: 50 MXN monthly up to 500,000 MXN, "
        "0.01050% + 0.30 MXN monthly above that",
    ],
    Broker.IBKR: [
        "Brokerage fee: 0.35% of trade value, minimum 0.35 USD per order",
        "Maximum of 1% of trade value",
        "No annual fee",
        "No inactivity fee",
        "Currency conversion: 0.20 basis points (0.002%) of trade value",
        "Real-time market data: varies by market, may be waived above a monthly commission minimum",
    ],
}

FEE_SCHEDULE_NOTE = (
    "Fees are subject to change and vary by account type and trading volume. "
    "Check current fees with each broker before investing."
)
