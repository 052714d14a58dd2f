from __future__ import annotations

import dataclasses
import enum
import math
import numbers
from typing import Dict, List, Mapping

MIN_HORIZON_YEARS = 1
MAX_HORIZON_YEARS = 1000


class Broker(enum.Enum):
    GBM = "GBM"
    ACTINVER = "Actinver"
    IBKR = "IBKR"

    @classmethod
    def parse(cls, text: str) -> "Broker":
        key = str(text).strip().lower()
        for broker in cls:
            if broker.value.lower() == key or broker.name.lower() == key:
                return broker
        raise ValueError(f"Unknown broker: {text!r}")


@dataclasses.dataclass(frozen=True)
class SimulationInput:
    monthly_contribution: float  # MXN
    exchange_rate: float  # MXN per USD
    annual_return_pct: float
    horizon_years: int

    def __post_init__(self) -> None:
        for name in ("monthly_contribution", "exchange_rate", "annual_return_pct"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a real number, got {value!r}")
        if not math.isfinite(self.monthly_contribution) or self.monthly_contribution < 0:
            raise ValueError(f"monthly_contribution must be >= 0, got {self.monthly_contribution}")
        if not math.isfinite(self.exchange_rate) or self.exchange_rate <= 0:
            raise ValueError(f"exchange_rate must be > 0, got {self.exchange_rate}")
        if not math.isfinite(self.annual_return_pct) or self.annual_return_pct < -100:
            raise ValueError(f"annual_return_pct must be >= -100, got {self.annual_return_pct}")
        if isinstance(self.horizon_years, bool) or not isinstance(self.horizon_years, int):
            raise ValueError(f"horizon_years must be an integer, got {self.horizon_years!r}")
        if not MIN_HORIZON_YEARS <= self.horizon_years <= MAX_HORIZON_YEARS:
            raise ValueError(
                f"horizon_years must be within [{MIN_HORIZON_YEARS}, {MAX_HORIZON_YEARS}], "
                f"got {self.horizon_years}"
            )

    @property
    def months(self) -> int:
        return self.horizon_years * 12


@dataclasses.dataclass(frozen=True)
class BrokerPosition:
    accumulated_value: float  # MXN
    accumulated_fees: float  # MXN


@dataclasses.dataclass(frozen=True)
class MonthSnapshot:
    month: int
    total_invested: float
    per_broker: Mapping[Broker, BrokerPosition]

    def value(self, broker: Broker) -> float:
        return self.per_broker[broker].accumulated_value

    def fees(self, broker: Broker) -> float:
        return self.per_broker[broker].accumulated_fees


@dataclasses.dataclass
class SimulationResult:
    input: SimulationInput
    snapshots: List[MonthSnapshot]

    @property
    def final(self) -> MonthSnapshot:
        return self.snapshots[-1]

    def series(self, broker: Broker) -> List[float]:
        return [s.value(broker) for s in self.snapshots]

    def fee_series(self, broker: Broker) -> List[float]:
        return [s.fees(broker) for s in self.snapshots]


@dataclasses.dataclass
class HorizonSummary:
    months: int
    total_invested: float
    final_value: Dict[Broker, float]
    total_fees: Dict[Broker, float]
    fee_drag: Dict[Broker, float]  # invested minus value at horizon
    ranking: List[Broker]

    @property
    def best(self) -> Broker:
        return self.ranking[0]


@dataclasses.dataclass
class InputComparison:
    baseline: SimulationResult
    changed: SimulationResult
    value_delta: Dict[Broker, float]
    fee_delta: Dict[Broker, float]
