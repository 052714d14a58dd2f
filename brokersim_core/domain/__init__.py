from brokersim_core.domain.models import (  # noqa: F401
    Broker,
    BrokerPosition,
    HorizonSummary,
    InputComparison,
    MonthSnapshot,
    SimulationInput,
    SimulationResult,
)

__all__ = [
    "Broker",
    "BrokerPosition",
    "HorizonSummary",
    "InputComparison",
    "MonthSnapshot",
    "SimulationInput",
    "SimulationResult",
]
