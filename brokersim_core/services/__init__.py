from brokersim_core.services.fees import monthly_fee  # noqa: F401
from brokersim_core.services.pipeline import compare_inputs  # noqa: F401
from brokersim_core.services.scenario import apply_changes  # noqa: F401
from brokersim_core.services.simulator import monthly_return_rate, simulate, simulate_reference  # noqa: F401
from brokersim_core.services.summary import summarize  # noqa: F401

__all__ = [
    "monthly_fee",
    "monthly_return_rate",
    "simulate",
    "simulate_reference",
    "summarize",
    "apply_changes",
    "compare_inputs",
]
