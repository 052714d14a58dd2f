from brokersim_core.io.config import (  # noqa: F401
    DEFAULT_INPUT,
    clamp_changes,
    clamp_input,
    load_changes,
    load_simulation_input,
)
from brokersim_core.io.export import result_to_frame, result_to_json, save_result, summary_to_json  # noqa: F401

__all__ = [
    "DEFAULT_INPUT",
    "clamp_changes",
    "clamp_input",
    "load_changes",
    "load_simulation_input",
    "result_to_frame",
    "result_to_json",
    "save_result",
    "summary_to_json",
]
