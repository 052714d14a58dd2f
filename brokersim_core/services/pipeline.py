from __future__ import annotations

from brokersim_core.domain.models import Broker, InputComparison, SimulationInput
from brokersim_core.services import simulator


def compare_inputs(base: SimulationInput, changed: SimulationInput) -> InputComparison:
    baseline_result = simulator.simulate(base)
    changed_result = simulator.simulate(changed)

    value_delta = {}
    fee_delta = {}
    for broker in Broker:
        value_delta[broker] = changed_result.final.value(broker) - baseline_result.final.value(broker)
        fee_delta[broker] = changed_result.final.fees(broker) - baseline_result.final.fees(broker)

    return InputComparison(
        baseline=baseline_result,
        changed=changed_result,
        value_delta=value_delta,
        fee_delta=fee_delta,
    )
