"""Signal propagation through (possibly recurrent) organism networks."""

from __future__ import annotations

import logging
import math
from collections import deque
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from .errors import CorruptedStateError, InputArityMismatchError
from .genes import Neuron
from .organism import Organism

logger = logging.getLogger(__name__)

ActivationFunction = Callable[[float], float]
ActivationMap = Mapping[str, ActivationFunction]


def _sigmoid(x: float) -> float:
    if x >= 0:
        z = math.exp(-x)
        return 1.0 / (1.0 + z)
    z = math.exp(x)
    return z / (1.0 + z)


def _fast_sigmoid(x: float) -> float:
    return x / (1.0 + abs(x))


def _rectifier(x: float) -> float:
    return x if x > 0.0 else 0.0


DEFAULT_ACTIVATIONS: dict[str, ActivationFunction] = {
    "identity": lambda x: x,
    "sigmoid": _sigmoid,
    "fast_sigmoid": _fast_sigmoid,
    "rectifier": _rectifier,
    "relu": _rectifier,
    "tanh": math.tanh,
}


def resolve_activation(
    name: str,
    functions: ActivationMap | None = None,
) -> ActivationFunction:
    """Look up an activation function by name.

    Matching ignores case, underscores and hyphens, so ``FastSigmoid`` and
    ``fast_sigmoid`` name the same function.
    """
    registry = DEFAULT_ACTIVATIONS if functions is None else functions
    lookup = {_normalize_activation_name(key): fn for key, fn in registry.items()}
    try:
        return lookup[_normalize_activation_name(name)]
    except KeyError as error:
        valid = ", ".join(sorted(registry))
        msg = f"Unknown activation function {name!r}. Expected one of: {valid}"
        raise ValueError(msg) from error


def _normalize_activation_name(name: str) -> str:
    return name.strip().lower().replace("_", "").replace("-", "")


def process(
    organism: Organism,
    inputs: Sequence[float],
    activation: ActivationFunction,
) -> list[float]:
    """Advance the organism one time step and return its output values.

    Signals that travel along a cycle arrive one step late: they are parked
    in each neuron's ``future`` accumulator and become its starting ``sum``
    on the next call.
    """
    if len(inputs) != len(organism.sensors):
        msg = f"Expected {len(organism.sensors)} inputs but received {len(inputs)}."
        raise InputArityMismatchError(msg)

    for neuron in organism.neurons.values():
        neuron.sum, neuron.future = neuron.future, 0.0
        neuron.visited = False
        neuron.seen = False

    for neuron_id, value in zip(organism.sensors, inputs, strict=True):
        organism.neurons[neuron_id].sum += value

    propagate(organism, activation)

    return [organism.neurons[neuron_id].value for neuron_id in organism.outputs]


def propagate(organism: Organism, activation: ActivationFunction) -> None:
    """Breadth-first evaluation starting from the sensors.

    Order is fixed by the sensor list, FIFO discipline and adjacency
    insertion order, so repeated runs sum floats identically.
    """
    neurons = organism.neurons
    synapses = organism.synapses
    queue: deque[Neuron] = deque()

    for neuron_id in organism.sensors:
        sensor = neurons[neuron_id]
        sensor.seen = True
        queue.append(sensor)

    while queue:
        neuron = queue.popleft()
        if neuron.visited:
            msg = f"Neuron {neuron.id} was queued after it had been evaluated."
            logger.debug("propagation aborted: %s", msg)
            raise CorruptedStateError(msg)

        neuron.visited = True
        neuron.value = activation(neuron.sum)

        for synapse_id in organism.outgoing(neuron.id):
            synapse = synapses[synapse_id]
            if not synapse.enabled:
                continue

            signal = neuron.value * synapse.weight
            target = neurons[synapse.target]
            if target.visited:
                target.future += signal
                continue

            target.sum += signal
            if not target.seen:
                target.seen = True
                queue.append(target)


@dataclass(slots=True)
class RecurrentNetwork:
    """An organism bound to the activation function used to evaluate it."""

    organism: Organism
    activation: ActivationFunction

    @classmethod
    def from_organism(
        cls,
        organism: Organism,
        activation: str = "identity",
        *,
        activation_functions: ActivationMap | None = None,
    ) -> RecurrentNetwork:
        """Bind an organism to a registered activation function."""
        return cls(
            organism=organism,
            activation=resolve_activation(activation, activation_functions),
        )

    def activate(self, inputs: Sequence[float]) -> list[float]:
        """Run one time step and return outputs in output-list order."""
        return process(self.organism, inputs, self.activation)

    def run(self, sequence: Sequence[Sequence[float]]) -> list[list[float]]:
        """Feed a series of input vectors, returning one output per step."""
        return [self.activate(inputs) for inputs in sequence]


__all__ = [
    "ActivationFunction",
    "ActivationMap",
    "DEFAULT_ACTIVATIONS",
    "RecurrentNetwork",
    "process",
    "propagate",
    "resolve_activation",
]
