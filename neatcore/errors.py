"""Exception types raised by the genome, crossover and propagation engines."""

from __future__ import annotations


class NEATError(Exception):
    """Base class for all neatcore errors."""


class GeneNotFoundError(NEATError, KeyError):
    """A neuron or synapse id is not registered in the organism."""

    def __str__(self) -> str:
        # KeyError quotes its message by default.
        return str(self.args[0]) if self.args else ""


class InputArityMismatchError(NEATError, ValueError):
    """The input vector length differs from the number of sensor neurons."""


class ParentArityMismatchError(NEATError, ValueError):
    """Two parents disagree on their sensor or output counts."""


class CorruptedStateError(NEATError, RuntimeError):
    """An internal invariant was broken; the organism's state is unreliable."""


__all__ = [
    "CorruptedStateError",
    "GeneNotFoundError",
    "InputArityMismatchError",
    "NEATError",
    "ParentArityMismatchError",
]
