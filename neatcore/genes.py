"""Gene primitives (neurons and synapses) for NEAT organisms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from .identity import DEFAULT_ALLOCATOR, IdentityAllocator


class NeuronKind(str, Enum):
    """Enumeration of supported neuron roles."""

    SENSOR = "sensor"
    HIDDEN = "hidden"
    OUTPUT = "output"

    @classmethod
    def coerce(cls, value: NeuronKind | str) -> NeuronKind:
        """Coerce a string or NeuronKind into a NeuronKind instance."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            msg = f"Unsupported neuron kind value: {value!r}"
            raise TypeError(msg)
        try:
            return cls(value.lower())
        except ValueError as error:
            valid = ", ".join(member.value for member in cls)
            msg = f"Invalid neuron kind {value!r}. Expected one of: {valid}"
            raise ValueError(msg) from error


class GeneKind(str, Enum):
    """Discriminates the two gene variants."""

    NEURON = "neuron"
    SYNAPSE = "synapse"


def _ensure_non_negative(value: int, *, label: str) -> None:
    if value < 0:
        msg = f"{label} must be non-negative."
        raise ValueError(msg)


@dataclass(slots=True)
class Neuron:
    """A neuron gene together with its per-step evaluation state.

    ``id``, ``kind`` and ``innovation`` never change once the neuron exists.
    The remaining fields are rewritten by the propagation engine on every
    step: ``sum`` accumulates this step's input, ``future`` collects signals
    arriving over recurrent edges for the next step.
    """

    id: int
    kind: NeuronKind
    innovation: int
    value: float = 0.0
    sum: float = 0.0
    future: float = 0.0
    visited: bool = False
    seen: bool = False

    def __post_init__(self) -> None:
        _ensure_non_negative(self.id, label="id")
        _ensure_non_negative(self.innovation, label="innovation")
        self.kind = NeuronKind.coerce(self.kind)

    def copy(self) -> Neuron:
        """Return an independent copy preserving identity and state."""
        return Neuron(
            id=self.id,
            kind=self.kind,
            innovation=self.innovation,
            value=self.value,
            sum=self.sum,
            future=self.future,
            visited=self.visited,
            seen=self.seen,
        )


@dataclass(slots=True)
class Synapse:
    """A weighted, switchable connection from ``source`` to ``target``."""

    id: int
    source: int
    target: int
    weight: float
    innovation: int
    enabled: bool = True

    def __post_init__(self) -> None:
        for label, value in (
            ("id", self.id),
            ("source", self.source),
            ("target", self.target),
            ("innovation", self.innovation),
        ):
            _ensure_non_negative(value, label=label)
        self.weight = _coerce_weight(self.weight)

    def copy(self) -> Synapse:
        """Return an independent copy with the same id and innovation."""
        return Synapse(
            id=self.id,
            source=self.source,
            target=self.target,
            weight=self.weight,
            enabled=self.enabled,
            innovation=self.innovation,
        )

    def toggle(self) -> None:
        """Flip the ``enabled`` flag in place."""
        self.enabled = not self.enabled


Gene: TypeAlias = Neuron | Synapse


def _coerce_weight(weight: object) -> float:
    try:
        value = float(weight)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        msg = f"weight must be convertible to float, got {weight!r}"
        raise ValueError(msg) from error
    if not math.isfinite(value):
        msg = "weight must be a finite number."
        raise ValueError(msg)
    return value


def gene_kind(gene: Gene) -> GeneKind:
    """Return which variant ``gene`` is."""
    if isinstance(gene, Neuron):
        return GeneKind.NEURON
    if isinstance(gene, Synapse):
        return GeneKind.SYNAPSE
    msg = f"Not a gene: {gene!r}"
    raise TypeError(msg)


def new_neuron(
    kind: NeuronKind | str,
    allocator: IdentityAllocator | None = None,
) -> Neuron:
    """Create a neuron with a fresh id and innovation number."""
    allocator = DEFAULT_ALLOCATOR if allocator is None else allocator
    neuron_id = allocator.next_id()
    return Neuron(
        id=neuron_id,
        kind=NeuronKind.coerce(kind),
        innovation=allocator.next_innovation(),
    )


def new_synapse(
    source: Neuron,
    target: Neuron,
    weight: float = 1.0,
    allocator: IdentityAllocator | None = None,
) -> Synapse:
    """Create an enabled synapse between two neurons."""
    allocator = DEFAULT_ALLOCATOR if allocator is None else allocator
    synapse_id = allocator.next_id()
    return Synapse(
        id=synapse_id,
        source=source.id,
        target=target.id,
        weight=weight,
        enabled=True,
        innovation=allocator.next_innovation(),
    )


__all__ = [
    "Gene",
    "GeneKind",
    "Neuron",
    "NeuronKind",
    "Synapse",
    "gene_kind",
    "new_neuron",
    "new_synapse",
]
