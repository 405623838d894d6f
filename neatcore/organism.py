"""Organism (genome container) holding neurons, synapses and gene order."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Protocol

from .errors import GeneNotFoundError
from .genes import Gene, Neuron, NeuronKind, Synapse, new_neuron, new_synapse
from .identity import DEFAULT_ALLOCATOR, IdentityAllocator

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform random source producing floats in ``[0, 1)``."""

    def random(self) -> float: ...


@dataclass(slots=True)
class Organism:
    """A candidate network: its genes plus generation and fitness bookkeeping.

    ``genes`` lists neurons and synapses in the order they were added, which
    is strictly ascending by innovation number. A neuron always precedes the
    synapses that reference it, so replaying ``genes`` through
    :meth:`add_neuron` / :meth:`add_synapse` rebuilds the organism.
    """

    allocator: IdentityAllocator = field(
        default_factory=lambda: DEFAULT_ALLOCATOR,
        repr=False,
        compare=False,
    )
    generation: int = 0
    fitness: float = 0.0
    genes: list[Gene] = field(default_factory=list, repr=False)
    neurons: dict[int, Neuron] = field(default_factory=dict, repr=False)
    synapses: dict[int, Synapse] = field(default_factory=dict, repr=False)
    connections: dict[int, list[int]] = field(default_factory=dict, repr=False)
    sensors: list[int] = field(default_factory=list)
    outputs: list[int] = field(default_factory=list)

    @classmethod
    def minimal(
        cls,
        n_inputs: int,
        n_outputs: int,
        allocator: IdentityAllocator | None = None,
    ) -> Organism:
        """Create sensors and outputs wired round-robin with unit weights.

        Sensor ``i % n_inputs`` is connected to output ``i % n_outputs`` for
        every ``i`` below ``max(n_inputs, n_outputs)``.
        """
        if n_inputs <= 0 or n_outputs <= 0:
            msg = "An organism needs at least one sensor and one output."
            raise ValueError(msg)
        allocator = DEFAULT_ALLOCATOR if allocator is None else allocator
        organism = cls(allocator=allocator)

        for _ in range(n_inputs):
            organism.add_neuron(new_neuron(NeuronKind.SENSOR, allocator))
        for _ in range(n_outputs):
            organism.add_neuron(new_neuron(NeuronKind.OUTPUT, allocator))

        for index in range(max(n_inputs, n_outputs)):
            source = organism.neurons[organism.sensors[index % n_inputs]]
            target = organism.neurons[organism.outputs[index % n_outputs]]
            organism.add_synapse(new_synapse(source, target, allocator=allocator))
        return organism

    def add_neuron(self, neuron: Neuron) -> None:
        """Register a neuron gene and record its role."""
        if neuron.id in self.neurons:
            msg = f"Neuron {neuron.id} already exists."
            raise ValueError(msg)
        self._append_gene(neuron)
        self.neurons[neuron.id] = neuron
        if neuron.kind is NeuronKind.SENSOR:
            self.sensors.append(neuron.id)
        elif neuron.kind is NeuronKind.OUTPUT:
            self.outputs.append(neuron.id)

    def add_synapse(self, synapse: Synapse) -> None:
        """Register a synapse gene whose endpoints are already present."""
        if synapse.id in self.synapses:
            msg = f"Synapse {synapse.id} already exists."
            raise ValueError(msg)
        for endpoint in (synapse.source, synapse.target):
            if endpoint not in self.neurons:
                msg = f"Synapse {synapse.id} references unknown neuron {endpoint}."
                raise GeneNotFoundError(msg)
        self._append_gene(synapse)
        self.synapses[synapse.id] = synapse
        self.connections.setdefault(synapse.source, []).append(synapse.id)

    def get_neuron(self, neuron_id: int) -> Neuron:
        """Return the neuron registered under ``neuron_id``."""
        try:
            return self.neurons[neuron_id]
        except KeyError:
            msg = f"Unknown neuron id {neuron_id}."
            raise GeneNotFoundError(msg) from None

    def get_synapse(self, synapse_id: int) -> Synapse:
        """Return the synapse registered under ``synapse_id``."""
        try:
            return self.synapses[synapse_id]
        except KeyError:
            msg = f"Unknown synapse id {synapse_id}."
            raise GeneNotFoundError(msg) from None

    def synapse_endpoints(self, synapse_id: int) -> tuple[Neuron, Neuron]:
        """Return the (source, target) neurons of a synapse."""
        synapse = self.get_synapse(synapse_id)
        return self.get_neuron(synapse.source), self.get_neuron(synapse.target)

    def outgoing(self, neuron_id: int) -> list[int]:
        """Return the outgoing synapse ids of a neuron in insertion order."""
        return self.connections.get(neuron_id, [])

    def clone(self) -> Organism:
        """Return a structurally identical organism owning fresh gene copies."""
        clone = Organism(
            allocator=self.allocator,
            generation=self.generation,
            fitness=self.fitness,
        )
        for gene in self.genes:
            if isinstance(gene, Neuron):
                clone.add_neuron(gene.copy())
            else:
                clone.add_synapse(gene.copy())
        return clone

    def split_synapse(self, synapse_id: int) -> tuple[Neuron, Synapse, Synapse]:
        """Insert a hidden neuron into a synapse, disabling the original.

        Returns:
            The new hidden neuron, the incoming synapse and the outgoing synapse.
        """
        source, target = self.synapse_endpoints(synapse_id)

        hidden = new_neuron(NeuronKind.HIDDEN, self.allocator)
        incoming = new_synapse(source, hidden, weight=1.0, allocator=self.allocator)
        outgoing = new_synapse(hidden, target, weight=1.0, allocator=self.allocator)

        self.synapses[synapse_id].enabled = False

        # Neuron first, so replaying the genes never meets a dangling synapse.
        self.add_neuron(hidden)
        self.add_synapse(incoming)
        self.add_synapse(outgoing)
        logger.debug(
            "split synapse %d (%d -> %d) via hidden neuron %d",
            synapse_id,
            source.id,
            target.id,
            hidden.id,
        )
        return hidden, incoming, outgoing

    def toggle_enabled(self, synapse_id: int) -> bool:
        """Flip a synapse's enabled flag and return the new value."""
        synapse = self.get_synapse(synapse_id)
        synapse.toggle()
        return synapse.enabled

    def resample_weight(
        self,
        synapse_id: int,
        rng: RandomSource,
        bound: float,
    ) -> float:
        """Replace a synapse weight with a uniform draw from ``[-bound, bound)``."""
        if not math.isfinite(bound) or bound <= 0.0:
            msg = "bound must be a finite positive number."
            raise ValueError(msg)
        synapse = self.get_synapse(synapse_id)
        synapse.weight = 2.0 * (rng.random() - 0.5) * bound
        return synapse.weight

    def _append_gene(self, gene: Gene) -> None:
        if self.genes and gene.innovation <= self.genes[-1].innovation:
            msg = (
                f"Gene innovation {gene.innovation} does not follow "
                f"{self.genes[-1].innovation}; genes must be added in "
                "ascending innovation order."
            )
            raise ValueError(msg)
        self.genes.append(gene)


__all__ = ["Organism", "RandomSource"]
