from __future__ import annotations

from random import Random

import pytest
from neatcore.errors import GeneNotFoundError
from neatcore.genes import Neuron, NeuronKind, Synapse, new_neuron, new_synapse
from neatcore.identity import IdentityAllocator
from neatcore.network import process
from neatcore.organism import Organism


def identity(x: float) -> float:
    return x


def build_recurrent(allocator: IdentityAllocator) -> Organism:
    # sensor -> hidden -> output, with hidden feeding back into the sensor
    organism = Organism(allocator=allocator)
    sensor = new_neuron(NeuronKind.SENSOR, allocator)
    hidden = new_neuron(NeuronKind.HIDDEN, allocator)
    output = new_neuron(NeuronKind.OUTPUT, allocator)
    for neuron in (sensor, hidden, output):
        organism.add_neuron(neuron)
    organism.add_synapse(new_synapse(sensor, hidden, allocator=allocator))
    organism.add_synapse(new_synapse(hidden, sensor, allocator=allocator))
    organism.add_synapse(new_synapse(hidden, output, allocator=allocator))
    return organism


def test_add_neuron_records_roles() -> None:
    allocator = IdentityAllocator()
    organism = Organism.minimal(2, 3, allocator=allocator)

    assert len(organism.sensors) == 2
    assert len(organism.outputs) == 3
    assert all(organism.neurons[i].kind is NeuronKind.SENSOR for i in organism.sensors)
    assert all(organism.neurons[i].kind is NeuronKind.OUTPUT for i in organism.outputs)

    hidden = new_neuron(NeuronKind.HIDDEN, allocator)
    organism.add_neuron(hidden)
    assert hidden.id not in organism.sensors + organism.outputs
    assert organism.genes[-1] is hidden


def test_minimal_wires_round_robin() -> None:
    organism = Organism.minimal(2, 3, allocator=IdentityAllocator())

    pairs = [
        (synapse.source, synapse.target)
        for synapse in organism.genes
        if isinstance(synapse, Synapse)
    ]
    sensors, outputs = organism.sensors, organism.outputs
    assert pairs == [
        (sensors[0], outputs[0]),
        (sensors[1], outputs[1]),
        (sensors[0], outputs[2]),
    ]
    assert organism.outgoing(sensors[0]) == [
        sid for sid, s in organism.synapses.items() if s.source == sensors[0]
    ]


def test_minimal_requires_inputs_and_outputs() -> None:
    with pytest.raises(ValueError):
        Organism.minimal(0, 1, allocator=IdentityAllocator())


def test_add_synapse_requires_known_endpoints() -> None:
    allocator = IdentityAllocator()
    organism = Organism(allocator=allocator)
    sensor = new_neuron(NeuronKind.SENSOR, allocator)
    stray = new_neuron(NeuronKind.OUTPUT, allocator)
    organism.add_neuron(sensor)

    with pytest.raises(GeneNotFoundError):
        organism.add_synapse(new_synapse(sensor, stray, allocator=allocator))
    assert organism.synapses == {}
    assert organism.genes == [sensor]


def test_genes_must_arrive_in_innovation_order() -> None:
    organism = Organism(allocator=IdentityAllocator())
    organism.add_neuron(Neuron(id=1, kind=NeuronKind.SENSOR, innovation=5))

    with pytest.raises(ValueError):
        organism.add_neuron(Neuron(id=2, kind=NeuronKind.OUTPUT, innovation=5))
    with pytest.raises(ValueError):
        organism.add_neuron(Neuron(id=1, kind=NeuronKind.OUTPUT, innovation=9))


def test_lookups_raise_gene_not_found() -> None:
    organism = Organism.minimal(1, 1, allocator=IdentityAllocator())

    with pytest.raises(GeneNotFoundError):
        organism.get_neuron(999)
    with pytest.raises(GeneNotFoundError):
        organism.get_synapse(999)
    with pytest.raises(KeyError):
        organism.synapse_endpoints(999)


def test_synapse_endpoints_returns_neurons() -> None:
    organism = Organism.minimal(1, 1, allocator=IdentityAllocator())
    (synapse_id,) = organism.synapses

    source, target = organism.synapse_endpoints(synapse_id)
    assert source.id == organism.sensors[0]
    assert target.id == organism.outputs[0]


def test_split_synapse_inserts_hidden_neuron() -> None:
    organism = Organism.minimal(1, 1, allocator=IdentityAllocator())
    (original_id,) = organism.synapses
    sensor, output = organism.synapse_endpoints(original_id)
    genes_before = len(organism.genes)

    hidden, incoming, outgoing = organism.split_synapse(original_id)

    assert organism.synapses[original_id].enabled is False
    assert original_id in organism.synapses
    assert hidden.kind is NeuronKind.HIDDEN
    assert (incoming.source, incoming.target) == (sensor.id, hidden.id)
    assert (outgoing.source, outgoing.target) == (hidden.id, output.id)
    assert incoming.weight == 1.0 and outgoing.weight == 1.0
    assert incoming.enabled and outgoing.enabled

    new_genes = organism.genes[genes_before:]
    assert new_genes == [hidden, incoming, outgoing]
    assert hidden.innovation < incoming.innovation < outgoing.innovation
    assert organism.outgoing(sensor.id) == [original_id, incoming.id]
    assert organism.outgoing(hidden.id) == [outgoing.id]


def test_split_preserves_signal_with_identity_activation() -> None:
    organism = Organism.minimal(1, 1, allocator=IdentityAllocator())
    (original_id,) = organism.synapses
    organism.split_synapse(original_id)

    assert process(organism, [0.75], identity) == [0.75]


def test_toggle_and_resample_weight() -> None:
    organism = Organism.minimal(1, 1, allocator=IdentityAllocator())
    (synapse_id,) = organism.synapses

    assert organism.toggle_enabled(synapse_id) is False
    assert organism.toggle_enabled(synapse_id) is True

    rng = Random(11)
    for _ in range(50):
        weight = organism.resample_weight(synapse_id, rng, 2.0)
        assert -2.0 <= weight < 2.0
        assert organism.synapses[synapse_id].weight == weight

    with pytest.raises(ValueError):
        organism.resample_weight(synapse_id, rng, 0.0)


@pytest.mark.parametrize("bound", [float("nan"), float("inf"), -float("inf")])
def test_resample_weight_rejects_non_finite_bound(bound: float) -> None:
    organism = Organism.minimal(1, 1, allocator=IdentityAllocator())
    (synapse_id,) = organism.synapses

    with pytest.raises(ValueError):
        organism.resample_weight(synapse_id, Random(0), bound)
    assert organism.synapses[synapse_id].weight == 1.0


def test_clone_is_structurally_identical() -> None:
    organism = build_recurrent(IdentityAllocator())
    organism.generation = 4
    organism.fitness = 1.5

    clone = organism.clone()

    assert [g.innovation for g in clone.genes] == [g.innovation for g in organism.genes]
    assert clone.sensors == organism.sensors
    assert clone.outputs == organism.outputs
    assert clone.connections == organism.connections
    assert clone.generation == 4
    assert clone.fitness == 1.5
    assert all(
        mine is not theirs
        for mine, theirs in zip(clone.genes, organism.genes, strict=True)
    )


def test_clone_tracks_original_outputs_and_is_independent() -> None:
    organism = build_recurrent(IdentityAllocator())
    clone = organism.clone()

    for value, expected in zip([1.0, 0.0, 0.0, 1.0], [1.0, 1.0, 1.0, 2.0], strict=True):
        assert process(organism, [value], identity) == [expected]
        assert process(clone, [value], identity) == [expected]

    for synapse in clone.synapses.values():
        synapse.weight = 3.0
    clone_output = organism.outputs[0]
    clone.get_synapse(next(iter(clone.synapses))).enabled = False

    # Original keeps its own weights and flags.
    assert all(s.weight == 1.0 and s.enabled for s in organism.synapses.values())
    assert process(organism, [0.0], identity) == [2.0]
    assert clone.neurons[clone_output] is not organism.neurons[clone_output]
