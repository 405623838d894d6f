"""Topology-evolving neural network genomes: mutation, crossover, propagation."""

from __future__ import annotations

import logging

from .config import (
    NEATConfig,
    OrganismConfig,
    SpeciesConfig,
    load_config,
    parse_config,
)
from .crossover import mate
from .errors import (
    CorruptedStateError,
    GeneNotFoundError,
    InputArityMismatchError,
    NEATError,
    ParentArityMismatchError,
)
from .genes import (
    Gene,
    GeneKind,
    Neuron,
    NeuronKind,
    Synapse,
    gene_kind,
    new_neuron,
    new_synapse,
)
from .identity import DEFAULT_ALLOCATOR, IdentityAllocator, IdentitySnapshot
from .mutation import MutationConfig, MutationReport, mutate
from .network import (
    DEFAULT_ACTIVATIONS,
    RecurrentNetwork,
    process,
    propagate,
    resolve_activation,
)
from .organism import Organism, RandomSource
from .reporters import configure_debug_logging, debug_enabled

logging.getLogger(__name__).addHandler(logging.NullHandler())
if debug_enabled():
    configure_debug_logging()

__all__ = [
    "CorruptedStateError",
    "DEFAULT_ACTIVATIONS",
    "DEFAULT_ALLOCATOR",
    "Gene",
    "GeneKind",
    "GeneNotFoundError",
    "IdentityAllocator",
    "IdentitySnapshot",
    "InputArityMismatchError",
    "MutationConfig",
    "MutationReport",
    "NEATConfig",
    "NEATError",
    "Neuron",
    "NeuronKind",
    "Organism",
    "OrganismConfig",
    "ParentArityMismatchError",
    "RandomSource",
    "RecurrentNetwork",
    "SpeciesConfig",
    "Synapse",
    "configure_debug_logging",
    "debug_enabled",
    "gene_kind",
    "load_config",
    "mate",
    "mutate",
    "new_neuron",
    "new_synapse",
    "parse_config",
    "process",
    "propagate",
    "resolve_activation",
]
