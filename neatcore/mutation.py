"""Probabilistic structural and weight mutation of organisms."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .genes import Synapse
from .organism import Organism, RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MutationConfig:
    """Per-synapse mutation probabilities and the weight resample bound."""

    split_probability: float
    toggle_probability: float
    weight_probability: float
    weight_bound: float

    def __post_init__(self) -> None:
        for label, value in (
            ("split_probability", self.split_probability),
            ("toggle_probability", self.toggle_probability),
            ("weight_probability", self.weight_probability),
        ):
            if not 0.0 <= value <= 1.0:
                msg = f"{label} must be in [0, 1]."
                raise ValueError(msg)
        if not math.isfinite(self.weight_bound) or self.weight_bound <= 0.0:
            msg = "weight_bound must be a finite positive number."
            raise ValueError(msg)


@dataclass(slots=True)
class MutationReport:
    """Counts of the edits applied by a single :func:`mutate` call."""

    splits: int = 0
    toggles: int = 0
    resamples: int = 0

    @property
    def total(self) -> int:
        return self.splits + self.toggles + self.resamples


def mutate(
    organism: Organism,
    config: MutationConfig,
    rng: RandomSource,
) -> MutationReport:
    """Mutate every synapse present when the call starts.

    Each synapse, enabled or not, gets three independent trials in the order
    split, toggle, weight resample. Synapses created by a split during this
    call are not visited until the next call.
    """
    report = MutationReport()
    candidates = [gene.id for gene in organism.genes if isinstance(gene, Synapse)]

    for synapse_id in candidates:
        if rng.random() < config.split_probability:
            organism.split_synapse(synapse_id)
            report.splits += 1
        if rng.random() < config.toggle_probability:
            organism.toggle_enabled(synapse_id)
            report.toggles += 1
        if rng.random() < config.weight_probability:
            organism.resample_weight(synapse_id, rng, config.weight_bound)
            report.resamples += 1

    logger.debug(
        "mutated %d synapses: %d splits, %d toggles, %d resamples",
        len(candidates),
        report.splits,
        report.toggles,
        report.resamples,
    )
    return report


__all__ = ["MutationConfig", "MutationReport", "mutate"]
