"""Configuration loading utilities for NEAT organisms."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .mutation import MutationConfig
from .network import DEFAULT_ACTIVATIONS, ActivationFunction, resolve_activation


@dataclass(frozen=True, slots=True)
class SpeciesConfig:
    """Coefficients of the genetic distance between two organisms.

    ``d = (c1 * E + c2 * D) / N + c3 * W`` where E counts excess genes, D
    disjoint genes, W is the mean weight difference of matching genes and N
    the gene count of the larger genome.
    """

    excess_genes_coeff: float = 1.0
    disjoint_genes_coeff: float = 1.0
    avg_weight_diff_coeff: float = 0.4
    compatibility_threshold: float = 3.0

    def __post_init__(self) -> None:
        for label, value in (
            ("excess_genes_coeff", self.excess_genes_coeff),
            ("disjoint_genes_coeff", self.disjoint_genes_coeff),
            ("avg_weight_diff_coeff", self.avg_weight_diff_coeff),
            ("compatibility_threshold", self.compatibility_threshold),
        ):
            if not math.isfinite(value) or value < 0:
                msg = f"{label} must be a finite non-negative number."
                raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class OrganismConfig:
    """Mutation rates and the activation function applied by every neuron."""

    split_probability: float = 0.03
    toggle_probability: float = 0.01
    weight_probability: float = 0.8
    weight_bound: float = 5.0
    activation: str = "sigmoid"

    def __post_init__(self) -> None:
        # Fail early on bad rates and unknown activation names.
        self.mutation_config()
        self.activation_function()

    def mutation_config(self) -> MutationConfig:
        return MutationConfig(
            split_probability=self.split_probability,
            toggle_probability=self.toggle_probability,
            weight_probability=self.weight_probability,
            weight_bound=self.weight_bound,
        )

    def activation_function(self) -> ActivationFunction:
        return resolve_activation(self.activation, DEFAULT_ACTIVATIONS)


@dataclass(frozen=True, slots=True)
class NEATConfig:
    species: SpeciesConfig = field(default_factory=SpeciesConfig)
    organism: OrganismConfig = field(default_factory=OrganismConfig)


def _load_yaml(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, Mapping):
        msg = f"Expected mapping in YAML file: {path}"
        raise ValueError(msg)
    return data


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        msg = f"Section {name!r} must be a mapping."
        raise ValueError(msg)
    return section


def _coerce_float(section: Mapping[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as error:
        msg = f"{key} must be a number, got {value!r}"
        raise ValueError(msg) from error


def _coerce_str(section: Mapping[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        msg = f"{key} must be a string, got {value!r}"
        raise ValueError(msg)
    return value


def parse_config(data: Mapping[str, Any]) -> NEATConfig:
    """Build a validated configuration from an already-parsed mapping."""
    species = _section(data, "species")
    organism = _section(data, "organism")
    return NEATConfig(
        species=SpeciesConfig(
            excess_genes_coeff=_coerce_float(species, "excess_genes_coeff", 1.0),
            disjoint_genes_coeff=_coerce_float(species, "disjoint_genes_coeff", 1.0),
            avg_weight_diff_coeff=_coerce_float(species, "avg_weight_diff_coeff", 0.4),
            compatibility_threshold=_coerce_float(
                species, "compatibility_threshold", 3.0
            ),
        ),
        organism=OrganismConfig(
            split_probability=_coerce_float(organism, "split_probability", 0.03),
            toggle_probability=_coerce_float(organism, "toggle_probability", 0.01),
            weight_probability=_coerce_float(organism, "weight_probability", 0.8),
            weight_bound=_coerce_float(organism, "weight_bound", 5.0),
            activation=_coerce_str(organism, "activation", "sigmoid"),
        ),
    )


def load_config(path: Path) -> NEATConfig:
    """Read and validate a YAML configuration file."""
    return parse_config(_load_yaml(Path(path)))


__all__ = [
    "NEATConfig",
    "OrganismConfig",
    "SpeciesConfig",
    "load_config",
    "parse_config",
]
