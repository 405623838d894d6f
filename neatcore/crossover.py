"""Crossover of two organisms aligned by innovation number."""

from __future__ import annotations

import logging

from .errors import CorruptedStateError, ParentArityMismatchError
from .genes import Gene, Neuron, gene_kind
from .organism import Organism

logger = logging.getLogger(__name__)


def mate(a: Organism, b: Organism) -> Organism:
    """Create an offspring combining the topologies of two parents.

    Both gene sequences are merged by innovation number. Homologous genes come
    from the fitter parent (``b`` wins ties); disjoint and excess genes come
    from whichever parent carries them. The offspring owns copies of every
    inherited gene, with ids and innovation numbers unchanged.

    Args:
        a: First parent; its generation and allocator carry over.
        b: Second parent.

    Raises:
        ParentArityMismatchError: If the parents differ in sensor or output count.
        CorruptedStateError: If the merge meets genes that cannot be aligned.
    """
    if len(a.sensors) != len(b.sensors) or len(a.outputs) != len(b.outputs):
        msg = (
            f"Parents must share input/output arity: "
            f"{len(a.sensors)}x{len(a.outputs)} vs {len(b.sensors)}x{len(b.outputs)}."
        )
        raise ParentArityMismatchError(msg)

    offspring = Organism(allocator=a.allocator, generation=a.generation + 1)
    a_fitter = a.fitness > b.fitness

    a_genes, b_genes = a.genes, b.genes
    a_len, b_len = len(a_genes), len(b_genes)
    a_index = b_index = 0
    matching = 0

    while a_index < a_len or b_index < b_len:
        a_gene = a_genes[a_index] if a_index < a_len else None
        b_gene = b_genes[b_index] if b_index < b_len else None

        inherited: Gene
        if a_gene is not None and b_gene is not None:
            if a_gene.innovation == b_gene.innovation:
                if gene_kind(a_gene) is not gene_kind(b_gene):
                    msg = (
                        f"Innovation {a_gene.innovation} names a "
                        f"{gene_kind(a_gene).value} in one parent and a "
                        f"{gene_kind(b_gene).value} in the other."
                    )
                    raise CorruptedStateError(msg)
                inherited = a_gene if a_fitter else b_gene
                a_index += 1
                b_index += 1
                matching += 1
            elif a_gene.innovation < b_gene.innovation:
                inherited = a_gene
                a_index += 1
            else:
                inherited = b_gene
                b_index += 1
        elif a_gene is not None:
            inherited = a_gene
            a_index += 1
        elif b_gene is not None:
            inherited = b_gene
            b_index += 1
        else:
            msg = "Both parents ran out of genes before the merge finished."
            raise CorruptedStateError(msg)

        if isinstance(inherited, Neuron):
            offspring.add_neuron(inherited.copy())
        else:
            offspring.add_synapse(inherited.copy())

    logger.debug(
        "mated organisms (%d and %d genes): %d matching, offspring has %d genes",
        a_len,
        b_len,
        matching,
        len(offspring.genes),
    )
    return offspring


__all__ = ["mate"]
