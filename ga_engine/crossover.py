"""
Crossover operators for the GA engine.

Implements k-point crossover over fixed-length chromosomes.
"""

import numpy as np

from .data_models import Chromosome


def k_point_crossover(
    parent_a: Chromosome,
    parent_b: Chromosome,
    points: int,
    rng: np.random.Generator
) -> Chromosome:
    """
    Combine two parents using k-point crossover.

    Two working copies start as the parents. For each of `points` rounds a cut
    index is drawn uniformly from [0, length) and the suffixes of the working
    copies are exchanged from that index onward. One of the two resulting
    chromosomes is returned, chosen 50/50.

    Args:
        parent_a: First parent chromosome
        parent_b: Second parent chromosome
        points: Number of crossover rounds (k)
        rng: Random number generator

    Returns:
        New child chromosome, same length as the parents

    Raises:
        ValueError: If a parent is None, the lengths differ or points < 0

    Note:
        Cut indices are redrawn on every call, so repeated calls on the same
        parents generally give different children.
    """
    if parent_a is None or parent_b is None:
        raise ValueError("chromosome must not be None")
    if len(parent_a) != len(parent_b):
        raise ValueError(
            f"chromosomes must be the same size, got {len(parent_a)} and {len(parent_b)}"
        )
    if points < 0:
        raise ValueError(f"crossover points must be >= 0, got {points}")

    genes_a = list(parent_a.genes)
    genes_b = list(parent_b.genes)
    length = len(genes_a)

    # Nothing to cut on an empty chromosome
    if length > 0:
        for _ in range(points):
            cut = int(rng.integers(0, length))
            genes_a, genes_b = (
                genes_a[:cut] + genes_b[cut:],
                genes_b[:cut] + genes_a[cut:],
            )

    if rng.random() < 0.5:
        return Chromosome(genes_a)
    return Chromosome(genes_b)
