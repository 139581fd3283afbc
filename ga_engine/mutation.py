"""
Mutation operators for the GA engine.

Implements per-gene point mutation: each gene is independently replaced by a
freshly generated one with a fixed probability.
"""

import numpy as np

from .data_models import Chromosome, GeneGenerator, Individual


def mutate_chromosome(
    chromosome: Chromosome,
    mutation_rate: float,
    gene_generator: GeneGenerator,
    rng: np.random.Generator
) -> Chromosome:
    """
    Mutate a chromosome in place.

    Every position is redrawn from `gene_generator` with probability
    `mutation_rate`. The new gene does not depend on the old one and may equal
    it by chance. Rates outside [0, 1] are not rejected: anything <= 0 never
    mutates and anything >= 1 always does.

    Args:
        chromosome: Chromosome to mutate
        mutation_rate: Per-gene mutation probability
        gene_generator: Callable drawing one random gene from the rng
        rng: Random number generator

    Returns:
        The same chromosome object, for chaining

    Raises:
        ValueError: If chromosome is None
    """
    if chromosome is None:
        raise ValueError("chromosome must not be None")

    for i in range(len(chromosome)):
        if rng.random() < mutation_rate:
            chromosome.set_gene(i, gene_generator(rng))

    return chromosome


def mutate_individual(
    individual: Individual,
    mutation_rate: float,
    gene_generator: GeneGenerator,
    rng: np.random.Generator
) -> Individual:
    """Mutate an individual's chromosome in place."""
    if individual is None:
        raise ValueError("individual must not be None")
    mutate_chromosome(individual.chromosome, mutation_rate, gene_generator, rng)
    return individual
