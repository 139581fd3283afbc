"""
Reproduction module for the GA engine.

Builds the initial population and produces each following generation from a
list of selected parents via crossover + mutation.
"""

from typing import List, Sequence
import numpy as np

from .data_models import GeneGenerator, Individual, Population
from .crossover import k_point_crossover
from .mutation import mutate_individual


def generate_population(
    population_size: int,
    chromosome_size: int,
    gene_generator: GeneGenerator,
    rng: np.random.Generator
) -> Population:
    """
    Generate a population of random individuals.

    Args:
        population_size: Number of individuals
        chromosome_size: Genes per chromosome
        gene_generator: Callable drawing one random gene from the rng
        rng: Random number generator

    Returns:
        New Population
    """
    if gene_generator is None:
        raise ValueError("gene_generator must not be None")

    population = Population()
    for _ in range(population_size):
        population.add_member(Individual.random(chromosome_size, gene_generator, rng))
    return population


def _check_parents(parent_a: Individual, parent_b: Individual) -> None:
    if parent_a is None or parent_b is None:
        raise ValueError("individuals must not be None")
    if len(parent_a.chromosome) != len(parent_b.chromosome):
        raise ValueError(
            f"chromosomes must be the same size, got "
            f"{len(parent_a.chromosome)} and {len(parent_b.chromosome)}"
        )


def produce_child(
    parent_a: Individual,
    parent_b: Individual,
    crossover_points: int,
    mutation_rate: float,
    gene_generator: GeneGenerator,
    rng: np.random.Generator
) -> Individual:
    """Cross two parents over, mutate the result and wrap it as a newborn."""
    _check_parents(parent_a, parent_b)

    chromosome = k_point_crossover(
        parent_a.chromosome, parent_b.chromosome, crossover_points, rng
    )
    child = Individual.born(chromosome, rng)
    return mutate_individual(child, mutation_rate, gene_generator, rng)


def produce_children(
    parent_a: Individual,
    parent_b: Individual,
    num_children: int,
    crossover_points: int,
    mutation_rate: float,
    gene_generator: GeneGenerator,
    rng: np.random.Generator
) -> List[Individual]:
    """
    Produce several children from one pair of parents.

    Each child gets its own crossover cut points and mutation draws.
    """
    _check_parents(parent_a, parent_b)

    return [
        produce_child(parent_a, parent_b, crossover_points, mutation_rate, gene_generator, rng)
        for _ in range(num_children)
    ]


def produce_next_generation(
    parents: Sequence[Individual],
    num_children: int,
    crossover_points: int,
    mutation_rate: float,
    gene_generator: GeneGenerator,
    rng: np.random.Generator
) -> Population:
    """
    Produce the next generation from selected parents.

    Parents are paired positionally: (0, 1), (2, 3), ... Each pair yields
    exactly `num_children` children, so the new population has
    len(parents) / 2 * num_children members.

    Args:
        parents: Selected parents (already shuffled by selection)
        num_children: Children per pair
        crossover_points: k for k-point crossover
        mutation_rate: Per-gene mutation probability
        gene_generator: Callable drawing one random gene from the rng
        rng: Random number generator

    Returns:
        New Population

    Raises:
        ValueError: If parents is None or has odd length

    Note:
        The population size is not checked against any target. Callers that
        pick a population size not divisible by num_children will see the
        size drift between generations.
    """
    if parents is None:
        raise ValueError("parents must not be None")
    if len(parents) % 2 != 0:
        raise ValueError(f"the number of parents must be even, got {len(parents)}")

    next_generation = Population()
    for i in range(0, len(parents), 2):
        next_generation.add_members(
            produce_children(
                parents[i],
                parents[i + 1],
                num_children,
                crossover_points,
                mutation_rate,
                gene_generator,
                rng
            )
        )
    return next_generation
