"""
Selection operators for the GA engine.

Implements tournament selection over (individual, fitness) pairs and the
parent-selection step that feeds reproduction.
"""

from typing import List, Sequence
import numpy as np

from .data_models import FitnessPair, Individual


def find_best(fitnesses: Sequence[FitnessPair]) -> FitnessPair:
    """
    Return the pair with the highest fitness.

    Only a strictly greater fitness replaces the incumbent, so ties resolve to
    the first pair encountered.

    Raises:
        ValueError: If fitnesses is empty
    """
    if not fitnesses:
        raise ValueError("cannot find best of an empty fitness list")

    best = fitnesses[0]
    for pair in fitnesses[1:]:
        if pair.fitness > best.fitness:
            best = pair
    return best


def average_fitness(fitnesses: Sequence[FitnessPair]) -> float:
    """Mean fitness of a generation."""
    if not fitnesses:
        raise ValueError("cannot average an empty fitness list")
    return float(np.mean([pair.fitness for pair in fitnesses]))


def tournament_select(
    candidates: Sequence[FitnessPair],
    tournament_size: int,
    rng: np.random.Generator
) -> FitnessPair:
    """
    Run one tournament.

    Draws `tournament_size` candidates independently and with replacement, then
    returns the fittest of the draw (first drawn wins ties).

    Args:
        candidates: Evaluated members of the current generation
        tournament_size: Number of draws
        rng: Random number generator

    Returns:
        Winning pair
    """
    if not candidates:
        raise ValueError("candidates must not be empty")
    if tournament_size < 1:
        raise ValueError(f"tournament_size must be >= 1, got {tournament_size}")

    drawn = rng.integers(0, len(candidates), size=tournament_size)
    tournament = [candidates[int(i)] for i in drawn]
    return find_best(tournament)


def select_parents(
    fitnesses: Sequence[FitnessPair],
    num_parents: int,
    tournament_size: int,
    rng: np.random.Generator
) -> List[Individual]:
    """
    Select parents for the next generation.

    Runs `num_parents` independent tournaments over the full candidate set and
    shuffles the winners so that adjacent parents (which get paired for mating)
    are unrelated to tournament order.

    Args:
        fitnesses: Evaluated members of the current generation
        num_parents: Number of tournaments to run
        tournament_size: Draws per tournament
        rng: Random number generator

    Returns:
        List of winning individuals in random order
    """
    candidates = list(fitnesses)
    parents = [
        tournament_select(candidates, tournament_size, rng).individual
        for _ in range(num_parents)
    ]
    order = rng.permutation(len(parents))
    return [parents[int(i)] for i in order]
