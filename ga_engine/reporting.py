"""
Reporting utilities for the GA engine.

Per-generation snapshots, a console reporter and an in-memory history
recorder. The engine never prints by itself: it hands a GenerationStats
snapshot to whatever reporter callback it was given.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .data_models import Individual, Results


@dataclass(frozen=True)
class GenerationStats:
    """
    Snapshot of one settled generation.

    Attributes:
        generation: Generation number (1 = initial population)
        best: Best individual of this generation
        best_fitness: Fitness of `best`
        average_fitness: Mean fitness of the generation
        best_so_far: Best individual seen in the run so far
        best_so_far_fitness: Fitness of `best_so_far`
        population_size: Number of evaluated individuals
    """
    generation: int
    best: Individual
    best_fitness: float
    average_fitness: float
    best_so_far: Individual
    best_so_far_fitness: float
    population_size: int


Reporter = Callable[[GenerationStats], Any]


def _format_genes(individual: Optional[Individual], limit: int = 40) -> str:
    if individual is None:
        return "None"
    genes = individual.chromosome.genes
    if len(genes) <= limit:
        return str(genes)
    return f"{genes[:limit]}... ({len(genes)} genes)"


def print_generation_stats(stats: GenerationStats) -> None:
    """Console reporter: print one generation block."""
    print("-" * 18 + f" GENERATION {stats.generation} " + "-" * 18)
    print(f" Generation Best Solution   :  {_format_genes(stats.best)}")
    print(f" Generation Best Fitness    :  {stats.best_fitness}")
    print(f" Generation Average Fitness :  {stats.average_fitness}")
    print(f" Best Solution so Far       :  {_format_genes(stats.best_so_far)}")
    print(f" Best Fitness so Far        :  {stats.best_so_far_fitness}")
    print()


class HistoryRecorder:
    """
    Reporter that keeps every snapshot it receives.

    Can be chained to another reporter so that console output and recording
    happen together.
    """

    def __init__(self, forward_to: Optional[Reporter] = None):
        self.history: List[GenerationStats] = []
        self.forward_to = forward_to

    def __call__(self, stats: GenerationStats) -> None:
        self.history.append(stats)
        if self.forward_to is not None:
            self.forward_to(stats)

    def __len__(self) -> int:
        return len(self.history)

    def generations(self) -> List[int]:
        return [s.generation for s in self.history]

    def best_fitness_series(self) -> List[float]:
        return [s.best_fitness for s in self.history]

    def best_so_far_series(self) -> List[float]:
        return [s.best_so_far_fitness for s in self.history]

    def average_fitness_series(self) -> List[float]:
        return [s.average_fitness for s in self.history]


def print_results_summary(results: Results, describe: Optional[Callable[[Individual], str]] = None) -> None:
    """
    Print the final summary block of a run.

    Args:
        results: Results returned by the engine
        describe: Optional problem-specific formatter for the solution
    """
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    if describe is not None and results.solution is not None:
        print(f"Solution: {describe(results.solution)}")
    else:
        print(f"Solution: {_format_genes(results.solution)}")
    print(f"Fitness: {results.fitness}")
    print(f"Generation: {results.generation}")
    print(f"Generations ran: {results.generations_ran}")
    if results.duration is not None:
        print(f"Duration: {results.duration.total_seconds():.3f} seconds")
