"""
Evolution engine for the GA package.

GeneticAlgorithm owns the algorithm parameters and drives the generation
loop: evaluate, select parents by tournament, reproduce by k-point crossover
and mutation, track the best individual so far, and stop on either a fixed
generation budget or a convergence test.
"""

from datetime import timedelta
from enum import Enum
from typing import Callable, List, Optional, Union
import time
import numpy as np

from .config import GAConfig
from .data_models import FitnessPair, GeneGenerator, Individual, Population, Results
from .reporting import GenerationStats, Reporter, print_generation_stats
from .reproduction import generate_population, produce_next_generation
from .selection import average_fitness, find_best, select_parents


FitnessFunction = Callable[[Individual], float]


class EngineState(Enum):
    """Phases of a run."""
    INITIALIZING = "initializing"
    EVALUATING = "evaluating"
    SELECTING = "selecting"
    REPRODUCING = "reproducing"
    TERMINATED = "terminated"


class GeneticAlgorithm:
    """
    Generic genetic algorithm over fixed-length chromosomes.

    Uses tournament selection to pick parents and k-point crossover plus
    per-gene mutation to mate them. There is no elitism: every generation
    after the first is made entirely of new children.

    Args:
        fitness_function: Scores an Individual, higher is better
        gene_generator: Draws one random gene from a numpy Generator
        chromosome_size: Genes per chromosome
        population_size: Individuals per generation
        mutation_rate: Per-gene mutation probability
        num_children: Children produced by each pair of parents
        crossover_points: k for k-point crossover
        tournament_size: Draws per tournament
        print_every: Report every N generations (0 disables reporting)
        reporter: Callback receiving a GenerationStats snapshot when a report
            is due (defaults to the console reporter)
        rng: numpy Generator, or an int seed, or None for fresh entropy

    Note:
        The parameters are not cross-checked. The number of parents per
        generation is (population_size // num_children) * 2, so a population
        size that is not a multiple of num_children drifts between
        generations.
    """

    def __init__(
        self,
        fitness_function: FitnessFunction,
        gene_generator: GeneGenerator,
        chromosome_size: int,
        population_size: int = 20,
        mutation_rate: float = 0.01,
        num_children: int = 2,
        crossover_points: int = 1,
        tournament_size: int = 2,
        print_every: int = 0,
        reporter: Optional[Reporter] = None,
        rng: Union[np.random.Generator, int, None] = None
    ):
        self.fitness_function = fitness_function
        self.gene_generator = gene_generator
        self.chromosome_size = chromosome_size
        self.population_size = population_size
        self.mutation_rate = mutation_rate
        self.num_children = num_children
        self.crossover_points = crossover_points
        self.tournament_size = tournament_size
        self.print_every = print_every
        self.reporter = reporter if reporter is not None else print_generation_stats
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.state = EngineState.INITIALIZING

    @classmethod
    def from_config(
        cls,
        fitness_function: FitnessFunction,
        gene_generator: GeneGenerator,
        chromosome_size: int,
        config: GAConfig,
        reporter: Optional[Reporter] = None,
        rng: Union[np.random.Generator, int, None] = None
    ) -> "GeneticAlgorithm":
        """
        Build an engine from a GAConfig.

        An explicit rng wins over config.random_seed.
        """
        return cls(
            fitness_function,
            gene_generator,
            chromosome_size,
            population_size=config.population_size,
            mutation_rate=config.mutation_rate,
            num_children=config.num_children,
            crossover_points=config.crossover_points,
            tournament_size=config.tournament_size,
            print_every=config.print_every,
            reporter=reporter,
            rng=rng if rng is not None else config.random_seed
        )

    @property
    def fitness_function(self) -> FitnessFunction:
        return self._fitness_function

    @fitness_function.setter
    def fitness_function(self, value: FitnessFunction) -> None:
        if value is None:
            raise ValueError("fitness_function must not be None")
        self._fitness_function = value

    @property
    def gene_generator(self) -> GeneGenerator:
        return self._gene_generator

    @gene_generator.setter
    def gene_generator(self, value: GeneGenerator) -> None:
        if value is None:
            raise ValueError("gene_generator must not be None")
        self._gene_generator = value

    @property
    def num_parents(self) -> int:
        """Parents selected per generation."""
        return (self.population_size // self.num_children) * 2

    def __repr__(self) -> str:
        return (
            f"GeneticAlgorithm(chromosome_size={self.chromosome_size}, "
            f"population_size={self.population_size}, "
            f"mutation_rate={self.mutation_rate}, "
            f"num_children={self.num_children}, "
            f"crossover_points={self.crossover_points}, "
            f"tournament_size={self.tournament_size})"
        )

    def compute_fitnesses(self, population: Population) -> List[FitnessPair]:
        """
        Score every member of a population.

        Any exception raised by the fitness function aborts the whole
        evaluation and propagates to the caller.
        """
        self.state = EngineState.EVALUATING
        return [
            FitnessPair(individual, float(self.fitness_function(individual)))
            for individual in population
        ]

    def _initial_generation(self) -> List[FitnessPair]:
        self.state = EngineState.INITIALIZING
        population = generate_population(
            self.population_size, self.chromosome_size, self.gene_generator, self.rng
        )
        return self.compute_fitnesses(population)

    def _next_generation(self, fitnesses: List[FitnessPair]) -> List[FitnessPair]:
        self.state = EngineState.SELECTING
        parents = select_parents(fitnesses, self.num_parents, self.tournament_size, self.rng)

        self.state = EngineState.REPRODUCING
        population = produce_next_generation(
            parents,
            self.num_children,
            self.crossover_points,
            self.mutation_rate,
            self.gene_generator,
            self.rng
        )
        return self.compute_fitnesses(population)

    def _report(self, fitnesses: List[FitnessPair], generation: int, best_so_far: FitnessPair) -> None:
        if self.print_every <= 0 or generation % self.print_every != 0:
            return
        generation_best = find_best(fitnesses)
        self.reporter(GenerationStats(
            generation=generation,
            best=generation_best.individual,
            best_fitness=generation_best.fitness,
            average_fitness=average_fitness(fitnesses),
            best_so_far=best_so_far.individual,
            best_so_far_fitness=best_so_far.fitness,
            population_size=len(fitnesses)
        ))

    def _finish(
        self,
        best_so_far: FitnessPair,
        generation_of_best: int,
        generations_ran: int,
        started: float,
        converged: Optional[bool] = None
    ) -> Results:
        self.state = EngineState.TERMINATED
        metadata = {} if converged is None else {"converged": converged}
        return Results(
            solution=best_so_far.individual,
            fitness=best_so_far.fitness,
            generation=generation_of_best,
            generations_ran=generations_ran,
            duration=timedelta(seconds=time.perf_counter() - started),
            metadata=metadata
        )

    def run(self, num_generations: int) -> Results:
        """
        Run for a fixed number of generations.

        Generation 1 is the initial random population; each later generation
        is produced from the previous one. The best individual so far is only
        replaced by a strictly fitter one, so the reported generation is the
        first one that reached the final best fitness.

        Args:
            num_generations: Total generations, including the initial one

        Returns:
            Results of the run
        """
        started = time.perf_counter()

        fitnesses = self._initial_generation()
        best_so_far = find_best(fitnesses)
        generation_of_best = 1

        generation = 1
        while generation < num_generations:
            self._report(fitnesses, generation, best_so_far)

            fitnesses = self._next_generation(fitnesses)
            generation_best = find_best(fitnesses)
            if generation_best.fitness > best_so_far.fitness:
                best_so_far = generation_best
                generation_of_best = generation

            generation += 1

        return self._finish(best_so_far, generation_of_best, generation, started)

    def run_until_converged(
        self,
        fitness_threshold: float,
        change_threshold: float,
        percent_average_threshold: float,
        max_generations: int
    ) -> Results:
        """
        Run until the population converges or max_generations is reached.

        After each new generation is evaluated the run stops when all of:
            1. the generation's best fitness >= fitness_threshold
            2. |best so far - generation best| <= change_threshold
            3. |generation best - average| <= |percent_average_threshold * average|

        Unlike run(), the best so far is replaced on ties as well (>=).

        Args:
            fitness_threshold: Minimum acceptable best fitness
            change_threshold: Maximum change against the best so far
            percent_average_threshold: Maximum spread between best and
                average, as a fraction of the average
            max_generations: Upper bound on generations, including the first

        Returns:
            Results of the run; metadata['converged'] tells whether the
            convergence test fired
        """
        started = time.perf_counter()

        fitnesses = self._initial_generation()
        best_so_far = find_best(fitnesses)
        generation_of_best = 1
        converged = False

        generation = 1
        while generation < max_generations:
            self._report(fitnesses, generation, best_so_far)

            fitnesses = self._next_generation(fitnesses)
            generation_best = find_best(fitnesses)
            average = average_fitness(fitnesses)

            converged = (
                generation_best.fitness >= fitness_threshold
                and abs(best_so_far.fitness - generation_best.fitness) <= change_threshold
                and abs(generation_best.fitness - average) <= abs(percent_average_threshold * average)
            )

            if generation_best.fitness >= best_so_far.fitness:
                best_so_far = generation_best
                generation_of_best = generation

            if converged:
                break

            generation += 1

        return self._finish(best_so_far, generation_of_best, generation, started, converged)
