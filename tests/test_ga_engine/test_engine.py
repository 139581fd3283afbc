"""
Tests for the evolution engine.

Tests construction, both run modes, best-so-far update rules, reporting
hooks and the known population-size drift.
"""

import unittest
from datetime import timedelta
import numpy as np

from ga_engine.config import GAConfig
from ga_engine.engine import EngineState, GeneticAlgorithm
from ga_engine.problems import binary_target_problem
from ga_engine.reporting import HistoryRecorder, print_generation_stats


def bit_generator(rng):
    return int(rng.integers(0, 2))


def ones_count(individual):
    return float(sum(individual.chromosome.genes))


class RecordingFitness:
    """Fitness function that remembers every evaluation."""

    def __init__(self, func):
        self.func = func
        self.calls = []

    def __call__(self, individual):
        fitness = self.func(individual)
        self.calls.append((individual, fitness))
        return fitness


class TestEngineConstruction(unittest.TestCase):
    """Test engine construction and parameters."""

    def test_defaults(self):
        ga = GeneticAlgorithm(ones_count, bit_generator, 10)
        self.assertEqual(ga.population_size, 20)
        self.assertEqual(ga.mutation_rate, 0.01)
        self.assertEqual(ga.num_children, 2)
        self.assertEqual(ga.crossover_points, 1)
        self.assertEqual(ga.tournament_size, 2)
        self.assertEqual(ga.print_every, 0)
        self.assertIs(ga.reporter, print_generation_stats)
        self.assertIsInstance(ga.rng, np.random.Generator)
        self.assertEqual(ga.state, EngineState.INITIALIZING)

    def test_missing_fitness_function(self):
        with self.assertRaises(ValueError):
            GeneticAlgorithm(None, bit_generator, 10)

    def test_missing_gene_generator(self):
        with self.assertRaises(ValueError):
            GeneticAlgorithm(ones_count, None, 10)

    def test_setters_reject_none(self):
        ga = GeneticAlgorithm(ones_count, bit_generator, 10)
        with self.assertRaises(ValueError):
            ga.fitness_function = None
        with self.assertRaises(ValueError):
            ga.gene_generator = None

    def test_num_parents(self):
        ga = GeneticAlgorithm(ones_count, bit_generator, 10, population_size=20, num_children=3)
        self.assertEqual(ga.num_parents, 12)

    def test_inconsistent_settings_accepted(self):
        """Test size combinations are not validated."""
        ga = GeneticAlgorithm(
            ones_count, bit_generator, 4,
            population_size=5, num_children=2, tournament_size=50, rng=0
        )
        results = ga.run(3)
        self.assertEqual(results.generations_ran, 3)

    def test_from_config(self):
        config = GAConfig(population_size=10, mutation_rate=0.2, num_children=5,
                          crossover_points=3, tournament_size=4, random_seed=9)
        ga = GeneticAlgorithm.from_config(ones_count, bit_generator, 6, config)

        self.assertEqual(ga.population_size, 10)
        self.assertEqual(ga.mutation_rate, 0.2)
        self.assertEqual(ga.num_children, 5)
        self.assertEqual(ga.crossover_points, 3)
        self.assertEqual(ga.tournament_size, 4)

        same = GeneticAlgorithm.from_config(ones_count, bit_generator, 6, config)
        self.assertEqual(ga.run(5).solution, same.run(5).solution)


class TestFixedBudgetRun(unittest.TestCase):
    """Test run(num_generations)."""

    def test_single_generation_returns_best_of_initial_population(self):
        """Test run(1) evaluates only the initial population."""
        fitness = RecordingFitness(ones_count)
        ga = GeneticAlgorithm(fitness, bit_generator, 12, population_size=10, rng=42)

        results = ga.run(1)

        self.assertEqual(results.generations_ran, 1)
        self.assertEqual(results.generation, 1)
        self.assertEqual(len(fitness.calls), 10)

        best_individual, best_fitness = fitness.calls[0]
        for individual, value in fitness.calls[1:]:
            if value > best_fitness:
                best_individual, best_fitness = individual, value
        self.assertIs(results.solution, best_individual)
        self.assertEqual(results.fitness, best_fitness)

    def test_generations_ran(self):
        for n in [1, 2, 10]:
            ga = GeneticAlgorithm(ones_count, bit_generator, 8, rng=n)
            self.assertEqual(ga.run(n).generations_ran, n)

    def test_evaluation_count(self):
        """Test every generation is fully evaluated exactly once."""
        fitness = RecordingFitness(ones_count)
        ga = GeneticAlgorithm(fitness, bit_generator, 8, population_size=12, num_children=3, rng=1)
        ga.run(6)
        self.assertEqual(len(fitness.calls), 12 * 6)

    def test_strict_update_keeps_first_generation_on_ties(self):
        """Test fixed mode only moves best-so-far on strict improvement."""
        ga = GeneticAlgorithm(lambda ind: 1.0, bit_generator, 5, rng=3)
        results = ga.run(10)
        self.assertEqual(results.generation, 1)
        self.assertEqual(results.fitness, 1.0)
        self.assertEqual(results.generations_ran, 10)

    def test_best_so_far_monotonic(self):
        """Test best-so-far never decreases over 50 generations."""
        problem = binary_target_problem(target=40000, bits=16)
        history = HistoryRecorder()
        ga = GeneticAlgorithm(
            problem.fitness_function, problem.gene_generator, problem.chromosome_size,
            population_size=20, mutation_rate=0.02, print_every=1, reporter=history, rng=2024
        )

        results = ga.run(50)

        series = history.best_so_far_series()
        self.assertEqual(len(series), 49)
        for earlier, later in zip(series, series[1:]):
            self.assertLessEqual(earlier, later)
        self.assertGreaterEqual(results.fitness, max(history.best_fitness_series()))
        self.assertGreaterEqual(results.fitness, series[0])

    def test_state_and_duration(self):
        ga = GeneticAlgorithm(ones_count, bit_generator, 6, rng=0)
        results = ga.run(4)
        self.assertEqual(ga.state, EngineState.TERMINATED)
        self.assertIsInstance(results.duration, timedelta)
        self.assertGreaterEqual(results.duration.total_seconds(), 0.0)

    def test_seeded_runs_are_reproducible(self):
        """Test the same seed produces the same run."""
        a = GeneticAlgorithm(ones_count, bit_generator, 16, rng=123).run(20)
        b = GeneticAlgorithm(ones_count, bit_generator, 16, rng=123).run(20)
        self.assertEqual(a.solution, b.solution)
        self.assertEqual(a.fitness, b.fitness)
        self.assertEqual(a.generation, b.generation)

    def test_fitness_errors_propagate(self):
        """Test a failing fitness function aborts the run."""
        def broken(individual):
            raise RuntimeError("evaluation failed")

        ga = GeneticAlgorithm(broken, bit_generator, 4, rng=0)
        with self.assertRaises(RuntimeError):
            ga.run(3)

    def test_fitness_error_in_later_generation(self):
        calls = []

        def flaky(individual):
            calls.append(1)
            if len(calls) > 20:
                raise RuntimeError("evaluation failed")
            return 0.0

        ga = GeneticAlgorithm(flaky, bit_generator, 4, population_size=20, rng=0)
        with self.assertRaises(RuntimeError):
            ga.run(5)


class TestConvergenceRun(unittest.TestCase):
    """Test run_until_converged(...)."""

    def test_converges_immediately_on_flat_landscape(self):
        """Test all three criteria hold at once on a constant fitness."""
        ga = GeneticAlgorithm(lambda ind: 1.0, bit_generator, 5, rng=0)
        results = ga.run_until_converged(1.0, 0.0, 0.0, 100)

        self.assertEqual(results.generations_ran, 1)
        self.assertEqual(results.generation, 1)
        self.assertTrue(results.metadata['converged'])
        self.assertEqual(ga.state, EngineState.TERMINATED)

    def test_non_strict_update_on_ties(self):
        """Test convergence mode moves best-so-far on equal fitness."""
        ga = GeneticAlgorithm(lambda ind: 1.0, bit_generator, 5, rng=0)
        results = ga.run_until_converged(1e9, 0.0, 0.0, 10)

        self.assertEqual(results.generations_ran, 10)
        self.assertEqual(results.generation, 9)
        self.assertFalse(results.metadata['converged'])

    def test_update_rules_differ_between_modes(self):
        fixed = GeneticAlgorithm(lambda ind: 0.5, bit_generator, 3, rng=1).run(6)
        converge = GeneticAlgorithm(lambda ind: 0.5, bit_generator, 3, rng=1).run_until_converged(
            10.0, 0.0, 0.0, 6
        )
        self.assertEqual(fixed.generation, 1)
        self.assertEqual(converge.generation, 5)

    def test_terminates_early_at_known_optimum(self):
        """Test a run stops before max_generations once the optimum is reached."""
        def capped_ones(individual):
            return min(float(sum(individual.chromosome.genes)), 2.0)

        ga = GeneticAlgorithm(capped_ones, bit_generator, 10, population_size=20,
                              mutation_rate=0.01, tournament_size=3, rng=17)
        results = ga.run_until_converged(2.0, 0.0, 0.0, 1000)

        self.assertTrue(results.metadata['converged'])
        self.assertLess(results.generations_ran, 1000)
        self.assertEqual(results.fitness, 2.0)

    def test_max_generations_bound(self):
        """Test the run stops at max_generations when never converging."""
        fitness = RecordingFitness(ones_count)
        ga = GeneticAlgorithm(fitness, bit_generator, 8, population_size=10, rng=4)
        results = ga.run_until_converged(100.0, 0.0, 0.0, 7)

        self.assertEqual(results.generations_ran, 7)
        self.assertFalse(results.metadata['converged'])
        self.assertEqual(len(fitness.calls), 10 * 7)

    def test_threshold_blocks_convergence(self):
        """Test an unreachable fitness threshold prevents early stopping."""
        ga = GeneticAlgorithm(lambda ind: 3.0, bit_generator, 4, rng=5)
        results = ga.run_until_converged(3.5, 10.0, 10.0, 12)
        self.assertEqual(results.generations_ran, 12)


class TestReporting(unittest.TestCase):
    """Test reporter hooks and drift."""

    def test_reporter_called_every_n_generations(self):
        history = HistoryRecorder()
        ga = GeneticAlgorithm(ones_count, bit_generator, 6, print_every=5, reporter=history, rng=8)
        ga.run(21)
        self.assertEqual(history.generations(), [5, 10, 15, 20])

    def test_no_reports_when_disabled(self):
        history = HistoryRecorder()
        ga = GeneticAlgorithm(ones_count, bit_generator, 6, reporter=history, rng=8)
        ga.run(10)
        self.assertEqual(len(history), 0)

    def test_snapshot_contents(self):
        history = HistoryRecorder()
        ga = GeneticAlgorithm(ones_count, bit_generator, 6, population_size=8,
                              print_every=1, reporter=history, rng=8)
        ga.run(4)

        for stats in history.history:
            self.assertEqual(stats.population_size, 8)
            self.assertLessEqual(stats.average_fitness, stats.best_fitness)
            self.assertLessEqual(stats.best_fitness, stats.best_so_far_fitness)

    def test_population_size_drift(self):
        """Test a population size not divisible by num_children drifts."""
        history = HistoryRecorder()
        ga = GeneticAlgorithm(ones_count, bit_generator, 6, population_size=5, num_children=2,
                              print_every=1, reporter=history, rng=8)
        ga.run(4)

        sizes = [stats.population_size for stats in history.history]
        self.assertEqual(sizes, [5, 4, 4])


if __name__ == '__main__':
    unittest.main()
