"""
GA Engine - Generic Genetic Algorithm

This package evolves fixed-length chromosomes of any gene type with
tournament selection, k-point crossover and per-gene mutation.

Key Features:
- Caller-supplied fitness function and gene generator
- Single injectable numpy random Generator for reproducible runs
- Two run modes: fixed generation budget and convergence test
- Pluggable per-generation reporter (console, history recorder)

Modules:
- data_models: Core data structures (Chromosome, Individual, Population, Results)
- crossover: K-point crossover
- mutation: Per-gene point mutation
- selection: Tournament selection and parent selection
- reproduction: Initial population and next-generation production
- engine: GeneticAlgorithm orchestrator
- reporting: Generation snapshots, console reporter, history recorder
- visualization: Fitness history plots
- config: GAConfig and YAML loading
- problems: Example problems (knapsack, point search, binary target)
- cli: Command-line interface driven by YAML run configs
"""

__version__ = "0.1.0"

from .data_models import Chromosome, Individual, Population, Results, Sex
from .engine import EngineState, GeneticAlgorithm
from .config import ConfigValidationError, GAConfig

__all__ = [
    "Chromosome",
    "Individual",
    "Population",
    "Results",
    "Sex",
    "EngineState",
    "GeneticAlgorithm",
    "ConfigValidationError",
    "GAConfig",
]
