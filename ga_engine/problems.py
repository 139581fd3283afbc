"""
Example problems for the GA engine.

Each Problem bundles a gene generator, a fitness function, a chromosome size
and a formatter for solutions. They are used by the CLI and the tests; the
engine itself knows nothing about them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence
import math
import numpy as np

from .data_models import GeneGenerator, Individual


@dataclass
class Problem:
    """A ready-to-run optimisation problem."""
    name: str
    chromosome_size: int
    gene_generator: GeneGenerator
    fitness_function: Callable[[Individual], float]
    describe: Callable[[Individual], str]
    optimum: float = math.inf


def random_bit(rng: np.random.Generator) -> int:
    return int(rng.integers(0, 2))


def bits_to_int(bits: Sequence[int]) -> int:
    """Decode big-endian bits into an unsigned integer."""
    value = 0
    for bit in bits:
        value = (value << 1) | int(bit)
    return value


def bits_to_float32(bits: Sequence[int]) -> float:
    """
    Decode 32 big-endian bits as an IEEE-754 single precision float.

    Raises:
        ValueError: If bits does not hold exactly 32 values
    """
    if len(bits) != 32:
        raise ValueError(f"expected 32 bits, got {len(bits)}")
    packed = np.packbits(np.asarray(bits, dtype=np.uint8))
    return float(np.frombuffer(packed.tobytes(), dtype='>f4')[0])


# =============================================================================
# Knapsack
# =============================================================================

KNAPSACK_ITEMS = ["A", "B", "C", "D", "E", "NONE"]  # NONE = empty slot
KNAPSACK_VALUES = {"A": 4, "B": 2, "C": 10, "D": 1, "E": 2, "NONE": 0}
KNAPSACK_WEIGHTS = {"A": 12, "B": 1, "C": 4, "D": 1, "E": 2, "NONE": 0}
KNAPSACK_CAPACITY = 15.0
KNAPSACK_PENALTY = 20.0


def knapsack_problem(chromosome_size: int = 15) -> Problem:
    """
    Fill a knapsack to exactly the target weight with the highest value.

    Fitness is value - 20 * |weight - 15|. With the default items the best
    achievable fitness is 36.
    """

    def gene_generator(rng: np.random.Generator) -> str:
        return KNAPSACK_ITEMS[int(rng.integers(0, len(KNAPSACK_ITEMS)))]

    def fitness_function(individual: Individual) -> float:
        value = 0.0
        weight = 0.0
        for item in individual.chromosome:
            value += KNAPSACK_VALUES[item]
            weight += KNAPSACK_WEIGHTS[item]
        return value - KNAPSACK_PENALTY * abs(weight - KNAPSACK_CAPACITY)

    def describe(individual: Individual) -> str:
        items = [item for item in individual.chromosome if item != "NONE"]
        return f"items={items}"

    return Problem(
        name="knapsack",
        chromosome_size=chromosome_size,
        gene_generator=gene_generator,
        fitness_function=fitness_function,
        describe=describe,
        optimum=36.0
    )


# =============================================================================
# 3-D point search
# =============================================================================

POINT_TARGET = (1.1, 2.2, 3.3)


def decode_point(genes: Sequence[int]) -> List[float]:
    """Split a 96-bit chromosome into three float32 coordinates."""
    return [bits_to_float32(genes[i:i + 32]) for i in range(0, 96, 32)]


def point_problem(target: Sequence[float] = POINT_TARGET) -> Problem:
    """
    Find a point close to `target` encoded as three float32 bit patterns.

    Fitness is the negative euclidean distance to the target; bit patterns
    that decode to NaN or infinity score -inf.
    """
    target_arr = np.asarray(target, dtype=float)

    def fitness_function(individual: Individual) -> float:
        point = np.asarray(decode_point(individual.chromosome.genes), dtype=float)
        if not np.all(np.isfinite(point)):
            return -math.inf
        with np.errstate(over='ignore'):
            distance = float(np.sqrt(np.sum((point - target_arr) ** 2)))
        return -distance if math.isfinite(distance) else -math.inf

    def describe(individual: Individual) -> str:
        x, y, z = decode_point(individual.chromosome.genes)
        return f"({x}, {y}, {z})"

    return Problem(
        name="point",
        chromosome_size=96,
        gene_generator=random_bit,
        fitness_function=fitness_function,
        describe=describe,
        optimum=0.0
    )


# =============================================================================
# Binary target
# =============================================================================

def binary_target_problem(target: int = 1000, bits: int = 16) -> Problem:
    """
    Evolve a bit string whose unsigned value equals `target`.

    Fitness is -|value - target|, so the optimum is 0.
    """
    if bits < 1:
        raise ValueError(f"bits must be >= 1, got {bits}")
    if not 0 <= target < 2 ** bits:
        raise ValueError(f"target {target} does not fit in {bits} bits")

    def fitness_function(individual: Individual) -> float:
        return -float(abs(bits_to_int(individual.chromosome.genes) - target))

    def describe(individual: Individual) -> str:
        return f"value={bits_to_int(individual.chromosome.genes)} target={target}"

    return Problem(
        name="binary_target",
        chromosome_size=bits,
        gene_generator=random_bit,
        fitness_function=fitness_function,
        describe=describe,
        optimum=0.0
    )


PROBLEMS: Dict[str, Callable[..., Problem]] = {
    "knapsack": knapsack_problem,
    "point": point_problem,
    "binary_target": binary_target_problem,
}


def get_problem(name: str, **params: Any) -> Problem:
    """
    Look up and build a problem by name.

    Raises:
        ValueError: If the problem name is unknown
    """
    if name not in PROBLEMS:
        raise ValueError(
            f"Unknown problem: '{name}'. Must be one of: {', '.join(sorted(PROBLEMS))}"
        )
    return PROBLEMS[name](**params)
