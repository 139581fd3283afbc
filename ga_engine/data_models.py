"""
Data models for the GA engine.

Core data structures representing chromosomes, individuals, populations,
per-generation fitness pairs and run results.
"""

from dataclasses import InitVar, dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Sequence
import numpy as np


GeneGenerator = Callable[[np.random.Generator], Any]


class Chromosome:
    """
    Fixed-length ordered sequence of genes.

    The gene type is opaque to the engine. Length is set at construction and
    never changes: crossover and mutation only replace gene values.
    """

    def __init__(self, genes: Sequence[Any]):
        if genes is None:
            raise ValueError("genes must not be None")
        self._genes = list(genes)

    @classmethod
    def random(
        cls,
        length: int,
        gene_generator: GeneGenerator,
        rng: np.random.Generator
    ) -> "Chromosome":
        """
        Build a chromosome of independently generated genes.

        Args:
            length: Number of genes
            gene_generator: Callable drawing one random gene from the rng
            rng: Random number generator

        Returns:
            Chromosome with exactly `length` genes

        Raises:
            ValueError: If length is negative or gene_generator is None
        """
        if gene_generator is None:
            raise ValueError("gene_generator must not be None")
        if length < 0:
            raise ValueError(f"chromosome length must be >= 0, got {length}")
        return cls([gene_generator(rng) for _ in range(length)])

    @property
    def genes(self) -> List[Any]:
        """Copy of the genes; use set_gene to change a value."""
        return list(self._genes)

    def copy(self) -> "Chromosome":
        """Return an independent chromosome with the same genes."""
        return Chromosome(self._genes)

    def slice(self, start: int, stop: int) -> List[Any]:
        """Genes in [start, stop)."""
        return self._genes[start:stop]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._genes):
            raise IndexError(
                f"gene index {index} out of range for chromosome of length {len(self._genes)}"
            )

    def get_gene(self, index: int) -> Any:
        self._check_index(index)
        return self._genes[index]

    def set_gene(self, index: int, value: Any) -> None:
        self._check_index(index)
        self._genes[index] = value

    def __len__(self) -> int:
        return len(self._genes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._genes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self._genes == other._genes

    def __repr__(self) -> str:
        return f"Chromosome(genes={self._genes!r})"


class Sex(Enum):
    """Descriptive tag carried by every individual (not used for mating)."""
    FEMALE = "FEMALE"
    MALE = "MALE"

    @classmethod
    def random(cls, rng: np.random.Generator) -> "Sex":
        return cls.FEMALE if rng.random() < 0.5 else cls.MALE


@dataclass
class Individual:
    """
    Single member of a GA population.

    Attributes:
        chromosome: The genetic encoding, exclusively owned by this individual
        sex: Descriptive tag; drawn at random when not given
        age: Number of aging steps applied (starts at 0)
        rng: Generator used to draw the sex (init-only, fresh entropy if None)
    """
    chromosome: Chromosome
    sex: Optional[Sex] = None
    age: int = 0
    rng: InitVar[Optional[np.random.Generator]] = None

    def __post_init__(self, rng: Optional[np.random.Generator]):
        """Validate chromosome and draw a sex if none was given."""
        if self.chromosome is None:
            raise ValueError("chromosome must not be None")
        if self.sex is None:
            self.sex = Sex.random(rng if rng is not None else np.random.default_rng())
        elif not isinstance(self.sex, Sex):
            raise ValueError(f"sex must be a Sex, got {self.sex!r}")

    @classmethod
    def born(cls, chromosome: Chromosome, rng: np.random.Generator) -> "Individual":
        """Create a newborn individual with a random sex and age 0."""
        return cls(chromosome=chromosome, age=0, rng=rng)

    @classmethod
    def random(
        cls,
        chromosome_size: int,
        gene_generator: GeneGenerator,
        rng: np.random.Generator
    ) -> "Individual":
        """Create a newborn individual with a random chromosome."""
        return cls.born(Chromosome.random(chromosome_size, gene_generator, rng), rng)

    def copy(self) -> "Individual":
        """
        Create a deep copy of this individual.

        Returns:
            New Individual whose chromosome shares no state with this one
        """
        return Individual(chromosome=self.chromosome.copy(), sex=self.sex, age=self.age)

    def age_step(self, steps: int = 1) -> None:
        self.age += steps


class Population:
    """
    Ordered, mutable collection of individuals.

    Order carries no meaning for the algorithm and the size is not enforced
    here; the engine keeps generations at the configured size.
    """

    def __init__(self, members: Optional[Sequence[Individual]] = None):
        self.members: List[Individual] = list(members) if members is not None else []

    def add_member(self, member: Individual) -> None:
        if member is None:
            raise ValueError("member must not be None")
        self.members.append(member)

    def add_members(self, members: Sequence[Individual]) -> None:
        if members is None:
            raise ValueError("members must not be None")
        for member in members:
            self.add_member(member)

    def set_members(self, members: Sequence[Individual]) -> None:
        """Replace all members."""
        if members is None:
            raise ValueError("members must not be None")
        if any(member is None for member in members):
            raise ValueError("member must not be None")
        self.members = list(members)

    def copy(self) -> "Population":
        """Create a population of deep copies of every member."""
        return Population([member.copy() for member in self.members])

    def age(self, steps: int = 1) -> None:
        """Age every member by `steps`."""
        for member in self.members:
            member.age_step(steps)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.members)

    def __getitem__(self, index: int) -> Individual:
        return self.members[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Population):
            return NotImplemented
        return self.members == other.members

    def __repr__(self) -> str:
        return f"Population(size={len(self.members)})"


@dataclass
class FitnessPair:
    """An individual and the fitness it scored in one generation."""
    individual: Individual
    fitness: float


@dataclass(frozen=True)
class Results:
    """
    Immutable snapshot of a finished run.

    Attributes:
        solution: Best individual found
        fitness: Fitness of the best individual
        generation: Generation in which the best individual was recorded
        generations_ran: Number of generations executed
        duration: Wall-clock time of the run, if measured
    """
    solution: Optional[Individual]
    fitness: float
    generation: int
    generations_ran: int
    duration: Optional[timedelta] = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert results to a plain dictionary for summaries.

        Returns:
            Dictionary with printable values
        """
        return {
            "solution": self.solution.chromosome.genes if self.solution is not None else None,
            "fitness": self.fitness,
            "generation": self.generation,
            "generations_ran": self.generations_ran,
            "duration_seconds": self.duration.total_seconds() if self.duration is not None else None,
        }
