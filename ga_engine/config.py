"""
Configuration for the GA engine.

GAConfig holds the algorithm parameters; load_ga_config reads them from a
YAML file.
"""

from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration file or section is invalid."""
    pass


@dataclass
class GAConfig:
    """Parameters of a genetic algorithm run."""

    population_size: int = 20          # Individuals per generation
    mutation_rate: float = 0.01        # Per-gene mutation probability
    num_children: int = 2              # Children per pair of parents
    crossover_points: int = 1          # k for k-point crossover
    tournament_size: int = 2           # Draws per tournament
    print_every: int = 0               # Report interval (0 = never)
    random_seed: Optional[int] = None  # None = fresh entropy

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate configuration.

        Only single-field checks are made. Combinations such as a population
        size that is not a multiple of num_children are accepted.
        """
        errors = []

        for name in ("population_size", "num_children", "tournament_size"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(f"{name} must be a positive integer, got {value!r}")

        for name in ("crossover_points", "print_every"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(f"{name} must be a non-negative integer, got {value!r}")

        if not isinstance(self.mutation_rate, (int, float)) or isinstance(self.mutation_rate, bool):
            errors.append(f"mutation_rate must be a number, got {self.mutation_rate!r}")

        if self.random_seed is not None and (
            not isinstance(self.random_seed, int) or isinstance(self.random_seed, bool)
        ):
            errors.append(f"random_seed must be an integer or null, got {self.random_seed!r}")

        return (len(errors) == 0, errors)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GAConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigValidationError(f"GA configuration must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_ga_config(config_path: Union[str, Path]) -> GAConfig:
    """
    Load GA configuration from a YAML file.

    Args:
        config_path: Path to YAML file with GAConfig fields at the top level

    Returns:
        Validated GAConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If the YAML is malformed, empty or invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if data is None:
        raise ConfigValidationError("Configuration file is empty")

    config = GAConfig.from_dict(data)
    ok, errors = config.validate()
    if not ok:
        raise ConfigValidationError("Invalid GA configuration: " + "; ".join(errors))

    return config
