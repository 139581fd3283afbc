"""
CLI module for the GA engine.

Handles run configuration loading, validation, and mode dispatching.
"""

from typing import Dict, Any, Optional
from pathlib import Path
import inspect
import sys
import yaml

from .config import ConfigValidationError, GAConfig, load_ga_config
from .data_models import Results
from .engine import GeneticAlgorithm
from .problems import PROBLEMS, get_problem
from .reporting import HistoryRecorder, print_generation_stats, print_results_summary


CONVERGE_FIELDS = [
    'fitness_threshold',
    'change_threshold',
    'percent_average_threshold',
    'max_generations',
]


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    # Check mode field
    if 'mode' not in config:
        raise ConfigValidationError("Missing required field: 'mode'")

    mode = config['mode']
    if mode not in ['fixed', 'converge']:
        raise ConfigValidationError(
            f"Invalid mode: '{mode}'. Must be 'fixed' or 'converge'"
        )

    # Check common required fields
    for field in ['problem', 'run']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")

    # Validate problem section
    problem = config['problem']
    if not isinstance(problem, dict):
        raise ConfigValidationError("'problem' must be a dictionary")
    if 'name' not in problem:
        raise ConfigValidationError("Missing required field: 'problem.name'")
    if problem['name'] not in PROBLEMS:
        raise ConfigValidationError(
            f"Unknown problem: '{problem['name']}'. Must be one of: {', '.join(sorted(PROBLEMS))}"
        )
    params = problem.get('params', {})
    if not isinstance(params, dict):
        raise ConfigValidationError("'problem.params' must be a dictionary")
    accepted = inspect.signature(PROBLEMS[problem['name']]).parameters
    unknown = sorted(key for key in params if key not in accepted)
    if unknown:
        raise ConfigValidationError(
            f"Unknown parameter(s) for problem '{problem['name']}': {', '.join(unknown)}. "
            f"Accepted: {', '.join(accepted)}"
        )

    # Validate GA section
    if 'ga' in config and 'ga_config' in config:
        raise ConfigValidationError(
            "Run configuration cannot have both 'ga' and 'ga_config'. Please specify only one."
        )
    if 'ga' in config:
        ga_config = GAConfig.from_dict(config['ga'])
        ok, errors = ga_config.validate()
        if not ok:
            raise ConfigValidationError("Invalid 'ga' section: " + "; ".join(errors))
    if 'ga_config' in config and not Path(config['ga_config']).exists():
        raise ConfigValidationError(f"GA config not found: {config['ga_config']}")

    # Validate run section
    if not isinstance(config['run'], dict):
        raise ConfigValidationError("'run' must be a dictionary")

    if mode == 'fixed':
        _validate_fixed_config(config)
    elif mode == 'converge':
        _validate_converge_config(config)

    if 'output' in config and not isinstance(config['output'], dict):
        raise ConfigValidationError("'output' must be a dictionary")


def _validate_fixed_config(config: Dict[str, Any]) -> None:
    """
    Validate fixed-budget mode configuration.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'generations' not in config['run']:
        raise ConfigValidationError("Fixed mode requires 'run.generations' field")

    generations = config['run']['generations']
    if not isinstance(generations, int) or generations <= 0:
        raise ConfigValidationError(
            f"'run.generations' must be a positive integer, got: {generations}"
        )


def _validate_converge_config(config: Dict[str, Any]) -> None:
    """
    Validate convergence mode configuration.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    run = config['run']
    for field in CONVERGE_FIELDS:
        if field not in run:
            raise ConfigValidationError(f"Converge mode requires 'run.{field}' field")

    for field in CONVERGE_FIELDS[:3]:
        if not isinstance(run[field], (int, float)) or isinstance(run[field], bool):
            raise ConfigValidationError(f"'run.{field}' must be a number, got: {run[field]}")

    max_generations = run['max_generations']
    if not isinstance(max_generations, int) or max_generations <= 0:
        raise ConfigValidationError(
            f"'run.max_generations' must be a positive integer, got: {max_generations}"
        )


def _resolve_ga_config(config: Dict[str, Any]) -> GAConfig:
    if 'ga_config' in config:
        print(f"Loading GA config from: {config['ga_config']}")
        ga_config = load_ga_config(config['ga_config'])
    else:
        ga_config = GAConfig.from_dict(config.get('ga'))

    # Top-level seed overrides the GA section
    if config.get('random_seed') is not None:
        ga_config.random_seed = config['random_seed']
    return ga_config


def run_from_config(config_path: str) -> Results:
    """
    Load run configuration and execute appropriate mode.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Results of the run

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    # Load and validate config
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    validate_run_config(config)

    mode = config['mode']
    print(f"Mode: {mode}\n")

    problem_config = config['problem']
    problem = get_problem(problem_config['name'], **problem_config.get('params', {}))
    ga_config = _resolve_ga_config(config)

    print("=" * 70)
    print(f"PROBLEM: {problem.name.upper()}")
    print("=" * 70)
    print(f"Chromosome size: {problem.chromosome_size}")
    for key, value in ga_config.to_dict().items():
        print(f"{key}: {value}")
    print()

    plot_path = config.get('output', {}).get('plot')
    history = HistoryRecorder(forward_to=print_generation_stats if ga_config.print_every else None)
    if plot_path and not ga_config.print_every:
        # Record every generation for the plot without printing
        ga_config.print_every = 1

    engine = GeneticAlgorithm.from_config(
        problem.fitness_function,
        problem.gene_generator,
        problem.chromosome_size,
        ga_config,
        reporter=history
    )

    run = config['run']
    if mode == 'fixed':
        results = engine.run(run['generations'])
    elif mode == 'converge':
        results = engine.run_until_converged(
            run['fitness_threshold'],
            run['change_threshold'],
            run['percent_average_threshold'],
            run['max_generations']
        )
    else:
        # Should never reach here due to validation
        raise ConfigValidationError(f"Invalid mode: {mode}")

    print_results_summary(results, describe=problem.describe)

    if plot_path and len(history) > 0:
        from .visualization import plot_fitness_history
        plot_fitness_history(history, save_path=plot_path, title=f"{problem.name} fitness")

    print("\nRun completed successfully!")
    return results


def main(argv: Optional[list] = None) -> int:
    """Console-script entry point: ga-engine RUN_CONFIG.yaml"""
    args = sys.argv[1:] if argv is None else argv
    if not args or args[0] in ['-h', '--help', 'help']:
        print("Usage: ga-engine RUN_CONFIG.yaml")
        return 0 if args else 1

    config_path = args[0]
    if config_path.startswith('--config='):
        config_path = config_path.split('=', 1)[1]
    elif config_path == '--config':
        if len(args) < 2:
            print("Error: --config requires an argument")
            return 1
        config_path = args[1]

    try:
        run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        return 1
    return 0
