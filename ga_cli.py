#!/usr/bin/env python3
"""
GA Engine CLI - Minimal entry point.

This is the command-line interface for the genetic algorithm engine.
All configuration is specified in YAML files.

Usage:
    python3 ga_cli.py run_config.yaml
    python3 ga_cli.py --config run_config.yaml
    python3 ga_cli.py --help

Examples:
    # Fixed generation budget on the knapsack problem
    python3 ga_cli.py examples/knapsack_fixed.yaml

    # Run the 3-D point search until it converges
    python3 ga_cli.py examples/point_converge.yaml
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def main():
    """Main entry point for GA CLI."""
    # Handle help
    if len(sys.argv) < 2 or sys.argv[1] in ['-h', '--help', 'help']:
        print(__doc__)
        sys.exit(0 if len(sys.argv) > 1 else 1)

    from ga_engine.cli import main as cli_main
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == '__main__':
    main()
