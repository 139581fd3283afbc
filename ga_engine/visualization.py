"""
Visualization utilities for the GA engine.

Plots the fitness history collected by a HistoryRecorder.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .reporting import HistoryRecorder


def plot_fitness_history(
    history: HistoryRecorder,
    save_path: Optional[Union[str, Path]] = None,
    figsize: Tuple[int, int] = (10, 6),
    title: str = "Fitness by generation"
) -> Optional[Path]:
    """
    Plot generation-best, best-so-far and average fitness.

    Args:
        history: Recorder filled during a run (needs print_every > 0)
        save_path: Optional PNG path; the figure is only kept in memory otherwise
        figsize: Figure size (width, height) in inches
        title: Plot title

    Returns:
        Path the figure was saved to, or None if save_path was not given

    Raises:
        ValueError: If the history is empty
    """
    if len(history) == 0:
        raise ValueError("history is empty; run the engine with print_every > 0")

    generations = history.generations()

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, history.best_fitness_series(), label="Generation best", color="tab:blue")
    ax.plot(generations, history.best_so_far_series(), label="Best so far", color="tab:green", linestyle="--")
    ax.plot(generations, history.average_fitness_series(), label="Average", color="tab:orange", alpha=0.8)
    ax.set_xlabel("Generation")
    ax.set_ylabel("Fitness")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()

    output = None
    if save_path is not None:
        output = Path(save_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=150, bbox_inches='tight')
        print(f"  Saved fitness plot: {output}")

    plt.close(fig)
    return output
