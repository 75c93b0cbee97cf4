"""Barplot of motif prevalence, the default plotting tool of the pipeline."""

import sys
from typing import List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from freqmotif.io import read_results
from freqmotif.ranking import LOW_COMPLEXITY

COLORS = {"LowComplexity": "red", "DiNucleotide": "blue", "TriNucleotide": "lightblue"}
DISPLAY_LIMIT = 0.05


def motif_type(label: str) -> str:
    if label == LOW_COMPLEXITY:
        return "LowComplexity"
    return "DiNucleotide" if len(label) == 2 else "TriNucleotide"


def plot_barplot(table: pd.DataFrame, ratio: float, ylim: float = DISPLAY_LIMIT):
    """
    Draw the proportion of reads per motif as a bar chart.

    Zero rows are dropped. The y axis is cut at ``ylim``; bars above it keep
    their height and get their value printed at the top of the axis.

    Returns:
        The matplotlib figure and axes
    """
    data = table[table["Proportion"] > 0].sort_values("Proportion", ascending=False, kind="mergesort")
    colors = [COLORS[motif_type(label)] for label in data["Motif"]]

    fig, ax = plt.subplots(figsize=(12, 8), facecolor="white")
    positions = range(len(data))
    ax.bar(positions, data["Proportion"], color=colors)
    ax.set_xticks(list(positions))
    ax.set_xticklabels(data["Motif"], rotation=45, ha="right")
    ax.set_ylim(0, ylim)

    for position, proportion in zip(positions, data["Proportion"]):
        if proportion > ylim:
            ax.text(position, ylim, f"{proportion:.4f}", ha="center", va="center", color="black", fontsize=10)

    handles = [plt.Rectangle((0, 0), 1, 1, color=color) for color in COLORS.values()]
    ax.legend(handles, list(COLORS), title="Type")
    ax.set_title(f"Proportion of reads with at least {ratio:.1f}% of given motif", fontsize=16)
    ax.set_xlabel("Motif", fontsize=16)
    ax.set_ylabel("Proportion", fontsize=16)
    ax.set_facecolor("white")
    ax.grid(True, axis="y", color="0.9")
    ax.set_axisbelow(True)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)

    return fig, ax


def main_plot(argv: Optional[List[str]] = None):
    """Command line entry point: ``freq-motif-barplot <input_csv> <output_png> <ratio>``."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 3:
        print("Usage: freq-motif-barplot <input_csv> <output_png> <ratio>", file=sys.stderr)
        sys.exit(1)

    input_csv, output_png, ratio = args[0], args[1], float(args[2])
    fig, _ = plot_barplot(read_results(input_csv), ratio)
    fig.savefig(output_png, facecolor="white", bbox_inches="tight")
    plt.close(fig)


if __name__ == "__main__":
    main_plot()
