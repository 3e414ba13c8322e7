"""Charts of batch simulation results."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from snakes_ladders.simulate import SimulationSummary


def make_win_chart(
    summary: SimulationSummary,
    output_path: str = "wins.png",
    title: str = "Snakes & Ladders Wins by Seat",
) -> str:
    """Create a horizontal bar chart of win counts, sorted descending.

    Returns the path to the saved PNG.
    """
    sorted_items = sorted(summary.wins.items(), key=lambda kv: kv[1], reverse=True)
    names = [name for name, _ in sorted_items]
    counts = [count for _, count in sorted_items]

    fig, ax = plt.subplots(figsize=(10, max(3, len(names) * 0.7)))
    bars = ax.barh(names, counts, color="#4A90D9", edgecolor="white")

    # Annotate bars with win share
    for bar, name in zip(bars, names):
        ax.text(
            bar.get_width(), bar.get_y() + bar.get_height() / 2,
            f" {summary.win_rate(name):.1%}",
            va="center", fontsize=11, fontweight="bold",
        )

    ax.set_xlabel(f"Wins out of {summary.games} games")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.invert_yaxis()  # most wins on top
    ax.set_xlim(left=0, right=max(counts + [1]) * 1.15)

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path


def make_turns_histogram(
    summary: SimulationSummary,
    output_path: str = "turns.png",
    title: str = "Snakes & Ladders Game Length",
    bins: int = 30,
) -> str:
    """Histogram of how many turns finished games took."""
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.hist(summary.turn_counts, bins=bins, color="#4A90D9", edgecolor="white")
    if summary.turn_counts:
        ax.axvline(summary.mean_turns, color="#D94A4A", linestyle="--",
                   label=f"mean {summary.mean_turns:.1f}")
        ax.legend()

    ax.set_xlabel("Turns until a player reached 100")
    ax.set_ylabel("Games")
    ax.set_title(title, fontsize=14, fontweight="bold")

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
