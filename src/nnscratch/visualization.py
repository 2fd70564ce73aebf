"""Plotting utilities for training progress and network weights."""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from .network import SerializedNetwork
from .trainer import TrainingHistory

POSITIVE_COLOUR = (16 / 255, 185 / 255, 129 / 255)
NEGATIVE_COLOUR = (239 / 255, 68 / 255, 68 / 255)
NODE_FACE = "#1f2937"
NODE_EDGE = "#06b6d4"


def plot_loss_history(history: TrainingHistory) -> None:
    """Plot the recorded mean squared error against the training step."""

    plt.figure()
    plt.plot(history.steps, history.losses)
    plt.xlabel("Step")
    plt.ylabel("Mean squared error")
    plt.title("Training Loss")
    plt.tight_layout()


def connection_style(weight: float) -> tuple[tuple[float, float, float, float], float]:
    """Return ``(rgba, linewidth)`` for a connection carrying ``weight``."""

    alpha = min(1.0, abs(weight) * 2)
    colour = POSITIVE_COLOUR if weight > 0 else NEGATIVE_COLOUR
    return (*colour, alpha), min(8.0, abs(weight) * 5)


def layer_positions(snapshot: SerializedNetwork) -> list[list[tuple[float, float]]]:
    """Node centres for the input, hidden and output columns in unit coordinates."""

    counts = (snapshot.input_nodes, snapshot.hidden_nodes, snapshot.output_nodes)
    positions = []
    for x, count in zip((0.0, 0.5, 1.0), counts):
        spacing = 1.0 / (count + 1)
        # First node at the top, as on screen.
        positions.append([(x, 1.0 - spacing * (j + 1)) for j in range(count)])
    return positions


def plot_network(snapshot: SerializedNetwork, ax: Optional[Axes] = None) -> Axes:
    """Draw the nodes and weighted connections of ``snapshot``.

    Positive weights are green, the rest red; stronger weights are drawn
    thicker and more opaque.
    """

    if ax is None:
        _, ax = plt.subplots()
    positions = layer_positions(snapshot)

    for weights, sources, sinks in (
        (snapshot.weights_ih, positions[0], positions[1]),
        (snapshot.weights_ho, positions[1], positions[2]),
    ):
        for i, (x0, y0) in enumerate(sources):
            for j, (x1, y1) in enumerate(sinks):
                colour, width = connection_style(weights[j][i])
                ax.plot([x0, x1], [y0, y1], color=colour, linewidth=width, zorder=1)

    for layer in positions:
        xs = [x for x, _ in layer]
        ys = [y for _, y in layer]
        ax.scatter(xs, ys, s=300, c=NODE_FACE, edgecolors=NODE_EDGE, linewidths=3, zorder=2)

    ax.set_xlim(-0.1, 1.1)
    ax.set_ylim(0.0, 1.0)
    ax.set_axis_off()
    ax.set_title(f"{snapshot.input_nodes}-{snapshot.hidden_nodes}-{snapshot.output_nodes} network")
    return ax
