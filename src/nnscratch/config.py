"""Configuration dataclasses for the network and its training driver."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LEARNING_RATE = 0.1


@dataclass(slots=True)
class NetworkConfig:
    """Configuration describing the network topology and step size.

    Parameters
    ----------
    input_nodes:
        Number of features in the input vector.
    hidden_nodes:
        Size of the single hidden layer.
    output_nodes:
        Number of sigmoid outputs.
    learning_rate:
        Multiplier applied to every gradient before it is added to the
        weights. It is deliberately not range checked; negative or very large
        values are accepted and simply make training diverge.
    seed:
        Optional seed for the random source used to initialise the weights.
        Two networks built from configs with the same seed start with
        identical parameters.
    """

    input_nodes: int
    hidden_nodes: int
    output_nodes: int
    learning_rate: float = DEFAULT_LEARNING_RATE
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.input_nodes <= 0:
            raise ValueError("input_nodes must be positive")
        if self.hidden_nodes <= 0:
            raise ValueError("hidden_nodes must be positive")
        if self.output_nodes <= 0:
            raise ValueError("output_nodes must be positive")


@dataclass(slots=True)
class TrainerConfig:
    """Configuration for the stepwise training driver.

    Parameters
    ----------
    steps_per_tick:
        Number of single-sample gradient steps executed by one call to
        :meth:`Trainer.tick`.
    report_every:
        The loss over the whole sample set is recorded each time the running
        step count reaches a multiple of this value.
    seed:
        Optional seed for the sampler that picks training examples.
    """

    steps_per_tick: int = 10
    report_every: int = 100
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.steps_per_tick <= 0:
            raise ValueError("steps_per_tick must be positive")
        if self.report_every <= 0:
            raise ValueError("report_every must be positive")
