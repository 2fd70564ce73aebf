"""Stepwise stochastic training driver."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import Sequence

from tqdm.auto import tqdm

from .config import TrainerConfig
from .datasets import TrainingSample
from .network import NeuralNetwork

logger = logging.getLogger(__name__)


def mean_squared_error(network: NeuralNetwork, samples: Sequence[TrainingSample]) -> float:
    """Average squared error of ``network`` over ``samples`` and their outputs."""

    if not samples:
        raise ValueError("samples must not be empty")
    total = 0.0
    for sample in samples:
        prediction = network.predict(sample.inputs)
        total += sum((t - p) ** 2 for t, p in zip(sample.targets, prediction)) / len(prediction)
    return total / len(samples)


@dataclass
class TrainingHistory:
    """Loss readings collected by :class:`Trainer`, keyed by step count."""

    steps: list[int] = field(default_factory=list)
    losses: list[float] = field(default_factory=list)

    def record(self, step: int, loss: float) -> None:
        self.steps.append(step)
        self.losses.append(loss)

    @property
    def latest(self) -> float | None:
        return self.losses[-1] if self.losses else None


class Trainer:
    """Drive a :class:`NeuralNetwork` through small, resumable bursts of SGD.

    Each :meth:`tick` trains on ``steps_per_tick`` examples drawn uniformly
    with replacement and then returns, so a caller can interleave training
    with checkpointing, rendering or changing the learning rate. The network
    is owned by the caller and may be swapped or restored between ticks.
    """

    def __init__(
        self,
        network: NeuralNetwork,
        samples: Sequence[TrainingSample],
        *,
        config: TrainerConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if not samples:
            raise ValueError("samples must not be empty")
        self.network = network
        self.samples = list(samples)
        self.config = config or TrainerConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.step_count = 0
        self.history = TrainingHistory()

    def tick(self, max_steps: int | None = None) -> int:
        """Run one burst of training steps and return how many were taken."""

        steps = self.config.steps_per_tick
        if max_steps is not None:
            steps = min(steps, max_steps)
        for _ in range(steps):
            sample = self.samples[self.rng.randrange(len(self.samples))]
            self.network.train(sample.inputs, sample.targets)
            self.step_count += 1
            if self.step_count % self.config.report_every == 0:
                loss = self.evaluate()
                self.history.record(self.step_count, loss)
                logger.debug("step=%d loss=%.6f", self.step_count, loss)
        return steps

    def run(self, total_steps: int, *, progress: bool = False) -> TrainingHistory:
        """Train for ``total_steps`` more steps, tick by tick."""

        if total_steps < 0:
            raise ValueError("total_steps must be non-negative")
        bar = tqdm(total=total_steps, desc="Training", disable=not progress)
        remaining = total_steps
        try:
            while remaining > 0:
                taken = self.tick(remaining)
                remaining -= taken
                bar.update(taken)
                if self.history.latest is not None:
                    bar.set_postfix(loss=f"{self.history.latest:.6f}", refresh=False)
        finally:
            bar.close()
        logger.info("Finished %d steps (total %d)", total_steps, self.step_count)
        return self.history

    def evaluate(self) -> float:
        return mean_squared_error(self.network, self.samples)

    def predictions(self) -> list[list[float]]:
        return [self.network.predict(sample.inputs) for sample in self.samples]
