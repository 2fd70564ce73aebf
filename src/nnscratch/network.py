"""Three-layer sigmoid network trained with per-sample gradient descent."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import random
from typing import Any, Mapping, Sequence

from .config import DEFAULT_LEARNING_RATE, NetworkConfig
from .errors import ShapeMismatch, SnapshotFormatError
from .matrix import Grid, Matrix, Vector

logger = logging.getLogger(__name__)


def sigmoid(x: float) -> float:
    try:
        return 1 / (1 + math.exp(-x))
    except OverflowError:
        # e^-x exceeded the float range; the formula's limit is 0.
        return 0.0


def dsigmoid(y: float) -> float:
    """Sigmoid derivative expressed through the already activated value ``y``."""

    return y * (1 - y)


def _copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


# Keys of the persisted mapping, in field order.
_WIRE_KEYS = {
    "input_nodes": "inputNodes",
    "hidden_nodes": "hiddenNodes",
    "output_nodes": "outputNodes",
    "weights_ih": "weights_ih",
    "weights_ho": "weights_ho",
    "bias_h": "bias_h",
    "bias_o": "bias_o",
    "learning_rate": "learningRate",
}


@dataclass
class SerializedNetwork:
    """Flat snapshot of every trainable value plus the topology.

    The snapshot carries no schema version. Its only structure is the shape
    of the nested grids, which must agree with the topology fields:
    ``weights_ih`` is ``hidden x input``, ``weights_ho`` is ``output x hidden``
    and the biases are single-column grids.
    """

    input_nodes: int
    hidden_nodes: int
    output_nodes: int
    weights_ih: Grid
    weights_ho: Grid
    bias_h: Grid
    bias_o: Grid
    learning_rate: float = DEFAULT_LEARNING_RATE

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted mapping using the wire field names."""

        values = {
            "input_nodes": self.input_nodes,
            "hidden_nodes": self.hidden_nodes,
            "output_nodes": self.output_nodes,
            "weights_ih": _copy_grid(self.weights_ih),
            "weights_ho": _copy_grid(self.weights_ho),
            "bias_h": _copy_grid(self.bias_h),
            "bias_o": _copy_grid(self.bias_o),
            "learning_rate": self.learning_rate,
        }
        return {_WIRE_KEYS[name]: value for name, value in values.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SerializedNetwork":
        """Parse the persisted mapping produced by :meth:`to_dict`.

        Only the presence and basic types of the fields are checked. Whether
        the grids agree with each other is discovered by the first matrix
        operation that uses them.
        """

        missing = [key for key in _WIRE_KEYS.values() if key not in data]
        if missing:
            raise SnapshotFormatError(f"Snapshot is missing fields: {', '.join(missing)}")

        def as_int(key: str) -> int:
            value = data[key]
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or (isinstance(value, float) and not value.is_integer())
            ):
                raise SnapshotFormatError(f"{key} must be an integer, got {value!r}")
            return int(value)

        def as_grid(key: str) -> Grid:
            value = data[key]
            if not isinstance(value, list) or not all(isinstance(row, list) for row in value):
                raise SnapshotFormatError(f"{key} must be a list of rows")
            try:
                return [[float(entry) for entry in row] for row in value]
            except (TypeError, ValueError) as exc:
                raise SnapshotFormatError(f"{key} holds a non-numeric entry") from exc

        learning_rate = data["learningRate"]
        if isinstance(learning_rate, bool) or not isinstance(learning_rate, (int, float)):
            raise SnapshotFormatError(f"learningRate must be a number, got {learning_rate!r}")

        return cls(
            input_nodes=as_int("inputNodes"),
            hidden_nodes=as_int("hiddenNodes"),
            output_nodes=as_int("outputNodes"),
            weights_ih=as_grid("weights_ih"),
            weights_ho=as_grid("weights_ho"),
            bias_h=as_grid("bias_h"),
            bias_o=as_grid("bias_o"),
            learning_rate=float(learning_rate),
        )


class NeuralNetwork:
    """Fully connected input -> hidden -> output network with sigmoid units.

    Every call to :meth:`train` performs exactly one stochastic gradient step
    on a single example and mutates the weights in place. :meth:`predict` is
    read-only and valid at any point; there is no separate training mode.

    The backward pass computes the hidden-layer error from ``weights_ho``
    *after* the output-layer update of the same step has been applied. This
    differs from textbook backpropagation, which uses the pre-update weights,
    but it is the sequencing that previously saved snapshots were trained
    with, so resumed training stays bit-exact.
    """

    def __init__(
        self,
        input_nodes: int,
        hidden_nodes: int,
        output_nodes: int,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if input_nodes <= 0 or hidden_nodes <= 0 or output_nodes <= 0:
            raise ValueError(
                f"Layer sizes must be positive, got ({input_nodes}, {hidden_nodes}, {output_nodes})."
            )
        self.rng = rng if rng is not None else random.Random()
        self.input_nodes = input_nodes
        self.hidden_nodes = hidden_nodes
        self.output_nodes = output_nodes

        self.weights_ih = Matrix.random(hidden_nodes, input_nodes, self.rng)
        self.weights_ho = Matrix.random(output_nodes, hidden_nodes, self.rng)
        self.bias_h = Matrix.random(hidden_nodes, 1, self.rng)
        self.bias_o = Matrix.random(output_nodes, 1, self.rng)
        self.learning_rate = DEFAULT_LEARNING_RATE
        logger.debug("Initialised %d-%d-%d network", input_nodes, hidden_nodes, output_nodes)

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "NeuralNetwork":
        network = cls(
            config.input_nodes,
            config.hidden_nodes,
            config.output_nodes,
            rng=random.Random(config.seed),
        )
        network.set_learning_rate(config.learning_rate)
        return network

    @property
    def topology(self) -> tuple[int, int, int]:
        return self.input_nodes, self.hidden_nodes, self.output_nodes

    def set_learning_rate(self, rate: float) -> None:
        self.learning_rate = rate

    def _forward(self, inputs: Matrix) -> tuple[Matrix, Matrix]:
        hidden = Matrix.matmul(self.weights_ih, inputs)
        hidden.add_matrix(self.bias_h)
        hidden.apply(sigmoid)

        outputs = Matrix.matmul(self.weights_ho, hidden)
        outputs.add_matrix(self.bias_o)
        outputs.apply(sigmoid)
        return hidden, outputs

    def predict(self, inputs: Sequence[float]) -> Vector:
        """Return the output activations for ``inputs`` without changing state."""

        self._check_length(inputs, self.input_nodes, "input")
        _, outputs = self._forward(Matrix.from_vector(inputs))
        return outputs.to_vector()

    def train(self, inputs: Sequence[float], targets: Sequence[float]) -> None:
        """Apply one gradient step towards ``targets`` for a single example."""

        self._check_length(inputs, self.input_nodes, "input")
        self._check_length(targets, self.output_nodes, "target")
        input_matrix = Matrix.from_vector(inputs)
        target_matrix = Matrix.from_vector(targets)

        hidden, outputs = self._forward(input_matrix)

        output_errors = Matrix.subtract(target_matrix, outputs)
        gradients = Matrix.map(outputs, dsigmoid)
        gradients.hadamard(output_errors)
        gradients.scale(self.learning_rate)

        weight_ho_deltas = Matrix.matmul(gradients, Matrix.transpose(hidden))
        self.weights_ho.add_matrix(weight_ho_deltas)
        self.bias_o.add_matrix(gradients)

        # Uses the weights_ho updated just above.
        hidden_errors = Matrix.matmul(Matrix.transpose(self.weights_ho), output_errors)
        hidden_gradient = Matrix.map(hidden, dsigmoid)
        hidden_gradient.hadamard(hidden_errors)
        hidden_gradient.scale(self.learning_rate)

        weight_ih_deltas = Matrix.matmul(hidden_gradient, Matrix.transpose(input_matrix))
        self.weights_ih.add_matrix(weight_ih_deltas)
        self.bias_h.add_matrix(hidden_gradient)

    def serialize(self) -> SerializedNetwork:
        """Return an independent snapshot of the current state."""

        return SerializedNetwork(
            input_nodes=self.input_nodes,
            hidden_nodes=self.hidden_nodes,
            output_nodes=self.output_nodes,
            weights_ih=self.weights_ih.to_rows(),
            weights_ho=self.weights_ho.to_rows(),
            bias_h=self.bias_h.to_rows(),
            bias_o=self.bias_o.to_rows(),
            learning_rate=self.learning_rate,
        )

    def deserialize(self, snapshot: SerializedNetwork) -> None:
        """Replace the topology, learning rate and every matrix from ``snapshot``.

        The grids are copied, so later changes to ``snapshot`` do not leak into
        the network. The grids are not checked against each other here; an
        inconsistent snapshot fails on the next :meth:`predict` or
        :meth:`train`.
        """

        weights_ih = Matrix.from_rows(snapshot.weights_ih)
        weights_ho = Matrix.from_rows(snapshot.weights_ho)
        bias_h = Matrix.from_rows(snapshot.bias_h)
        bias_o = Matrix.from_rows(snapshot.bias_o)

        self.input_nodes = snapshot.input_nodes
        self.hidden_nodes = snapshot.hidden_nodes
        self.output_nodes = snapshot.output_nodes
        self.learning_rate = snapshot.learning_rate
        self.weights_ih = weights_ih
        self.weights_ho = weights_ho
        self.bias_h = bias_h
        self.bias_o = bias_o
        logger.debug("Restored %d-%d-%d network", *self.topology)

    @classmethod
    def from_snapshot(cls, snapshot: SerializedNetwork, *, rng: random.Random | None = None) -> "NeuralNetwork":
        """Build a network directly from ``snapshot``.

        No random initialisation happens first, so the snapshot is accepted
        under exactly the same rules as :meth:`deserialize`.
        """

        network = cls.__new__(cls)
        network.rng = rng if rng is not None else random.Random()
        network.deserialize(snapshot)
        return network

    @staticmethod
    def _check_length(values: Sequence[float], expected: int, name: str) -> None:
        if len(values) != expected:
            raise ShapeMismatch(f"Expected {expected} {name} values, got {len(values)}.")
