"""Dense 2-D matrix implemented with only the Python standard library."""
from __future__ import annotations

import random
from typing import Callable, List, Sequence

from .errors import DimensionMismatch, ShapeMismatch

Grid = List[List[float]]
Vector = List[float]


def zeros(rows: int, cols: int) -> Grid:
    return [[0.0 for _ in range(cols)] for _ in range(rows)]


class Matrix:
    """Rectangular grid of floats addressed by ``(row, col)``.

    The shape is fixed for the lifetime of the object. Methods that change
    shape (:meth:`transpose`, :meth:`matmul`) are static and return a new
    matrix; the in-place methods validate their operands before touching any
    entry, so a rejected call leaves the receiver unchanged.
    """

    __slots__ = ("rows", "cols", "data")

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Matrix shape must be positive, got ({rows}, {cols}).")
        self.rows = rows
        self.cols = cols
        self.data: Grid = zeros(rows, cols)

    # Construction -----------------------------------------------------

    @classmethod
    def from_vector(cls, values: Sequence[float]) -> "Matrix":
        """Build a ``len(values) x 1`` column vector."""

        result = cls(len(values), 1)
        for i, value in enumerate(values):
            result.data[i][0] = float(value)
        return result

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """Build a matrix from a nested grid, copying every entry."""

        if not rows or not rows[0]:
            raise ShapeMismatch("Cannot build a matrix from an empty grid.")
        cols = len(rows[0])
        for index, row in enumerate(rows):
            if len(row) != cols:
                raise ShapeMismatch(f"Row {index} has {len(row)} entries, expected {cols}.")
        result = cls(len(rows), cols)
        result.data = [[float(value) for value in row] for row in rows]
        return result

    @classmethod
    def random(cls, rows: int, cols: int, rng: random.Random) -> "Matrix":
        result = cls(rows, cols)
        result.randomize(rng)
        return result

    @classmethod
    def identity(cls, size: int) -> "Matrix":
        result = cls(size, size)
        for i in range(size):
            result.data[i][i] = 1.0
        return result

    # Read-only views --------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def to_vector(self) -> Vector:
        """Flatten the entries in row-major order."""

        return [value for row in self.data for value in row]

    def to_rows(self) -> Grid:
        return [row.copy() for row in self.data]

    def copy(self) -> "Matrix":
        result = Matrix(self.rows, self.cols)
        result.data = self.to_rows()
        return result

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.data[row][col]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, data={self.data!r})"

    # In-place operations ----------------------------------------------

    def randomize(self, rng: random.Random) -> None:
        """Fill every entry with an independent draw from ``[-1, 1)``."""

        for i in range(self.rows):
            for j in range(self.cols):
                self.data[i][j] = rng.random() * 2 - 1

    def add_matrix(self, other: "Matrix") -> None:
        self._require_same_shape(other, "addition")
        for row, other_row in zip(self.data, other.data):
            for j, value in enumerate(other_row):
                row[j] += value

    def add_scalar(self, value: float) -> None:
        for row in self.data:
            for j in range(self.cols):
                row[j] += value

    def hadamard(self, other: "Matrix") -> None:
        """Element-wise multiply by ``other``."""

        self._require_same_shape(other, "element-wise multiplication")
        for row, other_row in zip(self.data, other.data):
            for j, value in enumerate(other_row):
                row[j] *= value

    def scale(self, value: float) -> None:
        for row in self.data:
            for j in range(self.cols):
                row[j] *= value

    def apply(self, fn: Callable[[float], float]) -> None:
        for row in self.data:
            for j in range(self.cols):
                row[j] = fn(row[j])

    # Pure operations --------------------------------------------------

    @staticmethod
    def subtract(a: "Matrix", b: "Matrix") -> "Matrix":
        a._require_same_shape(b, "subtraction")
        result = Matrix(a.rows, a.cols)
        result.data = [[va - vb for va, vb in zip(row_a, row_b)] for row_a, row_b in zip(a.data, b.data)]
        return result

    @staticmethod
    def transpose(matrix: "Matrix") -> "Matrix":
        result = Matrix(matrix.cols, matrix.rows)
        result.data = [list(col) for col in zip(*matrix.data)]
        return result

    @staticmethod
    def matmul(a: "Matrix", b: "Matrix") -> "Matrix":
        """Standard matrix product ``a . b``."""

        if a.cols != b.rows:
            raise DimensionMismatch(
                f"Cannot multiply {a.rows}x{a.cols} by {b.rows}x{b.cols}: columns of A must match rows of B."
            )
        result = Matrix(a.rows, b.cols)
        for i in range(a.rows):
            a_row = a.data[i]
            out_row = result.data[i]
            for j in range(b.cols):
                total = 0.0
                for k in range(a.cols):
                    total += a_row[k] * b.data[k][j]
                out_row[j] = total
        return result

    @staticmethod
    def map(matrix: "Matrix", fn: Callable[[float], float]) -> "Matrix":
        result = Matrix(matrix.rows, matrix.cols)
        result.data = [[fn(value) for value in row] for row in matrix.data]
        return result

    def _require_same_shape(self, other: "Matrix", operation: str) -> None:
        if self.shape != other.shape:
            raise ShapeMismatch(
                f"Matrix dimensions must match for {operation}: {self.shape} vs {other.shape}."
            )
