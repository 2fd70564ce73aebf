"""Exceptions raised by the network engine and its persistence helpers."""
from __future__ import annotations


class MatrixError(ValueError):
    """Base class for matrix contract violations."""


class ShapeMismatch(MatrixError):
    """Operands of an element-wise operation do not share a shape."""


class DimensionMismatch(MatrixError):
    """Left operand columns differ from right operand rows in a matrix product."""


class SnapshotFormatError(ValueError):
    """A persisted network mapping is missing fields or holds the wrong types."""
