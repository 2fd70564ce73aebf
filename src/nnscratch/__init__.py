"""Feed-forward sigmoid network with backpropagation, written in pure Python."""

from .config import NetworkConfig, TrainerConfig
from .datasets import TrainingSample, XOR_SAMPLES
from .errors import DimensionMismatch, MatrixError, ShapeMismatch, SnapshotFormatError
from .matrix import Matrix
from .network import NeuralNetwork, SerializedNetwork, dsigmoid, sigmoid
from .trainer import Trainer, TrainingHistory, mean_squared_error

__all__ = [
    "NetworkConfig",
    "TrainerConfig",
    "TrainingSample",
    "XOR_SAMPLES",
    "MatrixError",
    "ShapeMismatch",
    "DimensionMismatch",
    "SnapshotFormatError",
    "Matrix",
    "NeuralNetwork",
    "SerializedNetwork",
    "sigmoid",
    "dsigmoid",
    "Trainer",
    "TrainingHistory",
    "mean_squared_error",
]
