"""Save and restore network snapshots as JSON files.

Floats are written by :mod:`json` with their shortest round-tripping
representation, so a reloaded network reproduces the saved one bit for bit.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import SnapshotFormatError
from .network import NeuralNetwork, SerializedNetwork

logger = logging.getLogger(__name__)


def save_snapshot(snapshot: SerializedNetwork, path: str | Path) -> Path:
    """Write ``snapshot`` to ``path``, replacing any previous file in one step.

    The JSON goes to a sibling temporary file first, so an interrupted save
    leaves an existing checkpoint intact.
    """

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")
    tmp_path.write_text(json.dumps(snapshot.to_dict()), encoding="utf-8")
    tmp_path.replace(path)
    return path


def save_network(network: NeuralNetwork, path: str | Path) -> Path:
    """Write the current state of ``network`` to ``path``."""

    path = save_snapshot(network.serialize(), path)
    logger.info("Saved %d-%d-%d network to %s", *network.topology, path)
    return path


def load_snapshot(path: str | Path) -> SerializedNetwork:
    """Read a snapshot written by :func:`save_snapshot`.

    Raises :class:`FileNotFoundError` when nothing was saved at ``path`` and
    :class:`SnapshotFormatError` when the file is not a snapshot mapping.
    """

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SnapshotFormatError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"{path} does not contain a JSON object")
    return SerializedNetwork.from_dict(data)


def load_network(path: str | Path, network: NeuralNetwork | None = None) -> NeuralNetwork:
    """Restore a network from ``path``.

    When ``network`` is given its state is replaced in place and it is
    returned; otherwise a new network is built from the snapshot with
    :meth:`NeuralNetwork.from_snapshot`. Both paths accept exactly what
    :meth:`NeuralNetwork.deserialize` accepts.
    """

    snapshot = load_snapshot(path)
    if network is None:
        network = NeuralNetwork.from_snapshot(snapshot)
    else:
        network.deserialize(snapshot)
    logger.info("Loaded %d-%d-%d network from %s", *network.topology, path)
    return network
