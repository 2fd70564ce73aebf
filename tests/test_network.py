import math
import random

import pytest

from nnscratch import (
    DimensionMismatch,
    NetworkConfig,
    NeuralNetwork,
    ShapeMismatch,
    XOR_SAMPLES,
    dsigmoid,
    mean_squared_error,
    sigmoid,
)


def make_network(seed: int = 0, sizes=(2, 4, 1)) -> NeuralNetwork:
    return NeuralNetwork(*sizes, rng=random.Random(seed))


def test_initial_shapes_and_learning_rate() -> None:
    network = make_network(sizes=(3, 5, 2))
    assert network.weights_ih.shape == (5, 3)
    assert network.weights_ho.shape == (2, 5)
    assert network.bias_h.shape == (5, 1)
    assert network.bias_o.shape == (2, 1)
    assert network.learning_rate == 0.1
    for matrix in (network.weights_ih, network.weights_ho, network.bias_h, network.bias_o):
        assert all(-1.0 <= value < 1.0 for value in matrix.to_vector())


@pytest.mark.parametrize("sizes", [(0, 2, 1), (2, 0, 1), (2, 2, 0)])
def test_constructor_rejects_empty_layers(sizes) -> None:
    with pytest.raises(ValueError):
        NeuralNetwork(*sizes)


def test_same_seed_gives_identical_initial_weights() -> None:
    a = make_network(seed=7)
    b = make_network(seed=7)
    c = make_network(seed=8)
    assert a.serialize() == b.serialize()
    assert a.serialize() != c.serialize()


def test_from_config_applies_seed_and_learning_rate() -> None:
    config = NetworkConfig(input_nodes=2, hidden_nodes=3, output_nodes=1, learning_rate=0.5, seed=4)
    a = NeuralNetwork.from_config(config)
    b = NeuralNetwork.from_config(config)
    assert a.learning_rate == 0.5
    assert a.serialize() == b.serialize()


def test_set_learning_rate_is_unchecked() -> None:
    network = make_network()
    network.set_learning_rate(-3.0)
    assert network.learning_rate == -3.0


def test_sigmoid_values() -> None:
    assert sigmoid(0.0) == 0.5
    assert sigmoid(2.0) == pytest.approx(1 / (1 + math.exp(-2.0)))
    assert sigmoid(-1000.0) == 0.0
    assert sigmoid(1000.0) == 1.0
    assert dsigmoid(0.5) == 0.25


def test_predict_matches_manual_forward_pass() -> None:
    network = make_network(seed=1, sizes=(2, 2, 1))
    x = [0.3, -0.7]
    w_ih = network.weights_ih.to_rows()
    w_ho = network.weights_ho.to_rows()
    b_h = network.bias_h.to_vector()
    b_o = network.bias_o.to_vector()
    hidden = [sigmoid(w_ih[i][0] * x[0] + w_ih[i][1] * x[1] + b_h[i]) for i in range(2)]
    expected = sigmoid(w_ho[0][0] * hidden[0] + w_ho[0][1] * hidden[1] + b_o[0])
    (output,) = network.predict(x)
    assert output == pytest.approx(expected, rel=1e-15)


def test_predict_is_pure() -> None:
    network = make_network(seed=2)
    before = network.serialize()
    first = network.predict([1.0, 0.0])
    second = network.predict([1.0, 0.0])
    assert first == second
    assert network.serialize() == before
    assert len(first) == 1
    assert 0.0 < first[0] < 1.0


def test_predict_rejects_wrong_input_length() -> None:
    network = make_network()
    with pytest.raises(ShapeMismatch):
        network.predict([0, 0, 0])


def test_train_rejects_wrong_lengths_without_mutating() -> None:
    network = make_network(seed=3)
    before = network.serialize()
    with pytest.raises(ShapeMismatch):
        network.train([0, 0, 0], [1])
    with pytest.raises(ShapeMismatch):
        network.train([0, 0], [1, 0])
    assert network.serialize() == before


def test_train_changes_every_parameter() -> None:
    network = make_network(seed=5)
    before = network.serialize()
    network.train([1.0, 1.0], [0.0])
    after = network.serialize()
    assert after.weights_ih != before.weights_ih
    assert after.weights_ho != before.weights_ho
    assert after.bias_h != before.bias_h
    assert after.bias_o != before.bias_o
    assert after.learning_rate == before.learning_rate


def test_zero_learning_rate_freezes_parameters() -> None:
    network = make_network(seed=6)
    network.set_learning_rate(0.0)
    before = network.serialize()
    network.train([0.0, 1.0], [1.0])
    assert network.serialize() == before


def test_repeated_training_lowers_squared_error() -> None:
    network = make_network(seed=9, sizes=(3, 4, 2))
    inputs, targets = [0.2, 0.9, -0.4], [0.9, 0.1]

    def squared_error() -> float:
        return sum((t - p) ** 2 for t, p in zip(targets, network.predict(inputs)))

    network.set_learning_rate(0.5)
    initial = squared_error()
    for _ in range(500):
        network.train(inputs, targets)
    assert squared_error() < initial


def test_inconsistent_snapshot_fails_on_use() -> None:
    network = make_network(seed=4)
    snapshot = network.serialize()
    snapshot.weights_ho = [[0.1, 0.2]]  # hidden layer has 4 units
    network.deserialize(snapshot)
    with pytest.raises(DimensionMismatch):
        network.predict([0.0, 1.0])


def test_snapshot_with_wrong_bias_fails_on_use() -> None:
    network = make_network(seed=4)
    snapshot = network.serialize()
    snapshot.bias_h = [[0.0], [0.0]]
    network.deserialize(snapshot)
    before = network.serialize()
    with pytest.raises(ShapeMismatch):
        network.train([0.0, 1.0], [1.0])
    assert network.serialize() == before


def _train_xor(seed: int, max_steps: int = 100_000) -> tuple[NeuralNetwork, float, int]:
    network = make_network(seed=seed)
    sampler = random.Random(seed)
    loss = mean_squared_error(network, XOR_SAMPLES)
    step = 0
    while step < max_steps:
        sample = XOR_SAMPLES[sampler.randrange(len(XOR_SAMPLES))]
        network.train(sample.inputs, sample.targets)
        step += 1
        if step >= 5000 and step % 1000 == 0:
            loss = mean_squared_error(network, XOR_SAMPLES)
            if loss < 0.05:
                break
    return network, loss, step


def test_network_learns_xor() -> None:
    # A 2-4-1 sigmoid net can occasionally settle in a poor local minimum,
    # so a couple of seeds are tried.
    for seed in (1, 2, 3):
        network, loss, steps = _train_xor(seed)
        if loss < 0.05:
            break
    assert steps >= 5000
    assert loss < 0.05
    for sample in XOR_SAMPLES:
        (output,) = network.predict(sample.inputs)
        assert round(output) == sample.targets[0]
