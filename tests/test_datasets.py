import pytest

from nnscratch.datasets import (
    GENDERS,
    MYANMAR_CHARS,
    NAME_SAMPLES,
    VOCAB_SIZE,
    XOR_SAMPLES,
    gender_to_vector,
    name_samples,
    name_to_vector,
    vector_to_prediction,
)


def test_xor_truth_table() -> None:
    table = {sample.inputs: sample.targets for sample in XOR_SAMPLES}
    assert table == {
        (0.0, 0.0): (0.0,),
        (0.0, 1.0): (1.0,),
        (1.0, 0.0): (1.0,),
        (1.0, 1.0): (0.0,),
    }


def test_vocabulary() -> None:
    assert VOCAB_SIZE == len(MYANMAR_CHARS) == 38
    assert len(set(MYANMAR_CHARS)) == VOCAB_SIZE


def test_name_to_vector_is_multi_hot() -> None:
    vector = name_to_vector("ကိုကို")
    assert len(vector) == VOCAB_SIZE
    assert sum(vector) == 3.0
    for char in "ကို":
        assert vector[MYANMAR_CHARS.index(char)] == 1.0


def test_name_to_vector_ignores_unknown_characters() -> None:
    assert name_to_vector("abc") == [0.0] * VOCAB_SIZE
    assert name_to_vector("") == [0.0] * VOCAB_SIZE


def test_gender_vectors() -> None:
    assert gender_to_vector("male") == [1.0, 0.0]
    assert gender_to_vector("female") == [0.0, 1.0]
    with pytest.raises(ValueError):
        gender_to_vector("other")


def test_vector_to_prediction() -> None:
    assert vector_to_prediction([0.9, 0.1]) == ("male", 0.9)
    assert vector_to_prediction([0.2, 0.7]) == ("female", 0.7)
    assert vector_to_prediction([0.5, 0.5]) == ("female", 0.5)
    with pytest.raises(ValueError):
        vector_to_prediction([0.5])


def test_name_samples_encoding() -> None:
    samples = name_samples()
    assert len(samples) == len(NAME_SAMPLES) == 16
    assert {gender for _, gender in NAME_SAMPLES} == set(GENDERS)
    for sample, (name, gender) in zip(samples, NAME_SAMPLES):
        assert len(sample.inputs) == VOCAB_SIZE
        assert list(sample.inputs) == name_to_vector(name)
        assert list(sample.targets) == gender_to_vector(gender)
