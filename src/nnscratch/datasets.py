"""Small built-in datasets and their vector encoders."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class TrainingSample:
    """One supervised example: an input vector and its target vector."""

    inputs: tuple[float, ...]
    targets: tuple[float, ...]


XOR_SAMPLES: tuple[TrainingSample, ...] = (
    TrainingSample((0.0, 0.0), (0.0,)),
    TrainingSample((0.0, 1.0), (1.0,)),
    TrainingSample((1.0, 0.0), (1.0,)),
    TrainingSample((1.0, 1.0), (0.0,)),
)

# Basic Myanmar character set; names using characters outside it lose them
# during encoding.
MYANMAR_CHARS: tuple[str, ...] = tuple("ကခဂဃငစဆဇဈညတထဒဓနပဖဗဘမယရလဝသဟဠအာိီုူေဲံ့း")
VOCAB_SIZE = len(MYANMAR_CHARS)
_CHAR_INDEX = {char: index for index, char in enumerate(MYANMAR_CHARS)}

GENDERS: tuple[str, str] = ("male", "female")

NAME_SAMPLES: tuple[tuple[str, str], ...] = (
    ("အောင်အောင်", "male"),
    ("ကျော်စွာ", "male"),
    ("မင်းသူ", "male"),
    ("ကိုကို", "male"),
    ("ဇော်ဇော်", "male"),
    ("သူရ", "male"),
    ("နေမျိုး", "male"),
    ("စည်သူ", "male"),
    ("စုစု", "female"),
    ("ခင်ခင်", "female"),
    ("မေသူ", "female"),
    ("နွယ်နွယ်", "female"),
    ("စန္ဒာ", "female"),
    ("မိုးမိုး", "female"),
    ("အေးအေး", "female"),
    ("သီတာ", "female"),
)


def name_to_vector(name: str) -> list[float]:
    """Multi-hot encode the characters of ``name`` over :data:`MYANMAR_CHARS`.

    A ``1.0`` marks that the character occurs at least once; repeated and
    unknown characters add nothing.
    """

    vector = [0.0] * VOCAB_SIZE
    for char in name:
        index = _CHAR_INDEX.get(char)
        if index is not None:
            vector[index] = 1.0
    return vector


def gender_to_vector(gender: str) -> list[float]:
    if gender == "male":
        return [1.0, 0.0]
    if gender == "female":
        return [0.0, 1.0]
    raise ValueError(f"gender must be one of {GENDERS}, got {gender!r}")


def vector_to_prediction(output: Sequence[float]) -> tuple[str, float]:
    """Map a two-unit output to ``(gender, confidence)``; ties resolve to female."""

    if len(output) != 2:
        raise ValueError(f"Expected a two-element output vector, got {len(output)} values")
    male_confidence, female_confidence = output
    if male_confidence > female_confidence:
        return "male", male_confidence
    return "female", female_confidence


def name_samples() -> list[TrainingSample]:
    return [
        TrainingSample(tuple(name_to_vector(name)), tuple(gender_to_vector(gender)))
        for name, gender in NAME_SAMPLES
    ]
