"""Data models for the Naive Bayes estimator.

A label moves between two explicit states. :class:`LabelModel` holds only the
word-count statistics collected while documents are added. Training turns it
into a :class:`TrainedLabelModel`, which additionally carries the cached prior
and word probabilities. Only the trained state can score documents, so an
undefined probability can never be read.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Union

from .exceptions import DecodeError, InvalidArgumentError, InvalidStateError


# ---------------------------------------------------------------------------
# Decoding helpers
# ---------------------------------------------------------------------------

def read_field(data: dict, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    """Fetch ``data[key]`` and check its type, raising DecodeError otherwise."""
    if key not in data:
        raise DecodeError(f"{where}: missing field '{key}'")
    value = data[key]
    # bool is an int subclass but never a valid count or probability
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodeError(f"{where}: field '{key}' has invalid type {type(value).__name__}")
    return value


def _count_map(raw: Any, where: str) -> dict[str, int]:
    if not isinstance(raw, dict):
        raise DecodeError(f"{where}: expected an object of token counts")
    counts: dict[str, int] = {}
    for token, count in raw.items():
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise DecodeError(f"{where}: invalid count {count!r} for token {token!r}")
        counts[token] = count
    return counts


def _probability(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"{where}: probability must be a number, got {value!r}")
    value = float(value)
    if not 0.0 < value <= 1.0:
        raise DecodeError(f"{where}: probability {value!r} outside (0, 1]")
    return value


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

@dataclass
class Vocabulary:
    """Append-only set of every token seen in training.

    Each token also keeps its total number of occurrences across all labels.
    Tokens are never removed, so the size only grows.
    """

    counts: Counter[str] = field(default_factory=Counter, repr=False)

    def add(self, token: str) -> None:
        self.counts[token] += 1

    def size(self) -> int:
        """Number of distinct tokens."""
        return len(self.counts)

    def count(self, token: str) -> int:
        """Occurrences of ``token`` across every training document."""
        return self.counts.get(token, 0)

    def __contains__(self, token: object) -> bool:
        return token in self.counts

    def __len__(self) -> int:
        return len(self.counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def to_dict(self) -> dict[str, int]:
        return dict(sorted(self.counts.items()))

    @classmethod
    def from_dict(cls, data: Any) -> "Vocabulary":
        return cls(counts=Counter(_count_map(data, "vocabulary")))


# ---------------------------------------------------------------------------
# Label models
# ---------------------------------------------------------------------------

@dataclass
class LabelModel:
    """Word statistics for one label, before training.

    Attributes:
        label: Label identifier.
        example_count: Documents added with this label.
        total_word_count: Token occurrences (with repetition) in those documents.
        word_counts: Occurrences per token within this label.
    """

    label: str
    example_count: int = 0
    total_word_count: int = 0
    word_counts: dict[str, int] = field(default_factory=dict, repr=False)

    is_trained = False

    def add_word(self, token: str) -> None:
        """Record one occurrence of ``token`` under this label."""
        self.total_word_count += 1
        self.word_counts[token] = self.word_counts.get(token, 0) + 1

    def train(
        self,
        vocabulary: Vocabulary,
        total_example_count: int,
        smoothing: float,
    ) -> "TrainedLabelModel":
        """Estimate prior and smoothed word probabilities from current counts.

        Every vocabulary word gets strictly positive mass: observed words
        receive ``(count + smoothing) / denominator``, unobserved ones share
        ``smoothing / denominator`` where
        ``denominator = total_word_count + smoothing * |vocabulary|``.

        Args:
            vocabulary: Vocabulary shared by all labels.
            total_example_count: Documents added across every label.
            smoothing: Additive smoothing constant, strictly positive.

        Returns:
            The trained state of this label. The counts object is shared, not
            copied.

        Raises:
            InvalidStateError: If there are no training examples at all, or
                both the label and the vocabulary are empty.
            InvalidArgumentError: If ``smoothing`` is not positive.
        """
        if total_example_count <= 0:
            raise InvalidStateError("Cannot train without any training examples.")
        if not smoothing > 0:
            raise InvalidArgumentError(f"smoothing must be positive, got {smoothing!r}")

        denominator = self.total_word_count + smoothing * vocabulary.size()
        if denominator == 0:
            raise InvalidStateError(f"Cannot train label {self.label!r} on an empty vocabulary.")
        word_probabilities = {
            token: (count + smoothing) / denominator
            for token, count in self.word_counts.items()
            if token in vocabulary
        }
        return TrainedLabelModel(
            counts=self,
            prior_probability=self.example_count / total_example_count,
            default_word_probability=smoothing / denominator,
            word_probabilities=word_probabilities,
        )

    def to_dict(self) -> dict:
        return {
            "example_count": self.example_count,
            "total_word_count": self.total_word_count,
            "word_counts": dict(sorted(self.word_counts.items())),
        }

    @classmethod
    def from_dict(cls, label: str, data: Any) -> "LabelModel":
        where = f"label '{label}'"
        if not isinstance(data, dict):
            raise DecodeError(f"{where}: expected an object")
        model = cls(
            label=label,
            example_count=read_field(data, "example_count", int, where),
            total_word_count=read_field(data, "total_word_count", int, where),
            word_counts=_count_map(read_field(data, "word_counts", dict, where), where),
        )
        if model.example_count < 1:
            raise DecodeError(f"{where}: example_count must be at least 1")
        if model.total_word_count != sum(model.word_counts.values()):
            raise DecodeError(f"{where}: total_word_count does not match word_counts")
        return model


@dataclass(frozen=True)
class TrainedLabelModel:
    """A label's counts together with the probabilities estimated from them."""

    counts: LabelModel
    prior_probability: float
    default_word_probability: float
    word_probabilities: dict[str, float] = field(repr=False)

    is_trained = True

    @property
    def label(self) -> str:
        return self.counts.label

    @property
    def example_count(self) -> int:
        return self.counts.example_count

    @property
    def total_word_count(self) -> int:
        return self.counts.total_word_count

    @property
    def word_counts(self) -> dict[str, int]:
        return self.counts.word_counts

    def untrained(self) -> LabelModel:
        """Drop the cached probabilities, keeping the counts."""
        return self.counts

    def word_probability(self, token: str) -> float:
        """``p(token | label)``, falling back to the unseen-word probability."""
        return self.word_probabilities.get(token, self.default_word_probability)

    def score_document(self, tokens: Iterable[str], vocabulary: Vocabulary) -> float:
        """Log-likelihood of ``tokens`` under this label.

        Tokens outside the vocabulary carry no information for any label and
        are skipped.
        """
        total = 0.0
        for token in tokens:
            if token in vocabulary:
                total += math.log(self.word_probability(token))
        return math.log(self.prior_probability) + total

    def to_dict(self) -> dict:
        data = self.counts.to_dict()
        data["prior_probability"] = self.prior_probability
        data["default_word_probability"] = self.default_word_probability
        data["word_probabilities"] = dict(sorted(self.word_probabilities.items()))
        return data

    @classmethod
    def from_dict(cls, label: str, data: Any) -> "TrainedLabelModel":
        where = f"label '{label}'"
        counts = LabelModel.from_dict(label, data)
        raw_probabilities = read_field(data, "word_probabilities", dict, where)
        word_probabilities: dict[str, float] = {}
        for token, value in raw_probabilities.items():
            if token not in counts.word_counts:
                raise DecodeError(f"{where}: probability for unobserved token {token!r}")
            word_probabilities[token] = _probability(value, where)
        return cls(
            counts=counts,
            prior_probability=_probability(
                read_field(data, "prior_probability", (int, float), where), where
            ),
            default_word_probability=_probability(
                read_field(data, "default_word_probability", (int, float), where), where
            ),
            word_probabilities=word_probabilities,
        )


AnyLabelModel = Union[LabelModel, TrainedLabelModel]
