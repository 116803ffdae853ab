"""Multinomial Naive Bayes text classifier with additive smoothing.

The classifier accumulates labeled documents incrementally, estimates
per-label word probabilities on demand with :meth:`NaiveBayesClassifier.train`
and scores new documents in log space.

Example::

    classifier = NaiveBayesClassifier()
    classifier.add_document("sirloin pork belly short ribs", "meat")
    classifier.add_document("okra kale fava bean radish", "veggie")
    classifier.train()

    classifier.classify("pork ribs")           # "meat"
    classifier.score_document("pork ribs")     # {"meat": ..., "veggie": ...}

    # Persist and restore, cached probabilities included
    classifier.save("model.json")
    loaded = NaiveBayesClassifier.load("model.json")

Training is explicit: adding documents after :meth:`train` leaves the
classifier untrained until :meth:`train` runs again, and scoring an untrained
classifier raises :class:`InvalidStateError`.
"""

from __future__ import annotations

import json
import logging
import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from .config import DEFAULT_SMOOTHING, ClassifierConfig
from .exceptions import DecodeError, InvalidArgumentError, InvalidStateError
from .metrics import ClassificationMetrics, compute_metrics
from .models import (
    AnyLabelModel,
    LabelModel,
    TrainedLabelModel,
    Vocabulary,
    read_field,
)
from .tokenizer import Document, as_tokens

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


@dataclass
class ClassificationResult:
    """Outcome of classifying a single document.

    Attributes:
        label: Label with the highest log-likelihood.
        scores: Raw log-likelihood per label.
        probabilities: Reported values from
            :meth:`NaiveBayesClassifier.get_document_probabilities`.
    """

    label: str
    scores: dict[str, float]
    probabilities: dict[str, float]

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "scores": self.scores,
            "probabilities": self.probabilities,
        }


class NaiveBayesClassifier:
    """Bag-of-words Naive Bayes classifier.

    Documents are raw strings (split on whitespace) or sequences of tokens.
    Each instance owns its vocabulary and label models; nothing is shared
    between instances.

    Mutating calls (:meth:`add_document`, :meth:`set_smoothing`,
    :meth:`train`) must be serialized by the caller. Once trained and no
    longer mutated, the scoring methods only read state.

    Args:
        smoothing: Additive smoothing constant used by the next :meth:`train`.
    """

    def __init__(self, smoothing: float = DEFAULT_SMOOTHING) -> None:
        self.vocabulary = Vocabulary()
        self.total_example_count = 0
        self._smoothing = DEFAULT_SMOOTHING
        self._label_models: dict[str, AnyLabelModel] = {}
        self._trained = False
        self.set_smoothing(smoothing)

    @classmethod
    def from_config(cls, config: ClassifierConfig) -> "NaiveBayesClassifier":
        """Create an empty classifier from a :class:`ClassifierConfig`."""
        return cls(smoothing=config.smoothing)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def smoothing(self) -> float:
        """Smoothing constant applied by the next :meth:`train` call."""
        return self._smoothing

    @property
    def is_trained(self) -> bool:
        """Whether cached probabilities reflect every added document."""
        return self._trained

    @property
    def label_models(self) -> Mapping[str, AnyLabelModel]:
        """Read-only view of the label models, keyed by label."""
        return MappingProxyType(self._label_models)

    def get_labels(self) -> list[str]:
        """Known labels, sorted."""
        return sorted(self._label_models)

    def set_smoothing(self, smoothing: float) -> None:
        """Set the additive smoothing constant.

        Already cached probabilities are unaffected until :meth:`train` runs.

        Raises:
            InvalidArgumentError: If ``smoothing`` is not a positive finite number.
        """
        if isinstance(smoothing, bool) or not isinstance(smoothing, (int, float)):
            raise InvalidArgumentError(
                f"smoothing must be a number, got {type(smoothing).__name__}"
            )
        try:
            value = float(smoothing)
        except OverflowError as e:
            raise InvalidArgumentError(f"smoothing is too large, got {smoothing!r}") from e
        if not (math.isfinite(value) and value > 0):
            raise InvalidArgumentError(f"smoothing must be a positive number, got {smoothing!r}")
        self._smoothing = value

    # ------------------------------------------------------------------
    # Training data
    # ------------------------------------------------------------------

    def add_document(self, document: Document, label: str) -> None:
        """Add one labeled training document.

        Documents without tokens are ignored without error.

        Args:
            document: Raw text or a sequence of tokens.
            label: Non-empty label string.

        Raises:
            InvalidArgumentError: If the label is empty or not a string, or the
                document is neither text nor a token sequence.
        """
        if not isinstance(label, str) or not label:
            raise InvalidArgumentError(f"label must be a non-empty string, got {label!r}")
        tokens = as_tokens(document)
        if not tokens:
            logger.debug("Ignoring empty document for label %r", label)
            return

        if self._trained:
            self._label_models = {
                name: model.untrained() if isinstance(model, TrainedLabelModel) else model
                for name, model in self._label_models.items()
            }
            self._trained = False

        model = self._label_models.get(label)
        if model is None:
            model = LabelModel(label=label)
            self._label_models[label] = model

        for token in tokens:
            model.add_word(token)
            self.vocabulary.add(token)

        model.example_count += 1
        self.total_example_count += 1

    def add_documents(self, examples: Iterable[tuple[Document, str]]) -> None:
        """Add ``(document, label)`` pairs in order.

        There is no rollback: if a pair is rejected, the pairs before it stay
        added.
        """
        added = 0
        for document, label in examples:
            self.add_document(document, label)
            added += 1
        logger.debug("Processed %d training documents", added)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self) -> None:
        """Recompute cached probabilities for every label from current counts.

        Raises:
            InvalidStateError: If no documents have been added.
        """
        if self.total_example_count == 0:
            raise InvalidStateError("Cannot train without any training examples. Add documents first.")

        logger.info(
            "Training %d labels on %d examples (vocabulary=%d, smoothing=%g)",
            len(self._label_models),
            self.total_example_count,
            self.vocabulary.size(),
            self._smoothing,
        )

        trained: dict[str, AnyLabelModel] = {}
        for label, model in self._label_models.items():
            counts = model.untrained() if isinstance(model, TrainedLabelModel) else model
            result = counts.train(self.vocabulary, self.total_example_count, self._smoothing)
            logger.debug(
                "Label %r: prior=%.6f default_word_probability=%.6g",
                label,
                result.prior_probability,
                result.default_word_probability,
            )
            trained[label] = result

        self._label_models = trained
        self._trained = True

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _trained_models(self) -> list[TrainedLabelModel]:
        """Trained label models in label order."""
        if not self._label_models:
            raise InvalidStateError("Classifier has no labels. Add documents and call train() first.")
        if not self._trained:
            raise InvalidStateError("Classifier not trained since the last change. Call train() first.")
        models = []
        for label in sorted(self._label_models):
            model = self._label_models[label]
            if not isinstance(model, TrainedLabelModel):
                raise InvalidStateError(f"Label {label!r} is not trained. Call train() first.")
            models.append(model)
        return models

    def score_document(self, document: Document) -> dict[str, float]:
        """Log-likelihood of the document under every label, keyed by label.

        Raises:
            InvalidStateError: If there are no labels or the classifier is not
                trained.
        """
        models = self._trained_models()
        tokens = as_tokens(document)
        return {
            model.label: model.score_document(tokens, self.vocabulary)
            for model in models
        }

    def classify(self, document: Document) -> str:
        """Return the most likely label for the document.

        Equal top scores resolve to the lexicographically smallest label.

        Raises:
            InvalidStateError: If there are no labels or the classifier is not
                trained.
        """
        scores = self.score_document(document)
        best_label = next(iter(scores))
        best_score = scores[best_label]
        for label, score in scores.items():
            logger.debug("Score for %r: %.12f", label, score)
            if score > best_score:
                best_label = label
                best_score = score
        return best_label

    def get_document_probabilities(self, document: Document) -> list[tuple[str, float]]:
        """Per-label reported values ``1 - score / sum(scores)``, sorted by label.

        This transform of the log-likelihoods ranks labels the same way as
        :meth:`classify` but is not a probability distribution: values need
        not lie in ``[0, 1]`` or sum to one. When every score is zero the
        reported value is 1.0.
        """
        scores = self.score_document(document)
        total = sum(scores.values())
        if total == 0:
            return [(label, 1.0) for label in scores]
        return [(label, 1 - score / total) for label, score in scores.items()]

    def classify_with_scores(self, document: Document) -> ClassificationResult:
        """Classify and return the label together with all per-label values."""
        tokens = as_tokens(document)
        return ClassificationResult(
            label=self.classify(tokens),
            scores=self.score_document(tokens),
            probabilities=dict(self.get_document_probabilities(tokens)),
        )

    def most_informative_words(self, label: str, top_n: int = 10) -> list[tuple[str, float]]:
        """Words observed under ``label`` that most favour it over other labels.

        Each word is ranked by ``ln p(w|label)`` minus the mean of
        ``ln p(w|other)`` across the other labels (or by ``ln p(w|label)``
        alone when there is only one label).

        Raises:
            InvalidArgumentError: If the label is unknown.
            InvalidStateError: If the classifier is not trained.
        """
        models = {model.label: model for model in self._trained_models()}
        if label not in models:
            raise InvalidArgumentError(f"Unknown label: {label!r}. Known: {sorted(models)}")

        target = models[label]
        others = [model for name, model in models.items() if name != label]

        ranked: list[tuple[str, float]] = []
        for word in target.word_probabilities:
            score = math.log(target.word_probability(word))
            if others:
                score -= sum(math.log(o.word_probability(word)) for o in others) / len(others)
            ranked.append((word, score))

        ranked.sort(key=lambda item: (-item[1], item[0]))
        return ranked[:top_n]

    def evaluate(self, documents: Sequence[Document], labels: Sequence[str]) -> ClassificationMetrics:
        """Classify held-out documents and compare against their true labels.

        Raises:
            InvalidArgumentError: If documents and labels differ in length.
        """
        if len(documents) != len(labels):
            raise InvalidArgumentError(
                f"documents ({len(documents)}) and labels ({len(labels)}) must have same length"
            )
        predictions = [self.classify(document) for document in documents]
        return compute_metrics(list(labels), predictions)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize the complete classifier state."""
        return {
            "version": FORMAT_VERSION,
            "smoothing": self._smoothing,
            "total_example_count": self.total_example_count,
            "trained": self._trained,
            "vocabulary": self.vocabulary.to_dict(),
            "labels": {
                label: self._label_models[label].to_dict()
                for label in sorted(self._label_models)
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> "NaiveBayesClassifier":
        """Rebuild a classifier from :meth:`to_dict` output.

        Cached probabilities are restored as stored, not recomputed.

        Raises:
            DecodeError: If the data is malformed or internally inconsistent.
        """
        where = "classifier"
        if not isinstance(data, dict):
            raise DecodeError("Serialized classifier must be a JSON object")
        version = data.get("version")
        if version != FORMAT_VERSION:
            raise DecodeError(f"Unsupported model format version: {version!r}")

        trained = data.get("trained")
        if not isinstance(trained, bool):
            raise DecodeError(f"{where}: field 'trained' must be a boolean")

        try:
            nb = cls(smoothing=read_field(data, "smoothing", (int, float), where))
        except InvalidArgumentError as e:
            raise DecodeError(f"{where}: {e}") from e

        nb.total_example_count = read_field(data, "total_example_count", int, where)
        nb.vocabulary = Vocabulary.from_dict(read_field(data, "vocabulary", dict, where))

        model_type = TrainedLabelModel if trained else LabelModel
        for label, raw in read_field(data, "labels", dict, where).items():
            if not label:
                raise DecodeError(f"{where}: empty label")
            if not trained and isinstance(raw, dict) and "word_probabilities" in raw:
                raise DecodeError(f"label '{label}': cached probabilities on an untrained classifier")
            nb._label_models[label] = model_type.from_dict(label, raw)

        if trained and not nb._label_models:
            raise DecodeError(f"{where}: trained classifier without labels")
        if nb.total_example_count != sum(m.example_count for m in nb._label_models.values()):
            raise DecodeError(f"{where}: total_example_count does not match label example counts")
        word_totals: Counter[str] = Counter()
        for model in nb._label_models.values():
            word_totals.update(model.word_counts)
        if word_totals != nb.vocabulary.counts:
            raise DecodeError(f"{where}: vocabulary does not match label word counts")

        nb._trained = trained
        return nb

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize the classifier to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "NaiveBayesClassifier":
        """Deserialize a classifier from :meth:`to_json` output.

        Raises:
            DecodeError: If the payload is not valid JSON or not a valid model.
        """
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Invalid classifier JSON: {e}") from e
        return cls.from_dict(data)

    def save(self, path: str | Path) -> None:
        """Save the classifier to a JSON file, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json(indent=2))
        logger.info("Saved classifier with %d labels to %s", len(self._label_models), path)

    @classmethod
    def load(cls, path: str | Path) -> "NaiveBayesClassifier":
        """Load a classifier saved with :meth:`save`.

        Raises:
            DecodeError: If the file content is not valid UTF-8 JSON or not a
                valid model.
        """
        return cls.from_json(Path(path).read_bytes())

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(labels={self.get_labels()!r}, "
            f"examples={self.total_example_count}, vocabulary={self.vocabulary.size()}, "
            f"smoothing={self._smoothing!r}, trained={self._trained})"
        )
