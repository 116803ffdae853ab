"""Hold-out evaluation metrics for predicted labels."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .exceptions import InvalidArgumentError


@dataclass
class ClassificationMetrics:
    """Evaluation metrics comparing true and predicted labels.

    Attributes:
        accuracy: Fraction of predictions equal to the true label.
        per_label: Precision, recall and F1 for each label.
        macro_f1: Unweighted mean F1 across labels.
        weighted_f1: Support-weighted mean F1 across labels.
        confusion_matrix: ``{true_label: {predicted_label: count}}``.
        support: Number of true examples per label.
    """

    accuracy: float = 0.0
    per_label: dict[str, dict[str, float]] = field(default_factory=dict)
    macro_f1: float = 0.0
    weighted_f1: float = 0.0
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    support: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "accuracy": round(self.accuracy, 4),
            "macro_f1": round(self.macro_f1, 4),
            "weighted_f1": round(self.weighted_f1, 4),
            "per_label": {
                label: {k: round(v, 4) for k, v in scores.items()}
                for label, scores in self.per_label.items()
            },
            "confusion_matrix": self.confusion_matrix,
            "support": self.support,
        }

    def summary(self) -> str:
        """Human-readable summary of metrics."""
        lines = [
            f"Accuracy: {self.accuracy:.2%}",
            f"Macro F1: {self.macro_f1:.4f}",
            f"Weighted F1: {self.weighted_f1:.4f}",
            "",
            f"{'Label':<20} {'Precision':>10} {'Recall':>10} {'F1':>10} {'Support':>10}",
            "-" * 62,
        ]
        for label in sorted(self.per_label):
            scores = self.per_label[label]
            lines.append(
                f"{label:<20} {scores['precision']:>10.4f} {scores['recall']:>10.4f} "
                f"{scores['f1']:>10.4f} {self.support.get(label, 0):>10}"
            )
        return "\n".join(lines)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def compute_metrics(y_true: list[str], y_pred: list[str]) -> ClassificationMetrics:
    """Compute accuracy, per-label scores and the confusion matrix.

    Raises:
        InvalidArgumentError: If the two label lists differ in length.
    """
    if len(y_true) != len(y_pred):
        raise InvalidArgumentError(
            f"y_true ({len(y_true)}) and y_pred ({len(y_pred)}) must have the same length"
        )

    labels = sorted(set(y_true) | set(y_pred))
    matrix = {label: {other: 0 for other in labels} for label in labels}
    for true, pred in zip(y_true, y_pred):
        matrix[true][pred] += 1

    support = Counter(y_true)
    per_label: dict[str, dict[str, float]] = {}
    for label in labels:
        tp = matrix[label][label]
        predicted = sum(matrix[other][label] for other in labels)
        actual = sum(matrix[label].values())
        precision = _ratio(tp, predicted)
        recall = _ratio(tp, actual)
        per_label[label] = {
            "precision": precision,
            "recall": recall,
            "f1": _ratio(2 * precision * recall, precision + recall),
        }

    correct = sum(matrix[label][label] for label in labels)
    f1_scores = [scores["f1"] for scores in per_label.values()]
    return ClassificationMetrics(
        accuracy=_ratio(correct, len(y_true)),
        per_label=per_label,
        macro_f1=_ratio(sum(f1_scores), len(f1_scores)),
        weighted_f1=_ratio(
            sum(per_label[label]["f1"] * support[label] for label in labels),
            len(y_true),
        ),
        confusion_matrix=matrix,
        support=dict(support),
    )
