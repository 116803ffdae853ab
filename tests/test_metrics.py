"""Tests for hold-out evaluation metrics."""

from __future__ import annotations

import pytest

from bayes_text_classifier import ClassificationMetrics, InvalidArgumentError, compute_metrics


class TestComputeMetrics:
    """Tests for compute_metrics."""

    def test_perfect_predictions(self):
        metrics = compute_metrics(["meat", "veggie", "meat"], ["meat", "veggie", "meat"])
        assert metrics.accuracy == 1.0
        assert metrics.macro_f1 == 1.0
        assert metrics.weighted_f1 == 1.0
        assert metrics.support == {"meat": 2, "veggie": 1}

    def test_per_label_scores(self):
        y_true = ["meat", "meat", "veggie", "veggie"]
        y_pred = ["meat", "veggie", "veggie", "veggie"]
        metrics = compute_metrics(y_true, y_pred)

        assert metrics.accuracy == pytest.approx(0.75)
        assert metrics.per_label["meat"]["precision"] == pytest.approx(1.0)
        assert metrics.per_label["meat"]["recall"] == pytest.approx(0.5)
        assert metrics.per_label["veggie"]["precision"] == pytest.approx(2 / 3)
        assert metrics.per_label["veggie"]["recall"] == pytest.approx(1.0)
        assert metrics.confusion_matrix["meat"] == {"meat": 1, "veggie": 1}

    def test_f1_averages(self):
        y_true = ["meat", "meat", "meat", "veggie"]
        y_pred = ["meat", "meat", "veggie", "veggie"]
        metrics = compute_metrics(y_true, y_pred)
        meat_f1 = metrics.per_label["meat"]["f1"]
        veggie_f1 = metrics.per_label["veggie"]["f1"]
        assert metrics.macro_f1 == pytest.approx((meat_f1 + veggie_f1) / 2)
        assert metrics.weighted_f1 == pytest.approx((3 * meat_f1 + veggie_f1) / 4)

    def test_predicted_label_missing_from_truth(self):
        metrics = compute_metrics(["meat"], ["fish"])
        assert metrics.accuracy == 0.0
        assert metrics.per_label["fish"] == {"precision": 0.0, "recall": 0.0, "f1": 0.0}
        assert "fish" not in metrics.support

    def test_empty_inputs(self):
        metrics = compute_metrics([], [])
        assert metrics.accuracy == 0.0
        assert metrics.per_label == {}

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgumentError, match="same length"):
            compute_metrics(["meat"], [])


class TestClassificationMetrics:
    """Tests for metric reporting."""

    @pytest.fixture
    def metrics(self) -> ClassificationMetrics:
        return compute_metrics(["meat", "veggie", "veggie"], ["meat", "meat", "veggie"])

    def test_to_dict_rounds(self, metrics):
        data = metrics.to_dict()
        assert data["accuracy"] == round(2 / 3, 4)
        assert set(data["per_label"]) == {"meat", "veggie"}
        assert data["support"] == {"meat": 1, "veggie": 2}

    def test_summary_lists_labels(self, metrics):
        summary = metrics.summary()
        assert summary.startswith("Accuracy: 66.67%")
        assert "meat" in summary
        assert "veggie" in summary
