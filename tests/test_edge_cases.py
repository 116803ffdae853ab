"""Edge-case and regression tests for the classifier."""

from __future__ import annotations

import math

import pytest

from bayes_text_classifier import InvalidStateError, NaiveBayesClassifier

# ---------------------------------------------------------------------------
# Unusual tokens and labels
# ---------------------------------------------------------------------------


class TestTokenEdgeCases:
    """Edge-case tests for token handling."""

    def test_empty_string_token_in_pre_tokenized_document(self):
        """Pre-tokenized input is taken verbatim, empty strings included."""
        nb = NaiveBayesClassifier()
        nb.add_document(["", "ham"], "meat")
        assert "" in nb.vocabulary
        assert nb.label_models["meat"].total_word_count == 2

    def test_raw_text_never_adds_empty_token(self):
        nb = NaiveBayesClassifier()
        nb.add_document("  ham   hock  ", "meat")
        assert "" not in nb.vocabulary
        assert nb.vocabulary.size() == 2

    def test_case_and_punctuation_are_distinct_tokens(self):
        nb = NaiveBayesClassifier()
        nb.add_document("Ribs ribs ribs.", "meat")
        assert set(nb.vocabulary) == {"Ribs", "ribs", "ribs."}

    def test_label_with_whitespace_and_unicode(self):
        nb = NaiveBayesClassifier()
        nb.add_document("crème brûlée", "pâtisserie fine")
        nb.add_document("kale", "veggie")
        nb.train()
        assert nb.classify("crème") == "pâtisserie fine"

    def test_labels_compared_by_exact_value(self):
        nb = NaiveBayesClassifier()
        nb.add_document("ham", "Meat")
        nb.add_document("ham", "meat")
        assert nb.get_labels() == ["Meat", "meat"]


# ---------------------------------------------------------------------------
# Numerical behaviour
# ---------------------------------------------------------------------------


class TestNumericalEdgeCases:
    """Log-space scoring keeps long documents finite."""

    def test_long_document_score_is_finite(self, food_classifier):
        document = ["pancetta", "okra"] * 5000
        for score in food_classifier.score_document(document).values():
            assert math.isfinite(score)
            assert score < -1000

    def test_single_label_classifier(self):
        nb = NaiveBayesClassifier()
        nb.add_document("ham", "meat")
        nb.train()
        assert nb.classify("anything at all") == "meat"
        assert nb.label_models["meat"].prior_probability == 1.0

    def test_query_of_only_unknown_words(self, food_classifier):
        scores = food_classifier.score_document("unicorn dragon")
        assert scores["meat"] == pytest.approx(math.log(0.5))
        assert scores["veggie"] == pytest.approx(math.log(0.5))
        assert food_classifier.classify("unicorn dragon") == "meat"

    def test_large_smoothing_flattens_distribution(self, food_classifier):
        food_classifier.set_smoothing(1e6)
        food_classifier.train()
        meat = food_classifier.label_models["meat"]
        assert meat.word_probability("landjaeger") == pytest.approx(meat.default_word_probability, rel=1e-4)


# ---------------------------------------------------------------------------
# Lifecycle regressions
# ---------------------------------------------------------------------------


class TestLifecycleEdgeCases:
    """Regression tests for the trained/untrained lifecycle."""

    def test_instances_are_independent(self, food_examples):
        first = NaiveBayesClassifier()
        second = NaiveBayesClassifier()
        first.add_documents(food_examples)
        assert second.get_labels() == []
        assert second.vocabulary.size() == 0

    def test_failed_train_leaves_state_untouched(self):
        nb = NaiveBayesClassifier()
        with pytest.raises(InvalidStateError):
            nb.train()
        assert not nb.is_trained
        nb.add_document("ham", "meat")
        nb.train()
        assert nb.is_trained

    def test_classify_never_trains_implicitly(self, tiny_classifier):
        with pytest.raises(InvalidStateError):
            tiny_classifier.classify("a")
        assert not tiny_classifier.is_trained
        assert all(not m.is_trained for m in tiny_classifier.label_models.values())

    def test_adding_to_new_label_after_train(self, food_classifier, food_query):
        food_classifier.add_document("cod haddock", "fish")
        food_classifier.train()
        assert food_classifier.get_labels() == ["fish", "meat", "veggie"]
        assert food_classifier.classify("haddock") == "fish"
        assert food_classifier.classify(food_query) == "meat"

    def test_untrained_label_under_trained_flag_raises(self, tiny_classifier):
        tiny_classifier._trained = True
        with pytest.raises(InvalidStateError, match="'x' is not trained"):
            tiny_classifier.classify("a")
