"""Bayes Text Classifier -- Naive Bayes document classification with Laplace smoothing."""

__version__ = "0.1.0"

from .classifier import ClassificationResult, NaiveBayesClassifier
from .config import ClassifierConfig, configure_logging
from .exceptions import (
    ClassifierError,
    DecodeError,
    InvalidArgumentError,
    InvalidStateError,
)
from .metrics import ClassificationMetrics, compute_metrics
from .models import LabelModel, TrainedLabelModel, Vocabulary
from .tokenizer import as_tokens, tokenize

__all__ = [
    # Core
    "NaiveBayesClassifier",
    "ClassificationResult",
    "Vocabulary",
    "LabelModel",
    "TrainedLabelModel",
    # Tokenization
    "tokenize",
    "as_tokens",
    # Errors
    "ClassifierError",
    "InvalidArgumentError",
    "InvalidStateError",
    "DecodeError",
    # Evaluation
    "ClassificationMetrics",
    "compute_metrics",
    # Configuration
    "ClassifierConfig",
    "configure_logging",
]
