"""Shared test fixtures for bayes-text-classifier tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from bayes_text_classifier import NaiveBayesClassifier

# Vegetable examples from veggieipsum, meat examples from baconipsum
VEGGIE_DOCS = [
    "beetroot water spinach okra water chestnut ricebean pea catsear courgette summer "
    "purslane. water spinach arugula pea tatsoi aubergine spring onion bush tomato kale "
    "radicchio turnip chicory salsify pea sprouts fava bean. dandelion zucchini burdock "
    "yarrow chickpea dandelion sorrel courgette turnip greens tigernut soybean radish "
    "artichoke wattle seed endive groundnut broccoli arugula.",
    "pea horseradish azuki bean lettuce avocado asparagus okra. kohlrabi radish okra azuki "
    "bean corn fava bean mustard tigernut jicama green bean celtuce collard greens avocado "
    "quandong fennel gumbo black-eyed pea. grape silver beet watercress potato tigernut corn "
    "groundnut. chickweed okra pea winter purslane coriander yarrow sweet pepper radish "
    "garlic brussels sprout groundnut summer purslane earthnut pea tomato spring onion azuki "
    "bean gourd. gumbo kakadu plum komatsuna black-eyed pea green bean zucchini gourd winter "
    "purslane silver beet rock melon radish asparagus spinach.",
]

MEAT_DOCS = [
    "sirloin meatloaf ham hock sausage meatball tongue prosciutto picanha turkey ball tip "
    "pastrami. ribeye chicken sausage, ham hock landjaeger pork belly pancetta ball tip "
    "tenderloin leberkas shank shankle rump. cupim short ribs ground round biltong tenderloin "
    "ribeye drumstick landjaeger short loin doner chicken shoulder spare ribs fatback boudin. "
    "pork chop shank shoulder, t-bone beef ribs drumstick landjaeger meatball.",
    "sirloin porchetta drumstick, pastrami bresaola landjaeger turducken kevin ham capicola "
    "corned beef. pork cow capicola, pancetta turkey tri-tip doner ball tip salami. fatback "
    "pastrami rump pancetta landjaeger. doner porchetta meatloaf short ribs cow chuck jerky "
    "pork chop landjaeger picanha tail.",
]

FOOD_QUERY = "salami pancetta beef ribs"


@pytest.fixture
def food_examples() -> list[tuple[str, str]]:
    """Interleaved veggie and meat training documents."""
    return [
        (VEGGIE_DOCS[0], "veggie"),
        (MEAT_DOCS[0], "meat"),
        (VEGGIE_DOCS[1], "veggie"),
        (MEAT_DOCS[1], "meat"),
    ]


@pytest.fixture
def food_classifier(food_examples) -> NaiveBayesClassifier:
    """Classifier trained on the food examples with default smoothing."""
    nb = NaiveBayesClassifier()
    nb.add_documents(food_examples)
    nb.train()
    return nb


@pytest.fixture
def tiny_classifier() -> NaiveBayesClassifier:
    """Two labels, three vocabulary words; probabilities are easy to derive by hand.

    x: counts a=2, b=1 (3 words); y: counts c=1 (1 word); |V| = 3.
    """
    nb = NaiveBayesClassifier()
    nb.add_document("a b a", "x")
    nb.add_document("c", "y")
    return nb


@pytest.fixture
def food_tsv(tmp_path: Path, food_examples) -> Path:
    """Tab-separated training file with the food examples."""
    file = tmp_path / "foods.tsv"
    lines = ["# label<TAB>text"] + [f"{label}\t{text}" for text, label in food_examples]
    file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return file


@pytest.fixture
def food_query() -> str:
    """Meat-themed query that should classify as meat."""
    return FOOD_QUERY
