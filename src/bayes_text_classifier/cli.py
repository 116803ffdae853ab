"""Command-line interface for the Naive Bayes text classifier.

Provides ``train``, ``classify``, ``labels``, ``evaluate`` and ``inspect``
commands with rich terminal output using the ``click`` and ``rich`` libraries.

Training data files hold one ``label<TAB>text`` example per line; blank lines
and lines starting with ``#`` are skipped.

Usage::

    bayes-classify train foods.tsv -o model.json
    bayes-classify classify model.json "salami pancetta beef ribs"
    bayes-classify evaluate model.json held_out.tsv
    bayes-classify inspect model.json meat --top 5
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .classifier import NaiveBayesClassifier
from .config import ClassifierConfig, configure_logging
from .exceptions import ClassifierError

console = Console()

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def read_examples(path: Path) -> list[tuple[str, str]]:
    """Read ``(text, label)`` pairs from a tab-separated training file.

    Raises:
        click.UsageError: If a non-comment line has no tab separator.
    """
    examples: list[tuple[str, str]] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.rstrip("\n")
            if not line.strip() or line.startswith("#"):
                continue
            if "\t" not in line:
                raise click.UsageError(f"{path}:{lineno}: expected 'label<TAB>text'")
            label, text = line.split("\t", 1)
            examples.append((text, label.strip()))
    return examples


def _read_data(path: Path) -> list[tuple[str, str]]:
    try:
        return read_examples(path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error:[/] cannot read {path}: {e}")
        sys.exit(1)


def _load_model(path: Path) -> NaiveBayesClassifier:
    try:
        return NaiveBayesClassifier.load(path)
    except (ClassifierError, OSError) as e:
        console.print(f"[bold red]Error:[/] cannot load {path}: {e}")
        sys.exit(1)


@click.group()
@click.version_option(__version__, package_name="bayes-text-classifier")
@click.option("--log-level", type=click.Choice(_LOG_LEVELS, case_sensitive=False), default=None,
              help="Log level (defaults to BAYES_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Naive Bayes text classifier with Laplace smoothing.

    Train a model from labeled examples, then classify new documents.
    """
    try:
        config = ClassifierConfig.from_env()
    except ClassifierError as e:
        raise click.UsageError(str(e)) from e
    if log_level:
        config.log_level = log_level.upper()
    configure_logging(config.log_level)
    ctx.obj = config


@main.command()
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), required=True,
              help="Where to save the trained model (JSON).")
@click.option("--smoothing", type=float, default=None,
              help="Additive smoothing constant (defaults to BAYES_SMOOTHING or 1.0).")
@click.pass_obj
def train(config: ClassifierConfig, data: Path, output: Path, smoothing: float | None) -> None:
    """Train a classifier from a tab-separated examples file.

    Example: bayes-classify train foods.tsv -o model.json
    """
    examples = _read_data(data)

    with console.status("[bold blue]Training classifier...", spinner="dots"):
        try:
            nb = NaiveBayesClassifier.from_config(config)
            if smoothing is not None:
                nb.set_smoothing(smoothing)
            nb.add_documents(examples)
            nb.train()
            nb.save(output)
        except (ClassifierError, OSError) as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    table = Table(title=f"Trained model: {output.name}")
    table.add_column("Label", style="cyan")
    table.add_column("Examples", justify="right")
    table.add_column("Words", justify="right")
    table.add_column("Prior", justify="right")
    for label, model in sorted(nb.label_models.items()):
        table.add_row(
            label,
            str(model.example_count),
            str(model.total_word_count),
            f"{model.prior_probability:.3f}",
        )
    console.print(table)
    console.print(
        f"[dim]Vocabulary: {nb.vocabulary.size()} words | "
        f"Smoothing: {nb.smoothing:g} | Saved to {output}[/]"
    )


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("text")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def classify(model: Path, text: str, output: str) -> None:
    """Classify a document with a trained model.

    Example: bayes-classify classify model.json "salami pancetta beef ribs"
    """
    nb = _load_model(model)
    try:
        result = nb.classify_with_scores(text)
    except ClassifierError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    if output == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    console.print(Panel(f"[bold green]{result.label}[/]", title="Predicted label", border_style="blue"))
    table = Table(show_lines=False)
    table.add_column("Label", style="cyan")
    table.add_column("Log-likelihood", justify="right")
    table.add_column("Reported value", justify="right")
    for label in sorted(result.scores, key=result.scores.get, reverse=True):
        table.add_row(label, f"{result.scores[label]:.4f}", f"{result.probabilities[label]:.4f}")
    console.print(table)


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def labels(model: Path) -> None:
    """List the labels known to a model."""
    nb = _load_model(model)
    for label in nb.get_labels():
        click.echo(label)


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def evaluate(model: Path, data: Path, output: str) -> None:
    """Evaluate a trained model on a held-out examples file.

    Example: bayes-classify evaluate model.json held_out.tsv
    """
    nb = _load_model(model)
    examples = _read_data(data)
    try:
        metrics = nb.evaluate([text for text, _ in examples], [label for _, label in examples])
    except ClassifierError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    if output == "json":
        click.echo(json.dumps(metrics.to_dict(), indent=2))
    else:
        console.print(Panel(metrics.summary(), title=f"Evaluation: {data.name}", border_style="blue"))


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("label")
@click.option("--top", "-n", type=click.IntRange(min=1), default=10, help="Number of words.")
def inspect(model: Path, label: str, top: int) -> None:
    """Show the words that most favour LABEL over the other labels."""
    nb = _load_model(model)
    try:
        words = nb.most_informative_words(label, top_n=top)
    except ClassifierError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    table = Table(title=f"Most informative words: {label}")
    table.add_column("#", justify="right", width=4)
    table.add_column("Word", style="cyan")
    table.add_column("Log ratio", justify="right")
    for i, (word, score) in enumerate(words, 1):
        table.add_row(str(i), word, f"{score:.4f}")
    console.print(table)


if __name__ == "__main__":
    main()
