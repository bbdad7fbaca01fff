"""Command-line interface for Author Attribution."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from author_attribution import __version__
from author_attribution.errors import AttributionError

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool) -> None:
    """Author Attribution - guess who wrote a text from token statistics."""
    from author_attribution.config import get_settings
    from author_attribution.logging_utils import setup_logging

    setup_logging(logging.DEBUG if verbose else get_settings().log_level)


@main.command()
@click.argument("dataset", metavar="DIRECTORY|JSON", type=click.Path(exists=True))
@click.argument("save_path", type=click.Path(dir_okay=False))
def train(dataset: str, save_path: str) -> None:
    """Train a model on DATASET and save it to SAVE_PATH.

    DATASET is either a directory with one subdirectory of .txt files per
    author, or a JSON array of {"author": ..., "text_path": ...} objects.

    Example:
        aattr train data/authors/ models/authors.aafm
    """
    from author_attribution.dataset import load_dataset
    from author_attribution.model import save, train as train_model

    try:
        pairs = load_dataset(dataset)
    except AttributionError as exc:
        raise click.ClickException(str(exc)) from exc

    authors = list(dict.fromkeys(author for author, _ in pairs))
    console.print(f"[bold]Training on:[/bold] {dataset}")
    console.print(f"[dim]Authors: {len(authors)}, texts: {len(pairs)}[/dim]\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Indexing texts...", total=len(pairs))

        def update_progress(current: int, total: int) -> None:
            progress.update(task, completed=current, total=total)

        try:
            model = train_model(pairs, progress_callback=update_progress)
        except AttributionError as exc:
            raise click.ClickException(str(exc)) from exc

    console.print(f"[green]OK[/green] {model}")

    try:
        path = save(model, save_path)
    except AttributionError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"[green]OK[/green] Model saved to {path}")


@main.command()
@click.argument("model_path", metavar="MODEL", type=click.Path(exists=True, dir_okay=False))
@click.argument("text", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def classify(model_path: str, text: str | None, as_json: bool) -> None:
    """Classify TEXT with the model stored at MODEL.

    TEXT ending in .txt is read from that file; any other TEXT is used
    as-is. Without TEXT, the input is read from stdin.

    Examples:
        aattr classify models/authors.aafm chapter.txt
        cat chapter.txt | aattr classify models/authors.aafm --json
    """
    from author_attribution.model import Classifier, load

    try:
        input_text = get_input(text)
        model = load(model_path)
    except AttributionError as exc:
        raise click.ClickException(str(exc)) from exc

    result = Classifier(model).classify(input_text)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    authors = list(model.authors)

    table = Table(title="Aggregate Scores")
    table.add_column("Author", style="cyan")
    table.add_column("Score", style="green", justify="right")
    for author, score in sorted(result.aggregate.items(), key=lambda x: x[1], reverse=True):
        table.add_row(author, f"{score:.4f}")
    console.print(table)

    if result.sentences:
        sentence_table = Table(title="Sentence Scores")
        sentence_table.add_column("Offset", style="dim", justify="right")
        for author in authors:
            sentence_table.add_column(author, justify="right")
        for sentence in result.sentences:
            sentence_table.add_row(
                str(sentence.offset),
                *(f"{sentence.scores[a]:.4f}" for a in authors),
            )
        console.print(sentence_table)

    for issue in result.issues:
        console.print(f"[yellow]![/yellow] {issue}")

    best = result.best_author()
    if best is not None:
        console.print(f"\n[bold]Most likely author:[/bold] {best}")


@main.command()
@click.argument("model_path", metavar="MODEL", type=click.Path(exists=True, dir_okay=False))
def info(model_path: str) -> None:
    """Show the authors and token counts of a stored model."""
    from author_attribution.model import load

    try:
        model = load(model_path)
    except AttributionError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"[bold]{model}[/bold]")
    console.print(f"Vocabulary: {model.vocabulary_size:,} distinct tokens\n")

    table = Table()
    table.add_column("Author", style="cyan")
    table.add_column("Tokens", style="green", justify="right")
    for author, total in zip(model.authors, model.author_token_totals):
        table.add_row(author, f"{total:,}")
    console.print(table)


def get_input(text: str | None) -> str:
    """Resolve the text to classify from an argument, a .txt file or stdin."""
    from author_attribution.ingest import load_text

    if text is not None:
        if text.endswith(".txt"):
            return load_text(Path(text))
        return text

    stdin = click.get_text_stream("stdin")
    if stdin.isatty():
        return click.prompt("Please enter the text")
    return stdin.read()


if __name__ == "__main__":
    main()
