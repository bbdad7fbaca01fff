"""Build a FrequencyModel from labelled training texts."""

from pathlib import Path
from typing import Callable, Iterable, Optional

from author_attribution.config import Settings, get_settings
from author_attribution.ingest.loader import load_text
from author_attribution.ingest.segmenter import flatten, segment
from author_attribution.logging_utils import get_logger
from author_attribution.model.frequency import FrequencyCounter, FrequencyModel

logger = get_logger(__name__)

Dataset = Iterable[tuple[str, Path | str]]


def discover_authors(dataset: Dataset) -> list[str]:
    """Distinct authors in order of first appearance."""
    return list(dict.fromkeys(author for author, _ in dataset))


def train(
    dataset: Dataset,
    settings: Optional[Settings] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> FrequencyModel:
    """
    Train a frequency model on (author, path) pairs.

    Every file is read as UTF-8, segmented exactly as classification
    input is, and its tokens are counted for its author. An unreadable
    file aborts the whole run with ReadFailure.

    Args:
        dataset: Ordered (author, text file path) pairs
        settings: Segmentation settings (defaults to get_settings())
        progress_callback: Called with (files done, total files)

    Returns:
        The trained, read-only FrequencyModel
    """
    settings = settings or get_settings()
    dataset = list(dataset)

    authors = discover_authors(dataset)
    logger.debug("Contains %d authors in total.", len(authors))

    counter = FrequencyCounter(authors)
    author_indices = {author: i for i, author in enumerate(authors)}

    total_files = len(dataset)
    for done, (author, path) in enumerate(dataset, start=1):
        logger.debug("Indexing: (%r, %s)", author, path)
        text = load_text(path)
        tokens = flatten(segment(text, settings))
        added = counter.add(author_indices[author], tokens)
        if added == 0:
            logger.warning("No tokens found in %s for author %r", path, author)

        if progress_callback:
            progress_callback(done, total_files)

    model = counter.freeze()
    for author, total in zip(model.authors, model.author_token_totals):
        if total == 0:
            logger.warning("Author %r has no training tokens", author)

    logger.info("Model training finished: %s", model)
    return model
