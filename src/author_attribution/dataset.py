"""
Dataset Discovery

Resolve a training dataset into ordered (author, path) pairs, either from
a JSON manifest or from a directory with one subdirectory per author.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from author_attribution.errors import DatasetError
from author_attribution.logging_utils import get_logger

logger = get_logger(__name__)

DatasetPairs = list[tuple[str, Path]]


class DatasetEntry(BaseModel):
    """One element of a JSON dataset manifest."""
    author: str = Field(min_length=1)
    text_path: Path


_MANIFEST = TypeAdapter(list[DatasetEntry])


def load_json_dataset(manifest: Path | str) -> DatasetPairs:
    """
    Load a JSON manifest: an array of {"author": ..., "text_path": ...}.

    Relative text paths are resolved against the manifest's directory.
    """
    manifest = Path(manifest)
    try:
        raw = json.loads(manifest.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DatasetError(f"Failed to read dataset manifest {manifest}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Failed to parse JSON dataset {manifest}: {exc}") from exc

    try:
        entries = _MANIFEST.validate_python(raw)
    except ValidationError as exc:
        raise DatasetError(f"Invalid dataset manifest {manifest}:\n{exc}") from exc

    base = manifest.parent
    dataset = []
    for entry in entries:
        path = entry.text_path if entry.text_path.is_absolute() else base / entry.text_path
        dataset.append((entry.author, path))

    logger.debug("Loaded %d entries from %s", len(dataset), manifest)
    return dataset


def load_dir_dataset(directory: Path | str) -> DatasetPairs:
    """
    Load a dataset laid out as <directory>/<author>/**/*.txt.

    Authors and files are taken in sorted order. Files without an
    extension are rejected; other non-.txt files are skipped.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise DatasetError(f"Dataset directory not found: {root}")

    dataset = []
    for author_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        author = author_dir.name
        logger.debug("Load entry (author): %s", author_dir)

        for path in sorted(p for p in author_dir.rglob("*") if p.is_file()):
            if not path.suffix:
                raise DatasetError(f"Unsupported file format: {path}")
            if path.suffix.lower() != ".txt":
                logger.debug("Skipping non-text file: %s", path)
                continue
            logger.debug("Load text: %s", path)
            dataset.append((author, path))

    return dataset


def load_dataset(source: Path | str) -> DatasetPairs:
    """Load a dataset from a JSON manifest or a nested directory."""
    source = Path(source)
    if source.suffix.lower() == ".json":
        logger.debug("Load dataset according to JSON manifest.")
        return load_json_dataset(source)
    logger.debug("Load dataset from nested directory.")
    return load_dir_dataset(source)
