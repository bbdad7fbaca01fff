"""Exceptions raised by training, classification and model storage."""

from enum import Enum
from pathlib import Path
from typing import Optional


class AttributionError(Exception):
    """Base class for all errors raised by this package."""


class ReadFailure(AttributionError):
    """A training text or model file could not be read."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        message = f"Failed to read {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class SerializationFailure(AttributionError):
    """The model could not be encoded to bytes."""


class DeserializationFailure(AttributionError):
    """Stored bytes are not a valid encoding of a frequency model."""


class WriteFailure(AttributionError):
    """The model destination could not be created or written."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        message = f"Failed to write model to {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownAuthorError(AttributionError, KeyError):
    """An author name is not part of the trained model."""

    def __init__(self, author: str):
        self.author = author
        super().__init__(f"Unknown author: {author!r}")

    def __str__(self) -> str:
        return self.args[0]


class DatasetError(AttributionError):
    """A dataset manifest or directory could not be resolved."""


class DegenerateKind(Enum):
    """Division hazards met while classifying."""
    EMPTY_SENTENCE = "empty_sentence"        # Sentence contributed no tokens
    EMPTY_DOCUMENT = "empty_document"        # Text produced no sentences
    ZERO_AUTHOR_TOTAL = "zero_author_total"  # Author has no training tokens


class DegenerateInput(AttributionError):
    """
    A classification input that would divide by zero.

    Normally recorded on the result and replaced by a fallback value; raised
    only by a strict classifier.
    """

    def __init__(
        self,
        kind: DegenerateKind,
        sentence_index: Optional[int] = None,
        author: Optional[str] = None,
    ):
        self.kind = kind
        self.sentence_index = sentence_index
        self.author = author

        details = [kind.value]
        if sentence_index is not None:
            details.append(f"sentence {sentence_index}")
        if author is not None:
            details.append(f"author {author!r}")
        super().__init__("Degenerate input: " + ", ".join(details))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DegenerateInput):
            return NotImplemented
        return (self.kind, self.sentence_index, self.author) == (
            other.kind, other.sentence_index, other.author
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.sentence_index, self.author))
