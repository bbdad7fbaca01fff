"""Turn raw text into ordered sentences of tokens."""

from dataclasses import dataclass
from typing import Optional

from author_attribution.config import Settings, get_settings
from author_attribution.ingest.splitter import chunk_indices
from author_attribution.ingest.tokenizer import tokenize_many


@dataclass(frozen=True)
class Sentence:
    """A bounded-length chunk of text, reduced to its tokens."""

    offset: int  # Character offset of the chunk in the source text
    tokens: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.tokens)


def segment(text: str, settings: Optional[Settings] = None) -> list[Sentence]:
    """
    Split text into sentences and each sentence into tokens.

    Deterministic and side-effect free, so training and classification
    see identical token streams. Empty text gives an empty list.
    """
    settings = settings or get_settings()

    chunks = chunk_indices(text, settings.max_sentence_length)
    if not chunks:
        return []

    token_lists = tokenize_many((chunk for _, chunk in chunks), settings.language)
    return [
        Sentence(offset=offset, tokens=tuple(tokens))
        for (offset, _), tokens in zip(chunks, token_lists)
    ]


def flatten(sentences: list[Sentence]) -> list[str]:
    """All tokens of a document, in order."""
    return [token for sentence in sentences for token in sentence.tokens]
