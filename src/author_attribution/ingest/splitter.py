"""Split text into bounded-length chunks with their source offsets."""

import re
from typing import Callable

# Abbreviations that don't end sentences
ABBREVIATIONS = {
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "vs", "etc",
    "i.e", "e.g", "cf", "al", "st", "mt", "ft",
}

PARAGRAPH_BREAK = re.compile(r"\n[^\S\n]*\n\s*")
LINE_BREAK = re.compile(r"\n\s*")
# Western terminators need trailing whitespace, CJK ones don't
SENTENCE_END = re.compile(
    r"[.!?…]+[\"'”’)\]]*(?=\s)\s*"
    r"|[。！？]+[”」』）]*\s*"
)
CLAUSE_BREAK = re.compile(r"[,;:，、；：]+\s*")
WORD_BREAK = re.compile(r"\s+")

Chunk = tuple[int, str]


def chunk_indices(text: str, capacity: int) -> list[Chunk]:
    """
    Split text into chunks of at most `capacity` characters.

    Adjacent units are merged at the coarsest level that still fits:
    paragraphs, then lines, sentences, clauses, words, and finally plain
    character cuts. Each chunk is stripped of surrounding whitespace and
    returned with its starting offset in `text`. Whitespace-only input
    yields no chunks.
    """
    if capacity < 1:
        raise ValueError("capacity must be positive")

    chunks: list[Chunk] = []
    _split_range(text, 0, len(text), capacity, 0, chunks)
    return chunks


def _pattern_boundaries(pattern: re.Pattern) -> Callable[[str, int, int], list[int]]:
    def boundaries(text: str, start: int, end: int) -> list[int]:
        return [m.end() for m in pattern.finditer(text, start, end)]
    return boundaries


def _sentence_boundaries(text: str, start: int, end: int) -> list[int]:
    """Sentence ends, skipping periods that close a known abbreviation."""
    result = []
    for match in SENTENCE_END.finditer(text, start, end):
        if match.group().startswith(".") and _is_abbreviation(text, start, match.start()):
            continue
        result.append(match.end())
    return result


def _is_abbreviation(text: str, start: int, period: int) -> bool:
    words = text[max(start, period - 12):period].split()
    if not words:
        return False
    word = words[-1].lstrip("\"'(“‘[").lower()
    return word in ABBREVIATIONS


LEVELS: list[Callable[[str, int, int], list[int]]] = [
    _pattern_boundaries(PARAGRAPH_BREAK),
    _pattern_boundaries(LINE_BREAK),
    _sentence_boundaries,
    _pattern_boundaries(CLAUSE_BREAK),
    _pattern_boundaries(WORD_BREAK),
]


def _trim(text: str, start: int, end: int) -> tuple[int, int]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end


def _split_range(
    text: str,
    start: int,
    end: int,
    capacity: int,
    level: int,
    out: list[Chunk],
) -> None:
    start, end = _trim(text, start, end)
    if start >= end:
        return

    if end - start <= capacity:
        out.append((start, text[start:end]))
        return

    if level >= len(LEVELS):
        # No semantic boundary left, cut every `capacity` characters
        for cut in range(start, end, capacity):
            s, e = _trim(text, cut, min(cut + capacity, end))
            if s < e:
                out.append((s, text[s:e]))
        return

    cuts = [b for b in LEVELS[level](text, start, end) if start < b < end]
    if not cuts:
        _split_range(text, start, end, capacity, level + 1, out)
        return

    pieces = list(zip([start] + cuts, cuts + [end]))

    current_start, current_end = pieces[0]
    for piece_start, piece_end in pieces[1:]:
        s, e = _trim(text, current_start, piece_end)
        if e - s <= capacity:
            current_end = piece_end
        else:
            _split_range(text, current_start, current_end, capacity, level + 1, out)
            current_start, current_end = piece_start, piece_end

    _split_range(text, current_start, current_end, capacity, level + 1, out)
