"""
Language-aware word segmentation backed by spaCy tokenizers.

Text is cut into runs by script. Han and kana runs are segmented into
words by spaCy's Chinese pipeline with the jieba segmenter; every other
run goes to the blank pipeline of the configured language.
"""

from functools import lru_cache
import re
from typing import Iterable, Iterator

import spacy

CJK_LANGUAGE = "zh"

# Han ideographs, kana, CJK punctuation and fullwidth forms
CJK_RUN = re.compile(
    r"[\u3000-\u303f\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff00-\uffef]+"
)

# Lone surrogates (e.g. from surrogateescape decoding) cannot be encoded
SURROGATE = re.compile("[\ud800-\udfff]")
REPLACEMENT_CHARACTER = "\ufffd"


@lru_cache(maxsize=None)
def get_tokenizer(language: str = "xx"):
    """
    Lazy-load the tokenizer of a blank spaCy pipeline.

    "xx" is spaCy's multi-language pipeline. "zh" is configured with the
    jieba word segmenter instead of spaCy's per-character default. Only
    the tokenizer is used, so no trained model package is needed.
    """
    if language == CJK_LANGUAGE:
        nlp = spacy.blank(CJK_LANGUAGE, config={"nlp": {"tokenizer": {"segmenter": "jieba"}}})
    else:
        nlp = spacy.blank(language)
    return nlp.tokenizer


def scrub(text: str) -> str:
    """Replace lone surrogates with U+FFFD, keeping every offset in place."""
    return SURROGATE.sub(REPLACEMENT_CHARACTER, text)


def script_runs(text: str) -> Iterator[tuple[str, bool]]:
    """Yield (run, is_cjk) pairs covering the text in order."""
    position = 0
    for match in CJK_RUN.finditer(text):
        if match.start() > position:
            yield text[position:match.start()], False
        yield match.group(), True
        position = match.end()
    if position < len(text):
        yield text[position:], False


def tokenize(text: str, language: str = "xx") -> list[str]:
    """Split text into tokens, dropping whitespace-only tokens."""
    # TODO: Drop punctuation and stop words once per-language lists exist
    tokens = []
    for run, is_cjk in script_runs(scrub(text)):
        if run.isspace():
            continue
        tokenizer = get_tokenizer(CJK_LANGUAGE if is_cjk else language)
        tokens.extend(token.text for token in tokenizer(run) if not token.text.isspace())
    return tokens


def tokenize_many(texts: Iterable[str], language: str = "xx") -> Iterator[list[str]]:
    """Tokenize several texts in order."""
    for text in texts:
        yield tokenize(text, language)
