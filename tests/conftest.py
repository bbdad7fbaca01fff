"""Shared fixtures: synthetic vocabularies and small training corpora."""

import os
from itertools import product
from string import ascii_lowercase

import pytest

from author_attribution.config import Settings, get_settings
from author_attribution.model import train


def make_vocabulary(prefix: str, size: int) -> list[str]:
    """Distinct letter-only words, e.g. alphaaa, alphaab, ..."""
    suffixes = ("".join(p) for p in product(ascii_lowercase, repeat=2))
    return [prefix + next(suffixes) for _ in range(size)]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep AA_* variables and any .env file in the working directory out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("AA_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def vocab_a():
    return make_vocabulary("alpha", 50)


@pytest.fixture
def vocab_b():
    return make_vocabulary("omega", 60)


@pytest.fixture
def corpus_dir(tmp_path, vocab_a, vocab_b):
    """Directory dataset: two authors with disjoint vocabularies, each word used 5 times."""
    root = tmp_path / "authors"
    (root / "ann").mkdir(parents=True)
    (root / "bob").mkdir(parents=True)

    (root / "ann" / "part1.txt").write_text(" ".join(vocab_a * 3), encoding="utf-8")
    (root / "ann" / "part2.txt").write_text(" ".join(vocab_a * 2), encoding="utf-8")
    (root / "bob" / "book.txt").write_text(" ".join(vocab_b * 5), encoding="utf-8")
    return root


@pytest.fixture
def dataset(corpus_dir):
    return [
        ("ann", corpus_dir / "ann" / "part1.txt"),
        ("bob", corpus_dir / "bob" / "book.txt"),
        ("ann", corpus_dir / "ann" / "part2.txt"),
    ]


@pytest.fixture
def model(dataset, settings):
    return train(dataset, settings)
