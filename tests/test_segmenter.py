"""Tests for tokenization, segmentation and text loading."""

import pytest

from author_attribution.config import Settings
from author_attribution.errors import ReadFailure
from author_attribution.ingest import Sentence, flatten, load_text, segment, tokenize


class TestTokenize:
    """Test word segmentation."""

    def test_punctuation_split(self):
        assert tokenize("Hello, world!") == ["Hello", ",", "world", "!"]

    def test_whitespace_dropped(self):
        assert tokenize("a  b\n\nc") == ["a", "b", "c"]

    def test_no_case_normalization(self):
        assert tokenize("The the THE") == ["The", "the", "THE"]

    def test_chinese_words(self):
        assert tokenize("你好世界") == ["你好", "世界"]

    def test_chinese_clause_split(self):
        text = "男人头也不抬地说道。烈日炎炎下，哈利不安地动了动。"
        tokens = tokenize(text)

        assert "".join(tokens) == text
        assert tokens.count("。") == 2
        assert "，" in tokens
        assert all(len(token) <= 4 for token in tokens)

    def test_mixed_scripts(self):
        tokens = tokenize("Harry said 你好世界 twice.")
        assert tokens == ["Harry", "said", "你好", "世界", "twice", "."]

    def test_lone_surrogate(self):
        assert tokenize("abc \udcff def") == ["abc", "\ufffd", "def"]

    def test_empty(self):
        assert tokenize("") == []


class TestSegment:
    """Test the segmenter."""

    def test_empty_text(self, settings):
        assert segment("", settings) == []
        assert segment(" \n\t ", settings) == []

    def test_sentences_and_offsets(self):
        settings = Settings(max_sentence_length=20)
        text = "First paragraph.\n\nSecond paragraph."

        sentences = segment(text, settings)

        assert sentences == [
            Sentence(offset=0, tokens=("First", "paragraph", ".")),
            Sentence(offset=18, tokens=("Second", "paragraph", ".")),
        ]

    def test_chunks_respect_length(self, settings, vocab_a):
        text = " ".join(vocab_a)
        sentences = segment(text, settings)

        assert len(sentences) > 1
        assert flatten(sentences) == vocab_a
        offsets = [s.offset for s in sentences]
        assert offsets == sorted(offsets)

    def test_deterministic(self, settings):
        text = "It was a dark and stormy night. The rain fell in torrents, except at occasional intervals."
        assert segment(text, settings) == segment(text, settings)

    def test_sentence_length(self):
        assert len(Sentence(0, ("a", "b"))) == 2

    def test_lone_surrogate(self, settings):
        sentences = segment("abc \udcff def", settings)
        assert sentences == [Sentence(offset=0, tokens=("abc", "\ufffd", "def"))]


class TestLoadText:
    """Test reading texts from disk."""

    def test_utf8(self, tmp_path):
        path = tmp_path / "text.txt"
        path.write_text("Grüße, 世界", encoding="utf-8")
        assert load_text(path) == "Grüße, 世界"

    def test_bom_stripped(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes("\ufeffhello".encode("utf-8"))
        assert load_text(path) == "hello"

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin.txt"
        path.write_bytes(b"caf\xe9")
        with pytest.raises(ReadFailure) as exc_info:
            load_text(path)
        assert exc_info.value.path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReadFailure):
            load_text(tmp_path / "missing.txt")
