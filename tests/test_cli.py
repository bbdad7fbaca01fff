"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from author_attribution.cli import main


def json_payload(output: str) -> dict:
    """The JSON document printed at the end of the output."""
    return json.loads(output[output.index("{"):])


class TestCli:
    """Train, inspect and classify through the CLI."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def model_path(self, runner, tmp_path, corpus_dir):
        path = tmp_path / "models" / "authors.aafm"
        result = runner.invoke(main, ["train", str(corpus_dir), str(path)])
        assert result.exit_code == 0, result.output
        return path

    def test_train(self, model_path):
        assert model_path.exists()

    def test_info(self, runner, model_path):
        result = runner.invoke(main, ["info", str(model_path)])
        assert result.exit_code == 0, result.output
        assert "ann" in result.output
        assert "bob" in result.output

    def test_classify_literal_json(self, runner, model_path, vocab_a):
        result = runner.invoke(main, ["classify", str(model_path), " ".join(vocab_a[:10]), "--json"])
        assert result.exit_code == 0, result.output

        payload = json_payload(result.output)
        assert payload["aggregate"]["ann"] > payload["aggregate"]["bob"]
        assert payload["sentences"][0]["offset"] == 0

    def test_classify_file(self, runner, tmp_path, model_path, vocab_b):
        text_file = tmp_path / "input.txt"
        text_file.write_text(" ".join(vocab_b[:10]), encoding="utf-8")

        result = runner.invoke(main, ["classify", str(model_path), str(text_file)])
        assert result.exit_code == 0, result.output
        assert "Most likely author: bob" in result.output

    def test_classify_stdin(self, runner, model_path, vocab_a):
        result = runner.invoke(
            main, ["classify", str(model_path), "--json"], input=" ".join(vocab_a[:10])
        )
        assert result.exit_code == 0, result.output
        assert json_payload(result.output)["aggregate"]["ann"] > 0.5

    def test_classify_empty_input(self, runner, model_path):
        result = runner.invoke(main, ["classify", str(model_path), "--json"], input="")
        assert result.exit_code == 0, result.output

        payload = json_payload(result.output)
        assert payload["sentences"] == []
        assert payload["aggregate"] == {"ann": 0.5, "bob": 0.5}

    def test_corrupt_model(self, runner, tmp_path):
        path = tmp_path / "bad.aafm"
        path.write_bytes(b"garbage")
        result = runner.invoke(main, ["classify", str(path), "text"])
        assert result.exit_code != 0
        assert "Error" in result.output

    def test_train_bad_manifest(self, runner, tmp_path):
        manifest = tmp_path / "set.json"
        manifest.write_text("{", encoding="utf-8")

        result = runner.invoke(main, ["train", str(manifest), str(tmp_path / "m.aafm")])
        assert result.exit_code != 0
