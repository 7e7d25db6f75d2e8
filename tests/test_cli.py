"""Tests for the command-line entry point."""

import json

import pytest

from textwalk.cli import main


def _lines(capsys):
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.strip()]


class TestTextInput:
    """Test reducing texts through the offline embedder."""

    def test_walk_texts(self, capsys):
        assert main(["first", "second", "--dim", "12"]) == 0
        lines = _lines(capsys)

        assert len(lines) == 3
        first, second, summary = lines
        assert first["text"] == "first"
        assert first["method"] == "Random Projection"
        assert first["embeddingDimensions"] == 12
        assert second["segment"]["start"] == first["segment"]["end"]
        assert summary["summary"]["steps"] == 2
        assert summary["summary"]["pathLength"] == pytest.approx(10.0)

    def test_scatter_texts(self, capsys):
        assert main(["a", "b", "--dim", "12", "--mode", "scatter", "--method", "simple"]) == 0
        lines = _lines(capsys)
        for step in lines[:-1]:
            assert step["segment"]["start"] == {"x": 0.0, "y": 0.0, "z": 0.0}
            assert step["method"] == "Simple Averaging"
        assert lines[-1]["summary"]["pathLength"] == 0.0

    def test_deterministic_output(self, capsys):
        main(["hello", "--dim", "12"])
        first = capsys.readouterr().out
        main(["hello", "--dim", "12"])
        assert capsys.readouterr().out == first


class TestEmbeddingFile:
    """Test reducing raw embeddings from JSON."""

    def test_reduce_file(self, tmp_path, capsys):
        path = tmp_path / "vectors.json"
        path.write_text(json.dumps([[1.0, 0.0, 0.0], [0.0, 0.0, 3.0]]))

        assert main(["--embeddings", str(path), "--method", "simple", "--dim", "3"]) == 0
        lines = _lines(capsys)
        assert lines[0]["vector"] == {"x": 5.0, "y": 0.0, "z": 0.0}
        assert lines[1]["segment"]["end"] == {"x": 5.0, "y": 0.0, "z": 5.0}
        assert lines[2]["summary"]["currentPoint"] == {"x": 5.0, "y": 0.0, "z": 5.0}

    def test_short_vector_exit_code(self, tmp_path, capsys):
        path = tmp_path / "vectors.json"
        path.write_text(json.dumps([[1.0, 2.0]]))

        assert main(["--embeddings", str(path), "--method", "simple", "--dim", "3"]) == 2
        assert "invalid input" in capsys.readouterr().err

    def test_bad_file_shape(self, tmp_path, capsys):
        path = tmp_path / "vectors.json"
        path.write_text(json.dumps({"vectors": []}))

        assert main(["--embeddings", str(path)]) == 2

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--embeddings", str(tmp_path / "nope.json")]) == 1
