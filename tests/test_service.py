"""Tests for the embed service, session and offline embedder."""

import logging
import threading

import numpy as np
import pytest

from textwalk.config import TextWalkConfig
from textwalk.embedding import DeterministicEmbedder
from textwalk.exceptions import InvalidInputError
from textwalk.geometry import ORIGIN, Reducer, ReductionMethod, Vector3
from textwalk.service import EmbedService, VisualizationSession


class FakeProvider:
    """Provider returning canned embeddings and counting calls."""

    def __init__(self, embedding):
        self.embedding = embedding
        self.calls = []

    def embed_text(self, text):
        self.calls.append(text)
        return self.embedding


class FailingProvider:
    def embed_text(self, text):
        raise RuntimeError("provider unavailable")


class TestDeterministicEmbedder:
    """Test the offline provider."""

    def test_same_text_same_vector(self):
        embedder = DeterministicEmbedder(dim=64)
        assert embedder.embed_text("Hello world") == embedder.embed_text("  hello WORLD ")

    def test_unit_length(self):
        vec = DeterministicEmbedder(dim=3072).embed_text("some text")
        assert len(vec) == 3072
        assert np.linalg.norm(vec) == pytest.approx(1.0)

    def test_different_texts_differ(self):
        embedder = DeterministicEmbedder(dim=32)
        assert embedder.embed_text("cats") != embedder.embed_text("dogs")


class TestEmbedService:
    """Test text validation and reduction."""

    def test_blank_text_rejected(self):
        provider = FakeProvider([1.0] * 12)
        service = EmbedService(provider, TextWalkConfig.for_testing())
        for text in ("", "   ", "\n"):
            with pytest.raises(InvalidInputError):
                service.embed(text)
        assert provider.calls == []

    def test_result_payload(self):
        embedding = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        service = EmbedService(FakeProvider(embedding), TextWalkConfig.for_testing())
        result = service.embed("hello", method="simple")

        assert result.method is ReductionMethod.SIMPLE
        assert result.vector == service.reducer.reduce_average(embedding)
        payload = result.to_dict()
        assert payload["text"] == "hello"
        assert payload["embeddingDimensions"] == 6
        assert payload["method"] == "Simple Averaging"
        assert set(payload["vector"]) == {"x", "y", "z"}

    def test_default_method_is_projection(self):
        service = EmbedService(FakeProvider([0.5] * 12), TextWalkConfig.for_testing())
        result = service.embed("hello")
        assert result.method is ReductionMethod.PROJECTION
        assert result.to_dict()["method"] == "Random Projection"

    def test_reducer_config_is_reused(self):
        reducer = Reducer(TextWalkConfig.for_testing(input_dimensions=9))
        service = EmbedService(FakeProvider([1.0] * 9), reducer=reducer)
        assert service.config is reducer.config
        assert service.reducer is reducer

    def test_provider_errors_propagate(self):
        service = EmbedService(FailingProvider(), TextWalkConfig.for_testing())
        with pytest.raises(RuntimeError, match="provider unavailable"):
            service.embed("hello")

    def test_wrong_dimensions_warn_for_either_method(self, caplog):
        service = EmbedService(FakeProvider([1.0] * 6), TextWalkConfig.for_testing(12))
        for method in ("simple", "projection"):
            caplog.clear()
            with caplog.at_level(logging.WARNING, logger="textwalk"):
                service.embed("hello", method=method)
            assert "Expected 12 dimensions but got 6" in caplog.text

    def test_short_embedding_for_simple_fails(self):
        service = EmbedService(FakeProvider([1.0, 2.0]), TextWalkConfig.for_testing())
        with pytest.raises(InvalidInputError):
            service.embed("hello", method="simple")


class TestVisualizationSession:
    """Test submissions flowing into the path."""

    def _session(self, embedding):
        service = EmbedService(FakeProvider(embedding), TextWalkConfig.for_testing(input_dimensions=3))
        return VisualizationSession(service)

    def test_walk_submissions_chain(self):
        session = self._session([2.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        first = session.submit("a", method="simple", mode="walk")
        second = session.submit("b", method="simple", mode="walk")

        assert first.segment.end == Vector3(5.0, 0.0, 0.0)
        assert second.segment.start == Vector3(5.0, 0.0, 0.0)
        assert session.tracker.current_point == Vector3(10.0, 0.0, 0.0)
        assert [s.label for s in session.tracker.segments] == ["a", "b"]

    def test_scatter_submissions_stay_at_origin(self):
        session = self._session([0.0, 0.0, 0.0, 0.0, 0.0, 3.0])
        step = session.submit("a", method="simple", mode="scatter")
        assert step.segment.start == ORIGIN
        assert step.focus == ORIGIN
        assert session.tracker.path_points == (ORIGIN,)

    def test_focus_follows_walk(self):
        session = self._session([2.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        step = session.submit("a", method="simple", mode="walk")
        # Centroid of (0,0,0) and (5,0,0), eased by 0.1 from the origin
        assert step.focus.to_dict() == pytest.approx({"x": 0.25, "y": 0.0, "z": 0.0})
        assert step.to_dict()["focus"] == step.focus.to_dict()
        assert step.to_dict()["segment"]["mode"] == "walk"

    def test_concurrent_submits_keep_every_focus_step(self):
        """Concurrent walk submissions end on the same focus as sequential ones."""
        embedding = [2.0, 0.0, 0.0, 0.0, 0.0, 0.0]
        sequential = self._session(embedding)
        for _ in range(200):
            sequential.submit("a", method="simple", mode="walk")

        concurrent = self._session(embedding)
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            for _ in range(25):
                concurrent.submit("a", method="simple", mode="walk")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert concurrent.tracker.current_point == sequential.tracker.current_point
        assert concurrent.focus.to_dict() == pytest.approx(sequential.focus.to_dict())
