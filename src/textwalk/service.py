"""Text-to-point service used by transports (HTTP handlers, CLI).

EmbedService does what the /api/embed endpoint did: validate the text,
fetch an embedding from the provider, and reduce it. VisualizationSession
adds the session path on top, so each submission becomes a segment.

Provider failures propagate unchanged; nothing here retries.
"""

from dataclasses import dataclass
from threading import Lock
from typing import Optional, Union

from .config import TextWalkConfig
from .embedding import EmbeddingProvider
from .exceptions import InvalidInputError
from .geometry import (
    ORIGIN,
    PathTracker,
    Reducer,
    ReductionMethod,
    Segment,
    Vector3,
    VisualizationMode,
)
from .log import get_logger

logger = get_logger(__name__)


@dataclass
class EmbedResult:
    """A reduced embedding plus what a client needs to display it."""
    text: str
    vector: Vector3
    embedding_dimensions: int
    method: ReductionMethod

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "vector": self.vector.to_dict(),
            "embeddingDimensions": self.embedding_dimensions,
            "method": self.method.label,
        }


@dataclass
class SessionStep:
    """Result of one submission to a session."""
    result: EmbedResult
    segment: Segment
    focus: Vector3

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["segment"] = self.segment.to_dict()
        data["focus"] = self.focus.to_dict()
        return data


class EmbedService:
    """Embeds text with a provider and reduces it to a Vector3."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        config: Optional[TextWalkConfig] = None,
        reducer: Optional[Reducer] = None,
    ):
        self.provider = provider
        self.config = config or (reducer.config if reducer else TextWalkConfig())
        self.reducer = reducer or Reducer(self.config)

    def embed(
        self,
        text: str,
        method: Union[str, ReductionMethod, None] = None,
    ) -> EmbedResult:
        """Embed and reduce `text`.

        Raises:
            InvalidInputError: If the text is blank or the embedding cannot be reduced
        """
        if not text or not text.strip():
            raise InvalidInputError("Text is required")

        resolved = ReductionMethod.parse(method)
        logger.info("Getting embedding for: %s", text, extra={"method": resolved.value})

        embedding = self.provider.embed_text(text)
        vector = self.reducer.reduce(embedding, resolved)

        logger.info(
            "3D vector: (%.4f, %.4f, %.4f)", vector.x, vector.y, vector.z,
            extra={"method": resolved.value},
        )
        return EmbedResult(
            text=text,
            vector=vector,
            embedding_dimensions=len(embedding),
            method=resolved,
        )


class VisualizationSession:
    """One visualization session: a service plus its path state.

    Usage:
        session = VisualizationSession(EmbedService(DeterministicEmbedder()))
        step = session.submit("hello", mode="walk")
        step.segment.end
    """

    def __init__(
        self,
        service: EmbedService,
        tracker: Optional[PathTracker] = None,
    ):
        self.service = service
        self.tracker = tracker or PathTracker()
        self.focus: Vector3 = ORIGIN
        self._lock = Lock()

    def submit(
        self,
        text: str,
        method: Union[str, ReductionMethod, None] = None,
        mode: Union[str, VisualizationMode] = VisualizationMode.WALK,
    ) -> SessionStep:
        """Embed `text`, place it in the scene, and update the view focus."""
        result = self.service.embed(text, method)
        # Record and focus update form one step per submission
        with self._lock:
            segment = self.tracker.record(result.vector, mode, label=text)
            self.focus = self.tracker.focus_target(
                mode, self.focus, lerp=self.service.config.focus_lerp
            )
            focus = self.focus
        return SessionStep(result=result, segment=segment, focus=focus)
