"""TextWalk - deterministic 3D placement of text embeddings."""

from .config import TextWalkConfig
from .embedding import DeterministicEmbedder, EmbeddingProvider
from .exceptions import ConfigError, InvalidInputError, TextWalkError
from .geometry import (
    ORIGIN,
    PathTracker,
    ProjectionMatrix,
    Reducer,
    ReductionMethod,
    Segment,
    Vector3,
    VisualizationMode,
)
from .service import EmbedResult, EmbedService, SessionStep, VisualizationSession

__all__ = [
    "TextWalkConfig",
    "DeterministicEmbedder",
    "EmbeddingProvider",
    "ConfigError",
    "InvalidInputError",
    "TextWalkError",
    "ORIGIN",
    "PathTracker",
    "ProjectionMatrix",
    "Reducer",
    "ReductionMethod",
    "Segment",
    "Vector3",
    "VisualizationMode",
    "EmbedResult",
    "EmbedService",
    "SessionStep",
    "VisualizationSession",
]
