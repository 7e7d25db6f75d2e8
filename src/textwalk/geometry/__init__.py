"""Geometry of TextWalk - embedding-to-space reduction.

This module turns high-dimensional text embeddings into points in a 3D
scene. The same embedding always lands in the same place, and similar
embeddings point in similar directions.

Key concepts:
- ProjectionMatrix: Fixed pseudo-random basis, built once per process
- Reducer: Maps an embedding to a scaled Vector3 (projection or simple)
- PathTracker: Chains vectors into a walk or scatters them from the origin
"""

from .projection import (
    ProjectionMatrix,
    generate_projection_matrix,
    random_normal,
    seeded_random,
)
from .reducer import (
    ORIGIN,
    Reducer,
    ReductionMethod,
    Vector3,
    normalize_and_scale,
)
from .path import PathTracker, Segment, VisualizationMode

__all__ = [
    "ProjectionMatrix",
    "generate_projection_matrix",
    "random_normal",
    "seeded_random",
    "ORIGIN",
    "Reducer",
    "ReductionMethod",
    "Vector3",
    "normalize_and_scale",
    "PathTracker",
    "Segment",
    "VisualizationMode",
]
