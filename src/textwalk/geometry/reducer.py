"""Reduction of embedding vectors to 3D directions.

Two interchangeable methods map an N-dimensional embedding to a Vector3:

- projection: multiply by a fixed random basis (Johnson-Lindenstrauss style).
  Every input dimension contributes to every output axis.
- simple: average three contiguous chunks. Cheap and lossy; kept so older
  visualizations can be reproduced.

Both share the same post-processing: normalize to unit length, then scale
to a fixed visualization radius. Direction carries the semantic signal,
magnitude does not. A zero-magnitude result is returned as the origin
rather than an error.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Sequence, Union
import math
import numpy as np

from ..config import TextWalkConfig
from ..exceptions import InvalidInputError
from ..log import get_logger
from .projection import DEFAULT_ROWS, ProjectionMatrix

logger = get_logger(__name__)


@dataclass(frozen=True)
class Vector3:
    """A point or displacement in visualization space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def lerp(self, target: "Vector3", alpha: float) -> "Vector3":
        """Move `alpha` of the way toward `target`."""
        return Vector3(
            self.x + (target.x - self.x) * alpha,
            self.y + (target.y - self.y) * alpha,
            self.z + (target.z - self.z) * alpha,
        )

    def to_numpy(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vector3":
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)


ORIGIN = Vector3(0.0, 0.0, 0.0)


class ReductionMethod(Enum):
    """Selectable reduction algorithm."""
    PROJECTION = "projection"   # Fixed random basis (default)
    SIMPLE = "simple"           # Chunked averaging (legacy)

    @property
    def label(self) -> str:
        """Display name reported back to clients."""
        return _METHOD_LABELS[self]

    @classmethod
    def parse(cls, name: Union[str, "ReductionMethod", None]) -> "ReductionMethod":
        """Resolve a method name; missing or unknown names fall back to PROJECTION."""
        if isinstance(name, cls):
            return name
        if name is None:
            return cls.PROJECTION
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            logger.warning(
                "Unknown reduction method %r, using projection", name,
                extra={"method": str(name)},
            )
            return cls.PROJECTION


_METHOD_LABELS = {
    ReductionMethod.PROJECTION: "Random Projection",
    ReductionMethod.SIMPLE: "Simple Averaging",
}


def normalize_and_scale(x: float, y: float, z: float, scale: float) -> Vector3:
    """Scale (x, y, z) to length `scale`; the zero vector maps to the origin."""
    magnitude = math.hypot(x, y, z)
    if magnitude == 0:
        return ORIGIN
    return Vector3(
        x / magnitude * scale,
        y / magnitude * scale,
        z / magnitude * scale,
    )


def _as_embedding(
    embedding: Sequence[float],
    fill_missing: bool = False,
) -> np.ndarray:
    """Validate and convert an embedding to a 1-D float64 array.

    Missing entries (None or NaN) become 0 when `fill_missing` is set and
    are rejected otherwise. Infinite values are always rejected.
    """
    try:
        values = np.asarray(embedding, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Embedding must be a sequence of numbers: {e}") from e

    if values.ndim != 1:
        raise InvalidInputError(
            f"Embedding must be one-dimensional, got shape {values.shape}"
        )
    if values.size == 0:
        raise InvalidInputError("Embedding is empty", length=0)
    if np.any(np.isinf(values)):
        raise InvalidInputError(
            "Embedding contains infinite values", length=int(values.size)
        )

    missing = np.isnan(values)
    if np.any(missing):
        if not fill_missing:
            raise InvalidInputError(
                "Embedding contains missing or NaN values", length=int(values.size)
            )
        logger.warning(
            "Treating %d missing values as 0", int(missing.sum()),
            extra={"dimensions": int(values.size)},
        )
        values = np.where(missing, 0.0, values)
    return values


def _finite(reduce_fn, values: np.ndarray) -> np.ndarray:
    """Apply reduce_fn, rescaling first if huge inputs overflowed.

    Both reductions are linear, so dividing by the largest magnitude keeps
    the direction and only the (discarded) length changes.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        result = reduce_fn(values)
    if np.all(np.isfinite(result)):
        return result
    return reduce_fn(values / np.max(np.abs(values)))


class Reducer:
    """Maps embeddings to Vector3 with a basis built once at construction.

    Usage:
        reducer = Reducer()
        point = reducer.reduce(embedding, method="projection")

    The basis is shared process-wide per (seed, dimensions), so two reducers
    with the same config project onto the same directions. Pass `matrix`
    to inject a specific basis instead.
    """

    def __init__(
        self,
        config: Optional[TextWalkConfig] = None,
        matrix: Optional[ProjectionMatrix] = None,
    ):
        self.config = config or TextWalkConfig()
        self.matrix = matrix or ProjectionMatrix.shared(
            seed=self.config.seed,
            rows=DEFAULT_ROWS,
            cols=self.config.input_dimensions,
        )

    @property
    def input_dimensions(self) -> int:
        return self.matrix.cols

    def _check_dimensions(self, values: np.ndarray, method: ReductionMethod):
        """Log a warning when the embedding length differs from the basis width."""
        if values.size != self.input_dimensions:
            logger.warning(
                "Expected %d dimensions but got %d",
                self.input_dimensions, values.size,
                extra={
                    "method": method.value,
                    "dimensions": int(values.size),
                    "expected_dimensions": self.input_dimensions,
                },
            )

    def reduce_projection(self, embedding: Sequence[float]) -> Vector3:
        """Project onto the fixed basis, then normalize and scale.

        Indices past the end of a short embedding, and missing (None/NaN)
        entries, contribute zero; values past the basis width are ignored.
        """
        values = _as_embedding(embedding, fill_missing=True)
        self._check_dimensions(values, ReductionMethod.PROJECTION)

        x, y, z = _finite(self.matrix.project, values)
        return normalize_and_scale(
            float(x), float(y), float(z), self.config.projection_scale
        )

    def reduce_average(self, embedding: Sequence[float]) -> Vector3:
        """Average three contiguous chunks, then normalize and scale.

        chunk_size = floor(len / 3); trailing remainder values are dropped.
        """
        values = _as_embedding(embedding)
        self._check_dimensions(values, ReductionMethod.SIMPLE)
        chunk_size = values.size // 3
        if chunk_size == 0:
            raise InvalidInputError(
                f"Simple reduction needs at least 3 values, got {values.size}",
                length=int(values.size),
            )

        chunks = values[:3 * chunk_size].reshape(3, chunk_size)
        x, y, z = _finite(lambda c: c.mean(axis=1), chunks)
        return normalize_and_scale(
            float(x), float(y), float(z), self.config.simple_scale
        )

    # Legacy name for the averaging method
    reduce_simple = reduce_average

    def reduce(
        self,
        embedding: Sequence[float],
        method: Union[str, ReductionMethod, None] = None,
    ) -> Vector3:
        """Reduce with the named method (projection when omitted or unknown)."""
        resolved = ReductionMethod.parse(method)
        if resolved is ReductionMethod.SIMPLE:
            return self.reduce_average(embedding)
        return self.reduce_projection(embedding)

