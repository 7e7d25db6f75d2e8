"""Deterministic random projection basis.

The basis is a 3 x N matrix of approximately standard-normal values. It is
built from a sine-hash scalar generator fed through the Box-Muller
transform, walking a seed counter that starts at a fixed value and advances
by 2 per cell (each cell consumes two uniform draws).

Reproducibility matters more than statistical quality here: every cell is
computed with scalar `math` functions in a fixed row-major order, so the
same seed gives a bit-identical matrix on every run.
"""

import math
import sys
from dataclasses import dataclass
from threading import Lock
from typing import ClassVar, Dict, Tuple
import numpy as np

from ..log import get_logger

logger = get_logger(__name__)

DEFAULT_SEED = 42
DEFAULT_ROWS = 3
DEFAULT_COLS = 3072

# Smallest positive normal float; keeps log(u) finite
_MIN_UNIFORM = sys.float_info.min


def seeded_random(seed: float) -> float:
    """Uniform value in [0, 1) from frac(sin(seed) * 10000)."""
    x = math.sin(seed) * 10000.0
    return x - math.floor(x)


def random_normal(seed: float) -> float:
    """Standard-normal sample via Box-Muller over draws at seed and seed + 1."""
    u = 1.0 - seeded_random(seed)
    v = 1.0 - seeded_random(seed + 1)
    # frac() can round up to 1.0 for tiny negative sines
    if u < _MIN_UNIFORM:
        u = _MIN_UNIFORM
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def generate_projection_matrix(
    seed: int = DEFAULT_SEED,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLS,
) -> np.ndarray:
    """Generate a rows x cols matrix, row-major, seed counter step 2.

    Returns:
        Read-only float64 array
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"matrix shape must be positive, got ({rows}, {cols})")

    cells = []
    counter = seed
    for _ in range(rows):
        for _ in range(cols):
            cells.append(random_normal(counter))
            counter += 2

    matrix = np.array(cells, dtype=np.float64).reshape(rows, cols)
    matrix.setflags(write=False)
    return matrix


@dataclass(frozen=True, eq=False)
class ProjectionMatrix:
    """Immutable projection basis plus the parameters it was built from.

    Usage:
        basis = ProjectionMatrix.shared(seed=42, cols=3072)
        xyz = basis.project(embedding)

    The basis always has 3 finite rows. `values` is copied on construction
    and made read-only, so a caller's array can't change it afterwards.

    Instances returned by `shared` live for the rest of the process, one per
    (seed, rows, cols) key. A process normally uses a single key; call
    `clear_shared` to drop them, e.g. between tests or after reconfiguring.
    """
    values: np.ndarray
    seed: int

    # Process-wide instances keyed by (seed, rows, cols)
    _cache: ClassVar[Dict[Tuple[int, int, int], "ProjectionMatrix"]] = {}
    _lock: ClassVar[Lock] = Lock()

    def __post_init__(self):
        values = np.array(self.values, dtype=np.float64)
        if values.ndim != 2 or values.shape[0] != DEFAULT_ROWS or values.shape[1] == 0:
            raise ValueError(
                f"projection basis must have shape ({DEFAULT_ROWS}, N>0), got {values.shape}"
            )
        if not np.all(np.isfinite(values)):
            raise ValueError("projection basis contains NaN or infinite cells")
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @classmethod
    def generate(
        cls,
        seed: int = DEFAULT_SEED,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ) -> "ProjectionMatrix":
        """Build a fresh basis."""
        return cls(values=generate_projection_matrix(seed, rows, cols), seed=seed)

    @classmethod
    def shared(
        cls,
        seed: int = DEFAULT_SEED,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
    ) -> "ProjectionMatrix":
        """Return the process-wide basis for this key, building it exactly once."""
        key = (seed, rows, cols)
        with cls._lock:
            matrix = cls._cache.get(key)
            if matrix is None:
                logger.debug(
                    "Generating %dx%d projection matrix", rows, cols,
                    extra={"seed": seed},
                )
                matrix = cls.generate(seed, rows, cols)
                cls._cache[key] = matrix
            return matrix

    @classmethod
    def clear_shared(cls) -> None:
        """Forget every process-wide basis; later `shared` calls rebuild."""
        with cls._lock:
            cls._cache.clear()

    @property
    def rows(self) -> int:
        return self.values.shape[0]

    @property
    def cols(self) -> int:
        return self.values.shape[1]

    def project(self, vector: np.ndarray) -> np.ndarray:
        """Multiply the basis by `vector`, zero-filling or truncating to `cols`."""
        n = min(len(vector), self.cols)
        padded = np.zeros(self.cols, dtype=np.float64)
        padded[:n] = vector[:n]
        return self.values @ padded
