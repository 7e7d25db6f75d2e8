"""Session path through visualization space.

Reduced vectors are placed in one of two ways:

- walk: each vector starts where the previous one ended, forming a
  connected path from the origin.
- scatter: each vector starts at the origin; the path is left untouched.

The tracker keeps the cumulative walk position and every point visited in
walk mode. `path_points` is append-only and always starts with the origin.
"""

from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import List, Optional, Tuple, Union
import numpy as np

from ..log import get_logger
from .reducer import ORIGIN, Vector3

logger = get_logger(__name__)


class VisualizationMode(Enum):
    """How a new vector is anchored."""
    WALK = "walk"          # Chain head-to-tail from the current point
    SCATTER = "scatter"    # Anchor at the origin

    @classmethod
    def parse(cls, mode: Union[str, "VisualizationMode"]) -> "VisualizationMode":
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown visualization mode {mode!r}, expected 'walk' or 'scatter'"
            ) from None


@dataclass(frozen=True)
class Segment:
    """One recorded vector: where it was drawn from and to."""
    start: Vector3
    end: Vector3
    mode: VisualizationMode
    index: int                       # Position in the session's history
    label: Optional[str] = None      # Typically the source text

    @property
    def displacement(self) -> Vector3:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "mode": self.mode.value,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "label": self.label,
        }


class PathTracker:
    """Tracks the walk position and visited points for one session.

    Usage:
        tracker = PathTracker()
        tracker.record(Vector3(1, 0, 0), "walk")
        tracker.record(Vector3(0, 1, 0), "walk")
        tracker.current_point   # Vector3(1, 1, 0)

    Thread-safe: `record` holds a lock across the read-modify-write of the
    current point, so concurrent walk calls never interleave.
    """

    def __init__(self):
        self._current_point: Vector3 = ORIGIN
        self._path_points: List[Vector3] = [ORIGIN]
        self._segments: List[Segment] = []
        self._lock = Lock()

    @property
    def current_point(self) -> Vector3:
        """End of the last walk step (origin until the first one)."""
        return self._current_point

    @property
    def path_points(self) -> Tuple[Vector3, ...]:
        """Every point visited in walk mode, origin first."""
        with self._lock:
            return tuple(self._path_points)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        """Every recorded segment, both modes, in recording order."""
        with self._lock:
            return tuple(self._segments)

    def record(
        self,
        vector: Vector3,
        mode: Union[str, VisualizationMode] = VisualizationMode.WALK,
        label: Optional[str] = None,
    ) -> Segment:
        """Place `vector` and return the segment it was drawn along.

        Args:
            vector: Reduced vector, treated as a displacement
            mode: "walk" or "scatter"
            label: Optional text to keep with the segment

        Returns:
            The recorded Segment
        """
        mode = VisualizationMode.parse(mode)

        with self._lock:
            index = len(self._segments)
            if mode is VisualizationMode.SCATTER:
                segment = Segment(
                    start=ORIGIN, end=vector, mode=mode, index=index, label=label
                )
            else:
                start = self._current_point
                end = start + vector
                self._path_points.append(end)
                self._current_point = end
                segment = Segment(
                    start=start, end=end, mode=mode, index=index, label=label
                )
            self._segments.append(segment)

        logger.debug(
            "Recorded segment %d ending at (%.3f, %.3f, %.3f)",
            segment.index, segment.end.x, segment.end.y, segment.end.z,
            extra={"mode": mode.value},
        )
        return segment

    def centroid(self) -> Vector3:
        """Arithmetic mean of the current path points."""
        points = np.array([p.to_numpy() for p in self.path_points])
        return Vector3.from_iterable(points.mean(axis=0))

    def path_length(self) -> float:
        """Total distance travelled along the walk path."""
        points = np.array([p.to_numpy() for p in self.path_points])
        if len(points) < 2:
            return 0.0
        return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())

    def focus_target(
        self,
        mode: Union[str, VisualizationMode],
        current_target: Vector3 = ORIGIN,
        lerp: float = 0.1,
    ) -> Vector3:
        """Where a view should look after a recording.

        Scatter mode looks at the origin. Walk mode eases `current_target`
        toward the centroid of the path by `lerp`.
        """
        if VisualizationMode.parse(mode) is VisualizationMode.SCATTER:
            return ORIGIN
        return current_target.lerp(self.centroid(), lerp)
