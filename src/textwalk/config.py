"""Configuration for TextWalk."""

import math
from dataclasses import dataclass, fields
from typing import Any, Dict

from .exceptions import ConfigError


@dataclass
class TextWalkConfig:
    """Configuration for the reduction core.

    The reducer projects every embedding onto the same fixed basis:
    1. A 3 x input_dimensions matrix generated from `seed`
    2. Each reduction method normalizes its result to unit length
    3. The unit vector is scaled to that method's visualization radius

    Changing `seed` or `input_dimensions` changes the basis, so points
    reduced under different configs are not comparable.
    """

    # Projection basis
    seed: int = 42                       # First seed of the matrix counter
    input_dimensions: int = 3072         # text-embedding-3-large

    # Visualization radius per method
    projection_scale: float = 5.0
    simple_scale: float = 5.0

    # Camera follow factor for walk mode
    focus_lerp: float = 0.1

    def __post_init__(self):
        if self.input_dimensions <= 0:
            raise ConfigError(
                f"input_dimensions must be positive, got {self.input_dimensions}"
            )
        for name in ("projection_scale", "simple_scale"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a positive finite number, got {value}")
        if not 0.0 <= self.focus_lerp <= 1.0:
            raise ConfigError(f"focus_lerp must be within [0, 1], got {self.focus_lerp}")

    @classmethod
    def legacy(cls) -> "TextWalkConfig":
        """Preset matching the first server (text-embedding-3-small, scale 2 averaging)."""
        return cls(
            input_dimensions=1536,
            simple_scale=2.0,
        )

    @classmethod
    def for_testing(cls, input_dimensions: int = 12) -> "TextWalkConfig":
        """Small basis for fast tests."""
        return cls(input_dimensions=input_dimensions)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "TextWalkConfig":
        """Build a config from known keys, ignoring the rest."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})
