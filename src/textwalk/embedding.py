"""Embedding provider seam.

TextWalk never calls an embedding API itself. Anything with an
`embed_text(text) -> Sequence[float]` method can be plugged into the
service; DeterministicEmbedder is an offline stand-in for demos and tests.
"""

import hashlib
from typing import List, Protocol, Sequence
import numpy as np


class EmbeddingProvider(Protocol):
    """Turns text into a fixed-length embedding."""

    def embed_text(self, text: str) -> Sequence[float]:
        ...


class DeterministicEmbedder:
    """Hash-seeded embedder producing unit vectors.

    The same text (after lowercasing and stripping) always gives the same
    vector. There is no semantic signal; it exists to exercise the pipeline.
    """

    def __init__(self, dim: int = 3072):
        self.dim = dim

    def embed_text(self, text: str) -> List[float]:
        normalized = text.lower().strip()
        text_hash = hashlib.md5(normalized.encode("utf-8")).hexdigest()
        seed = int(text_hash[:8], 16)

        rng = np.random.default_rng(seed)
        vec = rng.standard_normal(self.dim)

        norm = np.linalg.norm(vec)
        if norm > 0:
            vec = vec / norm
        return vec.tolist()
