"""Command-line entry point.

Reduces texts (via the offline deterministic embedder) or raw embeddings
from a JSON file, places each one in walk or scatter mode, and prints one
JSON object per step followed by a summary.

Usage:
    textwalk "first thought" "second thought" --mode walk
    echo "hello" | textwalk --method simple
    textwalk --embeddings vectors.json --mode scatter
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import TextWalkConfig
from .embedding import DeterministicEmbedder
from .exceptions import InvalidInputError, TextWalkError
from .geometry import PathTracker, Reducer, ReductionMethod, VisualizationMode
from .log import configure_logging
from .service import EmbedService, VisualizationSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textwalk",
        description="Reduce text embeddings to 3D points along a path",
    )
    parser.add_argument(
        "texts", nargs="*",
        help="Texts to place (read from stdin, one per line, if omitted)",
    )
    parser.add_argument(
        "--embeddings", metavar="FILE",
        help="JSON file holding a list of embedding vectors to reduce instead of texts",
    )
    parser.add_argument(
        "--method", choices=[m.value for m in ReductionMethod],
        default=ReductionMethod.PROJECTION.value,
        help="Reduction method (default: projection)",
    )
    parser.add_argument(
        "--mode", choices=[m.value for m in VisualizationMode],
        default=VisualizationMode.WALK.value,
        help="Place vectors head-to-tail (walk) or from the origin (scatter)",
    )
    parser.add_argument(
        "--dim", type=int, default=3072,
        help="Embedding dimensions expected by the projection basis (default: 3072)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Projection seed")
    parser.add_argument("--json-logs", action="store_true", help="Structured log output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _load_embeddings(path: str) -> List[List[float]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise InvalidInputError(f"{path} must contain a JSON list of vectors")
    return data


def _emit(obj: dict) -> None:
    print(json.dumps(obj))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        structured=args.json_logs,
    )

    try:
        config = TextWalkConfig(seed=args.seed, input_dimensions=args.dim)
        reducer = Reducer(config)
        tracker = PathTracker()

        if args.embeddings:
            for i, embedding in enumerate(_load_embeddings(args.embeddings)):
                vector = reducer.reduce(embedding, args.method)
                segment = tracker.record(vector, args.mode, label=f"#{i}")
                _emit({
                    "vector": vector.to_dict(),
                    "embeddingDimensions": len(embedding),
                    "method": ReductionMethod.parse(args.method).label,
                    "segment": segment.to_dict(),
                })
        else:
            texts = args.texts or [line.strip() for line in sys.stdin if line.strip()]
            service = EmbedService(DeterministicEmbedder(dim=args.dim), config, reducer)
            session = VisualizationSession(service, tracker)
            for text in texts:
                _emit(session.submit(text, args.method, args.mode).to_dict())

    except InvalidInputError as e:
        print(f"textwalk: invalid input: {e}", file=sys.stderr)
        return 2
    except (TextWalkError, OSError, ValueError) as e:
        print(f"textwalk: {e}", file=sys.stderr)
        return 1

    _emit({
        "summary": {
            "steps": len(tracker.segments),
            "currentPoint": tracker.current_point.to_dict(),
            "centroid": tracker.centroid().to_dict(),
            "pathLength": tracker.path_length(),
        }
    })
    return 0


if __name__ == "__main__":
    sys.exit(main())
