import logging
import sys
import time
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

import torch

from .chart import ChartMemo
from .errors import InvalidInput, ParseFailure
from .extractor import extract_arcs
from .prune import PruneThreshold
from .span_solver import SpanSolver

logger = logging.getLogger(__name__)


class Arc(NamedTuple):
    head: int
    dependent: int
    score: float
    label: Optional[str] = None

    def to_dict(self):
        return {"head": self.head, "dependent": self.dependent, "score": self.score, "label": self.label}


@dataclass
class ParseResult:
    arcs: List[Arc]
    score: Optional[float]
    root: int
    size: int
    spans_solved: int = 0
    elapsed_ms: float = field(default=0.0, compare=False)

    @property
    def complete(self) -> bool:
        return len(self.arcs) == self.size - 1

    def heads(self):
        heads = [None] * self.size
        heads[self.root] = -1
        for arc in self.arcs:
            heads[arc.dependent] = arc.head
        return heads

    def to_dict(self):
        return {
            "arcs": [arc.to_dict() for arc in self.arcs],
            "heads": self.heads(),
            "score": self.score,
            "root": self.root,
            "complete": self.complete,
            "summary": {
                "tokens": self.size,
                "edges": len(self.arcs),
                "spans_solved": self.spans_solved,
                "elapsed_ms": round(self.elapsed_ms, 3),
            },
        }


def validate_scores(scores):
    """Return the score matrix as a list of float rows, or raise InvalidInput.

    Only off-diagonal cells must be finite; the diagonal is never read.
    """
    if isinstance(scores, torch.Tensor):
        tensor = scores.detach().to(dtype=torch.float64, device="cpu")
    else:
        if scores is None or isinstance(scores, (str, bytes)):
            raise InvalidInput("score matrix must be a square 2-D array")
        try:
            rows = [list(row) for row in scores]
        except TypeError:
            raise InvalidInput("score matrix must be a square 2-D array")
        n = len(rows)
        if any(len(row) != n for row in rows):
            raise InvalidInput(f"score matrix must be {n}x{n}, got ragged rows")
        try:
            tensor = torch.tensor(rows, dtype=torch.float64) if n else torch.empty((0, 0), dtype=torch.float64)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidInput(f"score matrix must contain only numbers: {e}")

    if tensor.dim() != 2 or tensor.shape[0] != tensor.shape[1]:
        raise InvalidInput(f"score matrix must be square, got shape {tuple(tensor.shape)}")

    n = tensor.shape[0]
    if n < 1:
        raise InvalidInput("at least one token is required")

    off_diagonal = ~torch.eye(n, dtype=torch.bool)
    bad = ~torch.isfinite(tensor) & off_diagonal
    if bool(bad.any()):
        head, dependent = (int(i) for i in bad.nonzero()[0])
        raise InvalidInput(f"non-finite score at [{head}][{dependent}]")

    return tensor.masked_fill(~off_diagonal, 0.0).tolist()


def validate_root(root, n):
    if isinstance(root, bool) or not isinstance(root, int):
        raise InvalidInput(f"root must be an integer, got {root!r}")
    if not 0 <= root < n:
        raise InvalidInput(f"root {root} outside [0, {n - 1}]")


def _ensure_recursion_headroom(n):
    # nested span solves go at most n frames deep, a few frames each;
    # the limit is process-wide, only ever raised and left raised
    needed = 4 * n + 200
    if sys.getrecursionlimit() < needed:
        sys.setrecursionlimit(needed)


def parse_scores(scores, root=0, prune=None, max_spans=None):
    """Find the best projective tree over the tokens of a score matrix.

    ``scores[h][d]`` is the plausibility that token h heads token d. The
    result is never raised as a failure; check ``ParseResult.complete`` or
    call ``ensure_complete``.
    """
    matrix = validate_scores(scores)
    n = len(matrix)
    validate_root(root, n)
    _ensure_recursion_headroom(n)

    start = time.perf_counter()
    memo = ChartMemo()
    solver = SpanSolver(matrix, memo=memo, prune=prune, max_spans=max_spans)
    solution = solver.solve(0, n - 1, root)

    arcs = [Arc(head, dependent, score) for head, dependent, score in extract_arcs(memo, solution)]
    mean = solution.score if arcs else None
    elapsed_ms = (time.perf_counter() - start) * 1000

    result = ParseResult(arcs=arcs, score=mean, root=root, size=n, spans_solved=len(memo), elapsed_ms=elapsed_ms)

    logger.info(f"[Parser] Parsed {n} tokens: {len(arcs)} edges, {len(memo)} spans solved, "
                f"score={mean}, {elapsed_ms:.1f}ms")
    if not result.complete:
        logger.warning(f"[Parser] Incomplete tree: {len(arcs)} of {n - 1} edges recovered")

    return result


def ensure_complete(result):
    if not result.complete:
        raise ParseFailure(
            f"expected {result.size - 1} edges, recovered {len(result.arcs)}",
            result=result,
        )
    return result


class CKYDependencyParser:
    """Reusable parser holding only configuration; each call gets a fresh chart."""

    def __init__(self, prune=None, max_spans=None, root=0):
        self.prune = prune if prune is not None else PruneThreshold()
        self.max_spans = max_spans
        self.root = root

    @classmethod
    def from_settings(cls, settings):
        return cls(prune=PruneThreshold.from_settings(settings), max_spans=settings.max_spans, root=settings.root)

    def parse(self, scores, root=None):
        return parse_scores(scores, root=self.root if root is None else root, prune=self.prune,
                            max_spans=self.max_spans)
