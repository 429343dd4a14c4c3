import logging
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

SENTINEL_SCORE = float("-inf")


class SpanKey(NamedTuple):
    left: int
    right: int
    root: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1


@dataclass(frozen=True)
class SpanSolution:
    """Best projective tree found over ``key.left..key.right`` headed by ``key.root``.

    ``left_child`` and ``right_child`` are handles into the owning ChartMemo,
    never the child solutions themselves.
    """

    key: SpanKey
    score: float = SENTINEL_SCORE
    probas: Tuple[float, ...] = ()
    total: float = 0.0
    arch: Optional[Tuple[int, int]] = None
    left_child: Optional[int] = None
    right_child: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.key.left == self.key.right

    @property
    def resolved(self) -> bool:
        # a single-token span is a complete tree with no edges
        return self.is_leaf or self.score != SENTINEL_SCORE


class ChartMemo:
    """Insert-only arena of span solutions for a single parse."""

    def __init__(self):
        self._solutions: List[SpanSolution] = []
        self._handles: Dict[SpanKey, int] = {}
        self.insert_count = 0

    def __len__(self):
        return len(self._solutions)

    def __contains__(self, key):
        return key in self._handles

    def handle(self, key: SpanKey) -> Optional[int]:
        return self._handles.get(key)

    def lookup(self, key: SpanKey) -> Optional[SpanSolution]:
        handle = self._handles.get(key)
        if handle is None:
            return None
        return self._solutions[handle]

    def get(self, handle: int) -> SpanSolution:
        return self._solutions[handle]

    def insert(self, solution: SpanSolution) -> int:
        existing = self._handles.get(solution.key)
        if existing is not None:
            logger.debug(f"[ChartMemo] Ignoring second insert for span {tuple(solution.key)}")
            return existing

        handle = len(self._solutions)
        self._solutions.append(solution)
        self._handles[solution.key] = handle
        self.insert_count += 1
        return handle
