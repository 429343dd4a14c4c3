import logging

from .chart import SENTINEL_SCORE, ChartMemo, SpanKey, SpanSolution
from .errors import InvalidInput, SearchBudgetExceeded
from .prune import PruneThreshold

logger = logging.getLogger(__name__)


class SpanSolver:
    """CKY-style search for the best projective tree over a span.

    Every span that is visited is solved once and stored in ``memo``; sibling
    decompositions asking for the same (left, right, root) reuse that entry.
    Scores are the arithmetic mean of all edge scores in the subtree.
    """

    def __init__(self, scores, memo=None, prune=None, max_spans=None):
        self.scores = scores
        self.memo = memo if memo is not None else ChartMemo()
        self.prune = prune if prune is not None else PruneThreshold()
        self.max_spans = max_spans

    def solve(self, left, right, root):
        key = SpanKey(left, right, root)
        cached = self.memo.lookup(key)
        if cached is not None:
            return cached

        if not (left <= root <= right):
            raise InvalidInput(f"root {root} outside span [{left}, {right}]")

        if self.max_spans is not None and len(self.memo) >= self.max_spans:
            raise SearchBudgetExceeded(self.max_spans, len(self.memo))

        if left == right:
            solution = SpanSolution(key)
        elif right - left == 1:
            target = right if root == left else left
            proba = self.scores[root][target]
            solution = SpanSolution(key, score=proba, probas=(proba,), total=proba, arch=(root, target))
        else:
            solution = self._solve_general(key)

        self.memo.insert(solution)
        return solution

    def _solve_general(self, key):
        left, right, root = key
        row = self.scores[root]
        threshold = self.prune.threshold(root, left, right, self.scores)

        best = SpanSolution(key)
        for j in range(left, right + 1):
            if j == root:
                continue
            if row[j] < threshold:
                continue

            for q in self._splits(left, right, root, j):
                if j > root:
                    left_tree = self.solve(left, q, root)
                    right_tree = self.solve(q + 1, right, j)
                else:
                    left_tree = self.solve(left, q, j)
                    right_tree = self.solve(q + 1, right, root)

                if not (left_tree.resolved and right_tree.resolved):
                    continue

                total = left_tree.total + right_tree.total + row[j]
                score = total / (len(left_tree.probas) + len(right_tree.probas) + 1)
                if score > best.score:
                    best = SpanSolution(
                        key,
                        score=score,
                        probas=left_tree.probas + right_tree.probas + (row[j],),
                        total=total,
                        arch=(root, j),
                        left_child=self.memo.handle(left_tree.key),
                        right_child=self.memo.handle(right_tree.key),
                    )

        if best.score == SENTINEL_SCORE:
            logger.debug(f"[SpanSolver] Span {tuple(key)} unresolved (threshold={threshold:.4f})")
        return best

    @staticmethod
    def _splits(left, right, root, j):
        # each sub-span must contain its own head, so j never sits on the
        # split boundary and both halves stay projective
        if j > root:
            return range(root, j)
        return range(j, root)
