import itertools
import random

import pytest

SCENARIO_SCORES = [
    [0.0, 0.9, 0.1],
    [0.2, 0.0, 0.8],
    [0.3, 0.4, 0.0],
]


def random_scores(n, seed, low=0.0, high=1.0):
    rng = random.Random(seed)
    return [[0.0 if h == d else rng.uniform(low, high) for d in range(n)] for h in range(n)]


def _is_tree(heads, root):
    for start in range(len(heads)):
        seen = set()
        node = start
        while node != root:
            if node in seen:
                return False
            seen.add(node)
            node = heads[node]
    return True


def _dominates(heads, head, node, root):
    while node != root:
        node = heads[node]
        if node == head:
            return True
    return False


def _is_projective(heads, root):
    for dependent, head in enumerate(heads):
        if dependent == root:
            continue
        lo, hi = sorted((head, dependent))
        for between in range(lo + 1, hi):
            if not _dominates(heads, head, between, root):
                return False
    return True


def best_projective_mean(scores, root):
    """Exhaustive search over every projective tree headed by ``root``."""
    n = len(scores)
    if n == 1:
        return None
    others = [i for i in range(n) if i != root]
    best = None
    for choice in itertools.product(range(n), repeat=len(others)):
        heads = [-1] * n
        ok = True
        for dependent, head in zip(others, choice):
            if head == dependent:
                ok = False
                break
            heads[dependent] = head
        if not ok or not _is_tree(heads, root) or not _is_projective(heads, root):
            continue
        mean = sum(scores[heads[d]][d] for d in others) / len(others)
        if best is None or mean > best:
            best = mean
    return best


@pytest.fixture
def scenario_scores():
    return [row[:] for row in SCENARIO_SCORES]
