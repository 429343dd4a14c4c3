from app.modules.dependency.components.chart import SENTINEL_SCORE, ChartMemo, SpanKey, SpanSolution


def test_lookup_misses_before_insert():
    memo = ChartMemo()
    assert memo.lookup(SpanKey(0, 2, 0)) is None
    assert len(memo) == 0


def test_insert_then_lookup_returns_same_solution():
    memo = ChartMemo()
    solution = SpanSolution(SpanKey(0, 1, 0), score=0.5, probas=(0.5,), arch=(0, 1))
    handle = memo.insert(solution)

    assert memo.lookup(SpanKey(0, 1, 0)) is solution
    assert memo.get(handle) is solution
    assert memo.handle(SpanKey(0, 1, 0)) == handle


def test_second_insert_for_same_span_is_ignored():
    memo = ChartMemo()
    first = SpanSolution(SpanKey(0, 1, 0), score=0.5, probas=(0.5,), arch=(0, 1))
    second = SpanSolution(SpanKey(0, 1, 0), score=0.9, probas=(0.9,), arch=(0, 1))

    h1 = memo.insert(first)
    h2 = memo.insert(second)

    assert h1 == h2
    assert memo.lookup(SpanKey(0, 1, 0)) is first
    assert memo.insert_count == 1
    assert len(memo) == 1


def test_keys_that_alias_under_radix_packing_stay_distinct():
    # root*10000 + left*100 + right gives 10199 for both
    a = SpanKey(left=0, right=199, root=1)
    b = SpanKey(left=1, right=99, root=1)
    memo = ChartMemo()
    memo.insert(SpanSolution(a, score=0.1, probas=(0.1,)))
    memo.insert(SpanSolution(b, score=0.2, probas=(0.2,)))

    assert len(memo) == 2
    assert memo.lookup(a).score == 0.1
    assert memo.lookup(b).score == 0.2


def test_keys_are_unique_for_every_valid_span():
    n = 40
    keys = {SpanKey(l, r, h) for l in range(n) for r in range(l, n) for h in range(l, r + 1)}
    assert len(keys) == sum((r - l + 1) for l in range(n) for r in range(l, n))


def test_leaf_solution_is_resolved_with_sentinel_score():
    leaf = SpanSolution(SpanKey(3, 3, 3))
    assert leaf.score == SENTINEL_SCORE
    assert leaf.is_leaf
    assert leaf.resolved
    assert leaf.arch is None

    unresolved = SpanSolution(SpanKey(0, 4, 0))
    assert not unresolved.resolved
