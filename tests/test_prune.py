import pytest

from app.modules.dependency.components.prune import PruneThreshold
from app.settings import ParserSettings


def _row_scores(n, row0):
    scores = [[0.0] * n for _ in range(n)]
    scores[0] = row0
    return scores


def test_spans_of_four_tokens_or_fewer_are_not_pruned():
    prune = PruneThreshold()
    scores = _row_scores(4, [0.0, 0.9, 0.9, 0.9])
    assert prune.threshold(0, 0, 3, scores) == 0.0


def test_threshold_is_capped():
    prune = PruneThreshold()
    scores = _row_scores(5, [0.0, 0.9, 0.9, 0.9, 0.9])
    assert prune.threshold(0, 0, 4, scores) == pytest.approx(0.2)


def test_threshold_scales_with_mean_of_root_row():
    prune = PruneThreshold()
    scores = _row_scores(5, [0.0, 0.1, 0.1, 0.2, 0.2])
    # mean 0.15 * 0.7
    assert prune.threshold(0, 0, 4, scores) == pytest.approx(0.105)


def test_threshold_ignores_tokens_outside_span():
    prune = PruneThreshold()
    scores = _row_scores(7, [0.0, 0.1, 0.1, 0.1, 0.1, 0.9, 0.9])
    assert prune.threshold(0, 0, 4, scores) == pytest.approx(0.07)


def test_disabled_never_prunes():
    prune = PruneThreshold.disabled()
    scores = _row_scores(5, [0.0, -5.0, -5.0, -5.0, -5.0])
    assert prune.threshold(0, 0, 4, scores) == float("-inf")


def test_from_settings():
    prune = PruneThreshold.from_settings(ParserSettings(prune_min_width=3, prune_cap=0.5, prune_ratio=0.5))
    assert (prune.min_width, prune.cap, prune.ratio) == (3, 0.5, 0.5)

    disabled = PruneThreshold.from_settings(ParserSettings(prune_enabled=False))
    assert disabled.threshold(0, 0, 9, [[0.0] * 10 for _ in range(10)]) == float("-inf")


def test_invalid_min_width():
    with pytest.raises(ValueError):
        PruneThreshold(min_width=0)
