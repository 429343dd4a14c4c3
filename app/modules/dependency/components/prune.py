class PruneThreshold:
    """Per-span cutoff on ``scores[root][j]`` for candidate intermediate heads.

    Spans of at most ``min_width`` tokens are never pruned. Wider spans use
    ``min(cap, mean * ratio)`` where ``mean`` is the average score of the
    root heading every other token in the span.
    """

    def __init__(self, min_width=4, cap=0.2, ratio=0.7):
        if min_width < 1:
            raise ValueError(f"min_width must be >= 1, got {min_width}")
        self.min_width = min_width
        self.cap = cap
        self.ratio = ratio

    @classmethod
    def disabled(cls):
        return _NoPruning()

    @classmethod
    def from_settings(cls, settings):
        if not settings.prune_enabled:
            return cls.disabled()
        return cls(min_width=settings.prune_min_width, cap=settings.prune_cap, ratio=settings.prune_ratio)

    def threshold(self, root, left, right, scores):
        if right - left <= self.min_width - 1:
            return 0.0

        row = scores[root]
        total = 0.0
        count = 0
        for i in range(left, right + 1):
            if i != root:
                total += row[i]
                count += 1
        return min(self.cap, total / count * self.ratio)

    def __repr__(self):
        return f"PruneThreshold(min_width={self.min_width}, cap={self.cap}, ratio={self.ratio})"


class _NoPruning(PruneThreshold):

    def __init__(self):
        super().__init__(min_width=1, cap=0.0, ratio=0.0)

    def threshold(self, root, left, right, scores):
        return float("-inf")

    def __repr__(self):
        return "PruneThreshold.disabled()"
