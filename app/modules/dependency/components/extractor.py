def extract_arcs(memo, solution):
    """Pre-order edge list: the span's own arch, then its left and right subtrees."""
    arcs = []
    stack = [solution]
    while stack:
        node = stack.pop()
        if node.arch is not None:
            head, dependent = node.arch
            arcs.append((head, dependent, node.probas[-1]))
        # right pushed first so the left subtree is emitted first
        if node.right_child is not None:
            stack.append(memo.get(node.right_child))
        if node.left_child is not None:
            stack.append(memo.get(node.left_child))
    return arcs
