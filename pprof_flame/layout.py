"""
Flamegraph layout: turn a weighted call tree into rectangles.

Every frame gets a depth (distance from the root) and a horizontal span
[x, x + width) inside [0, 1], split among siblings by weight.
"""

from pprof_flame.frames import LayoutRectangle

ZERO_WEIGHT_POLICIES = ("share", "collapse")


def _child_spans(frame, x, width, zero_weight):
    total = sum(c.weight for c in frame.children)
    cursor = x
    for child in frame.children:
        if total:
            child_width = width * child.weight / total
        elif zero_weight == "share":
            child_width = width / len(frame.children)
        else:
            child_width = 0.0
        # empty spans sit at the parent's start so x never reaches its end
        yield child, (cursor if child_width else x), child_width
        cursor += child_width


def layout(root, zero_weight: str = "share"):
    """
    Lay out `root` and return its rectangles in depth-first pre-order.

    When all children of a frame weigh zero, "share" splits the parent's span
    evenly between them and "collapse" gives each of them zero width.
    """
    if zero_weight not in ZERO_WEIGHT_POLICIES:
        raise ValueError(f"unknown zero_weight policy: {zero_weight!r}")
    rects = []
    stack = [(root, 0, 0.0, 1.0)]
    while stack:
        frame, depth, x, width = stack.pop()
        rects.append(LayoutRectangle(frame, depth, x, width))
        if frame.children:
            spans = list(_child_spans(frame, x, width, zero_weight))
            stack.extend((c, depth + 1, cx, cw) for c, cx, cw in reversed(spans))
    return rects


def max_depth(root) -> int:
    """Number of levels below and including the root; 0 for a tree with no frames."""
    if not root.children:
        return 0
    deepest = 0
    stack = [(root, 0)]
    while stack:
        frame, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((c, depth + 1) for c in frame.children)
    return deepest + 1
