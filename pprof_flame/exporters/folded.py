"""
folded.py

Export a call tree as FlameGraph-style folded stacks:
  frame;child;...;leaf <self samples>
"""


def folded_lines(root, include_root: bool = False):
    """
    Yield one folded line per frame that has self weight.

    Self weight is the frame's weight minus the weight of its children,
    so reading the output back as folded stacks rebuilds the same tree.
    """
    stack = [(root, [root.name] if include_root else [])]
    while stack:
        frame, path = stack.pop()
        self_weight = frame.weight - sum(c.weight for c in frame.children)
        if path and self_weight > 0:
            yield f"{';'.join(path)} {self_weight}"
        stack.extend((c, path + [c.name]) for c in reversed(frame.children))


def export_folded(root, out, include_root: bool = False):
    for line in folded_lines(root, include_root):
        out.write(line + "\n")
