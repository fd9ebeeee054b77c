#!/usr/bin/env python3
"""
view_flame.py

Render a weighted call tree as a collapsible tree in your terminal
using Rich, with percentages of the total and human-friendly units.
"""

import sys
from rich import print
from rich.tree import Tree

from pprof_flame.traces import parse_traces


def format_duration(seconds: float) -> str:
    """Convert seconds to a human-friendly string."""
    if seconds >= 1:
        return f"{seconds:.2f}s"
    elif seconds >= 0.001:
        return f"{seconds * 1_000:.2f}ms"
    else:
        return f"{seconds * 1_000_000:.0f}μs"


def format_weight(value, kind: str = "cpu") -> str:
    unit = "allocs" if kind == "heap" else "samples"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.2f}M {unit}"
    elif value >= 10_000:
        return f"{value / 1_000:.1f}k {unit}"
    else:
        return f"{value} {unit}"


def render(frame, tree: Tree, total, kind: str = "cpu", max_levels: int = None):
    stack = [(frame, tree, 0)]
    while stack:
        node, branch, level = stack.pop()
        if max_levels is not None and level >= max_levels:
            continue
        # Heaviest first
        for child in sorted(node.children, key=lambda c: c.weight, reverse=True):
            pct = child.weight / total * 100 if total else 0.0
            human = format_weight(child.weight, kind)
            sub = branch.add(f"[bold]{child.name}[/] • {human} ({pct:.1f}%)")
            stack.append((child, sub, level + 1))


def build_console_tree(root, kind: str = "cpu", max_levels: int = None) -> Tree:
    total = root.weight
    console_tree = Tree(f"[b]{root.name}[/] • {format_weight(total, kind)} (100%)")
    render(root, console_tree, total, kind, max_levels)
    return console_tree


def main():
    root = parse_traces(sys.stdin.read())
    print(build_console_tree(root))


if __name__ == "__main__":
    main()
