"""
traces.py

Rebuild a weighted call tree from `go tool pprof -traces` text.

Each sample in the dump is a block of frame lines, leaf first, optionally
preceded by a "<count> <duration>" line and separated from the next block by a
blank line or a run of dashes. Lines that make no sense are dropped; parsing
never fails on bad input.
"""

import logging
import re

from pprof_flame.frames import Frame

log = logging.getLogger(__name__)

BOUNDARY = "boundary"
SAMPLE_COUNT = "sample_count"
FRAME = "frame"
SKIP = "skip"

_SAMPLE_RE = re.compile(r"^\s*(\d+)\s+[\d.]+\S*\s*$")
# "#0 0x4a1b2c main.foo /src/main.go:12"
_ADDRESS_FRAME_RE = re.compile(r"^#\d+\s+0?x?[\da-fA-F]+\s+(.+?)\s+.+$")
_NUMERIC_RE = re.compile(r"^[\d.]+\S*$")


def classify_line(line: str):
    """
    Classify one trimmed line of trace text.

    Returns a (kind, value) pair: (BOUNDARY, None), (SAMPLE_COUNT, int),
    (FRAME, name) or (SKIP, None) for noise.
    """
    if line is None:
        raise TypeError("classify_line() needs a string, got None")
    if not line or line.startswith("---"):
        return BOUNDARY, None

    m = _SAMPLE_RE.match(line)
    if m:
        return SAMPLE_COUNT, int(m.group(1))

    m = _ADDRESS_FRAME_RE.match(line)
    if m:
        return FRAME, m.group(1)
    if line.startswith("#"):
        return SKIP, None

    token = line.split()[0]
    if _NUMERIC_RE.match(token):
        return SKIP, None
    return FRAME, token


def merge_stack(root: Frame, stack, weight=1):
    """Add one root-first stack to the tree, crediting `weight` to every frame on the path."""
    root.weight += weight
    node = root
    for name in stack:
        node = node.child(name)
        node.weight += weight
    return root


class CallTreeBuilder:
    """Feed trace lines one at a time with consume(), then call finish()."""

    def __init__(self):
        self.root = Frame("root")
        self.current_stack = []
        self.current_weight = 1
        self.skipped = 0

    def consume(self, line: str):
        kind, value = classify_line(line)
        if kind == BOUNDARY:
            self._flush()
        elif kind == SAMPLE_COUNT:
            self.current_weight = value
        elif kind == FRAME:
            self.current_stack.append(value)
        else:
            self.skipped += 1

    def _flush(self):
        if self.current_stack:
            # frames arrive leaf first
            self.current_stack.reverse()
            merge_stack(self.root, self.current_stack, self.current_weight)
        self.current_stack = []
        self.current_weight = 1

    def finish(self) -> Frame:
        self._flush()
        if self.skipped:
            log.debug("skipped %d unrecognised trace lines", self.skipped)
        return self.root


def parse_traces(text: str) -> Frame:
    """Parse a whole `pprof -traces` dump into a tree rooted at "root"."""
    if text is None:
        raise TypeError("parse_traces() needs a string, got None")
    builder = CallTreeBuilder()
    for line in text.splitlines():
        builder.consume(line.strip())
    return builder.finish()
