"""
Parse the flat ranking printed by `go tool pprof -top`.
"""

import re

from pprof_flame.frames import TopFunctionEntry

# "  10.50s  21.00% 21.00%   10.50s 21.00%  main.bubbleSort"
_ROW_RE = re.compile(
    r"^\s*([\d.]+\w*)\s+([\d.]+)%\s+([\d.]+)%\s+([\d.]+\w*)\s+([\d.]+)%\s+(.+)$"
)


def parse_top(text: str, total_samples: int, limit: int = 10):
    """
    Return up to `limit` TopFunctionEntry rows, in report order.

    Sample counts are estimated from the flat percentage and `total_samples`,
    since the report itself only carries durations or byte counts.
    """
    results = []
    for line in text.splitlines():
        m = _ROW_RE.match(line)
        if not m:
            continue
        percentage = float(m.group(2))
        results.append(
            TopFunctionEntry(
                m.group(6).strip(),
                percentage,
                int(round(percentage / 100 * total_samples)),
            )
        )
    return results[:limit]
