"""
payload.py

JSON forms of profiles and flamegraph layouts.
"""

import json

from pprof_flame.layout import layout, max_depth


def profile_json(profile, indent=2) -> str:
    return json.dumps(profile.to_dict(), indent=indent)


def layout_dict(root, zero_weight: str = "share") -> dict:
    """Rectangles plus the depth needed to size a canvas."""
    rects = layout(root, zero_weight=zero_weight)
    return {
        "maxDepth": max_depth(root),
        "total": root.weight,
        "rectangles": [r.to_dict() for r in rects],
    }


def layout_json(root, zero_weight: str = "share", indent=2) -> str:
    return json.dumps(layout_dict(root, zero_weight), indent=indent)
