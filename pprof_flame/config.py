"""
Runtime settings, read from PPROF_FLAME_* environment variables.
"""

import os
import tempfile


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


class Settings:
    def __init__(
        self,
        go_binary: str = "go",
        timeout_slack: int = 10,
        min_depth: int = 4,
        nodecount: int = 20,
        tmp_dir: str = None,
        top_limit: int = 10,
    ):
        self.go_binary = go_binary
        # added to the requested duration to bound the profiled run
        self.timeout_slack = timeout_slack
        # trees shallower than this are replaced by the demo profile
        self.min_depth = min_depth
        self.nodecount = nodecount
        self.tmp_dir = tmp_dir or tempfile.gettempdir()
        self.top_limit = top_limit

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            go_binary=os.environ.get("PPROF_FLAME_GO", "go"),
            timeout_slack=_env_int("PPROF_FLAME_TIMEOUT_SLACK", 10),
            min_depth=_env_int("PPROF_FLAME_MIN_DEPTH", 4),
            nodecount=_env_int("PPROF_FLAME_NODECOUNT", 20),
            tmp_dir=os.environ.get("PPROF_FLAME_TMPDIR"),
        )
