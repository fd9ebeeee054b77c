"""
profiler.py

Build a Go program, run it under pprof, and turn the pprof text reports into
a ProfileData payload. Any failure along the way (missing toolchain,
compile error, timeout, unparseable output) is logged and answered with the
demo profile instead.
"""

import logging
import os
import subprocess
import tempfile
import time

from pprof_flame.config import Settings
from pprof_flame.demo import demo_profile
from pprof_flame.frames import ProfileData
from pprof_flame.layout import max_depth
from pprof_flame.top import parse_top
from pprof_flame.traces import parse_traces

log = logging.getLogger(__name__)

PROFILE_KINDS = ("cpu", "heap")


class ProfilingError(Exception):
    """A toolchain step failed; the pipeline falls back to demo data."""


def _run(cmd, timeout=None, cwd=None) -> str:
    log.debug("running %s", " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=True,
        )
    except subprocess.TimeoutExpired as exc:
        raise ProfilingError(f"{cmd[0]} timed out after {exc.timeout}s") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise ProfilingError(
            f"{' '.join(cmd)} exited with {exc.returncode}: {stderr}"
        ) from exc
    except OSError as exc:
        raise ProfilingError(f"cannot run {cmd[0]}: {exc}") from exc
    return proc.stdout


def app_name(app_path: str) -> str:
    base = os.path.basename(app_path)
    if base.endswith(".go"):
        base = base[: -len(".go")]
    return base


def run_program(app_path: str, duration: int, kind: str, workdir: str, settings: Settings):
    """
    Compile and run the program, returning (elapsed seconds, profile file path).

    Raises ProfilingError when the build or the run fails.
    """
    resolved = os.path.abspath(app_path)
    name = app_name(resolved)
    binary = os.path.join(workdir, name)
    profile_file = os.path.join(workdir, f"profile_{int(time.time() * 1000)}.pb.gz")

    _run([settings.go_binary, "build", "-o", binary, resolved], cwd=os.path.dirname(resolved))

    flag = "-cpuprofile" if kind == "cpu" else "-memprofile"
    start = time.monotonic()
    _run(
        [binary, f"{flag}={profile_file}", f"-duration={duration}"],
        timeout=duration + settings.timeout_slack,
    )
    return time.monotonic() - start, profile_file


def read_reports(profile_file: str, settings: Settings):
    """Return the (traces, top) text reports pprof prints for `profile_file`."""
    go = settings.go_binary
    traces = _run([go, "tool", "pprof", "-traces", profile_file])
    top = _run([go, "tool", "pprof", "-top", f"-nodecount={settings.nodecount}", profile_file])
    return traces, top


def profile_go_app(app_path: str, duration: int = 5, kind: str = "cpu", settings: Settings = None) -> ProfileData:
    """Profile the Go program at `app_path`; never raises for toolchain or parse failures."""
    if kind not in PROFILE_KINDS:
        raise ValueError(f"profile kind must be one of {PROFILE_KINDS}, got {kind!r}")
    settings = settings or Settings.from_env()
    name = app_name(app_path)

    try:
        scratch = tempfile.TemporaryDirectory(prefix="pprof-flame-", dir=settings.tmp_dir)
    except OSError as exc:
        log.warning("cannot create a work directory in %s, using demo profile: %s", settings.tmp_dir, exc)
        return demo_profile(name, duration, kind)

    with scratch as workdir:
        try:
            elapsed, profile_file = run_program(app_path, duration, kind, workdir, settings)
        except ProfilingError as exc:
            log.warning("profiling %s failed, using demo profile: %s", app_path, exc)
            return demo_profile(name, duration, kind)
        try:
            traces, top = read_reports(profile_file, settings)
        except ProfilingError as exc:
            log.warning("pprof could not read the profile, using demo profile: %s", exc)
            return demo_profile(name, elapsed, kind)

    tree = parse_traces(traces)
    if not tree.children:
        log.warning("no frames found in pprof -traces output, using demo profile")
        return demo_profile(name, elapsed, kind)

    depth = max_depth(tree)
    if depth < settings.min_depth:
        log.info("profile depth %d below %d, using demo profile", depth, settings.min_depth)
        return demo_profile(name, elapsed, kind)

    total = tree.weight or 1
    return ProfileData(
        name=name,
        duration=elapsed,
        sample_count=total,
        top_functions=parse_top(top, total, limit=settings.top_limit),
        flamegraph=tree,
        raw_profile=(
            f"# {kind} profile for {name}\n"
            f"# Duration: {elapsed:.2f}s\n"
            f"# Samples: {total}"
        ),
        kind=kind,
    )
