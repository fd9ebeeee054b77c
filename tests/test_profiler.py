import subprocess

import pytest

from pprof_flame import profiler
from pprof_flame.config import Settings
from pprof_flame.profiler import ProfilingError, app_name, profile_go_app


class FakeGo:
    """Stand-in for subprocess.run that answers like the go toolchain."""

    def __init__(self, traces="", top="", fail_on=None, timeout_on=None):
        self.traces = traces
        self.top = top
        self.fail_on = fail_on
        self.timeout_on = timeout_on
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.fail_on and self.fail_on in cmd:
            raise subprocess.CalledProcessError(2, cmd, output="", stderr="boom")
        if self.timeout_on and cmd[0].endswith(self.timeout_on):
            raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))
        out = ""
        if "-traces" in cmd:
            out = self.traces
        elif "-top" in cmd:
            out = self.top
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr="")


@pytest.fixture
def settings(tmp_path):
    return Settings(go_binary="go", tmp_dir=str(tmp_path))


def test_app_name():
    assert app_name("./sample-app/main.go") == "main"
    assert app_name("/srv/bin/server") == "server"


def test_real_profile_is_used(monkeypatch, settings, traces_text, top_text):
    fake = FakeGo(traces=traces_text, top=top_text)
    monkeypatch.setattr(profiler.subprocess, "run", fake)

    result = profile_go_app("sample-app/main.go", 3, "cpu", settings)

    assert result.demo is False
    assert result.name == "main"
    assert result.sample_count == 8
    assert result.flamegraph.weight == 8
    assert [f.name for f in result.top_functions] == ["main.leafB", "main.leafA", "main.mid"]
    assert result.raw_profile.startswith("# cpu profile for main\n")

    build, run, traces, top = [cmd for cmd, _ in fake.calls]
    assert build[:3] == ["go", "build", "-o"]
    assert run[1].startswith("-cpuprofile=") and run[2] == "-duration=3"
    assert fake.calls[1][1]["timeout"] == 3 + settings.timeout_slack
    assert traces[:4] == ["go", "tool", "pprof", "-traces"]
    assert "-nodecount=20" in top


def test_heap_profile_flag(monkeypatch, settings, traces_text):
    fake = FakeGo(traces=traces_text)
    monkeypatch.setattr(profiler.subprocess, "run", fake)
    result = profile_go_app("main.go", 1, "heap", settings)
    assert fake.calls[1][0][1].startswith("-memprofile=")
    assert result.kind == "heap"


def test_build_failure_falls_back(monkeypatch, settings):
    monkeypatch.setattr(profiler.subprocess, "run", FakeGo(fail_on="build"))
    result = profile_go_app("broken.go", 5, "cpu", settings)
    assert result.demo is True
    assert result.name == "broken"
    assert result.duration == 5
    assert result.flamegraph.weight == 2000


def test_timeout_falls_back(monkeypatch, settings):
    monkeypatch.setattr(profiler.subprocess, "run", FakeGo(timeout_on="main"))
    assert profile_go_app("main.go", 1, "cpu", settings).demo is True


def test_missing_toolchain_falls_back(settings):
    settings.go_binary = "/nonexistent/bin/go-toolchain"
    assert profile_go_app("main.go", 1, "cpu", settings).demo is True


def test_unparseable_traces_fall_back(monkeypatch, settings):
    monkeypatch.setattr(profiler.subprocess, "run", FakeGo(traces="10ms\n\n"))
    result = profile_go_app("main.go", 1, "cpu", settings)
    assert result.demo is True


def test_shallow_tree_falls_back(monkeypatch, settings):
    monkeypatch.setattr(profiler.subprocess, "run", FakeGo(traces="4 40ms\nmain.work\nmain.main\n"))
    result = profile_go_app("main.go", 1, "cpu", settings)
    assert result.demo is True
    assert result.flamegraph.children[0].name == "main.main"


def test_min_depth_is_configurable(monkeypatch, settings):
    settings.min_depth = 2
    monkeypatch.setattr(profiler.subprocess, "run", FakeGo(traces="4 40ms\nmain.work\nmain.main\n"))
    result = profile_go_app("main.go", 1, "cpu", settings)
    assert result.demo is False
    assert result.sample_count == 4


def test_unknown_kind():
    with pytest.raises(ValueError):
        profile_go_app("main.go", 1, "goroutine")


def test_run_wraps_errors():
    with pytest.raises(ProfilingError):
        profiler._run(["/nonexistent/bin/definitely-not-here"])


def test_report_failure_keeps_measured_duration(monkeypatch, settings):
    monkeypatch.setattr(profiler.subprocess, "run", FakeGo(fail_on="-traces"))
    result = profile_go_app("main.go", 5, "cpu", settings)
    assert result.demo is True
    assert result.duration < 5


def test_missing_work_directory_falls_back(tmp_path):
    settings = Settings(tmp_dir=str(tmp_path / "does-not-exist"))
    result = profile_go_app("main.go", 3, "heap", settings)
    assert result.demo is True
    assert result.duration == 3
    assert result.kind == "heap"
