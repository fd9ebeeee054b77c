import pytest

from pprof_flame.traces import merge_stack
from pprof_flame.frames import Frame

TRACES = """\
-----------+-------------------------------------------------------
      3   30ms
#0 0x1000 main.leafA /src/main.go:10
#1 0x2000 main.mid /src/main.go:20
#2 0x3000 main.main /src/main.go:30
#3 0x4000 runtime.main /go/src/runtime/proc.go:250
-----------+-------------------------------------------------------
      5   50ms
#0 0x1100 main.leafB /src/main.go:12
#1 0x2000 main.mid /src/main.go:20
#2 0x3000 main.main /src/main.go:30
#3 0x4000 runtime.main /go/src/runtime/proc.go:250
-----------+-------------------------------------------------------
"""

TOP = """\
File: app
Type: cpu
Showing nodes accounting for 80ms, 100% of 80ms total
      flat  flat%   sum%        cum   cum%
      50ms 62.50% 62.50%       50ms 62.50%  main.leafB
      30ms 37.50%   100%       30ms 37.50%  main.leafA
         0     0%   100%       80ms   100%  main.mid
"""


@pytest.fixture
def traces_text():
    return TRACES


@pytest.fixture
def top_text():
    return TOP


@pytest.fixture
def abc_tree():
    root = Frame("root")
    merge_stack(root, ["a", "b"], 3)
    merge_stack(root, ["a", "c"], 5)
    return root
