import io
import json

from rich.console import Console

from pprof_flame.demo import demo_profile
from pprof_flame.exporters import payload, view_flame
from pprof_flame.exporters.folded import export_folded, folded_lines
from pprof_flame.frames import Frame
from pprof_flame.traces import merge_stack


def test_format_duration():
    assert view_flame.format_duration(2.5) == "2.50s"
    assert view_flame.format_duration(0.0125) == "12.50ms"
    assert view_flame.format_duration(0.000004) == "4μs"


def test_format_weight():
    assert view_flame.format_weight(2000) == "2000 samples"
    assert view_flame.format_weight(25_000, "heap") == "25.0k allocs"
    assert view_flame.format_weight(3_500_000) == "3.50M samples"


def test_console_tree_sorted_by_weight(abc_tree):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(view_flame.build_console_tree(abc_tree))
    out = console.file.getvalue()
    assert "root • 8 samples (100%)" in out
    assert out.index("c • 5 samples (62.5%)") < out.index("b • 3 samples (37.5%)")


def test_console_tree_level_limit(abc_tree):
    tree = view_flame.build_console_tree(abc_tree, max_levels=1)
    assert len(tree.children) == 1
    assert tree.children[0].children == []


def test_folded_lines(abc_tree):
    assert list(folded_lines(abc_tree)) == ["a;b 3", "a;c 5"]
    assert list(folded_lines(abc_tree, include_root=True)) == ["root;a;b 3", "root;a;c 5"]


def test_folded_self_weight():
    root = Frame("root")
    merge_stack(root, ["main"], 2)
    merge_stack(root, ["main", "work"], 6)
    out = io.StringIO()
    export_folded(root, out)
    assert out.getvalue() == "main 2\nmain;work 6\n"


def test_profile_json_round_trips_tree():
    profile = demo_profile("app", 5)
    data = json.loads(payload.profile_json(profile))
    rebuilt = Frame.from_dict(data["flamegraphData"])
    assert [f.name for f in rebuilt.walk()] == [f.name for f in profile.flamegraph.walk()]


def test_layout_dict(abc_tree):
    data = payload.layout_dict(abc_tree)
    assert data["maxDepth"] == 3
    assert data["total"] == 8
    assert [r["name"] for r in data["rectangles"]] == ["root", "a", "b", "c"]
    assert data["rectangles"][3]["x"] == 0.375


def test_deep_tree_exports():
    root = merge_stack(Frame("root"), [f"main.f{i}" for i in range(3000)], 2)
    data = root.to_dict()
    node, levels = data, 0
    while "children" in node:
        node = node["children"][0]
        levels += 1
    assert levels == 3000
    assert node == {"name": "main.f2999", "value": 2}

    rebuilt = Frame.from_dict(data)
    assert len(list(rebuilt.walk())) == 3001
    assert list(folded_lines(root))[0].endswith(";main.f2999 2")


def test_from_dict_keeps_duplicate_siblings():
    data = {"name": "root", "value": 3, "children": [
        {"name": "x", "value": 1},
        {"name": "x", "value": 2},
    ]}
    root = Frame.from_dict(data)
    assert [(c.name, c.weight) for c in root.children] == [("x", 1), ("x", 2)]
    assert root.to_dict() == data
