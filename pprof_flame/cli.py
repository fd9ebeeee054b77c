#!/usr/bin/env python3
"""
cli.py

Command-line interface for profiling Go programs and browsing pprof call
trees as flame graphs.
"""
import json
import sys
import click
from rich import print

from pprof_flame.config import Settings
from pprof_flame.demo import demo_profile
from pprof_flame.exporters import payload, view_flame
from pprof_flame.exporters.folded import export_folded
from pprof_flame.frames import Frame, ProfileData
from pprof_flame.layout import ZERO_WEIGHT_POLICIES
from pprof_flame.log import setup_logging
from pprof_flame.plugins.mcp_plugin import plugin as mcp_plugin
from pprof_flame.profiler import PROFILE_KINDS, profile_go_app
from pprof_flame.summary import insights, summary_text
from pprof_flame.top import parse_top
from pprof_flame.traces import parse_traces


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def cli(verbose):
    """
    Profile Go programs with pprof and view the call tree as a flame graph.
    """
    setup_logging(verbose)


def _show_profile(profile: ProfileData, as_json: bool, levels):
    if as_json:
        click.echo(payload.profile_json(profile))
        return
    print(view_flame.build_console_tree(profile.flamegraph, profile.kind, levels))
    click.echo()
    click.echo(summary_text(profile))
    click.echo()
    for line in insights(profile):
        click.echo(f"  - {line}")


@cli.command()
@click.argument("app_path", type=click.Path())
@click.option("--duration", "-d", default=5, type=click.IntRange(1, 3600), show_default=True,
              help="Seconds to run the program for")
@click.option("--kind", "-k", type=click.Choice(PROFILE_KINDS), default="cpu", show_default=True,
              help="Profile type")
@click.option("--go", "go_binary", envvar="PPROF_FLAME_GO", default="go", show_default=True,
              help="Go toolchain binary")
@click.option("--levels", type=click.IntRange(1), default=None,
              help="Only print this many levels of the tree")
@click.option("--json", "as_json", is_flag=True, help="Print the full payload as JSON")
def profile(app_path, duration, kind, go_binary, levels, as_json):
    """Build and profile the Go program APP_PATH."""
    settings = Settings.from_env()
    settings.go_binary = go_binary
    result = profile_go_app(app_path, duration, kind, settings)
    _show_profile(result, as_json, levels)


@cli.command()
@click.argument("traces_file", type=click.File("r"), default="-")
@click.option("--top", "top_file", type=click.File("r"), default=None,
              help="Saved `go tool pprof -top` output to rank functions from")
@click.option("--format", "fmt", type=click.Choice(["tree", "folded", "json", "rects"]),
              default="tree", show_default=True)
@click.option("--zero-weight", type=click.Choice(ZERO_WEIGHT_POLICIES), default="share",
              show_default=True, help="How to size siblings whose weights are all zero")
@click.option("--levels", type=click.IntRange(1), default=None,
              help="Only print this many levels of the tree")
def view(traces_file, top_file, fmt, zero_weight, levels):
    """
    Render a saved `go tool pprof -traces` dump (stdin by default).

    A JSON profile written by `--json` or `--format json` is read back as-is.
    """
    text = traces_file.read()
    if text.lstrip().startswith("{"):
        try:
            data = json.loads(text)
            root = Frame.from_dict(data.get("flamegraphData", data))
        except (ValueError, KeyError, AttributeError) as exc:
            click.echo(f"Invalid profile JSON: {exc}", err=True)
            raise SystemExit(1)
    else:
        root = parse_traces(text)
    if not root.children:
        click.echo("No stack frames found in input.", err=True)
        raise SystemExit(1)

    if fmt == "folded":
        export_folded(root, sys.stdout)
    elif fmt == "rects":
        click.echo(payload.layout_json(root, zero_weight))
    else:
        top = parse_top(top_file.read(), root.weight) if top_file else []
        result = ProfileData(
            name=traces_file.name,
            duration=0.0,
            sample_count=root.weight,
            top_functions=top,
            flamegraph=root,
        )
        if fmt == "json":
            click.echo(payload.profile_json(result))
        else:
            print(view_flame.build_console_tree(root, max_levels=levels))
            for i, f in enumerate(top, start=1):
                click.echo(f"  [{i}] {f.name} {f.percentage}% ({f.samples} samples)")


@cli.command()
@click.option("--name", default="app", show_default=True)
@click.option("--duration", "-d", default=5.0, type=float, show_default=True)
@click.option("--kind", "-k", type=click.Choice(PROFILE_KINDS), default="cpu", show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the full payload as JSON")
def demo(name, duration, kind, as_json):
    """Show the built-in demo profile."""
    _show_profile(demo_profile(name, duration, kind), as_json, None)


mcp_plugin.register(cli)


if __name__ == "__main__":
    cli()
