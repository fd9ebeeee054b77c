"""
MCP plugin: expose the profiler as a `profile-app` tool over stdio.
"""
import logging
from typing import Literal

import click
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from pprof_flame.config import Settings
from pprof_flame.profiler import profile_go_app
from pprof_flame.summary import summary_text

log = logging.getLogger(__name__)


def profile_tool(app_path: str, duration: int, kind: str, settings: Settings = None) -> dict:
    """Run the pipeline and shape its result for an MCP client."""
    try:
        result = profile_go_app(app_path, duration, kind, settings)
    except Exception as exc:
        log.exception("profile-app failed for %s", app_path)
        raise ToolError(f"Error profiling application: {exc}") from exc
    data = result.to_dict()
    data["summary"] = summary_text(result)
    return data


def create_server(settings: Settings = None) -> FastMCP:
    """Build the FastMCP server with the profile-app tool registered."""
    mcp = FastMCP(name="Flamegraph Profiler")

    @mcp.tool(
        name="profile-app",
        title="Profile Application",
        description=(
            "Profile a Go application and generate a flamegraph visualization. "
            "Analyzes CPU or memory usage and shows hotspots."
        ),
    )
    def profile_app(
        appPath: str = Field(description="Path to the Go source file to profile (e.g., './sample-app/main.go')"),
        duration: int = Field(default=5, ge=1, description="Profiling duration in seconds"),
        profileType: Literal["cpu", "heap"] = Field(
            default="cpu",
            description="Type of profile: 'cpu' for CPU profiling, 'heap' for memory profiling",
        ),
    ) -> dict:
        return profile_tool(appPath, duration, profileType, settings)

    return mcp


def register(cli):
    """Register the 'serve' command to run the MCP tool server."""
    @cli.command(name='serve')
    @click.option(
        '--go', 'go_binary', envvar='PPROF_FLAME_GO', default='go',
        help='Go toolchain binary'
    )
    def serve(go_binary):
        """Serve the profile-app tool to an MCP client over stdio."""
        settings = Settings.from_env()
        settings.go_binary = go_binary
        log.info("starting MCP server on stdio")
        create_server(settings).run(transport="stdio")
