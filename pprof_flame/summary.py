"""
Human-readable summaries of a ProfileData payload.
"""

from pprof_flame.exporters.view_flame import format_duration
from pprof_flame.frames import ProfileData


def summary_text(profile: ProfileData, count: int = 5) -> str:
    heading = "CPU Time" if profile.kind == "cpu" else "Memory"
    lines = [
        f"Profile Results for {profile.name}:",
        f"Duration: {format_duration(profile.duration)}",
        f"Samples: {profile.sample_count}",
        f"Profile Type: {profile.kind.upper()}",
    ]
    if profile.demo:
        lines.append("Source: demo profile (real profile unavailable or too shallow)")
    lines.append("")
    lines.append(f"Top Functions by {heading}:")
    for i, f in enumerate(profile.top_functions[:count], start=1):
        lines.append(f"{i}. {f.name}: {f.percentage}% ({f.samples} samples)")
    lines.append("")
    lines.append("Tip: Look for functions with high percentages - these are optimization targets.")
    return "\n".join(lines)


def insights(profile: ProfileData):
    """Rules of thumb about the ranked functions, one sentence each."""
    found = []
    top = profile.top_functions
    if top and top[0].percentage > 30:
        found.append(
            f"{top[0].name} is consuming {top[0].percentage:.1f}% of the profile - "
            "this is a major hotspot!"
        )

    runtime_pct = sum(f.percentage for f in top if f.name.startswith("runtime."))
    if runtime_pct > 20:
        found.append(
            f"Runtime functions account for {runtime_pct:.1f}% - "
            "consider reducing allocations or GC pressure."
        )

    sorts = [f.name for f in top if "sort" in f.name.lower()]
    if sorts:
        found.append(
            f"Sorting operations detected ({', '.join(sorts)}) - verify optimal algorithm is used."
        )

    if any("malloc" in f.name or "growslice" in f.name for f in top):
        found.append(
            "Memory allocation functions are hot - pre-allocate slices and reuse buffers where possible."
        )

    if any("fibonacci" in f.name for f in top):
        found.append(
            "Recursive fibonacci detected - consider memoization or iterative implementation."
        )

    if not found:
        found.append("Profile looks healthy - no major hotspots detected.")
    return found
