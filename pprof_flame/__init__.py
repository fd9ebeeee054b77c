"""
Go profiling helpers: rebuild pprof call trees and lay them out as flamegraphs.
"""

__version__ = "0.1.0"
