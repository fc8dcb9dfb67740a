"""
sortstrip
---------
Sort random colours and keep every intermediate state as an image.

    from sortstrip import run_sort, open_sink, SinkConfig
"""

from sortstrip.colors  import to_color, sort_key, greater_than, less_than, PREDICATES
from sortstrip.sinks   import FrameSink, PPMSink, GIFSink, SinkConfig, FrameSinkError, open_sink
from sortstrip.sorters import (
    ALGORITHMS, PreconditionViolation, get_generator, run_sort, load_custom_sorter,
)

__all__ = [
    "to_color",
    "sort_key",
    "greater_than",
    "less_than",
    "PREDICATES",
    "FrameSink",
    "PPMSink",
    "GIFSink",
    "SinkConfig",
    "FrameSinkError",
    "open_sink",
    "ALGORITHMS",
    "PreconditionViolation",
    "get_generator",
    "run_sort",
    "load_custom_sorter",
]
