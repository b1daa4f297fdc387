"""Flow-line tracing pipeline.

AIDEV-NOTE: This package turns an angle field and a batch of start points
into tapered outlines. Organized into modular components:
- sampler: Angle lookup at continuous positions
- tracer: Step-by-step centerline integration
- polygonize: Tapered outline construction
- processor: Batch orchestration and FlowLineProcessor
- utils: Batch statistics and start-point generation
"""

from .polygonize import polygonize
from .processor import (
    FlowLineProcessor,
    trace_and_polygonize,
    trace_flow_line,
    trace_flow_lines,
)
from .sampler import sample, sample_angle, sample_bilinear
from .tracer import trace
from .utils import random_requests

__all__ = [
    "FlowLineProcessor",
    "polygonize",
    "random_requests",
    "sample",
    "sample_angle",
    "sample_bilinear",
    "trace",
    "trace_and_polygonize",
    "trace_flow_line",
    "trace_flow_lines",
]
