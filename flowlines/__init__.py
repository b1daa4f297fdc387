"""Flow-line tracer: angle fields in, tapered outlines out."""

from .models import (
    AngleField,
    FlowLine,
    InvalidFieldError,
    InvalidStepLengthError,
    SamplingMode,
    TraceRequest,
    TracerConfig,
    TracingResult,
)
from .config_manager import ConfigManager
from .tracing import (
    FlowLineProcessor,
    polygonize,
    random_requests,
    sample,
    trace,
    trace_and_polygonize,
)

__all__ = [
    "AngleField",
    "ConfigManager",
    "FlowLine",
    "FlowLineProcessor",
    "InvalidFieldError",
    "InvalidStepLengthError",
    "SamplingMode",
    "TraceRequest",
    "TracerConfig",
    "TracingResult",
    "polygonize",
    "random_requests",
    "sample",
    "trace",
    "trace_and_polygonize",
]
