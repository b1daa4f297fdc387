"""Batch processor tracing many flow lines through one angle field.

AIDEV-NOTE: Every request is independent and only reads the shared field,
so batches can be fanned out over any concurrent.futures executor.
Results always come back in request order.
"""

from concurrent.futures import Executor, ProcessPoolExecutor
from functools import partial

import numpy as np

from flowlines.models import (
    AngleField,
    FlowLine,
    SamplingMode,
    TraceRequest,
    TracerConfig,
    TracingResult,
)

from .polygonize import polygonize
from .tracer import trace
from .utils import calculate_total_length, count_vertices, random_requests


def trace_flow_line(
    field: AngleField,
    request: TraceRequest,
    mode: SamplingMode = SamplingMode.NEAREST,
) -> FlowLine:
    """Trace one request and build its tapered outline."""
    centerline = trace(field, request, mode)
    polygon = polygonize(centerline, request.taper_min, request.taper_max)
    return FlowLine(id=request.id, centerline=centerline, polygon=polygon)


def trace_flow_lines(
    field: AngleField,
    requests: "list[TraceRequest]",
    mode: SamplingMode = SamplingMode.NEAREST,
    executor: Executor | None = None,
    chunksize: int = 1,
) -> "list[FlowLine]":
    """Trace every request against the same field.

    Args:
        field: Angle field shared read-only by all lines
        requests: Requests to trace
        mode: How angles are sampled from the field
        executor: Optional executor to fan the requests out over
        chunksize: Requests per task when the executor is a process pool

    Returns:
        One FlowLine per request, in the same order as `requests`
    """
    worker = partial(trace_flow_line, field, mode=mode)
    if executor is None:
        return [worker(request) for request in requests]
    return list(executor.map(worker, requests, chunksize=chunksize))


def trace_and_polygonize(
    field: AngleField,
    requests: "list[TraceRequest]",
    mode: SamplingMode = SamplingMode.NEAREST,
    executor: Executor | None = None,
) -> "list[tuple[tuple[float, float], ...]]":
    """Trace every request and return only the tapered polygons.

    Invalid start points produce empty polygons in their slot.
    """
    lines = trace_flow_lines(field, requests, mode=mode, executor=executor)
    return [line.polygon for line in lines]


class FlowLineProcessor:
    """Traces batches of flow lines using a TracerConfig."""

    def __init__(self, tracer_config: TracerConfig | None = None):
        self.tracer_config = tracer_config or TracerConfig()

    def build_requests(
        self,
        field: AngleField,
        rng: np.random.Generator | None = None,
        num_lines: int | None = None,
    ) -> "list[TraceRequest]":
        """Draw start points for a batch using the configured parameters.

        Args:
            field: Field whose extent bounds the start points
            rng: Generator to draw from; seeded from config if None
            num_lines: Number of requests, uses config default if None

        Returns:
            List of TraceRequest
        """
        config = self.tracer_config
        if rng is None:
            rng = np.random.default_rng(config.seed)
        if num_lines is None:
            num_lines = config.num_lines

        return random_requests(
            field,
            num_lines,
            rng,
            step_length=config.step_length,
            max_steps=config.max_steps,
            taper_min=config.taper_min,
            taper_max=config.taper_max,
        )

    def validate_requests(
        self, field: AngleField, requests: "list[TraceRequest]"
    ) -> "tuple[bool, list[str]]":
        """Check that every start point lies inside the field.

        Args:
            field: Field the requests will be traced against
            requests: Requests to check

        Returns:
            Tuple of (all_valid, error_messages)

        AIDEV-NOTE: Out-of-field starts are not fatal when tracing (they
        yield empty outlines). This only reports them.
        """
        errors = []

        for i, request in enumerate(requests):
            x, y = request.start_x, request.start_y
            if not (1 <= x <= field.width):
                errors.append(
                    f"Request {i}: X={x:.2f} out of bounds (1 to {field.width})"
                )
            if not (1 <= y <= field.height):
                errors.append(
                    f"Request {i}: Y={y:.2f} out of bounds (1 to {field.height})"
                )

        return len(errors) == 0, errors

    def trace(
        self,
        field: AngleField,
        requests: "list[TraceRequest]",
    ) -> "list[FlowLine]":
        """Trace requests, fanning out over processes if configured."""
        config = self.tracer_config
        mode = config.sampling_mode

        if config.max_workers <= 1 or len(requests) <= 1:
            return trace_flow_lines(field, requests, mode=mode)

        # Spread requests evenly so each worker gets a few large chunks
        chunksize = max(1, len(requests) // (config.max_workers * 4))
        with ProcessPoolExecutor(max_workers=config.max_workers) as executor:
            return trace_flow_lines(
                field, requests, mode=mode, executor=executor, chunksize=chunksize
            )

    def process(
        self,
        field: AngleField,
        requests: "list[TraceRequest] | None" = None,
        rng: np.random.Generator | None = None,
    ) -> TracingResult:
        """Execute the complete tracing pipeline.

        Args:
            field: Angle field to trace through
            requests: Requests to trace; drawn from `rng` if None
            rng: Generator for start points when `requests` is None

        Returns:
            TracingResult with all lines and batch statistics
        """
        print("Starting flow-line tracing...")
        print(f"Field size: {field.width}x{field.height} cells.")

        if requests is None:
            print("Generating start points...")
            requests = self.build_requests(field, rng)
        else:
            requests = list(requests)

        print(
            f"Tracing {len(requests)} flow lines "
            f"({self.tracer_config.sampling_mode.value} sampling)..."
        )
        lines = self.trace(field, requests)

        empty_count = sum(1 for line in lines if line.is_empty)
        total_length = calculate_total_length(lines)
        vertex_count = count_vertices(lines)

        print("Flow-line tracing complete.")
        print(f"Lines traced: {len(lines) - empty_count} ({empty_count} empty)")
        print(f"Total path length: {total_length:.2f} cells")
        print(f"Total polygon vertices: {vertex_count}")

        return TracingResult(
            lines=lines,
            field_width=field.width,
            field_height=field.height,
            total_path_length=total_length,
            empty_count=empty_count,
            vertex_count=vertex_count,
        )
