"""Utility functions for flow-line statistics and start-point generation.

AIDEV-NOTE: Helpers used by the processor to summarise a batch and to
build request lists from an explicit random generator.
"""

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from flowlines.models import AngleField, FlowLine, TraceRequest


def calculate_total_length(lines: "list[FlowLine]") -> float:
    """Calculate summed centerline length in field units."""
    total = 0.0
    for line in lines:
        points = line.centerline
        for i in range(1, len(points)):
            x1, y1 = points[i - 1]
            x2, y2 = points[i]
            total += math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)
    return total


def count_vertices(lines: "list[FlowLine]") -> int:
    """Count total number of polygon vertices across all lines."""
    return sum(len(line.polygon) for line in lines)


def random_requests(
    field: "AngleField",
    count: int,
    rng: np.random.Generator,
    step_length: float = 1.0,
    max_steps: int = 50,
    taper_min: float = 0.0,
    taper_max: float = 1.0,
) -> "list[TraceRequest]":
    """Draw start points uniformly over the field extent.

    Args:
        field: Field whose extent bounds the start points
        count: Number of requests to build
        rng: Generator supplying the start points
        step_length: Step length for every request
        max_steps: Step limit for every request
        taper_min: Starting half-width for every request
        taper_max: Ending half-width for every request

    Returns:
        List of TraceRequest with ids 0..count-1

    AIDEV-NOTE: The generator is always passed in. Two calls with
    generators seeded the same way produce identical requests.
    """
    from flowlines.models import TraceRequest

    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    xs = rng.uniform(1.0, field.width, size=count)
    ys = rng.uniform(1.0, field.height, size=count)

    return [
        TraceRequest(
            start_x=float(x),
            start_y=float(y),
            step_length=step_length,
            max_steps=max_steps,
            taper_min=taper_min,
            taper_max=taper_max,
            id=i,
        )
        for i, (x, y) in enumerate(zip(xs, ys))
    ]
