"""Step-by-step integration of a single flow line through an angle field.

AIDEV-NOTE: The direction is re-read from the field at every step, so the
heading of the previous step has no influence. Lines end when the next
step would leave the field, not after a fixed distance.
"""

import math

from flowlines.models import AngleField, SamplingMode, TraceRequest

from .sampler import sample_angle


def trace(
    field: AngleField,
    request: TraceRequest,
    mode: SamplingMode = SamplingMode.NEAREST,
) -> "tuple[tuple[float, float], ...]":
    """Trace a centerline from the request's start point.

    Args:
        field: Angle field shared by all lines
        request: Start point and stepping parameters for this line
        mode: How angles are sampled from the field

    Returns:
        Tuple of (x, y) points. Empty if the start point lies outside the
        field, otherwise between 1 and max_steps + 1 points long.
    """
    x = float(request.start_x)
    y = float(request.start_y)

    if not field.contains(x, y):
        return ()

    step_length = request.step_length
    points = [(x, y)]
    append_point = points.append

    for _ in range(int(request.max_steps)):
        angle_rad = math.radians(sample_angle(field, x, y, mode))

        next_x = x + math.cos(angle_rad) * step_length
        next_y = y + math.sin(angle_rad) * step_length

        # Leaving the field ends the line; the candidate is discarded
        if not field.contains(next_x, next_y):
            break

        x, y = next_x, next_y
        append_point((x, y))

    return tuple(points)
