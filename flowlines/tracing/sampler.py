"""Angle lookup from an AngleField at continuous positions.

AIDEV-NOTE: Positions are 1-based field coordinates. None of these
functions bounds-check; callers test `field.contains(x, y)` first.
"""

import math

import numpy as np

from flowlines.models import AngleField, SamplingMode


def sample(field: AngleField, x: float, y: float) -> float:
    """Get the angle (degrees) of the cell nearest to (x, y).

    Args:
        field: Angle field to read from
        x: Column coordinate in [1, width]
        y: Row coordinate in [1, height]

    Returns:
        Angle of the nearest cell in degrees

    AIDEV-NOTE: Ties round half to even (numpy.rint), so x=2.5 reads
    column 2 and x=3.5 reads column 4.
    """
    column = int(np.rint(x))
    row = int(np.rint(y))
    return float(field.angles[row - 1, column - 1])


def sample_bilinear(field: AngleField, x: float, y: float) -> float:
    """Get an angle (degrees) blended from the four cells around (x, y).

    Each cell contributes a unit vector weighted by its distance, and the
    blended vector is turned back into an angle. Averaging vectors keeps
    350 and 10 degrees blending to 0 instead of 180. Cells past the
    field edge are clamped to the edge.

    Returns:
        Angle in degrees in (-180, 180]
    """
    angles = field.angles
    max_col = field.width - 1
    max_row = field.height - 1

    # Zero-based continuous position
    fx = x - 1.0
    fy = y - 1.0

    col0 = min(max(int(math.floor(fx)), 0), max_col)
    row0 = min(max(int(math.floor(fy)), 0), max_row)
    col1 = min(col0 + 1, max_col)
    row1 = min(row0 + 1, max_row)

    tx = min(max(fx - col0, 0.0), 1.0)
    ty = min(max(fy - row0, 0.0), 1.0)

    corners = (
        (angles[row0, col0], (1 - tx) * (1 - ty)),
        (angles[row0, col1], tx * (1 - ty)),
        (angles[row1, col0], (1 - tx) * ty),
        (angles[row1, col1], tx * ty),
    )

    vx = 0.0
    vy = 0.0
    for angle, weight in corners:
        rad = math.radians(angle)
        vx += weight * math.cos(rad)
        vy += weight * math.sin(rad)

    # Opposing directions cancel out; fall back to the nearest cell
    if abs(vx) < 1e-12 and abs(vy) < 1e-12:
        return sample(field, x, y)

    return math.degrees(math.atan2(vy, vx))


def sample_angle(
    field: AngleField,
    x: float,
    y: float,
    mode: SamplingMode = SamplingMode.NEAREST,
) -> float:
    """Read an angle using the requested sampling mode."""
    if mode is SamplingMode.BILINEAR:
        return sample_bilinear(field, x, y)
    return sample(field, x, y)
