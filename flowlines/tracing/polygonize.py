"""Expand centerlines into closed, tapered outlines."""

import math

import numpy as np


def taper_offsets(count: int, taper_min: float, taper_max: float) -> np.ndarray:
    """Linearly spaced half-widths from taper_min to taper_max.

    A single point gets taper_min.
    """
    if count <= 0:
        return np.empty(0, dtype=np.float64)
    return np.linspace(taper_min, taper_max, count)


def polygonize(
    centerline: "tuple[tuple[float, float], ...]",
    taper_min: float,
    taper_max: float,
) -> "tuple[tuple[float, float], ...]":
    """Build a tapered outline around a centerline.

    Args:
        centerline: Ordered (x, y) points of a traced line
        taper_min: Half-width at the first point
        taper_max: Half-width at the last point

    Returns:
        Ring of 2 * len(centerline) vertices: the outward side shifted by
        +offset in y, followed by the return side walked backwards and
        shifted by -offset. The first vertex is not repeated at the end.

    AIDEV-NOTE: Offsets are applied along y only, not perpendicular to the
    path. A line that doubles back in x therefore yields a
    self-intersecting ring; renderers must cope with that.
    """
    if not centerline:
        return ()

    points = np.asarray(centerline, dtype=np.float64).reshape(-1, 2)
    offsets = taper_offsets(len(points), taper_min, taper_max)

    xs = points[:, 0]
    ys = points[:, 1]

    outward = zip(xs, ys + offsets)
    # Reversed walk pairs each point with the reversed taper, so point i
    # keeps offset i on the way back
    returning = zip(xs[::-1], ys[::-1] - offsets[::-1])

    ring = []
    for x, y in (*outward, *returning):
        x = float(x)
        y = float(y)
        if math.isnan(x) or math.isnan(y):
            continue
        ring.append((x, y))

    return tuple(ring)
