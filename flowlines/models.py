"""Data models and constants for the flow-line tracer."""

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Hashable

import numpy as np

# Configuration file path
CONFIG_FILE = Path.home() / ".flowlines_config.json"


class InvalidFieldError(ValueError):
    """Raised when an angle grid is empty, ragged or holds non-finite cells."""


class InvalidStepLengthError(ValueError):
    """Raised when a trace request has a non-positive or non-finite step."""


class SamplingMode(Enum):
    """How the tracer reads an angle at a continuous position.

    AIDEV-NOTE: NEAREST is the baseline behavior. BILINEAR must only be
    used when a caller asks for it explicitly.
    """

    NEAREST = "nearest"  # Round to the closest cell
    BILINEAR = "bilinear"  # Blend the four surrounding cells as unit vectors


class AngleField:
    """Immutable grid of direction angles in degrees.

    Coordinates are 1-based: column x covers [1, width] and row y covers
    [1, height], with row 1 at the top of the grid.
    """

    __slots__ = ("_angles",)

    def __init__(self, angles: Any):
        try:
            grid = np.array(angles, dtype=np.float64)
        except (TypeError, ValueError) as e:
            # Ragged nested lists cannot become a rectangular array
            raise InvalidFieldError(f"Angle grid must be rectangular: {e}") from e

        if grid.ndim != 2:
            raise InvalidFieldError(
                f"Angle grid must be 2D, got {grid.ndim} dimension(s)"
            )
        if grid.shape[0] < 1 or grid.shape[1] < 1:
            raise InvalidFieldError(f"Angle grid must not be empty, got {grid.shape}")
        if not np.all(np.isfinite(grid)):
            raise InvalidFieldError("Angle grid contains non-finite values")

        grid.setflags(write=False)
        self._angles = grid

    @classmethod
    def from_rows(cls, rows: "list[list[float]]") -> "AngleField":
        """Build a field from row-major nested lists (first row is the top)."""
        return cls(rows)

    @classmethod
    def uniform(cls, width: int, height: int, angle: float = 0.0) -> "AngleField":
        """Build a field where every cell points the same way."""
        return cls(np.full((height, width), angle, dtype=np.float64))

    @property
    def angles(self) -> np.ndarray:
        """Read-only (height, width) array of angles."""
        return self._angles

    @property
    def width(self) -> int:
        return int(self._angles.shape[1])

    @property
    def height(self) -> int:
        return int(self._angles.shape[0])

    def contains(self, x: float, y: float) -> bool:
        """Check whether a continuous position lies inside the field."""
        return 1 <= x <= self.width and 1 <= y <= self.height

    def cell(self, column: int, row: int) -> float:
        """Angle at a 1-based (column, row) cell."""
        return float(self._angles[row - 1, column - 1])

    def __reduce__(self):
        # Rebuild through __init__ so copies stay validated and read-only
        return (AngleField, (np.array(self._angles),))

    def __repr__(self) -> str:
        return f"AngleField(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class TraceRequest:
    """Parameters for a single flow line.

    AIDEV-NOTE: `id` is opaque and only carried through for callers that
    need to match polygons back to their own records.
    """

    start_x: float
    start_y: float
    step_length: float = 1.0
    max_steps: int = 50
    taper_min: float = 0.0
    taper_max: float = 1.0
    id: Hashable = None

    def __post_init__(self):
        if not math.isfinite(self.step_length) or self.step_length <= 0:
            raise InvalidStepLengthError(
                f"step_length must be positive, got {self.step_length}"
            )
        if (
            not isinstance(self.max_steps, (int, float, np.integer, np.floating))
            or not math.isfinite(self.max_steps)
            or int(self.max_steps) != self.max_steps
            or self.max_steps < 0
        ):
            raise ValueError(
                f"max_steps must be a non-negative integer, got {self.max_steps}"
            )


@dataclass(frozen=True)
class FlowLine:
    """A traced centerline together with its tapered outline."""

    id: Hashable
    centerline: "tuple[tuple[float, float], ...]"
    polygon: "tuple[tuple[float, float], ...]"

    @property
    def is_empty(self) -> bool:
        return not self.centerline


@dataclass
class TracingResult:
    """Result of tracing a batch of flow lines."""

    # One entry per request, in request order
    lines: "list[FlowLine]"

    # Field dimensions (cells)
    field_width: int = 0
    field_height: int = 0

    # Statistics
    total_path_length: float = 0.0  # Summed centerline length in field units
    empty_count: int = 0  # Requests whose start point was outside the field
    vertex_count: int = 0  # Total polygon vertices

    @property
    def polygons(self) -> "list[tuple[tuple[float, float], ...]]":
        return [line.polygon for line in self.lines]


@dataclass
class TracerConfig:
    """Default parameters for tracing a batch of flow lines."""

    # Per-line stepping
    step_length: float = 1.0  # Distance advanced per step, in cells
    max_steps: int = 50  # Upper bound on steps per line

    # Taper (half-width of the outline at the first and last point)
    taper_min: float = 0.0
    taper_max: float = 1.0

    # Batch generation
    num_lines: int = 500  # Start points drawn when none are supplied
    seed: int | None = None  # Seed for the start-point generator

    # How angles are read from the field
    sampling_mode: SamplingMode = SamplingMode.NEAREST

    # Worker processes for fan-out (1 = run in the calling process)
    max_workers: int = 1
