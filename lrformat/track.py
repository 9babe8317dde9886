"""In-memory model of a Line Rider track shared by every file format."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FormatError(ValueError):
    """Raised when track data cannot be read or written."""


class Format(Enum):
    """File formats a track can be stored in."""

    TRACKJSON = "trackjson"
    LRB = "lrb"


class GridVersion(Enum):
    """Grid algorithm version used by a track's physics."""

    V6_2 = 0
    V6_1 = 1
    V6_0 = 2


class LineType(Enum):
    """Kind of a line: blue and red lines collide, green lines are scenery."""

    BLUE = 0
    RED = 1
    GREEN = 2


@dataclass
class Vec2:
    """A point or vector in track coordinates (+y points down)."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Line:
    """Geometry and kind shared by all lines."""

    id: int
    x1: float
    y1: float
    x2: float
    y2: float
    line_type: LineType


@dataclass
class SimulationLine:
    """A line that takes part in the physics simulation."""

    base_line: Line
    flipped: bool = False
    left_extension: bool = False
    right_extension: bool = False
    multiplier: float | None = None


@dataclass
class SceneryLine:
    """A decorative line with no physical effect."""

    base_line: Line
    width: float | None = None


@dataclass
class Track:
    """A complete track, independent of the format it was loaded from."""

    grid_version: GridVersion = GridVersion.V6_2
    title: str = ""
    artist: str = ""
    description: str = ""
    duration: int = 0
    script: str = ""
    simulation_lines: list[SimulationLine] = field(default_factory=list)
    scenery_lines: list[SceneryLine] = field(default_factory=list)
    start_position: Vec2 = field(default_factory=Vec2)