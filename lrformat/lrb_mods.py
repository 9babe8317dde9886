"""Mod handlers for the sections of an LRB file and their shared helpers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntFlag
from typing import BinaryIO, Callable

from .track import (
    FormatError,
    GridVersion,
    Line,
    LineType,
    SceneryLine,
    SimulationLine,
    Track,
    Vec2,
)


class ModFlags(IntFlag):
    """Flags stored with every entry of an LRB mod table."""

    REQUIRED = 1 << 0
    PHYSICS = 1 << 1
    CAMERA = 1 << 2
    SCENERY = 1 << 3
    EXTRA_DATA = 1 << 4


class SimLineFlags(IntFlag):
    """Per-line flags of a simulation line: bits 0000DCBA."""

    RED = 1 << 0
    INVERTED = 1 << 1
    LEFT_EXTENSION = 1 << 2
    RIGHT_EXTENSION = 1 << 3


_ALL_SIMLINE_FLAGS = (
    SimLineFlags.RED
    | SimLineFlags.INVERTED
    | SimLineFlags.LEFT_EXTENSION
    | SimLineFlags.RIGHT_EXTENSION
)

Reader = Callable[[BinaryIO, Track], None]
Writer = Callable[[BinaryIO, Track], None]


@dataclass(frozen=True)
class ModHandler:
    """How one mod's data section is flagged, read and written."""

    flags: ModFlags
    read: Reader
    write: Writer


_LENGTH_FORMATS = {1: "<B", 2: "<H", 4: "<I"}


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise FormatError("unexpected end of data")
    return data


def _unpack(stream: BinaryIO, fmt: str) -> tuple:
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))


def _pack(stream: BinaryIO, fmt: str, *values: object) -> None:
    try:
        stream.write(struct.pack(fmt, *values))
    except struct.error as exc:
        raise FormatError(f"value out of range: {exc}") from exc


def read_string(stream: BinaryIO, length_size: int) -> str:
    """Read a UTF-8 string prefixed by a little-endian length of 1, 2 or 4 bytes."""
    try:
        fmt = _LENGTH_FORMATS[length_size]
    except KeyError:
        raise ValueError(f"unsupported string length size {length_size}") from None
    (length,) = _unpack(stream, fmt)
    raw = _read_exact(stream, length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError("Read invalid UTF-8 string") from exc


def read_gridver(stream: BinaryIO, track: Track) -> None:
    """Read the grid algorithm version (u8)."""
    (number,) = _unpack(stream, "<B")
    try:
        track.grid_version = GridVersion(number)
    except ValueError:
        raise FormatError(f"Invalid grid version number: {number}") from None


def write_gridver(stream: BinaryIO, track: Track) -> None:
    """Write the grid algorithm version (u8)."""
    _pack(stream, "<B", track.grid_version.value)


def read_label(stream: BinaryIO, track: Track) -> None:
    """Read the track's label as a u16-length string."""
    track.title = read_string(stream, 2)


def write_label(stream: BinaryIO, track: Track) -> None:
    """Write the track's label as a u16-length string."""
    encoded = track.title.encode("utf-8")
    if len(encoded) > 0xFFFF:
        raise FormatError("track label is too long")
    _pack(stream, "<H", len(encoded))
    stream.write(encoded)


def read_scnline(stream: BinaryIO, track: Track) -> None:
    """Read scenery lines: a u32 count, then id u32 and four f64 per line."""
    (count,) = _unpack(stream, "<I")
    for _ in range(count):
        line_id, x1, y1, x2, y2 = _unpack(stream, "<I4d")
        track.scenery_lines.append(
            SceneryLine(Line(line_id, x1, y1, x2, y2, LineType.GREEN))
        )


def write_scnline(stream: BinaryIO, track: Track) -> None:
    """Write scenery lines: a u32 count, then id u32 and four f64 per line."""
    _pack(stream, "<I", len(track.scenery_lines))
    for scenery in track.scenery_lines:
        line = scenery.base_line
        _pack(stream, "<I4d", line.id, line.x1, line.y1, line.x2, line.y2)


def read_simline(stream: BinaryIO, track: Track) -> None:
    """Read simulation lines: a u32 count, then id, flags and four f64 per line."""
    (count,) = _unpack(stream, "<I")
    for _ in range(count):
        line_id, raw_flags = _unpack(stream, "<IB")
        if raw_flags & ~_ALL_SIMLINE_FLAGS:
            raise FormatError("Read invalid simulation line flags!")
        flags = SimLineFlags(raw_flags)
        x1, y1, x2, y2 = _unpack(stream, "<4d")
        line_type = LineType.RED if SimLineFlags.RED in flags else LineType.BLUE
        track.simulation_lines.append(
            SimulationLine(
                Line(line_id, x1, y1, x2, y2, line_type),
                flipped=SimLineFlags.INVERTED in flags,
                left_extension=SimLineFlags.LEFT_EXTENSION in flags,
                right_extension=SimLineFlags.RIGHT_EXTENSION in flags,
            )
        )


def write_simline(stream: BinaryIO, track: Track) -> None:
    """Write simulation lines: a u32 count, then id, flags and four f64 per line."""
    _pack(stream, "<I", len(track.simulation_lines))
    for sim in track.simulation_lines:
        line = sim.base_line
        flags = SimLineFlags(0)
        if line.line_type is LineType.RED:
            flags |= SimLineFlags.RED
        if sim.flipped:
            flags |= SimLineFlags.INVERTED
        if sim.left_extension:
            flags |= SimLineFlags.LEFT_EXTENSION
        if sim.right_extension:
            flags |= SimLineFlags.RIGHT_EXTENSION
        _pack(stream, "<IB4d", line.id, int(flags), line.x1, line.y1, line.x2, line.y2)


def read_startoffset(stream: BinaryIO, track: Track) -> None:
    """Read the rider's start position as two f64 (+y is down)."""
    x, y = _unpack(stream, "<2d")
    track.start_position = Vec2(x, y)


def write_startoffset(stream: BinaryIO, track: Track) -> None:
    """Write the rider's start position as two f64 (+y is down)."""
    _pack(stream, "<2d", track.start_position.x, track.start_position.y)


SUPPORTED_MODS: dict[tuple[str, int], ModHandler] = {
    ("base.gridver", 0): ModHandler(
        ModFlags.EXTRA_DATA | ModFlags.PHYSICS, read_gridver, write_gridver
    ),
    ("base.label", 0): ModHandler(ModFlags.EXTRA_DATA, read_label, write_label),
    ("base.scnline", 0): ModHandler(
        ModFlags.EXTRA_DATA | ModFlags.SCENERY, read_scnline, write_scnline
    ),
    ("base.simline", 0): ModHandler(
        ModFlags.EXTRA_DATA | ModFlags.PHYSICS | ModFlags.SCENERY,
        read_simline,
        write_simline,
    ),
    ("base.startoffset", 0): ModHandler(
        ModFlags.EXTRA_DATA | ModFlags.PHYSICS, read_startoffset, write_startoffset
    ),
}


def find_handler(name: str, version: int) -> ModHandler | None:
    """Return the handler for a supported mod, or None if it is not supported."""
    return SUPPORTED_MODS.get((name, version))