"""Reading and writing tracks in the .track.json format."""

from __future__ import annotations

import json
import math
from typing import Any, Callable, NamedTuple

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

_VERSIONS = {
    "6.0": GridVersion.V6_0,
    "6.1": GridVersion.V6_1,
    "6.2": GridVersion.V6_2,
}
_VERSION_NAMES = {version: name for name, version in _VERSIONS.items()}

_LINE_TYPES = {0: LineType.BLUE, 1: LineType.RED, 2: LineType.GREEN}


class _RawLine(NamedTuple):
    id: int
    line_type: int
    x1: float
    y1: float
    x2: float
    y2: float
    flipped: bool | None
    left_ext: bool | None
    right_ext: bool | None


def _object(value: Any, where: str) -> dict:
    if not isinstance(value, dict):
        raise FormatError(f"expected an object for {where}")
    return value


def _array(value: Any, where: str) -> list:
    if not isinstance(value, list):
        raise FormatError(f"expected an array for {where}")
    return value


def _require(obj: dict, key: str, where: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise FormatError(f"missing field '{key}' in {where}") from None


def _int_in(low: int, high: int) -> Callable[[Any, str], int]:
    def check(value: Any, where: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            raise FormatError(f"expected an integer in [{low}, {high}] for {where}")
        return value

    return check


_u8 = _int_in(0, 0xFF)
_u32 = _int_in(0, 0xFFFF_FFFF)
_faulty_u32 = _int_in(-(2**31), 0xFFFF_FFFF)


def _float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatError(f"expected a number for {where}")
    return float(value)


def _bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise FormatError(f"expected a boolean for {where}")
    return value


def _str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise FormatError(f"expected a string for {where}")
    return value


def _field(obj: dict, key: str, check: Callable[[Any, str], Any], where: str) -> Any:
    return check(_require(obj, key, where), f"'{key}' in {where}")


def _optional(obj: dict, key: str, check: Callable[[Any, str], Any], where: str) -> Any:
    value = obj.get(key)
    return None if value is None else check(value, f"'{key}' in {where}")


def _vec2(value: Any, where: str) -> Vec2:
    obj = _object(value, where)
    return Vec2(_field(obj, "x", _float, where), _field(obj, "y", _float, where))


def _parse_line(value: Any) -> _RawLine:
    where = "line"
    obj = _object(value, where)
    raw = _RawLine(
        id=_field(obj, "id", _u32, where),
        line_type=_field(obj, "type", _u8, where),
        x1=_field(obj, "x1", _float, where),
        y1=_field(obj, "y1", _float, where),
        x2=_field(obj, "x2", _float, where),
        y2=_field(obj, "y2", _float, where),
        flipped=_optional(obj, "flipped", _bool, where),
        left_ext=_optional(obj, "leftExtended", _bool, where),
        right_ext=_optional(obj, "rightExtended", _bool, where),
    )
    _optional(obj, "multiplier", _float, where)
    _optional(obj, "width", _float, where)
    return raw


def _check_layer(value: Any) -> None:
    where = "layer"
    obj = _object(value, where)
    _field(obj, "id", _u32, where)
    _field(obj, "type", _u8, where)
    _field(obj, "name", _str, where)
    _field(obj, "visible", _bool, where)
    _field(obj, "editable", _bool, where)
    _optional(obj, "folderId", _faulty_u32, where)
    _optional(obj, "size", _u32, where)


def _check_rider(value: Any) -> None:
    where = "rider"
    obj = _object(value, where)
    _vec2(_require(obj, "startPosition", where), "rider startPosition")
    _vec2(_require(obj, "startVelocity", where), "rider startVelocity")
    _optional(obj, "angle", _float, where)
    _field(obj, "remountable", _bool, where)


def _required_flag(value: bool | None, name: str) -> bool:
    if value is None:
        raise FormatError(f"Json simline did not have {name} attribute!")
    return value


def read(text: str) -> Track:
    """Parse a track from .track.json text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"invalid JSON: {exc}") from exc

    where = "track"
    obj = _object(data, where)
    label = _field(obj, "label", _str, where)
    creator = _field(obj, "creator", _str, where)
    description = _field(obj, "description", _str, where)
    duration = _field(obj, "duration", _u32, where)
    version = _field(obj, "version", _str, where)
    start_position = _vec2(_require(obj, "startPosition", where), "startPosition")
    raw_lines = [_parse_line(item) for item in _array(_require(obj, "lines", where), "lines")]
    for layer in _array(_require(obj, "layers", where), "layers"):
        _check_layer(layer)
    for rider in _array(_require(obj, "riders", where), "riders"):
        _check_rider(rider)
    script = _field(obj, "script", _str, where)

    try:
        grid_version = _VERSIONS[version]
    except KeyError:
        raise FormatError(f"Invalid grid version {version} when parsing json!") from None

    track = Track(
        grid_version=grid_version,
        title=label,
        artist=creator,
        description=description,
        duration=duration,
        script=script,
        start_position=start_position,
    )

    for raw in raw_lines:
        try:
            line_type = _LINE_TYPES[raw.line_type]
        except KeyError:
            raise FormatError(f"Json line had invalid line type {raw.line_type}!") from None
        base_line = Line(raw.id, raw.x1, raw.y1, raw.x2, raw.y2, line_type)
        if line_type is LineType.GREEN:
            track.scenery_lines.append(SceneryLine(base_line))
        else:
            track.simulation_lines.append(
                SimulationLine(
                    base_line,
                    flipped=_required_flag(raw.flipped, "flipped"),
                    left_extension=_required_flag(raw.left_ext, "left_extension"),
                    right_extension=_required_flag(raw.right_ext, "right_extension"),
                )
            )
    return track


def _number(value: float) -> float | None:
    value = float(value)
    return value if math.isfinite(value) else None


def _line_fields(line: Line, type_number: int) -> dict[str, Any]:
    return {
        "id": line.id,
        "type": type_number,
        "x1": _number(line.x1),
        "y1": _number(line.y1),
        "x2": _number(line.x2),
        "y2": _number(line.y2),
    }


def write(track: Track) -> str:
    """Serialise a track as pretty-printed .track.json text."""
    lines: list[dict[str, Any]] = []
    for sim in track.simulation_lines:
        type_number = 0 if sim.base_line.line_type is LineType.BLUE else 1
        entry = _line_fields(sim.base_line, type_number)
        entry["flipped"] = sim.flipped
        entry["leftExtended"] = sim.left_extension
        entry["rightExtended"] = sim.right_extension
        if sim.multiplier is not None:
            entry["multiplier"] = _number(sim.multiplier)
        lines.append(entry)

    for scenery in track.scenery_lines:
        entry = _line_fields(scenery.base_line, 2)
        if scenery.width is not None:
            entry["width"] = _number(scenery.width)
        lines.append(entry)

    document = {
        "label": track.title,
        "creator": track.artist,
        "description": track.description,
        "duration": track.duration,
        "version": _VERSION_NAMES[track.grid_version],
        "startPosition": {
            "x": _number(track.start_position.x),
            "y": _number(track.start_position.y),
        },
        "lines": lines,
        "layers": [],
        "riders": [],
        "script": track.script,
    }
    return json.dumps(document, indent=2, ensure_ascii=False)