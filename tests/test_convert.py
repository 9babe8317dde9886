import json

import pytest

from lrformat import lrb, trackjson
from lrformat.convert import convert
from lrformat.track import Format, FormatError, GridVersion, LineType

SAMPLE = {
    "label": "Test track",
    "creator": "Someone",
    "description": "A small track",
    "duration": 40,
    "version": "6.1",
    "startPosition": {"x": 1.5, "y": -2.0},
    "lines": [
        {
            "id": 1,
            "type": 0,
            "x1": 0.0,
            "y1": 0.0,
            "x2": 10.0,
            "y2": 0.0,
            "flipped": False,
            "leftExtended": False,
            "rightExtended": False,
        },
        {
            "id": 2,
            "type": 1,
            "x1": 10.0,
            "y1": 0.0,
            "x2": 20.0,
            "y2": 5.0,
            "flipped": True,
            "leftExtended": True,
            "rightExtended": False,
        },
        {"id": 3, "type": 2, "x1": 0.0, "y1": 5.0, "x2": 5.0, "y2": 5.0},
    ],
    "layers": [],
    "riders": [],
    "script": "",
}


def _sample_bytes():
    return json.dumps(SAMPLE).encode("utf-8")


def test_json_to_lrb_produces_lrb():
    data = convert(_sample_bytes(), Format.TRACKJSON, Format.LRB)
    assert data[:3] == b"LRB"
    track = lrb.read(data)
    assert track.title == "Test track"
    assert track.grid_version is GridVersion.V6_1


def test_json_lrb_json_keeps_lrb_fields():
    original = trackjson.read(_sample_bytes().decode())
    lrb_data = convert(_sample_bytes(), Format.TRACKJSON, Format.LRB)
    back = trackjson.read(convert(lrb_data, Format.LRB, Format.TRACKJSON).decode())
    assert back.title == original.title
    assert back.grid_version == original.grid_version
    assert back.start_position == original.start_position
    assert back.simulation_lines == original.simulation_lines
    assert back.scenery_lines == original.scenery_lines
    assert back.scenery_lines[0].base_line.line_type is LineType.GREEN


def test_lrb_to_lrb_is_stable():
    lrb_data = convert(_sample_bytes(), Format.TRACKJSON, Format.LRB)
    assert convert(lrb_data, Format.LRB, Format.LRB) == lrb_data


def test_json_to_json_preserves_track():
    out = convert(_sample_bytes(), Format.TRACKJSON, Format.TRACKJSON)
    assert trackjson.read(out.decode()) == trackjson.read(_sample_bytes().decode())


def test_invalid_utf8_json_input():
    with pytest.raises(FormatError):
        convert(b"\xff\xfe{", Format.TRACKJSON, Format.LRB)


def test_invalid_lrb_input():
    with pytest.raises(FormatError, match="magic"):
        convert(b"NOPE", Format.LRB, Format.TRACKJSON)