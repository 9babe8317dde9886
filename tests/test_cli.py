import json

import pytest

from lrformat import lrb, trackjson
from lrformat.cli import main, parse_format
from lrformat.track import Format

SAMPLE = {
    "label": "Cli track",
    "creator": "Someone",
    "description": "",
    "duration": 0,
    "version": "6.2",
    "startPosition": {"x": 0.0, "y": 0.0},
    "lines": [
        {
            "id": 7,
            "type": 1,
            "x1": 0.0,
            "y1": 0.0,
            "x2": 4.0,
            "y2": 4.0,
            "flipped": False,
            "leftExtended": True,
            "rightExtended": True,
        }
    ],
    "layers": [],
    "riders": [],
    "script": "",
}


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "in.track.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("trackjson", Format.TRACKJSON),
        ("TrackJSON", Format.TRACKJSON),
        ("lrb", Format.LRB),
        ("LRB", Format.LRB),
    ],
)
def test_parse_format(name, expected):
    assert parse_format(name) is expected


def test_parse_format_invalid():
    with pytest.raises(ValueError, match="Invalid format 'sol'. Must be one of: trackjson, lrb"):
        parse_format("sol")


def test_converts_to_output_file(json_file, tmp_path, capsys):
    out = tmp_path / "out.lrb"
    assert main([str(json_file), "trackjson", "lrb", str(out)]) == 0
    assert capsys.readouterr().out.strip() == f"Converted file saved to {out}"
    track = lrb.read(out.read_bytes())
    assert track.title == "Cli track"
    assert track.simulation_lines[0].base_line.id == 7


def test_prints_to_stdout(json_file, capsys):
    assert main([str(json_file), "trackjson", "trackjson"]) == 0
    printed = capsys.readouterr().out
    assert trackjson.read(printed) == trackjson.read(json.dumps(SAMPLE))


def test_missing_input_file(tmp_path, capsys):
    missing = tmp_path / "absent.lrb"
    assert main([str(missing), "lrb", "trackjson"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Failed to open input file")


def test_bad_from_format(json_file, capsys):
    assert main([str(json_file), "xml", "lrb"]) == 1
    assert "Failed to parse 'from' format" in capsys.readouterr().err


def test_bad_to_format(json_file, capsys):
    assert main([str(json_file), "trackjson", "xml"]) == 1
    assert "Failed to parse 'to' format" in capsys.readouterr().err


def test_conversion_failure(tmp_path, capsys):
    bad = tmp_path / "bad.lrb"
    bad.write_bytes(b"XYZ")
    assert main([str(bad), "lrb", "trackjson"]) == 1
    assert "Conversion failed" in capsys.readouterr().err