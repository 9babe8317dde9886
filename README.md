# lrformat

Read, write and convert Line Rider track files. The package supports two formats:

- **TrackJSON** is the JSON track format used by the web version of Line Rider.
- **LRB** is a compact binary format. It is built from a table of "mods", and each mod holds one section of the track.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Command line

```
lrformat INPUT FROM TO [OUTPUT]
lrformat --version
```

`FROM` and `TO` each take the value `trackjson` or `lrb`, in any case.

- If `OUTPUT` is given, the converted file is written there and a confirmation line is printed.
- If `OUTPUT` is left out, the result is printed to standard output as UTF-8 text. Any bytes that are not valid UTF-8 are replaced, so send LRB output to a file rather than printing it.

```
lrformat mytrack.json trackjson lrb mytrack.lrb
lrformat mytrack.lrb lrb trackjson
```

The command exits with status 1 after printing `Error: ...` to standard error when any of these fail:

- an unknown format name
- an unreadable input file
- a failed conversion
- an unwritable output file

Missing arguments are reported by the argument parser, which exits with status 2.

## Library

`lrformat.convert.convert` converts the bytes of a track file from one format to another:

```python
from lrformat.convert import convert
from lrformat.track import Format

with open("mytrack.json", "rb") as f:
    lrb_bytes = convert(f.read(), Format.TRACKJSON, Format.LRB)
```

You can also use each format on its own:

- `lrformat.trackjson.read(text)` and `lrformat.trackjson.write(track)` work with JSON text.
- `lrformat.lrb.read(data)` and `lrformat.lrb.write(track)` work with bytes.

```python
from lrformat import lrb, trackjson

track = trackjson.read(json_text)
data = lrb.write(track)
again = lrb.read(data)
print(trackjson.write(again))
```

`lrformat.cli.parse_format(name)` turns a case-insensitive name into a `Format`. It raises `ValueError` for an unknown name.

### The track model

`lrformat.track.Track` is a dataclass. Its fields are:

| Field | Contents |
| --- | --- |
| `title`, `artist`, `description`, `script` | strings |
| `duration` | integer |
| `grid_version` | a `GridVersion`: `V6_0`, `V6_1` or `V6_2`, default `V6_2` |
| `start_position` | a `Vec2` |
| `simulation_lines` | a list of `SimulationLine` |
| `scenery_lines` | a list of `SceneryLine` |

Every line wraps a `Line`, which holds an `id`, the coordinates `x1`, `y1`, `x2` and `y2`, and a `LineType`: `BLUE`, `RED` or `GREEN`.

- A `SimulationLine` adds the fields `flipped`, `left_extension`, `right_extension` and `multiplier`.
- A `SceneryLine` adds the field `width`.

Malformed input raises `lrformat.track.FormatError`, which is a subclass of `ValueError`. Examples of malformed input:

- invalid JSON or a missing field
- an unknown grid version
- a bad line type
- a simulation line without its flags
- a wrong LRB magic number
- truncated data
- invalid mod flags or line flags
- an unsupported mod that is marked as required

### LRB mods

`lrformat.lrb_mods` holds one handler for each supported mod, all at version 0:

- `base.gridver`
- `base.label`
- `base.scnline`
- `base.simline`
- `base.startoffset`

Each handler is a `ModHandler` with `flags`, `read` and `write`. Use `find_handler(name, version)` to look one up. The module also exposes:

- the `read_*` and `write_*` functions for each section
- `read_string` for length-prefixed UTF-8 strings
- the `ModFlags` and `SimLineFlags` flag types

`lrb.write` always writes all five mods. `lrb.read` treats other mods as follows:

- An unsupported mod that is not required is skipped if it has no data section, and a warning goes to the `lrformat.lrb` logger.
- An unsupported mod that carries a data section raises `FormatError`.

## Limitations

- Layers and riders in TrackJSON input are checked for well-formedness and then discarded. TrackJSON output always contains empty `layers` and `riders` lists.
- `multiplier` and `width` are read from neither format. They are written to TrackJSON only when they are set on the track, and they are never written to LRB.
- LRB has no sections for the artist, description, duration or script. These fields are lost when a track is converted to LRB.
- The package only converts files. It does not simulate or render tracks.