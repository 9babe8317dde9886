"""Conversion of track files between supported formats."""

from __future__ import annotations

from . import lrb, trackjson
from .track import Format, FormatError, Track


def _load(data: bytes, source: Format) -> Track:
    if source is Format.TRACKJSON:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError(f"input is not valid UTF-8: {exc}") from exc
        return trackjson.read(text)
    if source is Format.LRB:
        return lrb.read(data)
    raise ValueError(f"unknown format {source!r}")


def _dump(track: Track, target: Format) -> bytes:
    if target is Format.TRACKJSON:
        return trackjson.write(track).encode("utf-8")
    if target is Format.LRB:
        return lrb.write(track)
    raise ValueError(f"unknown format {target!r}")


def convert(data: bytes, source: Format, target: Format) -> bytes:
    """Convert the bytes of a track file from one format to another."""
    return _dump(_load(data, source), target)