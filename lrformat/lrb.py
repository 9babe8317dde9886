"""Reading and writing tracks in the binary LRB format."""

from __future__ import annotations

import io
import logging
import struct
from typing import BinaryIO

from .lrb_mods import SUPPORTED_MODS, ModFlags, ModHandler, find_handler, read_string
from .track import FormatError, Track

_log = logging.getLogger(__name__)

_MAGIC = b"LRB"
_FILE_VERSION = 0
_KNOWN_MOD_FLAGS = int(
    ModFlags.REQUIRED
    | ModFlags.PHYSICS
    | ModFlags.CAMERA
    | ModFlags.SCENERY
    | ModFlags.EXTRA_DATA
)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise FormatError("unexpected end of data")
    return data


def _unpack(stream: BinaryIO, fmt: str) -> tuple:
    return struct.unpack(fmt, _read_exact(stream, struct.calcsize(fmt)))


def _report_unsupported(name: str, version: int, flags: ModFlags) -> None:
    _log.warning("This mod is not supported: %s v%d", name, version)
    if ModFlags.REQUIRED in flags:
        raise FormatError("Required mod found!")
    if ModFlags.SCENERY in flags:
        _log.warning("Ignoring it may affect scenery rendering.")
    if ModFlags.CAMERA in flags:
        _log.warning("Ignoring it may affect camera functionality.")
    if ModFlags.PHYSICS in flags:
        _log.warning("Ignoring it may affect track physics.")


def _read_section(
    stream: BinaryIO, handler: ModHandler, offset: int, size: int, track: Track
) -> None:
    if offset > size:
        raise FormatError("Failed to read mod! unexpected end of data")
    resume = stream.tell()
    stream.seek(offset)
    try:
        handler.read(stream, track)
    except FormatError as exc:
        raise FormatError(f"Failed to read mod! {exc}") from exc
    stream.seek(resume)


def read(data: bytes) -> Track:
    """Parse a track from the bytes of an LRB file."""
    stream = io.BytesIO(data)
    track = Track()

    if _read_exact(stream, len(_MAGIC)) != _MAGIC:
        raise FormatError("Read invalid magic number!")
    _unpack(stream, "<B")
    (mod_count,) = _unpack(stream, "<H")

    for _ in range(mod_count):
        name = read_string(stream, 1)
        version, raw_flags = _unpack(stream, "<HB")
        _log.info("Loading mod %s v%d", name, version)

        if raw_flags & ~_KNOWN_MOD_FLAGS:
            raise FormatError("Read invalid mod flags!")
        flags = ModFlags(raw_flags)

        has_data = ModFlags.EXTRA_DATA in flags
        offset = 0
        if has_data:
            offset, _length = _unpack(stream, "<QQ")

        handler = find_handler(name, version)
        if handler is None:
            _report_unsupported(name, version, flags)

        if not has_data:
            continue
        if handler is None:
            raise FormatError(f"Came across invalid mod {name}!")
        _read_section(stream, handler, offset, len(data), track)

    return track


def write(track: Track) -> bytes:
    """Serialise a track as the bytes of an LRB file."""
    stream = io.BytesIO()
    stream.write(_MAGIC)
    stream.write(struct.pack("<BH", _FILE_VERSION, len(SUPPORTED_MODS)))

    address_slots: dict[str, int] = {}
    for (name, version), handler in SUPPORTED_MODS.items():
        encoded = name.encode("utf-8")
        if len(encoded) > 0xFF:
            raise FormatError(f"mod name {name} is too long")
        stream.write(struct.pack("<B", len(encoded)))
        stream.write(encoded)
        stream.write(struct.pack("<HB", version, int(handler.flags)))
        if ModFlags.EXTRA_DATA in handler.flags:
            address_slots[name] = stream.tell()
            stream.write(bytes(16))

    for (name, _version), handler in SUPPORTED_MODS.items():
        start = stream.tell()
        try:
            handler.write(stream, track)
        except FormatError as exc:
            raise FormatError(f"Failed to write mod! {exc}") from exc
        end = stream.tell()
        slot = address_slots.get(name)
        if slot is not None:
            stream.seek(slot)
            stream.write(struct.pack("<QQ", start, end - start))
            stream.seek(end)

    return stream.getvalue()