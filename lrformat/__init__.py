"""Read, write and convert Line Rider track files (TrackJSON and LRB)."""

__version__ = "0.1.0"
__all__ = ["track", "trackjson", "lrb", "lrb_mods", "convert", "cli"]