"""Digest engines."""
from .digest import BroadcastWriter, stream_file

__all__ = [
    "BroadcastWriter",
    "stream_file",
]
