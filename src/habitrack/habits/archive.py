"""Bit-packed archival of full execution windows.

A full window is compacted to one bit per day (done or not done), packed
eight days per byte and encoded as unpadded URL-safe base64. The encoding
is lossy: "not done" and "unset" both become 0.
"""

import base64
from collections.abc import Sequence

from .models import WINDOW_SIZE, DayValue


def pack_window(window: Sequence[int]) -> bytes:
    """Pack day values into bytes, one bit per day, most significant first.

    A trailing group shorter than eight values is left-aligned in its byte.

    Args:
        window: Day values of any length.

    Returns:
        Packed bytes, ceil(len(window) / 8) long.
    """
    packed = bytearray()
    for start in range(0, len(window), 8):
        group = window[start:start + 8]
        byte = 0
        for value in group:
            byte <<= 1
            if value == DayValue.DONE:
                byte |= 1
        byte <<= 8 - len(group)
        packed.append(byte)
    return bytes(packed)


def archive_window(window: Sequence[int]) -> str:
    """Encode a full window as an archive token.

    Args:
        window: Exactly WINDOW_SIZE day values.

    Returns:
        Unpadded URL-safe base64 of the packed window.

    Raises:
        ValueError: If the window is not exactly WINDOW_SIZE long.
    """
    if len(window) != WINDOW_SIZE:
        raise ValueError(
            f"Can only archive a full window of {WINDOW_SIZE} days, got {len(window)}"
        )
    encoded = base64.urlsafe_b64encode(pack_window(window))
    return encoded.decode("ascii").rstrip("=")


def decode_archive(token: str) -> bytes:
    """Decode an archive token back to its packed bytes."""
    padding = "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(token + padding)


def archive_bitmap(token: str) -> list[bool]:
    """Expand an archive token into WINDOW_SIZE done/not-done flags."""
    packed = decode_archive(token)
    bits = [bool(byte >> (7 - i) & 1) for byte in packed for i in range(8)]
    return bits[:WINDOW_SIZE]
