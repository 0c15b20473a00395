"""
Storage codec for color maps.

Colors (0-15) are packed two per byte, high nibble first, in row-major
order. An odd cell count pads the last low nibble with 0; decoding drops
that padding value again.
"""

import numpy as np

from .types import Grid


def pack_color_map(cmap) -> bytes:
    """Pack an n×n color map into ceil(n²/2) bytes."""
    flat = np.asarray(cmap, dtype=int).ravel()
    if flat.size and (flat.min() < 0 or flat.max() > 0xF):
        raise ValueError("Colors must fit in a nibble (0-15).")
    if flat.size % 2:
        flat = np.append(flat, 0)
    pairs = flat.reshape(-1, 2)
    return bytes(((pairs[:, 0] << 4) | pairs[:, 1]).astype(np.uint8).tolist())


def unpack_color_map(data: bytes, size: int) -> Grid:
    """Inverse of pack_color_map for an n×n board of side `size`."""
    raw = np.frombuffer(bytes(data), dtype=np.uint8).astype(int)
    flat = np.empty(raw.size * 2, dtype=int)
    flat[0::2] = (raw >> 4) & 0xF
    flat[1::2] = raw & 0xF
    if size & 0x1:
        flat = flat[:-1]
    if flat.size != size * size:
        raise ValueError(f"Payload of {len(data)} bytes does not hold a {size}x{size} board.")
    return flat.reshape(size, size)
