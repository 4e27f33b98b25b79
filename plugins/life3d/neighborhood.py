"""
3D Moore neighborhood (26 neighbors) with a dead border.

Cells outside the lattice count as dead; there is no wraparound, so unlike
the np.roll counters of the 2D engines the lattice edge absorbs patterns.
"""

import numpy as np


# dz outermost, dx innermost
NEIGHBOR_OFFSETS = tuple(
    (dx, dy, dz)
    for dz in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy, dz) != (0, 0, 0)
)

MAX_NEIGHBORS = len(NEIGHBOR_OFFSETS)


def count_live_neighbors(engine, x, y, z):
    """Count live neighbors of one cell through the engine's bounded get()."""
    return sum(engine.get(x + dx, y + dy, z + dz) for dx, dy, dz in NEIGHBOR_OFFSETS)


def count_neighbors(grid, out=None, padded=None):
    """Count live neighbors of every cell in a (sz, sy, sx) 0/1 array.

    Args:
        grid: uint8 state array
        out: optional uint8 array of grid's shape to write counts into
        padded: optional zero-bordered uint8 scratch array, shape grid.shape + 2
            on every axis. Only its interior is written, so the border stays 0.

    Returns:
        uint8 array of counts in [0, 26]
    """
    sz, sy, sx = grid.shape
    if padded is None:
        padded = np.zeros((sz + 2, sy + 2, sx + 2), dtype=np.uint8)
    if out is None:
        out = np.zeros(grid.shape, dtype=np.uint8)

    padded[1:-1, 1:-1, 1:-1] = grid
    out.fill(0)
    for dx, dy, dz in NEIGHBOR_OFFSETS:
        out += padded[1 + dz:1 + dz + sz, 1 + dy:1 + dy + sy, 1 + dx:1 + dx + sx]
    return out
