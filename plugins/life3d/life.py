"""
3D Game of Life Engine

Conway's rules lifted to a 26-cell neighborhood:
- a dead cell is born when its live-neighbor count is in the birth set
- a live cell survives when its count is in the survive set
- every other cell is dead in the next generation

Updates are simultaneous: the next generation is computed from the current
buffer into the scratch buffer, and the two swap once the pass is complete.
All scratch arrays are allocated once per lattice, so stepping never
allocates.
"""

import numpy as np

from .engine_base import LatticeEngine, DEFAULT_DENSITY, check_density
from .neighborhood import count_neighbors
from .rules import DEFAULT_RULE, TABLE_WIDTH, parse_rule, format_rule


class Life3D(LatticeEngine):

    engine_name = "life3d"
    engine_label = "3D Game of Life"

    def __init__(self, sx=20, sy=20, sz=20, rule=DEFAULT_RULE, seed=None):
        """
        Args:
            sx, sy, sz: Lattice dimensions
            rule: Rule instance or B/S rule notation string
            seed: Seed for the engine's random generator (randomize/seed)
        """
        super().__init__(sx, sy, sz, seed=seed)
        self._alloc_scratch()
        self._set_rule(rule)

    def _alloc_scratch(self):
        sz, sy, sx = self._cells.shape
        self._counts = np.zeros_like(self._cells)
        self._keys = np.zeros_like(self._cells)
        self._padded = np.zeros((sz + 2, sy + 2, sx + 2), dtype=np.uint8)

    def _set_rule(self, rule):
        self.rule = parse_rule(rule)
        # Flattened (state, count) table, looked up with key = state*27 + count
        self._table = self.rule.table().ravel()

    def _next_states(self, out):
        """Write the next state of every cell into out. Returns the live count."""
        count_neighbors(self._cells, out=self._counts, padded=self._padded)
        np.multiply(self._cells, TABLE_WIDTH, out=self._keys)
        self._keys += self._counts
        np.take(self._table, self._keys, out=out, mode="clip")
        return int(np.count_nonzero(out))

    def step(self):
        """Advance one generation."""
        self._swap_buffers(self._next_states(self._next))

    def fates(self):
        """Classify cells by what the next step will do to them.

        Returns:
            dict with "born", "survive" and "die" sets of (x, y, z)
        """
        self._next_states(self._next)
        nxt = self._next.astype(bool)
        alive = self._cells.astype(bool)
        return {
            "born": _coords_of(nxt & ~alive),
            "survive": _coords_of(nxt & alive),
            "die": _coords_of(~nxt & alive),
        }

    def resized(self, sx, sy, sz):
        """Return an empty engine of a new size with the same rule."""
        return type(self)(sx, sy, sz, rule=self.rule)

    def load(self, payload):
        """Replace the whole state from a decoded payload.

        The payload is fully validated first; on error this engine is left
        untouched.
        """
        from .codec import decode

        other = decode(payload)
        self._adopt(other)
        self._counts = other._counts
        self._keys = other._keys
        self._padded = other._padded
        self._set_rule(other.rule)

    def set_params(self, rule=None, **_kw):
        if rule is not None:
            self._set_rule(rule)

    def get_params(self):
        return {"rule": format_rule(self.rule)}

    def seed(self, seed_type="random", **kwargs):
        density = kwargs.get("density", DEFAULT_DENSITY)
        if seed_type == "center":
            self._seed_center(density)
        elif seed_type == "sparse":
            self.randomize(0.05)
        else:
            self.randomize(density)

    def _seed_center(self, density=0.35):
        """Random fill of a box half the lattice size around the center."""
        density = check_density(density)
        self._cells.fill(0)
        box = tuple(slice(n // 4, n // 4 + max(1, n // 2)) for n in self._cells.shape)
        region = self._cells[box]
        region[...] = self._rng.random(region.shape) < density
        self._live_count = int(np.count_nonzero(self._cells))
        self.generation = 0


def _coords_of(mask):
    zs, ys, xs = np.nonzero(mask)
    return set(zip(xs.tolist(), ys.tolist(), zs.tolist()))
