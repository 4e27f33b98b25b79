"""
Base class for 3D lattice engines

Owns the dense cell state and everything about it that does not depend on
the transition rule: dimensions, the two equally sized buffers, the
generation counter and the cached live count. Engines (only Life3D so far)
subclass it and implement step().

Cells live in a C-ordered uint8 array of shape (sz, sy, sx), so the flat
index of cell (x, y, z) is x + y*sx + z*sx*sy.
"""

from abc import ABC, abstractmethod
import numpy as np

from .errors import ConfigurationError


DEFAULT_SIZE = (20, 20, 20)
DEFAULT_DENSITY = 0.2


def _check_dimension(value, axis):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{axis} dimension must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{axis} dimension must be positive, got {value}")
    return int(value)


def check_density(density):
    """Return density as a float, raising ConfigurationError unless in [0, 1]."""
    try:
        density = float(density)
    except (TypeError, ValueError):
        raise ConfigurationError(f"density must be a number, got {density!r}") from None
    # NaN fails both comparisons
    if not 0.0 <= density <= 1.0:
        raise ConfigurationError(f"density must be within [0, 1], got {density}")
    return density


def _check_coords(x, y, z):
    for v in (x, y, z):
        if not isinstance(v, (int, np.integer)):
            raise TypeError(f"cell coordinates must be integers, got ({x!r}, {y!r}, {z!r})")


class LatticeEngine(ABC):
    """Base class for double-buffered 3D lattice engines."""

    engine_name = ""   # e.g. "life3d"
    engine_label = ""  # e.g. "3D Game of Life"

    def __init__(self, sx=20, sy=20, sz=20, seed=None):
        sx = _check_dimension(sx, "x")
        sy = _check_dimension(sy, "y")
        sz = _check_dimension(sz, "z")
        self._size = (sx, sy, sz)

        # Current state and the scratch buffer the next generation is written to
        self._cells = np.zeros((sz, sy, sx), dtype=np.uint8)
        self._next = np.zeros_like(self._cells)

        self._rng = np.random.default_rng(seed)
        self._live_count = 0
        self.generation = 0

    def __repr__(self):
        sx, sy, sz = self._size
        return (f"{type(self).__name__}({sx}x{sy}x{sz}, "
                f"generation={self.generation}, live={self._live_count})")

    @property
    def size(self):
        """Dimensions as (sx, sy, sz)."""
        return self._size

    @property
    def volume(self):
        return self._cells.size

    @property
    def live_count(self):
        """Number of live cells. Derived from the state, not settable."""
        return self._live_count

    # Indexing -----------------------------------------------------------

    def in_bounds(self, x, y, z):
        sx, sy, sz = self._size
        return 0 <= x < sx and 0 <= y < sy and 0 <= z < sz

    def index(self, x, y, z):
        """Flat buffer index of (x, y, z)."""
        _check_coords(x, y, z)
        if not self.in_bounds(x, y, z):
            raise IndexError(f"cell ({x}, {y}, {z}) out of range for size {self._size}")
        sx, sy, _ = self._size
        return x + y * sx + z * sx * sy

    def coords(self, i):
        """Inverse of index()."""
        if not 0 <= i < self.volume:
            raise IndexError(f"flat index {i} out of range for volume {self.volume}")
        sx, sy, _ = self._size
        z, rem = divmod(i, sx * sy)
        y, x = divmod(rem, sx)
        return x, y, z

    # Cell access --------------------------------------------------------

    def get(self, x, y, z):
        """Return True if the cell is alive. Out-of-range cells read as dead."""
        _check_coords(x, y, z)
        if not self.in_bounds(x, y, z):
            return False
        return bool(self._cells[z, y, x])

    def set(self, x, y, z, value):
        """Write one cell. Out-of-range coordinates are ignored."""
        _check_coords(x, y, z)
        if not self.in_bounds(x, y, z):
            return
        new = 1 if value else 0
        if self._cells[z, y, x] != new:
            self._cells[z, y, x] = new
            self._live_count += 1 if new else -1

    def live_cells(self):
        """Return every live (x, y, z), ordered by z, then y, then x."""
        zs, ys, xs = np.nonzero(self._cells)
        return list(zip(xs.tolist(), ys.tolist(), zs.tolist()))

    def snapshot(self):
        """Copy of the dense state, shape (sz, sy, sx)."""
        return self._cells.copy()

    # Bulk mutation ------------------------------------------------------

    def clear(self):
        """Kill every cell and reset the generation counter."""
        self._cells.fill(0)
        self._live_count = 0
        self.generation = 0

    def randomize(self, density=DEFAULT_DENSITY, rng=None):
        """Set each cell alive independently with probability density."""
        density = check_density(density)
        if rng is None:
            rng = self._rng
        self._cells[...] = rng.random(self._cells.shape) < density
        self._live_count = int(np.count_nonzero(self._cells))
        self.generation = 0

    def _swap_buffers(self, live_count):
        """Publish the scratch buffer as the new generation.

        live_count is the population of the scratch buffer, counted by the
        pass that wrote it.
        """
        self._cells, self._next = self._next, self._cells
        self._live_count = live_count
        self.generation += 1

    def _adopt(self, other):
        """Take over another engine's size and buffers (full-state replacement)."""
        self._size = other._size
        self._cells = other._cells
        self._next = other._next
        self._live_count = other._live_count
        self.generation = 0

    # Stepping -----------------------------------------------------------

    @abstractmethod
    def step(self):
        """Advance one generation."""

    def step_n(self, n):
        """Advance n generations. Returns the final stats."""
        for _ in range(n):
            self.step()
        return self.stats

    @abstractmethod
    def set_params(self, **params):
        """Update engine parameters."""

    @abstractmethod
    def get_params(self):
        """Return dict of current parameter values."""

    @abstractmethod
    def seed(self, seed_type="random", **kwargs):
        """Seed the lattice based on type string."""

    @property
    def stats(self):
        """Return current lattice statistics."""
        return {
            "generation": self.generation,
            "live": self._live_count,
            "volume": self.volume,
            "alive_pct": self._live_count / self.volume * 100,
        }
