"""
3D Life Presets

Each preset either lists its live cells explicitly (a pattern, loaded
through the codec) or names a seed type and density for a random start.
The "rule" field selects the birth/survival rule.
"""

import logging

from .codec import decode
from .engine_base import DEFAULT_SIZE
from .errors import ConfigurationError
from .life import Life3D

logger = logging.getLogger(__name__)


def _plus(cx, cy, cz):
    return [[cx, cy, cz],
            [cx - 1, cy, cz], [cx + 1, cy, cz],
            [cx, cy - 1, cz], [cx, cy + 1, cz],
            [cx, cy, cz - 1], [cx, cy, cz + 1]]


def _cube(x0, y0, z0):
    return [[x0 + dx, y0 + dy, z0 + dz]
            for dz in (0, 1) for dy in (0, 1) for dx in (0, 1)]


PRESETS = {
    # =====================================================================
    # PATTERNS
    # =====================================================================
    "plus": {
        "name": "3D Plus",
        "description": "Center cell and its 6 face neighbors - a B6/S5,6 still life",
        "rule": "B6/S5,6", "size": [20, 20, 20],
        "liveCells": _plus(10, 10, 10),
    },
    "cube": {
        "name": "Cube",
        "description": "2x2x2 block - every cell has 7 neighbors and dies",
        "rule": "B6/S5,6", "size": [20, 20, 20],
        "liveCells": _cube(9, 9, 9),
    },

    # =====================================================================
    # RANDOM STARTS
    # =====================================================================
    "soup": {
        "name": "Primordial Soup",
        "description": "Random fill at 20% density under B6/S5,6",
        "rule": "B6/S5,6", "size": list(DEFAULT_SIZE),
        "seed": "random", "density": 0.2,
    },
    "core": {
        "name": "Dense Core",
        "description": "Random fill of the central box, empty margins",
        "rule": "B6/S5,6", "size": list(DEFAULT_SIZE),
        "seed": "center", "density": 0.35,
    },
    "bays_4555": {
        "name": "Bays 4555",
        "description": "B5/S4,5 - Bays' Life 4555 from a sparse start",
        "rule": "B5/S4,5", "size": list(DEFAULT_SIZE),
        "seed": "sparse",
    },
    "bays_5766": {
        "name": "Bays 5766",
        "description": "B6/S5,6,7 - Bays' Life 5766, slow-growing blobs",
        "rule": "B6/S5,6,7", "size": list(DEFAULT_SIZE),
        "seed": "random", "density": 0.25,
    },
}

PRESET_ORDER = ["plus", "cube", "soup", "core", "bays_4555", "bays_5766"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]


def build_preset(name, seed=None, density=None):
    """Create a Life3D engine from a preset.

    Args:
        name: Preset key
        seed: Random generator seed for random starts
        density: Overrides the preset density for random starts
    """
    p = get_preset(name)
    if p is None:
        raise ConfigurationError(f"unknown preset: {name!r}")

    if "liveCells" in p:
        engine = decode({"size": p["size"], "liveCells": p["liveCells"]})
        engine.set_params(rule=p["rule"])
    else:
        engine = Life3D(*p["size"], rule=p["rule"], seed=seed)
        seed_kwargs = {}
        if density is not None:
            seed_kwargs["density"] = density
        elif "density" in p:
            seed_kwargs["density"] = p["density"]
        engine.seed(p.get("seed", "random"), **seed_kwargs)

    logger.debug("built preset %s: size=%s live=%d", name, engine.size, engine.live_count)
    return engine
