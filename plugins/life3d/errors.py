"""
Error types raised by the 3D Life engine.

Out-of-bounds cell reads and writes are not errors; everything else that a
caller can get wrong ends up as one of the classes below.
"""


class Life3DError(Exception):
    """Base class for engine errors."""


class ConfigurationError(Life3DError, ValueError):
    """Invalid construction parameters (dimensions, density, rule, preset)."""


class DataFormatError(Life3DError, ValueError):
    """Malformed external payload (decode input, JSON text, pasted cells)."""
