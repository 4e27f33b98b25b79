"""
Sparse live-cell codec for Life3D lattices.

Payload shape (used for save files and presets):

    {
      "size": [sx, sy, sz],
      "liveCells": [[x, y, z], ...],
      "rules": {"birth": [n, ...], "survive": [n, ...]}
    }

"rules" is optional. Generation and live count are not part of the payload;
a decoded lattice starts at generation 0. decode() validates the whole
payload before building anything, so a bad payload never produces a
half-filled lattice.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

import numpy as np

from .errors import ConfigurationError, DataFormatError
from .life import Life3D
from .neighborhood import MAX_NEIGHBORS
from .rules import DEFAULT_RULE, Rule

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "3dlife.json"


def _is_int(value):
    return (isinstance(value, (int, np.integer))
            and not isinstance(value, (bool, np.bool_)))


def _is_cell(entry):
    return (isinstance(entry, (list, tuple)) and len(entry) == 3
            and all(_is_int(v) for v in entry))


def encode(engine):
    """Return the sparse payload dict for an engine."""
    sx, sy, sz = engine.size
    return {
        "size": [sx, sy, sz],
        "liveCells": [[x, y, z] for x, y, z in engine.live_cells()],
        "rules": {
            "birth": sorted(engine.rule.birth),
            "survive": sorted(engine.rule.survive),
        },
    }


def _parse_size(size):
    if not isinstance(size, (list, tuple)) or len(size) != 3:
        raise ConfigurationError(f"size must be three positive integers, got {size!r}")
    for n in size:
        if not _is_int(n) or n <= 0:
            raise ConfigurationError(f"size must be three positive integers, got {size!r}")
    return tuple(int(n) for n in size)


def _parse_live_cells(cells, size):
    if not isinstance(cells, (list, tuple)):
        raise DataFormatError(f"liveCells must be a list, got {type(cells).__name__}")
    sx, sy, sz = size
    parsed = []
    for i, entry in enumerate(cells):
        if not _is_cell(entry):
            raise DataFormatError(f"liveCells[{i}] is not an [x, y, z] integer triple: {entry!r}")
        x, y, z = (int(v) for v in entry)
        if not (0 <= x < sx and 0 <= y < sy and 0 <= z < sz):
            raise DataFormatError(f"liveCells[{i}] {entry!r} outside lattice of size {list(size)}")
        parsed.append((x, y, z))
    return parsed


def _parse_counts(counts, key):
    if not isinstance(counts, (list, tuple)) or not counts:
        raise DataFormatError(f"rules.{key} must be a non-empty list, got {counts!r}")
    for n in counts:
        if not _is_int(n) or not 0 <= n <= MAX_NEIGHBORS:
            raise DataFormatError(
                f"rules.{key} entries must be integers in [0, {MAX_NEIGHBORS}], got {n!r}")
    return frozenset(int(n) for n in counts)


def _parse_rules(rules):
    if rules is None:
        return DEFAULT_RULE
    if not isinstance(rules, Mapping):
        raise DataFormatError(f"rules must be an object, got {type(rules).__name__}")
    return Rule(_parse_counts(rules.get("birth"), "birth"),
                _parse_counts(rules.get("survive"), "survive"))


def decode(payload):
    """Build a fresh Life3D from a payload dict.

    Raises:
        ConfigurationError: size is not three positive integers
        DataFormatError: anything else about the payload is malformed
    """
    if not isinstance(payload, Mapping):
        raise DataFormatError(f"payload must be an object, got {type(payload).__name__}")
    size = _parse_size(payload.get("size"))
    if "liveCells" not in payload:
        raise DataFormatError("payload has no liveCells")
    cells = _parse_live_cells(payload["liveCells"], size)
    rule = _parse_rules(payload.get("rules"))

    engine = Life3D(*size, rule=rule)
    for x, y, z in cells:
        engine.set(x, y, z, True)
    return engine


def dumps(engine, indent=2):
    """Encode an engine as JSON text."""
    return json.dumps(encode(engine), indent=indent)


def loads(text):
    """Decode JSON text into a fresh Life3D."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DataFormatError(f"invalid JSON: {e}") from e
    return decode(payload)


def save(engine, path=DEFAULT_FILENAME):
    """Write an engine to a JSON file. Returns the path."""
    path = Path(path)
    path.write_text(dumps(engine), encoding="utf-8")
    logger.debug("saved %d live cells to %s", engine.live_count, path)
    return path


def load(path):
    """Read a JSON file into a fresh Life3D."""
    path = Path(path)
    engine = loads(path.read_text(encoding="utf-8"))
    logger.debug("loaded %s: size=%s live=%d", path, engine.size, engine.live_count)
    return engine


def parse_live_cells(text):
    """Parse pasted cell text into a list of entries.

    Accepts "[2,2,1],[2,3,2]", "[[2,2,1],[2,3,2]]" or a single "[2,2,1]".
    Entries are not checked here; apply_live_cells() skips bad ones.
    """
    text = text.strip()
    if not text:
        return []
    try:
        cells = json.loads(text)
    except ValueError:
        try:
            cells = json.loads(f"[{text}]")
        except ValueError as e:
            raise DataFormatError(
                "cells must look like [2,2,1],[2,3,2] or [[2,2,1],[2,3,2]]") from e
    if not isinstance(cells, list):
        raise DataFormatError(f"expected a list of cells, got {cells!r}")
    if cells and not isinstance(cells[0], list):
        cells = [cells]  # single cell
    return cells


def apply_live_cells(engine, cells):
    """Set every valid in-bounds cell alive. Returns how many were applied."""
    count = 0
    for cell in cells:
        if _is_cell(cell) and engine.in_bounds(*cell):
            engine.set(*cell, True)
            count += 1
    skipped = len(cells) - count
    if skipped:
        logger.debug("skipped %d invalid or out-of-bounds cells", skipped)
    return count
