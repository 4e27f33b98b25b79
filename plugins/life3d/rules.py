"""
Birth/survival rules for the 3D automaton.

Rules use B/S notation like the 2D engines, but a 3D cell can have up to 26
neighbors, so counts are comma separated:

- B6/S5,6: 3D Life (default)
- B5/S4,5: Bays' Life 4555
- B6/S5,6,7: Bays' Life 5766

A side without commas is read digit by digit (B6/S56 is survive {5, 6},
B26 is birth {2, 6}). A single count above 9 takes a trailing comma (B26,).
"""

from dataclasses import dataclass

import numpy as np

from .errors import ConfigurationError
from .neighborhood import MAX_NEIGHBORS


# Columns of the lookup table: one per possible neighbor count
TABLE_WIDTH = MAX_NEIGHBORS + 1


def _check_counts(counts, label):
    counts = frozenset(counts)
    for n in counts:
        if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
            raise ConfigurationError(f"{label} count must be an integer, got {n!r}")
        if not 0 <= n <= MAX_NEIGHBORS:
            raise ConfigurationError(
                f"{label} count {n} outside [0, {MAX_NEIGHBORS}]")
    return frozenset(int(n) for n in counts)


@dataclass(frozen=True)
class Rule:
    """Neighbor counts that give birth to a dead cell / keep a live one."""

    birth: frozenset
    survive: frozenset

    def __post_init__(self):
        object.__setattr__(self, "birth", _check_counts(self.birth, "birth"))
        object.__setattr__(self, "survive", _check_counts(self.survive, "survive"))

    def table(self):
        """Return a (2, 27) uint8 table: table[state, count] -> next state."""
        table = np.zeros((2, TABLE_WIDTH), dtype=np.uint8)
        table[0, sorted(self.birth)] = 1
        table[1, sorted(self.survive)] = 1
        return table

    def __str__(self):
        return format_rule(self)


DEFAULT_RULE = Rule(frozenset({6}), frozenset({5, 6}))


def _parse_counts(text, rule_str):
    if not text:
        return frozenset()
    if "," in text:
        # A lone trailing comma marks a single multi-digit count: "B13,"
        parts = text[:-1].split(",") if text.endswith(",") else text.split(",")
    else:
        parts = list(text)
    try:
        return frozenset(int(p) for p in parts)
    except ValueError:
        raise ConfigurationError(f"invalid neighbor counts in rule {rule_str!r}") from None


def parse_rule(rule_str):
    """Parse B/S notation like 'B6/S5,6' into a Rule."""
    if isinstance(rule_str, Rule):
        return rule_str
    if not isinstance(rule_str, str):
        raise ConfigurationError(f"rule must be a string, got {rule_str!r}")
    text = rule_str.upper().replace(" ", "")
    birth = survive = None
    for part in text.split("/"):
        if part.startswith("B"):
            birth = _parse_counts(part[1:], rule_str)
        elif part.startswith("S"):
            survive = _parse_counts(part[1:], rule_str)
        else:
            raise ConfigurationError(f"cannot parse rule {rule_str!r}")
    if birth is None and survive is None:
        raise ConfigurationError(f"cannot parse rule {rule_str!r}")
    return Rule(birth or frozenset(), survive or frozenset())


def _format_counts(counts):
    text = ",".join(str(n) for n in sorted(counts))
    # Without the comma "13" would read back as the digits 1 and 3
    if len(counts) == 1 and len(text) > 1:
        text += ","
    return text


def format_rule(rule):
    """Format a Rule as 'B6/S5,6'."""
    return f"B{_format_counts(rule.birth)}/S{_format_counts(rule.survive)}"
