"""
3D Game of Life - Headless Runner

Usage:
    python -m life3d [preset] [options]

Examples:
    python -m life3d
    python -m life3d plus --steps 5
    python -m life3d --size 30x30x30 --density 0.25 --steps 50
    python -m life3d --rule B5/S4,5 --seed 7 --save 3dlife.json
    python -m life3d --load 3dlife.json --steps 20

Options:
    --size SXxSYxSZ   Lattice size for a random start (default 20x20x20)
    --rule RULE       Birth/survival rule, e.g. B6/S5,6
    --density D       Density of the random start (default 0.2)
    --steps N         Generations to run (default 10)
    --seed N          Random seed
    --load FILE       Start from a saved lattice
    --save FILE       Save the final lattice
    --list            List presets
    -v, --verbose     Debug logging

Use --list to see all available presets.
"""

import logging
import sys

from . import codec
from .engine_base import DEFAULT_SIZE, DEFAULT_DENSITY
from .errors import ConfigurationError, Life3DError
from .life import Life3D
from .presets import PRESET_ORDER, build_preset, list_presets

logger = logging.getLogger(__name__)


def _parse_size(text):
    parts = text.lower().split("x")
    if len(parts) == 1:
        parts = parts * 3
    try:
        size = [int(p) for p in parts]
    except ValueError:
        raise ConfigurationError(f"invalid size: {text!r}") from None
    if len(size) != 3:
        raise ConfigurationError(f"size must be SXxSYxSZ, got {text!r}")
    return size


def _parse_int(text, option):
    try:
        return int(text)
    except ValueError:
        raise ConfigurationError(f"{option} expects an integer, got {text!r}") from None


def run(engine, steps):
    """Step the engine, printing a status line per generation."""
    print(f"Gen: {engine.generation}  Live: {engine.live_count}")
    for _ in range(steps):
        engine.step()
        print(f"Gen: {engine.generation}  Live: {engine.live_count}")
    return engine


def main(argv=None):
    preset = None
    size = list(DEFAULT_SIZE)
    rule = None
    density = None
    steps = 10
    seed = None
    load_path = None
    save_path = None
    verbose = False

    args = sys.argv[1:] if argv is None else list(argv)
    try:
        i = 0
        while i < len(args):
            arg = args[i]
            if arg == "--size" and i + 1 < len(args):
                size = _parse_size(args[i + 1])
                i += 2
            elif arg == "--rule" and i + 1 < len(args):
                rule = args[i + 1]
                i += 2
            elif arg == "--density" and i + 1 < len(args):
                density = args[i + 1]
                i += 2
            elif arg == "--steps" and i + 1 < len(args):
                steps = _parse_int(args[i + 1], "--steps")
                i += 2
            elif arg == "--seed" and i + 1 < len(args):
                seed = _parse_int(args[i + 1], "--seed")
                i += 2
            elif arg == "--load" and i + 1 < len(args):
                load_path = args[i + 1]
                i += 2
            elif arg == "--save" and i + 1 < len(args):
                save_path = args[i + 1]
                i += 2
            elif arg in ("-v", "--verbose"):
                verbose = True
                i += 1
            elif arg == "--list":
                print("\nAvailable presets:")
                for key, name, desc in list_presets():
                    print(f"    {key:12s} {name:18s} {desc}")
                print()
                return 0
            elif arg in ("--help", "-h"):
                print(__doc__)
                return 0
            elif arg in PRESET_ORDER:
                preset = arg
                i += 1
            else:
                print(f"Unknown argument: {arg}")
                print("Use --list to see available presets")
                return 2

        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="[life3d] %(levelname)s %(name)s: %(message)s",
        )

        if steps < 0:
            raise ConfigurationError(f"--steps must be non-negative, got {steps}")

        if load_path is not None:
            engine = codec.load(load_path)
        elif preset is not None:
            engine = build_preset(preset, seed=seed, density=density)
        else:
            engine = Life3D(*size, seed=seed)
            engine.randomize(DEFAULT_DENSITY if density is None else density)
        if rule is not None:
            engine.set_params(rule=rule)

        sx, sy, sz = engine.size
        print(f"3D Game of Life  {sx}x{sy}x{sz}  rule {engine.get_params()['rule']}")
        run(engine, steps)

        if save_path is not None:
            path = codec.save(engine, save_path)
            print(f"saved: {path}")
    except (Life3DError, OSError) as e:
        logger.debug("run failed", exc_info=True)
        print(f"Error: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
