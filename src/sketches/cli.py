"""
Command line entry point.

    sketches draw transit --seed 42 --size 1600x600
    sketches batch series --count 20 --jobs 4
    sketches themes --index 3
    sketches families

Output paths are templates: {name} (family), {seed} and {extension}.
"""

import argparse
import logging
import sys
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple

from . import __version__
from .config import FORMATS, ConfigManager, SketchConfig, get_config_manager
from .errors import InvalidParameterError, SketchError
from .families import get_family, list_all_family_info, render_sketch
from .geometry import Size
from .options import RenderOptions
from .palette import ENCODINGS, PaletteStore
from .render import save
from .rng import RngContext, Seed

logger = logging.getLogger(__name__)


def expand_dest(template: str, name: str, seed: Seed, extension: str) -> Path:
    """Substitute {name}, {seed} and {extension} into an output template."""
    fields = {"name": name, "seed": str(seed), "extension": extension}
    try:
        return Path(template.format_map(fields))
    except KeyError as e:
        raise InvalidParameterError(f"unknown placeholder {e} in destination {template!r}") from None
    except (ValueError, IndexError) as e:
        raise InvalidParameterError(f"malformed destination {template!r}: {e}") from None


def _load_config(args) -> SketchConfig:
    """Fresh copy of the configured settings, safe to override per command."""
    manager = ConfigManager(Path(args.config)) if args.config else get_config_manager()
    return SketchConfig.from_dict(manager.load().to_dict())


def _apply_overrides(args, config: SketchConfig) -> SketchConfig:
    """Fold command line flags over the loaded configuration."""
    for name in ("size", "themes", "encoding", "format"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(config, name, value)
    family = getattr(args, "family", None)
    if family and getattr(args, "show_grid", False):
        settings = config.family(family)
        if hasattr(settings, "show_grid"):
            settings.show_grid = True
        else:
            print(f"[Draw] --show-grid has no effect on {family}", file=sys.stderr)
    return config


def _options(config: SketchConfig, seed: Seed) -> RenderOptions:
    store = PaletteStore.open(config.themes, config.encoding)
    return RenderOptions(
        seed=seed,
        canvas=Size.parse(config.size),
        themes_path=config.themes,
        encoding=config.encoding,
        store=store,
    )


def _render_job(job: Tuple[str, RenderOptions, SketchConfig, str]) -> str:
    """Render and save one image. Runs in a worker process for batches."""
    name, opts, config, dest = job
    drawing = render_sketch(name, opts, config)
    return str(save(drawing, dest, config.format))


# --- Commands ---

def cmd_draw(args, config: SketchConfig) -> int:
    get_family(args.family)
    seed = Seed.parse(args.seed) if args.seed else Seed()
    if not args.silent:
        print(seed, flush=True)
    opts = _options(config, seed)
    dest = expand_dest(args.dest or config.dest, args.family, seed, config.format)

    path = _render_job((args.family, opts, config, str(dest)))
    logger.debug("wrote %s", path)
    return 0


def cmd_batch(args, config: SketchConfig) -> int:
    get_family(args.family)
    count = args.count if args.count is not None else config.count
    if count < 1:
        raise InvalidParameterError(f"count must be positive: {count}")
    if args.jobs < 1:
        raise InvalidParameterError(f"jobs must be positive: {args.jobs}")

    parent = Seed.parse(args.seed) if args.seed else Seed()
    rng = RngContext(parent)
    base = _options(config, parent)
    template = args.dest or config.batch_dest

    jobs = []
    for _ in range(count):
        seed = Seed(rng.next_seed())
        dest = expand_dest(template, args.family, seed, config.format)
        jobs.append((args.family, base.with_seed(seed), config, str(dest)))

    if args.jobs == 1:
        paths = [_render_job(job) for job in jobs]
    else:
        with ProcessPoolExecutor(max_workers=args.jobs) as pool:
            paths = list(pool.map(_render_job, jobs))

    if not args.silent:
        print(f"parent {parent}")
        for (_, opts, _, _), path in zip(jobs, paths):
            print(f"{opts.seed} {path}")
    return 0


def cmd_themes(args, config: SketchConfig) -> int:
    store = PaletteStore.open(config.themes, config.encoding)
    if args.index is None:
        print(f"{config.themes}: {len(store)} themes ({config.encoding})")
        return 0
    print(" ".join(str(c) for c in store.get(args.index)))
    return 0


def cmd_families(args, config: SketchConfig) -> int:
    for info in list_all_family_info():
        print(f"{info['name']:<10} {info['description']}")
    return 0


def _common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="YAML or JSON settings file (default: sketches.yaml)")
    parser.add_argument("--themes", help="palette file")
    parser.add_argument("--encoding", choices=ENCODINGS, help="palette color encoding")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")


def _render_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("family", help="sketch family (see 'sketches families')")
    parser.add_argument("--seed", help="decimal or 0x-prefixed hex seed (default: current time)")
    parser.add_argument("--size", help="canvas WxH, or N for a square")
    parser.add_argument("--format", choices=FORMATS, help="output format")
    parser.add_argument("--dest", help="output path template")
    parser.add_argument("--silent", action="store_true", help="do not print seeds")
    parser.add_argument("--show-grid", action="store_true", help="draw the debug grid overlay")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sketches", description="Seeded procedural vector sketches")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd", required=True)

    draw = sub.add_parser("draw", help="render one image")
    _render_args(draw)
    _common(draw)
    draw.set_defaults(func=cmd_draw)

    batch = sub.add_parser("batch", help="render many images from one parent seed")
    _render_args(batch)
    _common(batch)
    batch.add_argument("--count", type=int, help="number of images (default from config)")
    batch.add_argument("--jobs", type=int, default=1, help="worker processes")
    batch.set_defaults(func=cmd_batch)

    themes = sub.add_parser("themes", help="summarize the palette file")
    _common(themes)
    themes.add_argument("--index", type=int, help="print one palette as hex colors")
    themes.set_defaults(func=cmd_themes)

    families = sub.add_parser("families", help="list sketch families")
    families.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    families.add_argument("--config", help=argparse.SUPPRESS)
    families.set_defaults(func=cmd_families)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    try:
        config = _apply_overrides(args, _load_config(args))
        valid, error = config.validate()
        if not valid:
            raise InvalidParameterError(error)
        return args.func(args, config)
    except SketchError as e:
        print(f"[Draw] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
