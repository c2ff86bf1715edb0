#!/usr/bin/env python3
import argparse, logging, sys

from keygrid.config import GenerationConfig
from keygrid.levelio import dump_ascii, load_level, save_level, write_level
from keygrid.logger_config import configure_logging
from keygrid.mapgen.generator import GENERATORS, PLACERS, REFINERS, generate_level
from keygrid.mapgen.sampling import GenerationError
from keygrid.validate import check_invariants

logger = logging.getLogger("keygrid.tools.lvltool")


def cmd_emit(args):
    cfg = GenerationConfig.from_json(args.config) if args.config else GenerationConfig()
    try:
        level = generate_level(
            tuple(args.seed),
            generator=args.generator,
            placer=args.placer,
            refiners=args.refine or (),
            config=cfg,
        )
    except GenerationError as e:
        logger.error("generation failed: %s", e)
        return 1
    if args.out == "-":
        write_level(sys.stdout.buffer, level)
    else:
        save_level(args.out, level)
        logger.info("wrote %s", args.out)
    if args.ascii:
        sys.stderr.write(dump_ascii(level))
    return 0


def cmd_dump(args):
    sys.stdout.write(dump_ascii(load_level(args.path)))
    return 0


def cmd_check(args):
    problems = check_invariants(load_level(args.path), bordered=not args.no_border)
    for p in problems:
        print(f"{args.path}: {p}")
    if not problems:
        print(f"{args.path}: ok")
    return 1 if problems else 0


def cmd_png(args):
    from keygrid.render.image import save_png
    save_png(load_level(args.path), args.out, tile_size=args.tile, sheet_path=args.sheet)
    logger.info("wrote %s", args.out)
    return 0


def main():
    p = argparse.ArgumentParser(description="Generate and inspect .lvl files")
    p.add_argument('--log-level', default='INFO')
    sub = p.add_subparsers(dest='cmd', required=True)

    p1 = sub.add_parser('emit', help='generate a level')
    p1.add_argument('--seed', type=int, nargs=2, default=[1, 1], metavar=('A', 'B'))
    p1.add_argument('--generator', choices=sorted(GENERATORS), default='empty')
    p1.add_argument('--placer', choices=sorted(PLACERS), default='scatter')
    p1.add_argument('--refine', choices=sorted(REFINERS), action='append',
                    help='refiner to run after placement (repeatable)')
    p1.add_argument('--config', type=str, help='JSON file of generation settings')
    p1.add_argument('--out', type=str, default='-', help="output .lvl, '-' for stdout")
    p1.add_argument('--ascii', action='store_true', help='also print the level to stderr')
    p1.set_defaults(func=cmd_emit)

    p2 = sub.add_parser('dump', help='print a .lvl as text')
    p2.add_argument('path')
    p2.set_defaults(func=cmd_dump)

    p3 = sub.add_parser('check', help='validate a .lvl')
    p3.add_argument('path')
    p3.add_argument('--no-border', action='store_true', help='do not require a wall ring')
    p3.set_defaults(func=cmd_check)

    p4 = sub.add_parser('png', help='render a .lvl to PNG')
    p4.add_argument('path')
    p4.add_argument('--out', type=str, required=True)
    p4.add_argument('--tile', type=int, default=32)
    p4.add_argument('--sheet', type=str, default='assets/sheet.bmp')
    p4.set_defaults(func=cmd_png)

    args = p.parse_args()
    configure_logging(args.log_level.upper())
    sys.exit(args.func(args))


if __name__ == '__main__':
    main()
