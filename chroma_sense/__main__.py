"""chroma-sense: Dominant colour and palette extraction for raster images.

Usage: chroma-sense <technique> <image> [<image> ...] [options]

Techniques are auto-discovered from chroma_sense/techniques/.
Each technique module's docstring is its documentation.
Run `chroma-sense help <technique>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, chroma-sense looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from chroma_sense import registry
from chroma_sense.core.env import load_env
from chroma_sense.core.errors import ChromaSenseError
from chroma_sense.core.imaging import RESAMPLE_FILTERS, load_image
from chroma_sense.core.palette import is_hex
from chroma_sense.core.report import format_json, format_text
from chroma_sense.core.types import Report


def _load_technique_module(name: str) -> object:
    """Load the raw module for a technique (for docstring access)."""
    return importlib.import_module(f'chroma_sense.techniques.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_technique_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    techniques = registry.all_techniques()

    epilog = (
        'Examples:\n'
        '  chroma-sense palette photo.jpg\n'
        '  chroma-sense palette a.png b.png --jobs 4 --json\n'
        '  chroma-sense census photo.jpg --resample nearest\n'
        "  chroma-sense dominant logo.png --expect '#f05030' --fail-on-delta 20\n"
        '  chroma-sense help palette\n'
        '\n'
        'Settings (set in .env or environment, flags win):\n'
        '  CHROMA_SENSE_RESAMPLE  nearest | bilinear | bicubic | lanczos\n'
        '  CHROMA_SENSE_JOBS      worker threads for multi-image runs\n'
    )
    parser = argparse.ArgumentParser(
        prog='chroma-sense',
        description='Dominant colour and palette extraction for raster images.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='technique', help='Technique to run')

    for name, tech in sorted(techniques.items()):
        p = sub.add_parser(name, help=_short_doc(name, tech.help))
        p.add_argument('images', nargs='+', help='Image files (any format Pillow can decode)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-J', '--jobs', type=int, default=None, metavar='N', help='Analyse N images in parallel')
        p.add_argument(
            '-r',
            '--resample',
            choices=sorted(RESAMPLE_FILTERS),
            default=None,
            help='Downsizing filter (default: CHROMA_SENSE_RESAMPLE or bilinear)',
        )
        p.add_argument('-e', '--expect', metavar='HEX', help='Expected dominant colour, e.g. #f05030')
        p.add_argument(
            '-d',
            '--fail-on-delta',
            type=float,
            default=None,
            metavar='N',
            help='Exit 1 if any dominant colour is more than N from --expect (CI gating, requires --expect)',
        )

    help_parser = sub.add_parser('help', help='Print full docs for a technique')
    help_parser.add_argument('command', nargs='?', help='Technique name')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a technique."""
    techniques = registry.all_techniques()

    if command is None:
        print('Available techniques:\n')
        for name, tech in sorted(techniques.items()):
            print(f'  {name:<10} {_short_doc(name, tech.help)}')
        print('\nRun: chroma-sense help <technique> for full docs.')
        return

    if command not in techniques:
        print(f'Unknown technique: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(techniques))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_technique_module(command).__doc__ or '').strip()
    print(doc or f'(No module docs for {command!r})')


def _check_fail_on_delta(report: Report, threshold: float) -> bool:
    """Return True if any image's dominant colour is further than threshold from --expect."""
    failures = []
    for path, entry in report.images.items():
        dist = entry.get('techniques', {}).get('expect', {}).get('distance')
        if dist is not None and dist > threshold:
            failures.append((path, dist))

    if failures:
        print(f'\nFAIL: {len(failures)} image(s) exceeded delta threshold {threshold}:')
        for path, dist in failures:
            print(f'  {path}: Δ={dist}')
        return True
    return False


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # OS env vars always win over .env
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'chroma-sense: loaded {env_path}', file=sys.stderr)

    if not args.technique:
        parser.print_help()
        sys.exit(1)

    if args.technique == 'help':
        _print_help(getattr(args, 'command', None))
        return

    # without --expect there are no distances, so the gate could never fail
    if args.fail_on_delta is not None and not args.expect:
        parser.error('--fail-on-delta requires --expect')

    if args.expect and not is_hex(args.expect):
        print(f'Error: --expect is not a hex colour: {args.expect}', file=sys.stderr)
        sys.exit(1)

    report = Report(expected=args.expect)
    try:
        images = [load_image(path) for path in args.images]
        for img in images:
            report.set_dimensions(img.path, *img.original_size)

        registry.get(args.technique).execute(images, report, args)
    except ChromaSenseError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate after output so the report is visible even on failure
    if args.fail_on_delta is not None and _check_fail_on_delta(report, args.fail_on_delta):
        sys.exit(1)


if __name__ == '__main__':
    main()
