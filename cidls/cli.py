"""Command-line interface for cidls.

Usage:
    cidls [options] PATH...        # List one or more paths
    cidls -s -v docs src           # Stream entries, with headers
    find . -type d | cidls --enc json

Paths are resolved against --root (default: the current directory). When
no PATH is given, paths are read from stdin, one per line.
"""

import argparse
import asyncio
import signal
import sys
from typing import List, Optional, TextIO

from . import __version__
from .config import ListConfig, SUPPORTED_CID_BASES
from .encoding import get_encoder
from .errors import ListCancelledError, ListError
from .aio.adapters import LocalStoreAdapter
from .aio.core import AsyncStoreAdapter
from .aio.driver import ListDriver
from .render import TabularRenderer


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cidls',
        description='List directory contents for content-addressed filesystem objects.',
        epilog='Each entry is shown as: <hash> <size in bytes> <name>. '
               'Directories are shown with size "-" and a trailing "/".',
    )
    parser.add_argument('paths', nargs='*', metavar='PATH',
                        help='Path(s) to list (read from stdin if omitted)')
    parser.add_argument('-v', '--headers', action='store_true',
                        help='Print table headers (Hash, Size, Name)')
    parser.add_argument('--resolve-type', action=argparse.BooleanOptionalAction, default=True,
                        help='Resolve linked objects to find out their types (default: on)')
    parser.add_argument('--size', action=argparse.BooleanOptionalAction, default=True,
                        help='Resolve linked objects to find out their file size (default: on)')
    parser.add_argument('-s', '--stream', action='store_true',
                        help='Stream directory entries as they are traversed')
    parser.add_argument('--enc', choices=('text', 'json'), default='text',
                        help='Output encoding (default: text)')
    parser.add_argument('--cid-base', choices=SUPPORTED_CID_BASES, default='identity',
                        help='Encoding used to display hashes (default: identity)')
    parser.add_argument('--root', default='.',
                        help='Store root that paths are resolved against (default: .)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def read_paths(args: argparse.Namespace, stdin: TextIO) -> List[str]:
    """Get the paths to list from the arguments or stdin."""
    if args.paths:
        return list(args.paths)
    if stdin is None or stdin.isatty():
        return []
    return [line.rstrip('\r\n') for line in stdin if line.strip()]


async def run_listing(
    paths: List[str],
    adapter: AsyncStoreAdapter,
    config: ListConfig,
    enc: str = 'text',
    stdout: Optional[TextIO] = None
) -> None:
    """Run a listing and write it to ``stdout`` as units arrive.

    Raises:
        ListError: If the listing fails; output written so far stays
    """
    stdout = stdout or sys.stdout
    encoder = get_encoder(config.cid_base)
    driver = ListDriver(adapter, config)

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, driver.cancel)
        restore_sigint = True
    except (NotImplementedError, RuntimeError, ValueError):
        # No signal handlers outside the main thread or on Windows
        restore_sigint = False

    try:
        if enc == 'json':
            async for unit in driver.run(paths):
                stdout.write(unit.to_json(encoder) + '\n')
                stdout.flush()
        else:
            renderer = TabularRenderer(stdout, config.render_options(len(paths)), encoder)
            async for unit in driver.run(paths):
                renderer.render(unit)
                stdout.flush()
    finally:
        if restore_sigint:
            loop.remove_signal_handler(signal.SIGINT)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the cidls command.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    paths = read_paths(args, sys.stdin)
    if not paths:
        parser.error('at least one PATH is required')

    config = ListConfig(
        headers=args.headers,
        resolve_type=args.resolve_type,
        resolve_size=args.size,
        stream=args.stream,
        cid_base=args.cid_base,
    )

    adapter = LocalStoreAdapter(args.root)

    try:
        asyncio.run(run_listing(paths, adapter, config, args.enc))
    except ListCancelledError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INTERRUPTED
    except ListError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
