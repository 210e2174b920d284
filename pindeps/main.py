import argparse
import logging
import sys
from pathlib import Path

from pindeps.manifest import OutputWriteError, render, write_manifest
from pindeps.repository import Repository
from pindeps.resolver import Resolver
from pindeps.tools import DEFAULT_TOOLS_FILE, InputNotFoundError, InputParseError, find_tools_file, load_tools

DEFAULT_OUTPUT_FILE = 'deps.toml'

RULE = '=' * 48

log = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='pindeps',
        description=f"Write the direct dependencies of the tools listed in {DEFAULT_TOOLS_FILE} to a manifest.")
    parser.add_argument('-o', '--output-file', default=DEFAULT_OUTPUT_FILE,
                        help=f"Path of the manifest to write (default: {DEFAULT_OUTPUT_FILE})")
    parser.add_argument('-i', '--input-file', default=DEFAULT_TOOLS_FILE,
                        help='Name of the tool list, searched for in the current directory and its parents '
                             f"(default: {DEFAULT_TOOLS_FILE})")
    parser.add_argument('--registry-url', default=Repository.DEFAULT_URL,
                        help=f"Base URL of the package registry (default: {Repository.DEFAULT_URL})")
    parser.add_argument('-j', '--jobs', type=int, default=1,
                        help='Number of packages to fetch at once (default: 1)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    args = parser.parse_args(argv)
    if args.jobs < 1:
        parser.error('--jobs must be at least 1')
    return args


def main(argv=None, cwd: Path = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(stream=sys.stdout, format='%(message)s',
                        level=logging.DEBUG if args.verbose else logging.INFO)
    # Suppress debug messages from urllib3
    logging.getLogger('urllib3.connectionpool').setLevel(logging.WARNING)

    log.info(RULE)
    log.info(RULE)
    try:
        tools_path = find_tools_file(cwd if cwd is not None else Path.cwd(), args.input_file)
        tools = load_tools(tools_path)

        resolver = Resolver(Repository(args.registry_url))
        resolved = resolver.resolve_many(tools, jobs=args.jobs)

        write_manifest(args.output_file, render(tools, resolved))
    except (InputNotFoundError, InputParseError, OutputWriteError) as e:
        log.error(f"Error: {e}")
        return 1

    log.info(f"\nAll dependencies written to {args.output_file}")
    log.info(RULE)
    log.info(RULE)
    return 0


if __name__ == '__main__':
    sys.exit(main())
