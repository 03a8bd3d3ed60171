"""
CLI entry point for doccheck.

Usage:
    doccheck <file>                      Check a single file
    doccheck <file> --print-tokens       Also print the parsed tokens
    doccheck <dir> --recursive           Check every matching file under a directory
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional

from doccheck import __version__
from doccheck.checker import DocChecker
from doccheck.config import DocCheckConfig, get_config
from doccheck.errors import DocCheckError

logger = logging.getLogger(__name__)

PROG = "doccheck"


def iter_source_files(root: Path, config: DocCheckConfig) -> Iterator[Path]:
    """Yield files under ``root`` with a configured extension, in sorted order."""
    excluded = set(config.exclude_dirs)
    extensions = set(config.extensions)
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if excluded.intersection(path.relative_to(root).parts[:-1]):
            continue
        if path.suffix in extensions:
            yield path


def _collect_files(paths: List[Path], recursive: bool, config: DocCheckConfig) -> Optional[List[Path]]:
    files = []
    for path in paths:
        if path.is_file():
            files.append(path)
        elif recursive and path.is_dir():
            files.extend(iter_source_files(path, config))
        else:
            print(f'expected "{path}" to point to a file')
            return None
    return files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Check that every declaration carries complete documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    doccheck src/lib.rs
    doccheck src/lib.rs --print-tokens
    doccheck src --recursive
"""
    )
    parser.add_argument('--version', action='version', version=f'{PROG} {__version__}')
    parser.add_argument('paths', nargs='*', type=Path, help='Files (or directories with -r) to check')
    parser.add_argument('--print-tokens', action='store_true', default=None,
                        help='Print parsed tokens and declarations before checking')
    parser.add_argument('-r', '--recursive', action='store_true',
                        help='Check matching files under directories')
    parser.add_argument('-c', '--config', type=Path, help='Path to a doccheck.yaml file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config(args.config)
    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.paths:
        print(f"{PROG} (v{__version__})")
        print()
        print("expected a path to be specified\n")
        return 1

    files = _collect_files(args.paths, args.recursive, config)
    if files is None:
        return 1

    print_tokens = config.print_tokens if args.print_tokens is None else args.print_tokens
    single = len(files) == 1 and args.paths[0].is_file()
    checker = DocChecker()
    failed = 0

    for path in files:
        try:
            checker.check_file(path, print_tokens=print_tokens)
        except OSError as e:
            print(f"failed to read the file, error: {e}")
            failed += 1
        except DocCheckError as e:
            print(e.message if single else f"{path}: {e.message}")
            failed += 1

    logger.debug(f"Checked {len(files)} files, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
