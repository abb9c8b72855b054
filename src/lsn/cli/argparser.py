"""Command-line argument parsing for lsn.

This module defines the command-line interface for lsn, handling argument parsing,
validation and the translation of parsed arguments into a ListingConfig.
"""

import argparse
from typing import Any, List, Optional, Sequence, Union

from lsn import __version__
from lsn.config import DEFAULT_WORKERS, ListingConfig
from lsn.filters.ignore_filter import read_ignore_file
from lsn.walker.permission_action import PermissionAction

# CLI spelling of each permission action
PERMISSION_ACTIONS = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.WARN,
    "fail": PermissionAction.RAISE,
}


class IgnorePatternAction(argparse.Action):
    """Collect ignore patterns in command-line order.

    ``-i PATTERN`` contributes one pattern and ``-I FILE`` contributes every line of
    the file, both appended to the same ``ignore_patterns`` list so that later
    negations (``!pattern``) override earlier rules regardless of which option they
    came from.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        kwargs.setdefault("default", [])
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        patterns = list(getattr(namespace, self.dest, None) or [])
        if values is not None:
            if option_string in ("-I", "--ignore-file"):
                try:
                    patterns.extend(read_ignore_file(str(values)))
                except FileNotFoundError as e:
                    raise argparse.ArgumentError(self, str(e))
            else:
                patterns.append(str(values))
        setattr(namespace, self.dest, patterns)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with lsn's options.
    """
    description = """
    lsn: print the files and directories beneath a path.

    Every entry is passed through a fixed chain of filters and printed only if all of
    them accept it. Filters are combined with AND; there is no expression language.

    Filter order:
    - hidden entries (names starting with '.') are skipped unless -a is given, and
      hidden directories are not descended
    - with -d N, the listing stops at the first entry deeper than N
    - -of / -od keep only files / only directories (both together: no restriction)
    - -fi terms must all appear in the path; matching ignores case when the whole
      filter string is lower case or upper case
    - -ex drops paths containing the given text (case-sensitive)
    - -i / -I drop paths matching gitignore-style patterns
    """

    epilog = """
    Examples:
      # Everything under the current directory, hidden entries excluded
      lsn

      # Two levels deep, including hidden entries
      lsn -a -d 2 /path/to/project

      # Python files only, as absolute paths
      lsn -of -f -fi .py src

      # Paths containing both "test" and "cli", but nothing under build directories
      lsn -fi "test cli" -ex /build/

      # gitignore-style exclusions, from a file and inline
      lsn -I .gitignore -i "*.log" -i "!keep.log"

      # List with 16 threads and write to a file
      lsn -j 16 -o listing.txt /data
    """

    parser = argparse.ArgumentParser(
        prog="lsn",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--version", action="version", version=f"lsn v{__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="The directory to list (default: the current directory).",
    )
    parser.add_argument(
        "-d",
        "--depth",
        type=int,
        default=0,
        metavar="N",
        help="Recurse at most N levels below the root; 0 means unlimited (default: 0).",
    )
    parser.add_argument(
        "-f",
        "--full-path",
        action="store_true",
        help="Print absolute paths.",
    )
    parser.add_argument(
        "-of",
        "--only-file",
        action="store_true",
        help="Print only files.",
    )
    parser.add_argument(
        "-od",
        "--only-dir",
        action="store_true",
        help="Print only directories.",
    )
    parser.add_argument(
        "-fi",
        "--filter",
        default="",
        metavar="TERMS",
        help="Space-separated terms that must all appear in a path.",
    )
    parser.add_argument(
        "-ex",
        "--exclusion",
        default="",
        metavar="TEXT",
        help="Skip paths containing TEXT (case-sensitive).",
    )
    parser.add_argument(
        "-a",
        "--all",
        dest="include_hidden",
        action="store_true",
        help="Include hidden files and directories.",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        dest="ignore_patterns",
        metavar="PATTERN",
        action=IgnorePatternAction,
        help="Gitignore-style pattern of paths to skip (can be specified multiple times).",
    )
    parser.add_argument(
        "-I",
        "--ignore-file",
        dest="ignore_patterns",
        metavar="FILE",
        action=IgnorePatternAction,
        help="File of gitignore-style patterns, e.g. .gitignore (can be specified multiple times).",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symbolic links to directories.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=list(PERMISSION_ACTIONS),
        default="ignore",
        help="How to handle permission errors (default: ignore).",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=DEFAULT_WORKERS,
        metavar="N",
        help=f"Number of threads listing directories (default: {DEFAULT_WORKERS}).",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        type=str.upper,
        help="Logging level for diagnostics on stderr (default: WARNING).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.depth < 0:
        raise ValueError(f"-d/--depth cannot be negative, got {args.depth}")
    if args.jobs < 1:
        raise ValueError(f"-j/--jobs must be at least 1, got {args.jobs}")


def config_from_args(args: argparse.Namespace) -> ListingConfig:
    """Build the ListingConfig described by parsed arguments.

    Args:
        args: Parsed and validated command-line arguments.

    Returns:
        The immutable listing configuration.
    """
    return ListingConfig(
        depth=args.depth,
        full_path=args.full_path,
        only_file=args.only_file,
        only_dir=args.only_dir,
        filter=args.filter,
        exclusion=args.exclusion,
        include_hidden=args.include_hidden,
        ignore_patterns=tuple(args.ignore_patterns or ()),
        follow_symlinks=args.follow_symlinks,
        permission_action=PERMISSION_ACTIONS[args.permission_action],
        workers=args.jobs,
    )
