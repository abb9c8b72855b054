"""Command-line interface for lsn.

This module provides the command-line entry point, which parses arguments into a
ListingConfig, walks the requested directory and writes one accepted path per line.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`)
    - SIGINT: Handled for clean exit on Ctrl+C
    In both cases the next write fails, the walk stops and the process exits with
    the conventional status.

Exit Codes:
    0: Successful completion, including a walk cut short by the depth limit
    1: Runtime error during execution
    2: Command-line syntax error
    126: Permission denied (with -P fail)
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE)

Example:
    # List everything beneath a directory
    $ lsn /path/to/dir

    # Files only, two levels deep
    $ lsn -of -d 2 /path/to/dir

    # Display version information
    $ lsn --version
"""

import logging
import sys
from typing import Optional, Sequence

from lsn.cli.argparser import config_from_args, create_parser, validate_args
from lsn.cli.safe_writer import SafeWriter
from lsn.cli.signal_handler import setup_signal_handling, signal_handler
from lsn.logging_utils import configure_logging
from lsn.walker.walker import Walker

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the lsn command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE)
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
        args = parser.parse_args(argv)

        validate_args(args)
        configure_logging(args.log_level)

        config = config_from_args(args)
        walker = Walker.from_config(args.root, config)
        logger.debug("Listing %s with %d worker(s)", walker.root, walker.max_workers)

        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                walker.walk(safe_writer.write_line)
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
