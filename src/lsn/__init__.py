"""Filtered directory listing.

This package lists the files and directories beneath a root path, passing every
visited entry through a fixed pipeline of filters (hidden entries, depth limit,
entry type, substring include/exclude, gitignore-style patterns) and yielding the
paths that survive.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("lsn")
except PackageNotFoundError:
    __version__ = "unknown"
