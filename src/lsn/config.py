"""Immutable listing configuration."""

import os
from dataclasses import dataclass
from typing import Tuple

from lsn.walker.permission_action import PermissionAction

DEFAULT_WORKERS = min(8, os.cpu_count() or 1)


@dataclass(frozen=True)
class ListingConfig:
    """Everything that shapes a listing, gathered once and passed around read-only.

    Attributes:
        depth (int): Maximum depth of listed entries relative to the root; 0 means
            unlimited.
        full_path (bool): Print absolute paths instead of cleaned relative ones.
        only_file (bool): List only non-directories.
        only_dir (bool): List only directories. Setting both ``only_file`` and
            ``only_dir`` is the same as setting neither.
        filter (str): Space-separated include terms; every term must appear in the
            pathname. Matching is case-insensitive when the whole string is uniformly
            cased.
        exclusion (str): Case-sensitive substring that excludes a pathname.
        include_hidden (bool): List dot-files and descend into dot-directories.
        ignore_patterns (Tuple[str, ...]): .gitignore-style patterns, in order.
        follow_symlinks (bool): Descend into symlinked directories.
        permission_action (PermissionAction): What to do with unreadable paths.
        workers (int): Number of threads listing directories; 1 walks sequentially.

    Example:
        >>> config = ListingConfig(depth=2, filter="txt")
        >>> config.depth, config.only_file
        (2, False)
        >>> ListingConfig(depth=-1)
        Traceback (most recent call last):
            ...
        ValueError: depth cannot be negative, got -1
    """

    depth: int = 0
    full_path: bool = False
    only_file: bool = False
    only_dir: bool = False
    filter: str = ""
    exclusion: str = ""
    include_hidden: bool = False
    ignore_patterns: Tuple[str, ...] = ()
    follow_symlinks: bool = False
    permission_action: PermissionAction = PermissionAction.IGNORE
    workers: int = 1

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"depth cannot be negative, got {self.depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        # Accept any sequence but keep the stored value hashable and immutable
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))

    @property
    def type_restricted(self) -> bool:
        """True when exactly one of ``only_file`` and ``only_dir`` is set."""
        return self.only_file != self.only_dir
