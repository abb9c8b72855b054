"""Depth limit filter."""

import os
from dataclasses import dataclass

from lsn.walker.dir_entry import DirEntry

from .base_filter import BaseFilter, FilterResult


def path_depth(path: str) -> int:
    """Count the segments of a cleaned path.

    >>> path_depth("a"), path_depth(os.path.join("a", "b.txt")), path_depth("a//b/")
    (1, 2, 2)
    """
    return len(os.path.normpath(path).split(os.sep))


@dataclass(frozen=True)
class DepthFilter(BaseFilter):
    """Stop the walk at the first entry deeper than ``max_depth``.

    Depth is measured on the entry's path relative to the walk root, so direct
    children of the root have depth 1. Going over the limit yields ABORT for the
    whole walk rather than excluding the one entry. Because the walker visits
    entries level by level, every entry within the limit has already been seen by
    the time the first deeper entry shows up.

    Attributes:
        max_depth (int): Largest number of path segments that may be listed.
    """

    max_depth: int

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    def evaluate(self, entry: DirEntry) -> FilterResult:
        if path_depth(entry.relative_path) > self.max_depth:
            return FilterResult.ABORT
        return FilterResult.INCLUDED
