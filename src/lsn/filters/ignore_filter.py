"""Filter using .gitignore pattern syntax."""

import os
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from lsn.types import PathType
from lsn.walker.dir_entry import DirEntry

from .base_filter import BaseFilter, FilterResult


def read_ignore_file(path: PathType) -> List[str]:
    """Read the pattern lines of a .gitignore-style file.

    Args:
        path: File to read.

    Returns:
        The file's lines, in order. Comments and blank lines are left for pathspec
        to skip.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    rules_path = Path(path)
    if not rules_path.is_file():
        raise FileNotFoundError(f"Ignore file not found: {rules_path}")
    with open(rules_path, "r") as f:
        return f.read().splitlines()


class IgnorePatternFilter(BaseFilter):
    """Filter out entries matching .gitignore-style patterns.

    Patterns are compiled with the pathspec library and matched the way Git matches
    them: against the entry's path relative to the walk root, using ``/`` separators,
    with a trailing ``/`` appended for directories so that patterns such as
    ``build/`` only hit directories. Later patterns override earlier ones, so
    ``!keep.log`` after ``*.log`` re-includes ``keep.log``.

    A matching directory is PRUNED: as in Git, nothing beneath an ignored directory
    can be re-included.

    Attributes:
        spec (PathSpec): Compiled pattern matcher.

    Example:
        >>> from lsn.walker.dir_entry import DirEntry
        >>> f = IgnorePatternFilter(["*.log", "!keep.log", "build/"])
        >>> f(DirEntry("app.log", "app.log", "app.log")).value
        'excluded'
        >>> f(DirEntry("keep.log", "keep.log", "keep.log")).value
        'included'
        >>> f(DirEntry("build", "build", "build", is_dir=True)).value
        'pruned'
        >>> f(DirEntry("build", "build", "build", is_dir=False)).value
        'included'
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        """Compile ``patterns``, in order.

        Args:
            patterns: Lines in .gitignore syntax. Blank lines and ``#`` comments are
                ignored.
        """
        self.spec = PathSpec.from_lines(GitWildMatchPattern, list(patterns))

    @classmethod
    def from_files(cls, rules_files: Union[PathType, Sequence[PathType]]) -> "IgnorePatternFilter":
        """Build a filter from one or more .gitignore-style files, concatenated in order.

        Raises:
            FileNotFoundError: If any file does not exist.
        """
        if isinstance(rules_files, (str, os.PathLike)):
            rules_files = [rules_files]
        lines: List[str] = []
        for rules_file in rules_files:
            lines.extend(read_ignore_file(rules_file))
        return cls(lines)

    def has_rules(self) -> bool:
        """Return True if at least one line is an actual pattern (not a comment or blank)."""
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check a root-relative path against the patterns.

        Args:
            relative_path: Path relative to the walk root, using the OS separator.
            is_dir: Whether the path names a directory.

        Returns:
            True if the patterns ignore the path.
        """
        path = relative_path.replace(os.sep, "/")
        if is_dir and not path.endswith("/"):
            path += "/"
        return bool(self.spec.match_file(path))

    def evaluate(self, entry: DirEntry) -> FilterResult:
        if not self.matches(entry.relative_path, entry.is_dir):
            return FilterResult.INCLUDED
        if entry.is_dir:
            return FilterResult.PRUNED
        return FilterResult.EXCLUDED

    def __repr__(self) -> str:
        return f"IgnorePatternFilter(patterns={len(self.spec.patterns)})"
