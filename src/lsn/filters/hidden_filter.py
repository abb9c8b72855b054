"""Filter that hides dot-files and prunes dot-directories."""

from dataclasses import dataclass

from lsn.walker.dir_entry import DirEntry

from .base_filter import BaseFilter, FilterResult


def is_hidden_name(name: str) -> bool:
    """Return True for names starting with a dot, except ``.`` itself.

    >>> is_hidden_name(".git"), is_hidden_name("."), is_hidden_name("src")
    (True, False, False)
    """
    return name != "." and name.startswith(".")


@dataclass(frozen=True)
class HiddenEntryFilter(BaseFilter):
    """Exclude hidden entries, pruning hidden directories.

    A hidden directory is reported as PRUNED rather than EXCLUDED so that nothing
    beneath it is ever visited. This filter is placed first in a pipeline so that no
    other filter sees the contents of a hidden directory.
    """

    def evaluate(self, entry: DirEntry) -> FilterResult:
        if is_hidden_name(entry.name):
            if entry.is_dir:
                return FilterResult.PRUNED
            return FilterResult.EXCLUDED
        return FilterResult.INCLUDED
