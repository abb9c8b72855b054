from abc import ABC, abstractmethod
from enum import Enum

from lsn.walker.dir_entry import DirEntry


class FilterResult(str, Enum):
    """Outcome of running a filter against one entry.

    The walker treats each value differently, which is why exclusion is split in two
    and the depth limit is a result rather than an exception:

    Values:
        INCLUDED: The entry passes this filter; evaluation continues with the next one.
        EXCLUDED: The entry is not listed. Directories are still descended.
        PRUNED: The entry is not listed and, if it is a directory, its subtree is skipped.
        ABORT: The whole walk stops here. This is a successful termination, not an error.
    """

    INCLUDED = "included"
    EXCLUDED = "excluded"
    PRUNED = "pruned"
    ABORT = "abort"


class BaseFilter(ABC):
    """
    Abstract base class defining the interface for entry filters.

    A filter inspects a single DirEntry and reports a FilterResult. Filters must be
    pure functions of the entry and whatever parameters they captured at construction
    time: the walker may call them concurrently from several worker threads, and a
    pipeline relies on them being safe to evaluate in any order across entries.

    Filters are also callable, so a filter can be used anywhere a plain predicate
    function is expected.

    Example:
        >>> from lsn.walker.dir_entry import DirEntry
        >>> class PythonOnly(BaseFilter):
        ...     def evaluate(self, entry: DirEntry) -> FilterResult:
        ...         if entry.is_dir or entry.name.endswith(".py"):
        ...             return FilterResult.INCLUDED
        ...         return FilterResult.EXCLUDED
        >>> f = PythonOnly()
        >>> f(DirEntry("main.py", "src/main.py", "src/main.py")).value
        'included'
        >>> f(DirEntry("notes.md", "notes.md", "notes.md")).value
        'excluded'
    """

    @abstractmethod
    def evaluate(self, entry: DirEntry) -> FilterResult:
        """
        Decide what happens to ``entry``.

        Args:
            entry (DirEntry): The visited entry.

        Returns:
            FilterResult: INCLUDED to let later filters decide, EXCLUDED or PRUNED to
                drop the entry, ABORT to end the walk.
        """
        pass

    def __call__(self, entry: DirEntry) -> FilterResult:
        return self.evaluate(entry)
