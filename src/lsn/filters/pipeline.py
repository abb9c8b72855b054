"""Ordered filter pipeline and the builder that assembles it from a ListingConfig."""

from typing import Iterable, Iterator, List

from lsn.config import ListingConfig
from lsn.types import FileType
from lsn.walker.dir_entry import DirEntry

from .base_filter import BaseFilter, FilterResult
from .depth_filter import DepthFilter
from .hidden_filter import HiddenEntryFilter
from .ignore_filter import IgnorePatternFilter
from .substring_filters import ExclusionFilter, substring_filters
from .type_filter import EntryTypeFilter


def build_filters(config: ListingConfig) -> List[BaseFilter]:
    """Build the filters a configuration asks for, in evaluation order.

    The order is fixed and matters:

    1. HiddenEntryFilter, unless hidden entries are included. It runs first so that a
       hidden directory is pruned before any other filter looks at it.
    2. DepthFilter, when a depth limit is set. It ends the walk rather than
       excluding single entries.
    3. EntryTypeFilter, when exactly one of only-file/only-directory is set.
    4. One SubstringFilter per include term.
    5. ExclusionFilter, when an exclusion substring is set.
    6. IgnorePatternFilter, when ignore patterns are set.

    Args:
        config: The listing configuration.

    Returns:
        A new list of filters. Empty when nothing is filtered.

    Example:
        >>> [type(f).__name__ for f in build_filters(ListingConfig())]
        ['HiddenEntryFilter']
        >>> config = ListingConfig(depth=2, only_file=True, filter="a b", include_hidden=True)
        >>> [type(f).__name__ for f in build_filters(config)]
        ['DepthFilter', 'EntryTypeFilter', 'SubstringFilter', 'SubstringFilter']
        >>> build_filters(ListingConfig(only_file=True, only_dir=True, include_hidden=True))
        []
    """
    filters: List[BaseFilter] = []

    if not config.include_hidden:
        filters.append(HiddenEntryFilter())

    if config.depth > 0:
        filters.append(DepthFilter(config.depth))

    if config.type_restricted:
        filters.append(EntryTypeFilter(FileType.DIRECTORY if config.only_dir else FileType.FILE))

    if config.filter:
        filters.extend(substring_filters(config.filter))

    if config.exclusion:
        filters.append(ExclusionFilter(config.exclusion))

    if config.ignore_patterns:
        filters.append(IgnorePatternFilter(config.ignore_patterns))

    return filters


class FilterPipeline:
    """An ordered sequence of filters evaluated with short-circuiting.

    An entry is INCLUDED only if every filter includes it. Evaluation stops at the
    first filter that says anything else, and that filter's result (EXCLUDED, PRUNED
    or ABORT) becomes the pipeline's result. An empty pipeline includes everything.

    The pipeline holds no per-entry state, so one instance can be shared by all the
    walker's worker threads.

    Attributes:
        filters (List[BaseFilter]): The filters, in evaluation order.

    Example:
        >>> from lsn.walker.dir_entry import DirEntry
        >>> pipeline = FilterPipeline.from_config(ListingConfig(filter="txt"))
        >>> pipeline.evaluate(DirEntry("b.txt", "a/b.txt", "a/b.txt")).value
        'included'
        >>> pipeline.evaluate(DirEntry(".b.txt", "a/.b.txt", "a/.b.txt")).value
        'excluded'
    """

    def __init__(self, filters: Iterable[BaseFilter] = ()) -> None:
        """Initialize the pipeline.

        Args:
            filters: Filters in evaluation order.

        Raises:
            TypeError: If any item doesn't implement BaseFilter.
        """
        filters = list(filters)
        for i, entry_filter in enumerate(filters):
            if not isinstance(entry_filter, BaseFilter):
                raise TypeError(f"Filter at index {i} must implement BaseFilter, " f"got {type(entry_filter)}")
        self.filters: List[BaseFilter] = filters

    @classmethod
    def from_config(cls, config: ListingConfig) -> "FilterPipeline":
        """Build the pipeline described by ``config`` (see build_filters)."""
        return cls(build_filters(config))

    def evaluate(self, entry: DirEntry) -> FilterResult:
        """Run the filters against ``entry`` until one of them does not include it.

        Args:
            entry: The visited entry.

        Returns:
            INCLUDED if every filter includes the entry, otherwise the first
            non-INCLUDED result.
        """
        for entry_filter in self.filters:
            result = entry_filter.evaluate(entry)
            if result is not FilterResult.INCLUDED:
                return result
        return FilterResult.INCLUDED

    def add_filter(self, entry_filter: BaseFilter) -> None:
        """Append a filter to the end of the pipeline.

        Raises:
            TypeError: If ``entry_filter`` doesn't implement BaseFilter.
        """
        if not isinstance(entry_filter, BaseFilter):
            raise TypeError(f"Filter must implement BaseFilter, got {type(entry_filter)}")
        self.filters.append(entry_filter)

    def get_filters(self) -> List[BaseFilter]:
        """Return a copy of the filter list."""
        return list(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[BaseFilter]:
        return iter(self.filters)
