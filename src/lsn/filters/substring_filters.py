"""Substring include and exclude filters."""

from dataclasses import dataclass
from typing import List

from lsn.walker.dir_entry import DirEntry

from .base_filter import BaseFilter, FilterResult


def is_uniformly_cased(text: str) -> bool:
    """Return True if ``text`` is entirely lower case or entirely upper case.

    Characters without case do not count either way, so ``"v2"`` and ``"V2"`` are
    both uniformly cased while ``"Readme"`` is not.

    >>> is_uniformly_cased("txt"), is_uniformly_cased("TXT"), is_uniformly_cased("Txt")
    (True, True, False)
    """
    return text == text.lower() or text == text.upper()


@dataclass(frozen=True)
class SubstringFilter(BaseFilter):
    """Include entries whose pathname contains ``term``.

    Attributes:
        term (str): Substring to look for. Stored lowered when ``case_insensitive``.
        case_insensitive (bool): Compare lowered pathname against lowered term.
    """

    term: str
    case_insensitive: bool = False

    def __post_init__(self) -> None:
        if self.case_insensitive:
            object.__setattr__(self, "term", self.term.lower())

    def evaluate(self, entry: DirEntry) -> FilterResult:
        pathname = entry.pathname.lower() if self.case_insensitive else entry.pathname
        if self.term in pathname:
            return FilterResult.INCLUDED
        return FilterResult.EXCLUDED


@dataclass(frozen=True)
class ExclusionFilter(BaseFilter):
    """Exclude entries whose pathname contains ``substring``. Always case-sensitive.

    Attributes:
        substring (str): Substring that marks an entry for exclusion.
    """

    substring: str

    def evaluate(self, entry: DirEntry) -> FilterResult:
        if self.substring in entry.pathname:
            return FilterResult.EXCLUDED
        return FilterResult.INCLUDED


def substring_filters(filter_string: str) -> List[SubstringFilter]:
    """Build one SubstringFilter per whitespace-separated term of ``filter_string``.

    The terms are ANDed by the pipeline. Case sensitivity is decided once for the
    whole string, not per term: ``"readme TODO"`` is mixed-case as a whole, so both
    terms match case-sensitively.

    Args:
        filter_string: Space-separated include terms.

    Returns:
        The filters in term order. Empty if the string has no terms.

    Example:
        >>> [f.term for f in substring_filters("Src Main")]
        ['Src', 'Main']
        >>> [f.term for f in substring_filters("SRC MAIN")]
        ['src', 'main']
    """
    case_insensitive = is_uniformly_cased(filter_string)
    return [SubstringFilter(term, case_insensitive) for term in filter_string.split()]
