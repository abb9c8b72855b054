"""Entry filters and the pipeline that orders them."""

from .base_filter import BaseFilter, FilterResult
from .depth_filter import DepthFilter
from .hidden_filter import HiddenEntryFilter
from .ignore_filter import IgnorePatternFilter
from .pipeline import FilterPipeline, build_filters
from .substring_filters import ExclusionFilter, SubstringFilter, substring_filters
from .type_filter import EntryTypeFilter

__all__ = [
    "BaseFilter",
    "DepthFilter",
    "EntryTypeFilter",
    "ExclusionFilter",
    "FilterPipeline",
    "FilterResult",
    "HiddenEntryFilter",
    "IgnorePatternFilter",
    "SubstringFilter",
    "build_filters",
    "substring_filters",
]
