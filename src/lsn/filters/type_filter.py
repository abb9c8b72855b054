"""Filter restricting a listing to files or to directories."""

from dataclasses import dataclass

from lsn.types import FileType
from lsn.walker.dir_entry import DirEntry

from .base_filter import BaseFilter, FilterResult


@dataclass(frozen=True)
class EntryTypeFilter(BaseFilter):
    """Include only entries of one FileType.

    Excluded directories are still descended, so ``FileType.FILE`` lists files at
    every depth.

    Attributes:
        file_type (FileType): The type to keep.
    """

    file_type: FileType

    def evaluate(self, entry: DirEntry) -> FilterResult:
        wanted_dir = self.file_type is FileType.DIRECTORY
        if entry.is_dir == wanted_dir:
            return FilterResult.INCLUDED
        return FilterResult.EXCLUDED
