from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Enumeration of entry types an entry-type filter can restrict a listing to.

    Attributes:
        FILE: Anything that is not a directory (regular files, unfollowed symlinks, etc.)
        DIRECTORY: Directory
    """

    FILE = "file"
    DIRECTORY = "directory"
