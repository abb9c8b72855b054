"""Entry record handed to each filter during traversal."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DirEntry:
    """A filesystem node visited by the walker.

    Attributes:
        name (str): Base name of the entry.
        pathname (str): Path as encountered, i.e. the walk root joined with every name
            on the way down. Not normalised beyond the root itself.
        relative_path (str): Path of the entry relative to the walk root.
        is_dir (bool): True if the entry is a directory. A symlink to a directory only
            counts as one when symlinks are being followed.
        is_symlink (bool): True if the entry itself is a symbolic link.

    Example:
        >>> entry = DirEntry("b.txt", "a/b.txt", "a/b.txt", is_dir=False)
        >>> entry.name, entry.is_dir
        ('b.txt', False)
    """

    name: str
    pathname: str
    relative_path: str
    is_dir: bool = False
    is_symlink: bool = False
