"""Device/inode identity used to detect symlink loops."""

import os
from dataclasses import dataclass

from lsn.types import PathType


@dataclass(frozen=True)
class FileIdentifier:
    """Identity of a directory by device and inode number.

    Two paths that resolve to the same directory share a FileIdentifier, which lets the
    walker notice when a followed symlink leads back to one of its own ancestors.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Example:
        >>> FileIdentifier(1, 2) == FileIdentifier(1, 2)
        True
        >>> FileIdentifier(1, 2)
        FileIdentifier(device_id=1, inode_number=2)
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        """Build an identifier from an ``os.stat_result``."""
        return cls(stat_result.st_dev, stat_result.st_ino)

    @classmethod
    def from_path(cls, path: PathType) -> "FileIdentifier":
        """Stat ``path`` (following symlinks) and return its identifier.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        return cls.from_stat(os.stat(path))
