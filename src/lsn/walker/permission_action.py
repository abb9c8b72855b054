"""Permission action enum for handling permission errors during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory or entry cannot be read because access is denied.

    Values:
        IGNORE: Skip the inaccessible path silently and keep walking (default behavior)
        WARN: Log a warning naming the inaccessible path, then keep walking
        RAISE: Raise a PermissionError immediately, ending the walk
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"
