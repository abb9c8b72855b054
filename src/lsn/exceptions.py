class TraversalError(Exception):
    """
    Exception raised when a filesystem error other than a permission error ends a walk.

    Permission errors are governed by the walker's permission action; every other
    ``OSError`` met while listing a directory or reading an entry's type is fatal and
    is wrapped in this exception so callers can report the offending path.

    Attributes:
        path (str): Path that was being accessed when the error occurred.
        error (OSError): The underlying error.

    Example:
        >>> error = TraversalError("/data/dev", OSError(5, "Input/output error"))
        >>> str(error)
        'Error accessing /data/dev: [Errno 5] Input/output error'
    """

    def __init__(self, path: str, error: OSError) -> None:
        """
        Initialize the exception with the failing path and the original error.

        Args:
            path (str): Path that was being accessed.
            error (OSError): The error raised by the filesystem call.
        """
        self.path = path
        self.error = error
        super().__init__(f"Error accessing {path}: {error}")
