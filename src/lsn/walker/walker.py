"""Directory traversal driving the filter pipeline.

This module provides the Walker class, which visits every entry beneath a root
directory, runs each one through a FilterPipeline and turns the pipeline's verdicts
into listed paths, skipped subtrees or an early end of the walk.
"""

import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, FrozenSet, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

from lsn.config import ListingConfig
from lsn.exceptions import TraversalError
from lsn.filters.base_filter import BaseFilter, FilterResult
from lsn.filters.hidden_filter import HiddenEntryFilter
from lsn.filters.pipeline import FilterPipeline
from lsn.types import PathType
from lsn.walker.dir_entry import DirEntry
from lsn.walker.file_identifier import FileIdentifier
from lsn.walker.permission_action import PermissionAction

logger = logging.getLogger(__name__)


class _PendingDir(NamedTuple):
    """A directory waiting to be listed."""

    pathname: str
    relative_path: str
    ancestors: FrozenSet[FileIdentifier]


class _ScannedEntry(NamedTuple):
    """A listed entry together with the pipeline's verdict on it."""

    entry: DirEntry
    result: FilterResult
    identifier: Optional[FileIdentifier]


def _join(parent: str, name: str) -> str:
    # Keep children of "." free of a leading "./"
    if parent in ("", os.curdir):
        return name
    return os.path.join(parent, name)


class Walker:
    """Walk a directory tree and yield the entries a filter pipeline accepts.

    The walk is breadth-first and level-synchronous: every entry at depth *k* is
    visited before any entry at depth *k+1*. A depth limit can therefore end the walk
    with ABORT at the first entry past the limit and still have listed every entry
    within it. Inside a directory, entries are visited in name order.

    How each pipeline result is handled:
        - INCLUDED: the entry's output path is produced.
        - EXCLUDED: nothing is produced; a directory is still descended.
        - PRUNED: nothing is produced and a directory is not descended.
        - ABORT: the walk ends immediately. This is not an error; whatever was
          already produced stands.

    Concurrency:
        With ``max_workers`` greater than 1, the directories of each level are listed
        and filtered on a thread pool. Results are consumed on the calling thread in
        submission order, so the output order does not depend on thread timing. Once
        the walk is stopped (ABORT, an error, stop(), or the consumer closing the
        iterator), queued listings are cancelled and in-flight ones finish without
        their results being used.
        A Walker runs one walk at a time; each walk has its own stop state.

    Symbolic Link Behavior:
        By default, symbolic links are listed but never descended. With
        ``follow_symlinks``, links to directories are descended too, and a directory
        that resolves to one of its own ancestors is listed but not descended.

    Permission Handling:
        Permission errors while listing a directory or reading an entry's type follow
        ``permission_action``:
        - IGNORE (default): skip the path silently
        - WARN: log a warning and skip the path
        - RAISE: raise PermissionError
        Every other OSError is fatal and raised as TraversalError.

    Attributes:
        root (str): Normalised root directory.
        pipeline (FilterPipeline): Filters applied to every visited entry.
        full_path (bool): Produce absolute output paths.
        permission_action (PermissionAction): How to handle permission errors.
        follow_symlinks (bool): Whether to descend into symlinked directories.
        max_workers (int): Number of listing threads; 1 walks on the calling thread.

    Example:
        >>> walker = Walker(".", FilterPipeline.from_config(ListingConfig(only_dir=True)))  # doctest: +SKIP
        >>> for path in walker.iter_paths():  # doctest: +SKIP
        ...     print(path)
        docs
        src
        src/lsn
    """

    def __init__(
        self,
        root: PathType = ".",
        filters: Optional[Union[FilterPipeline, Sequence[BaseFilter]]] = None,
        full_path: bool = False,
        permission_action: PermissionAction = PermissionAction.IGNORE,
        follow_symlinks: bool = False,
        max_workers: int = 1,
    ) -> None:
        """Initialize a Walker.

        Args:
            root: Directory to list. An empty path means the current directory.
            filters: A FilterPipeline or a sequence of filters in evaluation order.
                Defaults to no filtering.
            full_path: Produce absolute output paths. Defaults to False.
            permission_action: How to handle permission errors. Defaults to IGNORE.
            follow_symlinks: Descend into symlinked directories. Defaults to False.
            max_workers: Number of listing threads. Defaults to 1.

        Raises:
            ValueError: If max_workers is less than 1.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.root = os.path.normpath(os.fspath(root) or os.curdir)
        if isinstance(filters, FilterPipeline):
            self.pipeline = filters
        else:
            self.pipeline = FilterPipeline(filters or [])
        self.full_path = full_path
        self.permission_action = permission_action
        self.follow_symlinks = follow_symlinks
        self.max_workers = max_workers
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        self._running = False
        self._finished = False

    @classmethod
    def from_config(cls, root: PathType, config: ListingConfig) -> "Walker":
        """Create a Walker whose pipeline and options come from ``config``.

        Example:
            >>> walker = Walker.from_config("src", ListingConfig(depth=1, workers=4))
            >>> walker.root, walker.max_workers, len(walker.pipeline)
            ('src', 4, 2)
        """
        return cls(
            root,
            FilterPipeline.from_config(config),
            full_path=config.full_path,
            permission_action=config.permission_action,
            follow_symlinks=config.follow_symlinks,
            max_workers=config.workers,
        )

    def stop(self) -> None:
        """Ask the walk to stop.

        A running walk ends at the next point it checks for cancellation; entries
        that were already produced stand. Called while no walk is running, the
        request applies to the next walk, which then produces nothing. Safe to call
        from any thread.
        """
        with self._state_lock:
            if self._finished:
                self._stop_event = threading.Event()
                self._finished = False
            self._stop_event.set()

    @property
    def stopped(self) -> bool:
        """True once the current or most recent walk has been stopped for any reason."""
        return self._stop_event.is_set()

    def output_path(self, entry: DirEntry) -> str:
        """Return the path to print for an accepted entry.

        In full-path mode a relative pathname is made absolute; otherwise the
        pathname is cleaned (no redundant separators, no trailing slash).

        Example:
            >>> Walker("data").output_path(DirEntry("b.txt", "data//a/b.txt", "a/b.txt"))
            'data/a/b.txt'
        """
        if self.full_path and not os.path.isabs(entry.pathname):
            return os.path.abspath(entry.pathname)
        return os.path.normpath(entry.pathname)

    def iter_paths(self) -> Iterator[str]:
        """Lazily yield the output path of every accepted entry.

        Raises:
            FileNotFoundError: If the root does not exist.
            NotADirectoryError: If the root is not a directory.
            PermissionError: If access is denied and permission_action is RAISE.
            TraversalError: On any other filesystem error.
        """
        entries = self.iter_entries()
        try:
            for entry in entries:
                yield self.output_path(entry)
        finally:
            entries.close()

    def walk(self, emit: Callable[[str], None]) -> None:
        """Call ``emit`` with the output path of every accepted entry.

        Returns normally when the walk completes or when a filter aborts it. An
        exception raised by ``emit`` stops the walk and propagates.

        Args:
            emit: Callback receiving each output path.

        Raises:
            Same as iter_paths().
        """
        for path in self.iter_paths():
            emit(path)

    def iter_entries(self) -> Iterator[DirEntry]:
        """Lazily yield every entry the pipeline includes.

        The root itself is never yielded, but it is checked by any hidden-entry
        filter in the pipeline: a hidden root such as ``.config`` or ``..`` yields
        nothing, exactly as if it had been pruned.

        Raises:
            RuntimeError: If this Walker is already running a walk.
            Same as iter_paths().
        """
        stop_event = self._begin_walk()
        executor: Optional[ThreadPoolExecutor] = None
        try:
            root_id = self._check_root()
            if self._root_is_hidden():
                logger.debug("Root %s is hidden; nothing to list", self.root)
                return
            ancestors: FrozenSet[FileIdentifier] = frozenset() if root_id is None else frozenset([root_id])
            level: List[_PendingDir] = [_PendingDir(self.root, "", ancestors)]

            if self.max_workers > 1:
                executor = ThreadPoolExecutor(max_workers=self.max_workers)
            while level and not stop_event.is_set():
                next_level: List[_PendingDir] = []
                for pending, scanned in self._scan_level(level, executor, stop_event):
                    for item in scanned:
                        if stop_event.is_set():
                            return
                        entry = item.entry
                        if item.result is FilterResult.ABORT:
                            logger.debug("Depth limit reached at %s; stopping traversal", entry.pathname)
                            return
                        if item.result is FilterResult.INCLUDED:
                            yield entry
                        if not entry.is_dir:
                            continue
                        if item.result is FilterResult.PRUNED:
                            logger.debug("Pruned %s", entry.pathname)
                        elif item.identifier is not None and item.identifier in pending.ancestors:
                            logger.debug("Symlink loop at %s; not descending", entry.pathname)
                        else:
                            ancestors = pending.ancestors
                            if item.identifier is not None:
                                ancestors = ancestors | {item.identifier}
                            next_level.append(_PendingDir(entry.pathname, entry.relative_path, ancestors))
                level = next_level
        finally:
            stop_event.set()
            if executor is not None:
                executor.shutdown(wait=True, cancel_futures=True)
            self._end_walk()

    def _begin_walk(self) -> threading.Event:
        """Mark a walk as running and return its stop event.

        A Walker runs one walk at a time. A finished walk leaves its event set, so
        the next walk gets a fresh one unless stop() was requested in between.
        """
        with self._state_lock:
            if self._running:
                raise RuntimeError("Walker is already running a walk")
            if self._finished:
                self._stop_event = threading.Event()
                self._finished = False
            self._running = True
            return self._stop_event

    def _end_walk(self) -> None:
        with self._state_lock:
            self._running = False
            self._finished = True

    def _root_is_hidden(self) -> bool:
        """Return True if a hidden-entry filter in the pipeline rejects the root's own name."""
        name = os.path.basename(self.root)
        if not name:
            return False
        root_entry = DirEntry(name=name, pathname=self.root, relative_path="", is_dir=True)
        return any(
            isinstance(f, HiddenEntryFilter) and f(root_entry) is not FilterResult.INCLUDED for f in self.pipeline
        )

    def _check_root(self) -> Optional[FileIdentifier]:
        """Validate the root and return its identity when symlinks are followed."""
        if not os.path.exists(self.root):
            raise FileNotFoundError(f"Root path does not exist: {self.root}")
        if not os.path.isdir(self.root):
            raise NotADirectoryError(f"Root path is not a directory: {self.root}")
        if not self.follow_symlinks:
            return None
        try:
            return FileIdentifier.from_path(self.root)
        except OSError as e:
            raise TraversalError(self.root, e) from e

    def _scan_level(
        self,
        level: Sequence[_PendingDir],
        executor: Optional[ThreadPoolExecutor],
        stop_event: threading.Event,
    ) -> Iterator[Tuple[_PendingDir, List[_ScannedEntry]]]:
        """Yield ``(directory, scanned entries)`` for a level, in submission order."""
        if executor is None:
            for pending in level:
                yield pending, self._scan_directory(pending, stop_event)
            return

        futures: List[Future] = [executor.submit(self._scan_directory, pending, stop_event) for pending in level]
        for pending, future in zip(level, futures):
            yield pending, future.result()

    def _scan_directory(self, pending: _PendingDir, stop_event: threading.Event) -> List[_ScannedEntry]:
        """List one directory and run the pipeline on each of its entries.

        Runs on worker threads when the walk is parallel.
        """
        if stop_event.is_set():
            return []

        try:
            with os.scandir(pending.pathname) as it:
                children = sorted(it, key=lambda child: child.name)
        except PermissionError as e:
            self._handle_permission_error(pending.pathname, e)
            return []
        except OSError as e:
            raise TraversalError(pending.pathname, e) from e

        scanned: List[_ScannedEntry] = []
        for child in children:
            if stop_event.is_set():
                break
            item = self._scan_entry(pending, child)
            if item is None:
                continue
            scanned.append(item)
            if item.result is FilterResult.ABORT:
                break
        return scanned

    def _scan_entry(self, pending: _PendingDir, child: "os.DirEntry[str]") -> Optional[_ScannedEntry]:
        """Build the DirEntry for ``child`` and evaluate it; None if it was unreadable."""
        pathname = _join(pending.pathname, child.name)
        try:
            is_symlink = child.is_symlink()
            is_dir = child.is_dir(follow_symlinks=self.follow_symlinks)
            identifier = None
            if is_dir and self.follow_symlinks:
                identifier = FileIdentifier.from_stat(child.stat(follow_symlinks=True))
        except PermissionError as e:
            self._handle_permission_error(pathname, e)
            return None
        except OSError as e:
            raise TraversalError(pathname, e) from e

        entry = DirEntry(
            name=child.name,
            pathname=pathname,
            relative_path=_join(pending.relative_path, child.name),
            is_dir=is_dir,
            is_symlink=is_symlink,
        )
        return _ScannedEntry(entry, self.pipeline.evaluate(entry), identifier)

    def _handle_permission_error(self, path: str, error: PermissionError) -> None:
        """Apply the permission action to an access error on ``path``."""
        if self.permission_action == PermissionAction.RAISE:
            raise PermissionError(f"Access denied to {path}: {error}")
        if self.permission_action == PermissionAction.WARN:
            logger.warning("Skipping %s: permission denied", path)
        else:
            logger.debug("Skipping %s: permission denied", path)


def traverse(
    root: PathType,
    filters: Union[FilterPipeline, Sequence[BaseFilter]],
    emit: Callable[[str], None],
    full_path: bool = False,
    permission_action: PermissionAction = PermissionAction.IGNORE,
    follow_symlinks: bool = False,
    max_workers: int = 1,
) -> None:
    """Walk ``root`` with ``filters`` and pass every accepted output path to ``emit``.

    A convenience wrapper around ``Walker(root, filters, ...).walk(emit)``.
    Returns normally when the walk completes or is aborted by a depth limit.

    Args:
        root: Directory to list.
        filters: Pipeline or filters in evaluation order.
        emit: Callback receiving each output path.
        full_path: Produce absolute output paths.
        permission_action: How to handle permission errors.
        follow_symlinks: Descend into symlinked directories.
        max_workers: Number of listing threads.

    Raises:
        Same as Walker.iter_paths().
    """
    walker = Walker(
        root,
        filters,
        full_path=full_path,
        permission_action=permission_action,
        follow_symlinks=follow_symlinks,
        max_workers=max_workers,
    )
    walker.walk(emit)
