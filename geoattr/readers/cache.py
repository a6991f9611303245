import os
import threading
from collections import OrderedDict
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from geoattr.errors import DatabaseOpenError
from geoattr.logger import logger
from geoattr.readers.base import BaseGeoReader

ReaderFactory = Callable[[str], BaseGeoReader]


class _Entry:
    __slots__ = ("version", "reader", "borrowers", "stale")

    def __init__(self, version: tuple[int, int], reader: BaseGeoReader) -> None:
        self.version = version
        self.reader = reader
        self.borrowers = 0
        self.stale = False


class ReaderCache:
    """Shares open readers between calls, keyed by database file.

    The key includes the file's modification time and size, so a database
    replaced on disk is reopened. Readers are lent out with `borrow`; a reader
    that was replaced or evicted is closed as soon as its last borrower returns
    it. At most `max_readers` idle readers are kept, least recently used first
    out. Readers are only read from while lent, so they can be shared between
    threads.
    """

    def __init__(self, reader_factory: ReaderFactory, max_readers: int = 8) -> None:
        self._reader_factory = reader_factory
        self._max_readers = max_readers
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, _Entry] = OrderedDict()

    @contextmanager
    def borrow(self, database_path: str) -> Iterator[BaseGeoReader]:
        entry = self._acquire(database_path)
        try:
            yield entry.reader
        finally:
            self._release(entry)

    def _acquire(self, database_path: str) -> _Entry:
        path = os.path.realpath(database_path)
        try:
            stat = os.stat(path)
        except OSError as exc:
            raise DatabaseOpenError(f"Database file not found: {database_path}") from exc
        version = (stat.st_mtime_ns, stat.st_size)

        with self._lock:
            entry = self._entries.get(path)
            if entry is not None and entry.version == version:
                self._entries.move_to_end(path)
                entry.borrowers += 1
                return entry

            fresh = _Entry(version, self._reader_factory(path))
            fresh.borrowers = 1
            if entry is not None:
                logger.info(f"Database changed on disk, reopened path={path}")
                self._retire(self._entries.pop(path))
            else:
                logger.debug(f"Opened cached database reader path={path}")
            self._entries[path] = fresh
            self._evict()
            return fresh

    def _release(self, entry: _Entry) -> None:
        with self._lock:
            entry.borrowers -= 1
            if entry.stale and entry.borrowers == 0:
                entry.reader.close()

    def _retire(self, entry: _Entry) -> None:
        # Caller holds the lock and has removed the entry from the map.
        entry.stale = True
        if entry.borrowers == 0:
            entry.reader.close()

    def _evict(self) -> None:
        idle = [path for path, entry in self._entries.items() if entry.borrowers == 0]
        while len(self._entries) > self._max_readers and idle:
            path = idle.pop(0)
            logger.debug(f"Evicted cached database reader path={path}")
            self._retire(self._entries.pop(path))

    def clear(self) -> None:
        """Close every cached reader; readers still lent out close when returned."""
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
            for entry in entries:
                self._retire(entry)

    def __len__(self) -> int:
        return len(self._entries)
