"""
Storage module for the Short URL service (in-memory implementation).

Responsibilities:
    - Assign sequential ids (0, 1, 2, ...) to submitted URLs
    - Resolve ids back to the stored URL
    - Stay consistent under concurrent request handlers

Design:
    - The next id is the current size of the map, computed and used under the
      write lock, so concurrent inserts can never share or skip an id.
    - Lookups take the read lock, so redirects run in parallel with each other.
    - Lock scope is the dict operation only; nothing else happens while held.
    - One instance per app (see `create_app`), never a module-level singleton,
      so every test gets a fresh store.

LLM Prompt Example:
    "Explain how deriving the id from the map size under an exclusive lock
     gives gap-free, duplicate-free ids without a separate counter."
"""

from typing import Dict, List, Optional

from .base import BaseStore, Entry
from .lock import ReadWriteLock


class MemoryStore(BaseStore):
    def __init__(self, lock: Optional[ReadWriteLock] = None):
        """
        Initialize an empty store.

        Internal schema:
            self._urls = {id: original_url}
        """
        self._urls: Dict[int, str] = {}
        self._lock = lock or ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    def insert(self, url: str) -> int:
        """
        Store `url` under the next id.

        Returns:
            int: The assigned id (equal to the store size before the insert).
        """
        with self._lock.write_locked():
            entry_id = len(self._urls)
            self._urls[entry_id] = url
        return entry_id

    def lookup(self, entry_id: int) -> Optional[str]:
        """
        Return the URL for `entry_id`, or None if unknown.

        LLM Prompt Example:
            "Discuss why a read/write lock beats a plain mutex for a
             redirect-heavy workload."
        """
        with self._lock.read_locked():
            return self._urls.get(entry_id)

    def entries(self) -> List[Entry]:
        with self._lock.read_locked():
            items = sorted(self._urls.items())
        return [Entry(id=i, original_url=u) for i, u in items]

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._urls)
