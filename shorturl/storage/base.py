"""
Base storage interface for the Short URL service.

Purpose:
    Define a small, stable contract for the id -> URL store so the manager
    and the HTTP layer never depend on how entries are kept.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Entry:
    """One stored shortened URL: sequential id plus the URL exactly as submitted."""
    id: int
    original_url: str


class BaseStore(ABC):
    """Abstract base class for store backends."""

    @abstractmethod  # pragma: no cover
    def insert(self, url: str) -> int:
        """
        Store `url` under the next sequential id and return that id.

        The id equals the store size before the insert, so ids are always
        0..N-1 with no gaps. Implementations must make this atomic.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def lookup(self, entry_id: int) -> Optional[str]:
        """
        Return the URL stored under `entry_id`, or None if it was never assigned.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def entries(self) -> List[Entry]:
        """Return a snapshot of all entries ordered by id."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def __len__(self) -> int:
        raise NotImplementedError
