"""
ShortUrlManager module for the Short URL service.

Responsibilities:
    - Apply the submission gate (URL must start with "http" when enabled)
    - Hand accepted URLs to the store and return the created Entry
    - Resolve ids back to their original URL

Design notes:
    - Storage is an injected dependency; the manager never touches the lock.
    - Rejections raise InvalidURLError before the store is touched, so a
      rejected submission never consumes an id.
    - URLs are stored verbatim: no normalization, quoting or trimming.
"""

import logging
from typing import Optional

from ..storage.base import BaseStore, Entry

log = logging.getLogger("shorturl.manager")

URL_PREFIX = "http"


class InvalidURLError(ValueError):
    """Raised when a submitted URL fails the prefix check."""

    def __init__(self, url: str):
        super().__init__("invalid url")
        self.url = url


class ShortUrlManager:
    """Coordinates shortening and resolution on top of a store."""

    def __init__(self, store: BaseStore, validate_urls: bool = True):
        """
        Args:
            store (BaseStore): Backend store instance.
            validate_urls (bool): Reject URLs that do not start with "http".
        """
        self.store = store
        self.validate_urls = validate_urls

    def _validate_url(self, url: str) -> None:
        """
        Raises:
            InvalidURLError: If validation is on and `url` lacks the prefix.
        """
        if self.validate_urls and not url.startswith(URL_PREFIX):
            raise InvalidURLError(url)

    def shorten(self, url: str) -> Entry:
        """
        Store `url` under the next sequential id.

        Returns:
            Entry: The new entry (id and the URL as given).

        Raises:
            InvalidURLError: On a rejected submission; the store is unchanged.
        """
        self._validate_url(url)
        entry_id = self.store.insert(url)
        log.info("Shortened id=%d url=%s", entry_id, url)
        return Entry(id=entry_id, original_url=url)

    def resolve(self, entry_id: int) -> Optional[str]:
        """Return the original URL for `entry_id`, or None if it was never assigned."""
        url = self.store.lookup(entry_id)
        if url is None:
            log.debug("Unknown id=%d", entry_id)
        return url
