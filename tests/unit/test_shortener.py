"""
Unit tests for ShortUrlManager.

Covers:
    - prefix validation gate (accept/reject, store untouched on reject)
    - validation disabled accepts any string
    - shorten returns the created Entry
    - resolve (found & not found)
"""

import pytest

from shorturl.manager.shortener import InvalidURLError, ShortUrlManager
from shorturl.storage.base import Entry


def test_shorten_returns_entry(manager):
    entry = manager.shorten("https://example.com")
    assert entry == Entry(id=0, original_url="https://example.com")


def test_shorten_sequential_ids(manager):
    ids = [manager.shorten(f"http://site{i}.example").id for i in range(10)]
    assert ids == list(range(10))


@pytest.mark.parametrize("url", ["not-a-url", "", "ftp://example.com", " http://x", "HTTP://upper.example"])
def test_invalid_url_rejected_without_touching_store(manager, store, url):
    with pytest.raises(InvalidURLError) as exc:
        manager.shorten(url)
    assert str(exc.value) == "invalid url"
    assert exc.value.url == url
    assert len(store) == 0


def test_prefix_check_is_literal(manager):
    """Anything starting with "http" passes, even without a scheme separator."""
    assert manager.shorten("httpfoo").id == 0


def test_rejection_does_not_consume_id(manager):
    manager.shorten("https://a.example")
    with pytest.raises(InvalidURLError):
        manager.shorten("nope")
    assert manager.shorten("https://b.example").id == 1


def test_invalid_url_error_is_value_error():
    assert issubclass(InvalidURLError, ValueError)


def test_validation_disabled_accepts_anything(store):
    manager = ShortUrlManager(store=store, validate_urls=False)
    assert manager.shorten("not-a-url").id == 0
    assert manager.shorten("").id == 1
    assert store.lookup(0) == "not-a-url"


def test_resolve_round_trip(manager):
    entry = manager.shorten("https://example.com/page?x=1")
    assert manager.resolve(entry.id) == "https://example.com/page?x=1"


def test_resolve_unknown_returns_none(manager):
    assert manager.resolve(0) is None
    manager.shorten("https://example.com")
    assert manager.resolve(1) is None
