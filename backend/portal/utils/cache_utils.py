import json
import logging
from hashlib import md5
from typing import Any, Callable, Iterable, Mapping, Optional

from django.core.cache import cache

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


def _version_key(tag: str) -> str:
    return f"tag:cache-version:{tag}"


def get_tag_version(tag: str) -> int:
    """Return the current cache version for a tag."""
    key = _version_key(tag)
    version = cache.get(key)
    if version is None:
        cache.set(key, 1, timeout=None)
        version = 1
    return int(version)


def bump_tag_version(tag: str) -> None:
    """Increment a tag's version so every key built from it goes stale."""
    key = _version_key(tag)
    try:
        cache.incr(key)
    except ValueError:
        cache.set(key, 2, timeout=None)


def build_cache_key(prefix: str, tags: Iterable[str], params: Optional[Mapping[str, Any]] = None) -> str:
    """Generate a stable cache key from the tag versions and query params."""
    versions = [f"{tag}@{get_tag_version(tag)}" for tag in sorted(set(tags))]
    serialized = sorted((params or {}).items())
    digest = md5(json.dumps([versions, serialized], default=str).encode('utf-8')).hexdigest()
    return f"{prefix}:{digest}"


def cached_query(prefix: str, tags: Iterable[str], loader: Callable[[], Any],
                 params: Optional[Mapping[str, Any]] = None, timeout: int = DEFAULT_TIMEOUT) -> Any:
    """Return ``loader()`` through the cache, keyed by tag versions."""
    tags = list(tags)
    key = build_cache_key(prefix, tags, params)
    value = cache.get(key)
    if value is None:
        value = loader()
        cache.set(key, value, timeout=timeout)
    return value
