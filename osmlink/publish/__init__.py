"""Publishing of artifacts with cache references rewritten."""

from .rewriter import (
    rewrite,
    publish_artifact,
    cache_uri_prefix,
    relative_cache_prefix,
)

__all__ = [
    "rewrite",
    "publish_artifact",
    "cache_uri_prefix",
    "relative_cache_prefix",
]
