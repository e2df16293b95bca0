"""Rewrite absolute tile-cache references in published artifact copies.

Rendered artifacts reference background tiles through an absolute
``file://`` URI of the default cache directory. A published copy gets that
prefix replaced by a path relative to its new location, so the copy keeps
working when the publish tree is moved together with the cache.
"""

import os
from pathlib import Path
from typing import Optional

from osmlink.conf.settings import override_settings, settings
from osmlink.schemas.link import PublishContext
from osmlink.utils.io_utils import path_to_uri_prefix, read_text, write_text
from osmlink.utils.logging_utils import get_logger

logger = get_logger(__name__)


def cache_uri_prefix(cache_dir: str | Path) -> str:
    """``file://`` prefix under which artifacts reference the cache directory."""
    return path_to_uri_prefix(cache_dir)


def relative_cache_prefix(publish_target: str | Path, cache_dir: str | Path) -> str:
    """Path from the publish target's directory to the cache directory.

    Args:
        publish_target: Published artifact path
        cache_dir: Cache directory the copy should reference

    Returns:
        Relative path with a trailing '/', e.g. '../../cache/OSM/'
    """
    target_dir = os.path.abspath(Path(publish_target).expanduser().parent)
    cache = os.path.abspath(Path(cache_dir).expanduser())
    relative = Path(os.path.relpath(cache, target_dir)).as_posix()
    return relative if relative.endswith("/") else relative + "/"


def rewrite(
    source_file: str | Path,
    publish_target: str | Path,
    old_absolute_prefix: str,
    new_relative_prefix: str,
) -> Path:
    """Copy a file, replacing every occurrence of a prefix.

    The contents are handled as opaque text: newline normalisation is
    suspended for the read and write, so apart from the replaced prefixes
    the copy is byte-identical to the source. The source is never written.

    Args:
        source_file: Artifact to copy
        publish_target: Destination path
        old_absolute_prefix: Literal prefix to replace
        new_relative_prefix: Replacement

    Returns:
        Path of the written copy

    Raises:
        ValueError: If the target is the source file or the prefix is empty
        OSError: If reading or writing fails
    """
    source_file = Path(source_file)
    publish_target = Path(publish_target)

    if not old_absolute_prefix:
        raise ValueError("Prefix to replace must not be empty")

    if publish_target.exists() and publish_target.resolve() == source_file.resolve():
        raise ValueError(f"Publish target is the source file: {source_file}")

    with override_settings(normalize_newlines=False):
        text = read_text(source_file)
        occurrences = text.count(old_absolute_prefix)
        write_text(text.replace(old_absolute_prefix, new_relative_prefix), publish_target)

    if occurrences:
        logger.info(
            f"Published {publish_target}: rewrote {occurrences} reference(s) "
            f"'{old_absolute_prefix}' -> '{new_relative_prefix}'"
        )
    else:
        logger.debug(f"Published {publish_target}: no '{old_absolute_prefix}' references found")

    return publish_target


def publish_artifact(
    context: PublishContext,
    default_cache_dir: Optional[str | Path] = None,
) -> Path:
    """Publish one artifact into the publish directory.

    Only references to the default cache directory (as embedded by the
    renderer) are rewritten; a different cache path inside the artifact is
    left untouched.

    Args:
        context: Source artifact, publish directory and cache directory
        default_cache_dir: Cache directory the renderer embedded
            (defaults to settings.cache_dir)

    Returns:
        Path of the published copy
    """
    default_cache_dir = default_cache_dir or settings.cache_dir
    target = Path(context.publish_directory) / Path(context.source_artifact_path).name

    return rewrite(
        context.source_artifact_path,
        target,
        cache_uri_prefix(default_cache_dir),
        relative_cache_prefix(target, context.cache_directory),
    )
