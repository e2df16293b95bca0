"""Context-specific artifact paths."""

import os
from pathlib import Path
from typing import Optional

from osmlink.schemas.link import PathContext, ResolvedPaths


class PathResolver:
    """Computes the path to use for an artifact in a given context.

    Paths never require the artifact to exist.
    """

    def __init__(self, document_dir: Optional[Path] = None):
        """Initialize resolver.

        Args:
            document_dir: Directory of the document being exported
                (None = current working directory at call time)
        """
        self.document_dir = Path(document_dir) if document_dir is not None else None

    def _document_dir(self) -> Path:
        return Path(os.path.abspath((self.document_dir or Path.cwd()).expanduser()))

    def resolve_path(self, artifact_path: str | Path, context: PathContext) -> str:
        """Resolve an artifact path for a context.

        Args:
            artifact_path: Artifact path (relative paths are taken from the
                document directory)
            context: Where the path will be used

        Returns:
            Path string for the context
        """
        path = Path(artifact_path).expanduser()
        if not path.is_absolute():
            path = self._document_dir() / path

        if context == PathContext.INTERACTIVE:
            return str(path.resolve())
        elif context == PathContext.EXPORT_ABSOLUTE:
            return os.path.abspath(path)
        elif context == PathContext.EXPORT_RELATIVE:
            # Compare canonical paths so symlinked document directories give stable results
            return os.path.relpath(path.resolve(), self._document_dir().resolve())
        else:
            raise ValueError(f"Unsupported path context: {context}")

    def resolve_all(self, artifact_path: str | Path) -> ResolvedPaths:
        """Relative and absolute export paths for one artifact."""
        return ResolvedPaths(
            relative=self.resolve_path(artifact_path, PathContext.EXPORT_RELATIVE),
            absolute=self.resolve_path(artifact_path, PathContext.EXPORT_ABSOLUTE),
        )
