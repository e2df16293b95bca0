"""Artifact resolution: reuse an existing artifact or render it on demand."""

from pathlib import Path
from typing import Callable, Optional, Sequence

from osmlink.errors import RenderError
from osmlink.schemas.link import Coordinate
from osmlink.utils.logging_utils import get_logger

logger = get_logger(__name__)

# renderer(coordinates, target) -> path of the created artifact; raises RenderError
ArtifactRenderer = Callable[[Sequence[Coordinate], Path], Path]


class ArtifactResolver:
    """Guarantees an artifact file exists for a track.

    Existence is checked on every call rather than cached, since artifacts
    may be created or removed out of band. Two callers resolving the same
    missing artifact at once may both render it; that race is accepted.
    """

    def __init__(self, renderer: ArtifactRenderer, base_dir: Optional[Path] = None):
        """Initialize resolver.

        Args:
            renderer: Callable producing an artifact for (coordinates, target)
            base_dir: Directory relative filenames are anchored at
                (None = current working directory at call time)
        """
        self.renderer = renderer
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def target_path(self, filename: str | Path) -> Path:
        """Anchor a filename at the base directory."""
        path = Path(filename).expanduser()
        if path.is_absolute():
            return path
        return (self.base_dir or Path.cwd()) / path

    def resolve(self, coordinates: Sequence[Coordinate], filename: str | Path) -> Path:
        """Return the artifact path, rendering it if it does not exist yet.

        Args:
            coordinates: Ordered (latitude, longitude) pairs
            filename: Artifact filename

        Returns:
            Path to the existing or newly created artifact

        Raises:
            RenderError: If the renderer fails or reports a missing artifact
        """
        target = self.target_path(filename)

        if target.exists():
            logger.debug(f"Artifact already exists: {target}")
            return target

        logger.info(f"Rendering artifact: {target} ({len(coordinates)} points)")
        created = Path(self.renderer(coordinates, target))

        if not created.exists():
            raise RenderError(f"Renderer reported {created} but no artifact exists there")

        if created.suffix != target.suffix:
            raise RenderError(
                f"Renderer changed artifact extension: expected '{target.suffix}', got '{created.suffix}'"
            )

        # Keep the requested spelling when the renderer returns a normalized path
        if created != target and target.exists() and created.samefile(target):
            created = target

        logger.info(f"Created artifact: {created}")
        return created
