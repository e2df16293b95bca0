"""Track link engine: parse, resolve, and render links per context."""

import webbrowser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

from osmlink.conf.export_config import load_export_config
from osmlink.conf.settings import Settings, settings as global_settings
from osmlink.export.renderer import FormatRenderer
from osmlink.links.artifacts import ArtifactRenderer, ArtifactResolver
from osmlink.links.parser import parse_link
from osmlink.links.paths import PathResolver
from osmlink.publish.rewriter import publish_artifact
from osmlink.render.svg_renderer import SvgTrackRenderer
from osmlink.schemas.link import ExportFormat, PathContext, PublishContext, RenderTemplates
from osmlink.utils.logging_utils import get_logger

logger = get_logger(__name__)

Viewer = Callable[[str], None]


def open_in_browser(path: str) -> None:
    """Default viewer: open the artifact with the system browser."""
    logger.info(f"Opening {path}")
    webbrowser.open(Path(path).as_uri())


@dataclass
class EngineConfig:
    """Explicit engine configuration."""

    templates: RenderTemplates = field(default_factory=RenderTemplates)
    renderer: Optional[ArtifactRenderer] = None
    viewer: Viewer = open_in_browser
    extension: str = field(default_factory=lambda: global_settings.image_extension)
    cache_dir: Optional[Path] = None  # Cache directory the renderer embeds

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        config: Optional[Dict] = None,
    ) -> "EngineConfig":
        """Build the default configuration.

        Args:
            settings: Settings instance (defaults to the global one)
            config: Export config as returned by load_export_config

        Returns:
            EngineConfig with the SVG renderer and browser viewer
        """
        settings = settings or global_settings
        config = config or load_export_config(settings=settings)

        renderer_options = {
            key: value
            for key, value in config['renderer'].items()
            if value is not None and key in Settings.model_fields
        }
        render_settings = settings.model_copy(update=renderer_options)

        return cls(
            templates=RenderTemplates(
                hypertext=config['templates']['html'],
                typesetting_macro=config['templates']['latex'],
            ),
            renderer=SvgTrackRenderer(render_settings),
            viewer=open_in_browser,
            extension=settings.image_extension,
            cache_dir=Path(render_settings.cache_dir).expanduser(),
        )


class TrackLinkEngine:
    """Resolves track links for interactive viewing, export and publishing.

    Both follow and export go through the same ArtifactResolver, so the
    render-on-demand logic lives in one place.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig.from_settings()
        # The default renderer embeds the same cache directory publish rewrites
        self.renderer = self.config.renderer or SvgTrackRenderer(cache_dir=self.config.cache_dir)
        self.formatter = FormatRenderer(self.config.templates)

    def follow(self, raw_path: str, base_dir: Optional[Path] = None) -> Path:
        """Open the artifact of a link in the viewer, rendering it first if needed.

        Args:
            raw_path: Link path
            base_dir: Directory relative filenames are anchored at

        Returns:
            Canonical artifact path passed to the viewer
        """
        link = parse_link(raw_path, extension=self.config.extension)
        artifact = ArtifactResolver(self.renderer, base_dir).resolve(
            link.coordinates, link.filename
        )
        path = PathResolver(base_dir).resolve_path(artifact, PathContext.INTERACTIVE)

        self.config.viewer(path)
        return Path(path)

    def export(
        self,
        raw_path: str,
        fmt: ExportFormat,
        document_dir: Path,
        description: Optional[str] = None,
    ) -> str:
        """Export a link for a document format.

        Any failure propagates before a string is produced.

        Args:
            raw_path: Link path
            fmt: Target export format
            document_dir: Directory of the exported document
            description: Link description (None = relative artifact path)

        Returns:
            Rendered string for the format
        """
        fmt = ExportFormat(fmt)
        link = parse_link(raw_path, description=description, extension=self.config.extension)
        artifact = ArtifactResolver(self.renderer, document_dir).resolve(
            link.coordinates, link.filename
        )
        paths = PathResolver(document_dir).resolve_all(artifact)

        output = self.formatter.render(fmt, paths, link.description)
        logger.debug(f"Exported {link.filename} as {fmt.value}")
        return output

    def publish(
        self,
        source: Path,
        publish_dir: Path,
        cache_dir: Optional[Path] = None,
    ) -> Path:
        """Publish an artifact with its cache references made relative.

        Args:
            source: Artifact to publish
            publish_dir: Destination directory
            cache_dir: Cache directory the copy should reference
                (defaults to the engine's cache directory)

        Returns:
            Path of the published copy
        """
        default_cache = self.config.cache_dir or Path(global_settings.cache_dir).expanduser()
        context = PublishContext(
            source_artifact_path=source,
            publish_directory=publish_dir,
            cache_directory=cache_dir or default_cache,
        )
        return publish_artifact(context, default_cache_dir=default_cache)
