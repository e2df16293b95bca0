"""Configuration settings for track link resolution and export."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global osmlink settings."""

    model_config = SettingsConfigDict(
        env_prefix="OSMLINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    # Links
    link_type: str = "track"
    image_extension: str = ".svg"

    # Tile cache (read only, tiles are never downloaded)
    cache_dir: str = str(Path.home() / ".cache" / "osmlink" / "OSM")
    tile_zoom: int = 15
    tile_size_px: int = 256

    # SVG canvas
    canvas_width_px: int = 800
    canvas_height_px: int = 600
    canvas_padding: float = 0.05  # Fraction of canvas kept free on each side
    stroke_color: str = "#d62728"
    stroke_width_px: float = 3.0
    marker_radius_px: float = 5.0

    # Export templates
    html_template: str = '<a href="%s" target="_blank">%s</a>'
    latex_template: str = "\\href{file://%F}{%d}"

    # Text IO
    text_encoding: str = "utf-8"
    normalize_newlines: bool = True  # Translate CRLF/CR to LF when reading text

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    logs_path: str = "logs"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Global settings instance
settings = Settings()


@contextmanager
def override_settings(target: Settings = None, **values) -> Iterator[Settings]:
    """Temporarily override settings fields.

    Previous values are restored on every exit path, including when the
    body raises.

    Args:
        target: Settings instance to modify (defaults to the global instance)
        **values: Field name/value pairs to apply

    Yields:
        The modified settings instance
    """
    target = target if target is not None else settings

    unknown = [name for name in values if not hasattr(target, name)]
    if unknown:
        raise AttributeError(f"Unknown settings field(s): {', '.join(unknown)}")

    previous = {name: getattr(target, name) for name in values}
    try:
        for name, value in values.items():
            setattr(target, name, value)
        yield target
    finally:
        for name, value in previous.items():
            setattr(target, name, value)
