"""SVG rendering of a track over locally cached map tiles."""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple
from xml.sax.saxutils import quoteattr

import numpy as np
from svgpathtools import Line, Path as SvgPath

from osmlink.conf.settings import Settings, settings as global_settings
from osmlink.errors import RenderError
from osmlink.schemas.link import Coordinate
from osmlink.utils.io_utils import path_to_uri_prefix, write_text
from osmlink.utils.logging_utils import get_logger

logger = get_logger(__name__)

MAX_MERCATOR_LAT = 85.05112878
MAX_TILES = 1024


def project_web_mercator(
    lats: np.ndarray,
    lons: np.ndarray,
    zoom: int,
    tile_size: int = 256
) -> Tuple[np.ndarray, np.ndarray]:
    """Project GPS coordinates to Web-Mercator world pixel coordinates.

    Args:
        lats: Latitude values in degrees
        lons: Longitude values in degrees
        zoom: Tile zoom level
        tile_size: Tile edge length in pixels

    Returns:
        (x, y) world pixel coordinates; y grows southwards
    """
    world_size = tile_size * 2 ** zoom
    lat_rad = np.radians(np.clip(lats, -MAX_MERCATOR_LAT, MAX_MERCATOR_LAT))

    x = (np.asarray(lons) + 180.0) / 360.0 * world_size
    y = (1.0 - np.log(np.tan(lat_rad) + 1.0 / np.cos(lat_rad)) / np.pi) / 2.0 * world_size

    return x, y


class SvgTrackRenderer:
    """Renders a track as an SVG polyline on top of cached OSM tiles.

    Tiles are looked up as ``<cache_dir>/<zoom>/<x>/<y>.png`` and referenced
    through absolute ``file://`` URIs; missing tiles are skipped, nothing is
    downloaded.
    """

    def __init__(self, settings: Optional[Settings] = None, cache_dir: Optional[Path] = None):
        """Initialize renderer.

        Args:
            settings: Canvas, stroke and tile settings
            cache_dir: Tile cache directory (defaults to settings.cache_dir)
        """
        self.settings = settings or global_settings
        self.cache_dir = Path(cache_dir or self.settings.cache_dir).expanduser()

    def __call__(self, coordinates: Sequence[Coordinate], filename: Path) -> Path:
        """Render the track to ``filename``.

        Returns:
            Canonical path of the written SVG

        Raises:
            RenderError: If the coordinates are unusable or the file cannot be written
        """
        try:
            svg = self.render_svg(coordinates)
            written = write_text(svg, filename)
        except (OSError, ValueError) as e:
            raise RenderError(f"Failed to render track to {filename}: {e}") from e

        return written.resolve()

    def _fit(self, x: np.ndarray, y: np.ndarray) -> Tuple[float, float, float]:
        """Scale and world-space origin that fit the track into the canvas.

        Returns:
            (scale, origin_x, origin_y) so that canvas = (world - origin) * scale
        """
        s = self.settings
        available_width = s.canvas_width_px * (1 - 2 * s.canvas_padding)
        available_height = s.canvas_height_px * (1 - 2 * s.canvas_padding)

        span_x = float(x.max() - x.min())
        span_y = float(y.max() - y.min())

        # Preserve aspect ratio, degenerate spans do not constrain the scale
        scales = []
        if span_x > 0:
            scales.append(available_width / span_x)
        if span_y > 0:
            scales.append(available_height / span_y)
        scale = min(scales) if scales else 1.0

        origin_x = float(x.min()) - (s.canvas_width_px - span_x * scale) / (2 * scale)
        origin_y = float(y.min()) - (s.canvas_height_px - span_y * scale) / (2 * scale)

        return scale, origin_x, origin_y

    def _tile_elements(self, scale: float, origin_x: float, origin_y: float) -> List[str]:
        """<image> elements for cached tiles covering the canvas."""
        s = self.settings
        tile = s.tile_size_px
        max_index = 2 ** s.tile_zoom - 1

        right = origin_x + s.canvas_width_px / scale
        bottom = origin_y + s.canvas_height_px / scale
        tx_range = range(max(0, int(origin_x // tile)), min(max_index, int(right // tile)) + 1)
        ty_range = range(max(0, int(origin_y // tile)), min(max_index, int(bottom // tile)) + 1)

        if len(tx_range) * len(ty_range) > MAX_TILES:
            logger.warning(
                f"Track spans {len(tx_range) * len(ty_range)} tiles at zoom {s.tile_zoom}, "
                f"skipping background"
            )
            return []

        if not self.cache_dir.is_dir():
            logger.debug(f"Tile cache not found: {self.cache_dir}")
            return []

        uri_prefix = path_to_uri_prefix(self.cache_dir)
        size = tile * scale
        elements = []

        for tx in tx_range:
            for ty in ty_range:
                relative = f"{s.tile_zoom}/{tx}/{ty}.png"
                if not (self.cache_dir / relative).exists():
                    continue
                elements.append(
                    f'  <image xlink:href={quoteattr(uri_prefix + relative)} '
                    f'x="{(tx * tile - origin_x) * scale:.2f}" y="{(ty * tile - origin_y) * scale:.2f}" '
                    f'width="{size:.2f}" height="{size:.2f}"/>'
                )

        logger.debug(f"Referenced {len(elements)} cached tiles")
        return elements

    def render_svg(self, coordinates: Sequence[Coordinate]) -> str:
        """Build the SVG document for a track.

        Args:
            coordinates: Ordered (latitude, longitude) pairs

        Returns:
            SVG document text
        """
        if len(coordinates) == 0:
            raise ValueError("No coordinates to render")

        s = self.settings
        points = np.asarray(coordinates, dtype=float)
        if points.ndim != 2 or points.shape[1] != 2 or not np.isfinite(points).all():
            raise ValueError("Coordinates must be finite (latitude, longitude) pairs")

        x, y = project_web_mercator(points[:, 0], points[:, 1], s.tile_zoom, s.tile_size_px)
        scale, origin_x, origin_y = self._fit(x, y)
        cx = (x - origin_x) * scale
        cy = (y - origin_y) * scale

        # Drop consecutive duplicates, zero-length segments carry no geometry
        canvas_points = [complex(px, py) for px, py in zip(cx, cy)]
        segments = [
            Line(start, end)
            for start, end in zip(canvas_points[:-1], canvas_points[1:])
            if abs(end - start) > 1e-9
        ]

        elements = self._tile_elements(scale, origin_x, origin_y)

        if segments:
            track = SvgPath(*segments)
            elements.append(
                f'  <path d={quoteattr(track.d())} fill="none" stroke={quoteattr(s.stroke_color)} '
                f'stroke-width="{s.stroke_width_px}" stroke-linejoin="round" stroke-linecap="round"/>'
            )
            logger.debug(f"Track path: {len(segments)} segments, {track.length():.1f}px")

        start, end = canvas_points[0], canvas_points[-1]
        elements.append(
            f'  <circle cx="{start.real:.2f}" cy="{start.imag:.2f}" r="{s.marker_radius_px}" '
            f'fill="#2ca02c"/>'
        )
        if len(canvas_points) > 1:
            elements.append(
                f'  <circle cx="{end.real:.2f}" cy="{end.imag:.2f}" r="{s.marker_radius_px}" '
                f'fill={quoteattr(s.stroke_color)}/>'
            )

        header = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
            f'width="{s.canvas_width_px}" height="{s.canvas_height_px}" '
            f'viewBox="0 0 {s.canvas_width_px} {s.canvas_height_px}">'
        )
        return "\n".join([header, *elements, "</svg>"]) + "\n"
