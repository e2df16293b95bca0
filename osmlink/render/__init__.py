"""Default track artifact renderer."""

from .svg_renderer import SvgTrackRenderer, project_web_mercator

__all__ = [
    'SvgTrackRenderer',
    'project_web_mercator',
]
