"""Format-specific rendering of resolved track links."""

from typing import Optional

from osmlink.schemas.link import ExportFormat, RenderTemplates, ResolvedPaths
from osmlink.utils.logging_utils import get_logger
from .templates import substitute_named, substitute_ordered

logger = get_logger(__name__)

# Named tokens of the typesetting macro template
RELATIVE_PATH_TOKEN = "%f"
ABSOLUTE_PATH_TOKEN = "%F"
DESCRIPTION_TOKEN = "%d"


class FormatRenderer:
    """Renders the output string for an export format."""

    def __init__(self, templates: Optional[RenderTemplates] = None):
        self.templates = templates or RenderTemplates()

    def render(
        self,
        fmt: ExportFormat,
        paths: ResolvedPaths,
        description: Optional[str] = None,
    ) -> str:
        """Render a resolved link for an export format.

        Args:
            fmt: Target format
            paths: Relative and absolute artifact paths
            description: Link description (None or empty = relative path)

        Returns:
            Rendered string
        """
        fmt = ExportFormat(fmt)
        if not description:
            description = paths.relative

        if fmt == ExportFormat.PLAIN:
            return paths.relative
        elif fmt == ExportFormat.HYPERTEXT:
            return substitute_ordered(self.templates.hypertext, [paths.relative, description])
        elif fmt == ExportFormat.TYPESETTING_MACRO:
            return substitute_named(
                self.templates.typesetting_macro,
                {
                    RELATIVE_PATH_TOKEN: paths.relative,
                    ABSOLUTE_PATH_TOKEN: paths.absolute,
                    DESCRIPTION_TOKEN: description,
                },
            )
        else:
            raise ValueError(f"Unsupported export format: {fmt}")
