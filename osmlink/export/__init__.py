"""Export of resolved track links into document formats."""

from .templates import substitute_ordered, substitute_named
from .renderer import FormatRenderer

__all__ = [
    "substitute_ordered",
    "substitute_named",
    "FormatRenderer",
]
