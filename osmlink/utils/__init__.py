"""Utility modules for track link processing."""

from .logging_utils import setup_logger, get_logger
from .io_utils import (
    ensure_dir,
    read_text,
    write_text,
    path_to_uri_prefix,
)

__all__ = [
    # Logging
    "setup_logger",
    "get_logger",
    # IO
    "ensure_dir",
    "read_text",
    "write_text",
    "path_to_uri_prefix",
]
