"""IO utilities for artifact files."""

from pathlib import Path

from osmlink.conf.settings import settings


def ensure_dir(path: str | Path) -> Path:
    """Ensure directory exists, create if needed.

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj


def read_text(file_path: str | Path) -> str:
    """Read a text file honouring the text IO settings.

    With ``settings.normalize_newlines`` enabled, CRLF and CR line endings
    come back as LF. Undecodable bytes are kept as surrogates so that
    write_text can restore them.

    Args:
        file_path: Path to file

    Returns:
        File contents
    """
    newline = None if settings.normalize_newlines else ""
    with open(
        file_path,
        "r",
        encoding=settings.text_encoding,
        errors="surrogateescape",
        newline=newline,
    ) as f:
        return f.read()


def write_text(text: str, file_path: str | Path) -> Path:
    """Write a text file honouring the text IO settings.

    Args:
        text: Contents to write
        file_path: Output file path

    Returns:
        Path written
    """
    path_obj = Path(file_path)
    ensure_dir(path_obj.parent)

    newline = None if settings.normalize_newlines else ""
    with open(
        path_obj,
        "w",
        encoding=settings.text_encoding,
        errors="surrogateescape",
        newline=newline,
    ) as f:
        f.write(text)

    return path_obj


def path_to_uri_prefix(directory: str | Path) -> str:
    """Build a ``file://`` URI prefix for a canonicalized directory.

    Args:
        directory: Directory path (``~`` is expanded)

    Returns:
        URI string ending with '/', e.g. 'file:///home/u/.cache/OSM/'
    """
    uri = Path(directory).expanduser().resolve().as_uri()
    return uri if uri.endswith("/") else uri + "/"
