"""Test publishing artifacts with rewritten cache references."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

import osmlink.publish.rewriter as rewriter
from osmlink.conf.settings import Settings, override_settings, settings
from osmlink.publish.rewriter import (
    cache_uri_prefix,
    publish_artifact,
    relative_cache_prefix,
    rewrite,
)
from osmlink.schemas.link import PublishContext

SOURCE_BYTES = (
    b'<?xml version="1.0" encoding="UTF-8"?>\r\n'
    b'<svg xmlns="http://www.w3.org/2000/svg">\r\n'
    b'  <image xlink:href="file:///cache/OSM/15/1/2.png"/>\r\n'
    b'  <image xlink:href="file:///cache/OSM/15/1/3.png"/>\n'
    b'  <image xlink:href="file:///cache/OSM/15/2/2.png"/>\r'
    b'</svg>\n'
)


def test_every_occurrence_is_replaced_byte_for_byte(tmp_path):
    source = tmp_path / "src" / "FILE.svg"
    source.parent.mkdir()
    source.write_bytes(SOURCE_BYTES)
    target = tmp_path / "public" / "a" / "b" / "FILE.svg"

    written = rewrite(source, target, "file:///cache/OSM/", "../../cache/OSM/")

    assert written == target
    assert target.read_bytes() == SOURCE_BYTES.replace(b"file:///cache/OSM/", b"../../cache/OSM/")
    assert target.read_bytes().count(b"../../cache/OSM/") == 3
    assert source.read_bytes() == SOURCE_BYTES


def test_undecodable_bytes_survive(tmp_path):
    source = tmp_path / "FILE.svg"
    source.write_bytes(b"\xff\xfe file:///cache/OSM/x.png \x80")
    target = tmp_path / "out" / "FILE.svg"

    rewrite(source, target, "file:///cache/OSM/", "cache/")

    assert target.read_bytes() == b"\xff\xfe cache/x.png \x80"


def test_relative_cache_prefix(tmp_path):
    target = tmp_path / "site" / "a" / "b" / "FILE.svg"
    cache = tmp_path / "site" / "cache" / "OSM"

    assert relative_cache_prefix(target, cache) == "../../cache/OSM/"


def test_cache_uri_prefix(tmp_path):
    cache = tmp_path / "cache" / "OSM"
    assert cache_uri_prefix(cache) == cache.resolve().as_uri() + "/"


def test_publish_artifact(tmp_path):
    default_cache = tmp_path / "home" / ".cache" / "OSM"
    source = tmp_path / "doc" / "FILE.svg"
    source.parent.mkdir()
    source.write_text(f'<image xlink:href="{cache_uri_prefix(default_cache)}15/1/2.png"/>\n')

    context = PublishContext(
        source_artifact_path=source,
        publish_directory=tmp_path / "site" / "docs" / "tracks",
        cache_directory=tmp_path / "site" / "cache" / "OSM",
    )
    published = publish_artifact(context, default_cache_dir=default_cache)

    assert published == tmp_path / "site" / "docs" / "tracks" / "FILE.svg"
    assert published.read_text() == '<image xlink:href="../../cache/OSM/15/1/2.png"/>\n'


def test_other_cache_path_is_left_untouched(tmp_path):
    source = tmp_path / "FILE.svg"
    source.write_text('<image xlink:href="file:///somewhere/else/15/1/2.png"/>')

    context = PublishContext(
        source_artifact_path=source,
        publish_directory=tmp_path / "site",
        cache_directory=tmp_path / "cache",
    )
    published = publish_artifact(context, default_cache_dir=tmp_path / "default-cache")

    assert published.read_text() == source.read_text()


def test_target_must_differ_from_source(tmp_path):
    source = tmp_path / "FILE.svg"
    source.write_text("file:///cache/OSM/")

    with pytest.raises(ValueError):
        rewrite(source, source, "file:///cache/OSM/", "cache/")

    assert source.read_text() == "file:///cache/OSM/"


def test_newline_setting_suspended_during_rewrite(tmp_path, monkeypatch):
    seen = []
    original_read_text = rewriter.read_text

    def recording_read_text(path):
        seen.append(settings.normalize_newlines)
        return original_read_text(path)

    monkeypatch.setattr(rewriter, "read_text", recording_read_text)
    source = tmp_path / "FILE.svg"
    source.write_text("x")

    assert settings.normalize_newlines is True
    rewrite(source, tmp_path / "out.svg", "file:///cache/OSM/", "cache/")

    assert seen == [False]
    assert settings.normalize_newlines is True


def test_setting_restored_when_read_fails(tmp_path):
    assert settings.normalize_newlines is True

    with pytest.raises(FileNotFoundError):
        rewrite(tmp_path / "missing.svg", tmp_path / "out.svg", "file:///cache/OSM/", "cache/")

    assert settings.normalize_newlines is True
    assert not (tmp_path / "out.svg").exists()


def test_setting_restored_when_write_fails(tmp_path, monkeypatch):
    def failing_write_text(text, path):
        raise PermissionError(f"read-only: {path}")

    monkeypatch.setattr(rewriter, "write_text", failing_write_text)
    source = tmp_path / "FILE.svg"
    source.write_text("file:///cache/OSM/")

    with pytest.raises(PermissionError):
        rewrite(source, tmp_path / "out.svg", "file:///cache/OSM/", "cache/")

    assert settings.normalize_newlines is True


def test_override_settings_restores_previous_values():
    local = Settings(normalize_newlines=True, text_encoding="utf-8")

    with pytest.raises(RuntimeError):
        with override_settings(local, normalize_newlines=False, text_encoding="latin-1"):
            assert local.normalize_newlines is False
            raise RuntimeError("boom")

    assert local.normalize_newlines is True
    assert local.text_encoding == "utf-8"

    with pytest.raises(AttributeError):
        with override_settings(local, no_such_field=1):
            pass
