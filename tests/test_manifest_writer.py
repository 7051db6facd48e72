"""Tests for the atomic manifest writer."""
import os
import stat

import pytest

from errors import ManifestWriteError
from render import writer
from render.writer import write_manifest


def test_writes_new_file(tmp_path):
    target = tmp_path / "pom-dependencies.xml"
    assert write_manifest(str(target), "<project/>\n") == str(target)
    assert target.read_text(encoding="utf-8") == "<project/>\n"


def test_overwrites_previous_manifest(tmp_path):
    target = tmp_path / "pom-dependencies.xml"
    target.write_text("old", encoding="utf-8")
    write_manifest(str(target), "new")
    assert target.read_text(encoding="utf-8") == "new"
    assert os.listdir(tmp_path) == ["pom-dependencies.xml"]


def test_missing_directory_raises(tmp_path):
    target = tmp_path / "missing" / "pom-dependencies.xml"
    with pytest.raises(ManifestWriteError) as exc_info:
        write_manifest(str(target), "content")
    assert exc_info.value.path == str(target)
    assert not (tmp_path / "missing").exists()


def test_failed_replace_keeps_previous_file(tmp_path, monkeypatch):
    target = tmp_path / "pom-dependencies.xml"
    target.write_text("previous", encoding="utf-8")

    def failing_replace(src, dst):
        raise PermissionError("denied")

    monkeypatch.setattr(writer.os, "replace", failing_replace)

    with pytest.raises(ManifestWriteError):
        write_manifest(str(target), "replacement")

    assert target.read_text(encoding="utf-8") == "previous"
    assert os.listdir(tmp_path) == ["pom-dependencies.xml"]


def test_replacement_keeps_previous_mode(tmp_path):
    target = tmp_path / "pom-dependencies.xml"
    target.write_text("old", encoding="utf-8")
    os.chmod(target, 0o640)

    write_manifest(str(target), "<project/>")

    assert stat.S_IMODE(os.stat(target).st_mode) == 0o640
    assert target.read_text(encoding="utf-8") == "<project/>"


def test_new_file_follows_umask(tmp_path):
    target = tmp_path / "pom-dependencies.xml"
    previous = os.umask(0o022)
    try:
        write_manifest(str(target), "<project/>")
    finally:
        os.umask(previous)

    assert stat.S_IMODE(os.stat(target).st_mode) == 0o644
