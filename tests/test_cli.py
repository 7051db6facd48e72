"""Tests for the finddeps command line entry point."""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET

import pytest

from constants import ExitCodes
from finddeps import main

NS = {"m": "http://maven.apache.org/POM/4.0.0"}

ROOT_POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.acme</groupId>
  <artifactId>root</artifactId>
  <version>1.0</version>
  <packaging>pom</packaging>
  <modules>
    <module>a</module>
    <module>b</module>
    <module>c</module>
  </modules>
  <repositories>
    <repository>
      <id>corp</id>
      <url>https://repo.corp.example/maven</url>
    </repository>
  </repositories>
</project>
"""


def _module(artifact, body):
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <parent>
    <groupId>com.acme</groupId>
    <artifactId>root</artifactId>
    <version>1.0</version>
  </parent>
  <artifactId>{artifact}</artifactId>
  {body}
</project>
"""


def _dependency(group, artifact, version):
    return (
        f"<dependency><groupId>{group}</groupId><artifactId>{artifact}</artifactId>"
        f"<version>{version}</version></dependency>"
    )


def _write(path, content):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def project_dir(tmp_path):
    _write(str(tmp_path / "pom.xml"), ROOT_POM)
    _write(str(tmp_path / "a" / "pom.xml"), _module(
        "a", f"<dependencies>{_dependency('org.lib', 'foo', '1.0')}</dependencies>"))
    _write(str(tmp_path / "b" / "pom.xml"), _module(
        "b",
        "<dependencies>"
        f"{_dependency('org.lib', 'foo', '1.0')}{_dependency('com.acme', 'sibling', '1.0')}"
        "</dependencies>",
    ))
    _write(str(tmp_path / "c" / "pom.xml"), _module(
        "c",
        "<build><plugins><plugin><groupId>org.plugin</groupId><artifactId>p</artifactId>"
        f"<version>2.0</version><dependencies>{_dependency('org.lib', 'bar', '3.0')}</dependencies>"
        "</plugin></plugins></build>",
    ))
    return tmp_path


def _dependency_coords(path):
    root = ET.parse(str(path)).getroot()
    return [
        ":".join(d.findtext(f"m:{tag}", namespaces=NS) for tag in ("groupId", "artifactId", "version"))
        for d in root.findall("m:dependencies/m:dependency", NS)
    ]


def test_generates_manifest_for_top_level(project_dir):
    rc = main(["-d", str(project_dir), "-a", "org.extra:baz:4.0:pom"])

    assert rc == ExitCodes.SUCCESS.value
    manifest = project_dir / "pom-dependencies.xml"
    assert _dependency_coords(manifest) == ["org.extra:baz:4.0", "org.lib:bar:3.0", "org.lib:foo:1.0"]

    root = ET.parse(str(manifest)).getroot()
    assert [r.findtext("m:id", namespaces=NS) for r in root.findall("m:repositories/m:repository", NS)] == [
        "central", "corp",
    ]
    assert [p.findtext("m:artifactId", namespaces=NS) for p in root.findall("m:build/m:plugins/m:plugin", NS)] == ["p"]


def test_child_module_is_skipped(project_dir):
    rc = main(["-d", str(project_dir / "a")])
    assert rc == ExitCodes.SUCCESS.value
    assert not (project_dir / "pom-dependencies.xml").exists()
    assert not (project_dir / "a" / "pom-dependencies.xml").exists()


def test_repository_flags_and_output_path(project_dir, tmp_path):
    out = tmp_path / "custom.xml"
    rc = main([
        "-d", str(project_dir),
        "-o", str(out),
        "--exclude-repo-id", "central",
        "--no-super-pom",
        "--include-repo-url", "https://repo.corp.example/maven",
    ])
    assert rc == ExitCodes.SUCCESS.value
    root = ET.parse(str(out)).getroot()
    assert [r.findtext("m:id", namespaces=NS) for r in root.findall("m:repositories/m:repository", NS)] == ["corp"]
    assert root.find("m:pluginRepositories", NS) is None


def test_config_file(project_dir, tmp_path):
    config = tmp_path / "finddeps.yml"
    config.write_text(
        "finddeps:\n"
        "  excluded_repo_ids: [corp]\n"
        "  additional_artifacts:\n"
        "    - org.extra:baz:4.0\n",
        encoding="utf-8",
    )
    rc = main(["-d", str(project_dir), "-c", str(config)])
    assert rc == ExitCodes.SUCCESS.value
    manifest = project_dir / "pom-dependencies.xml"
    assert "org.extra:baz:4.0" in _dependency_coords(manifest)
    assert "corp" not in manifest.read_text(encoding="utf-8")


def test_bad_additional_artifact_exit_code(project_dir):
    previous = project_dir / "pom-dependencies.xml"
    previous.write_text("previous", encoding="utf-8")

    rc = main(["-d", str(project_dir), "-a", "org.bad:coords"])

    assert rc == ExitCodes.CONFIG_ERROR.value
    assert previous.read_text(encoding="utf-8") == "previous"


def test_missing_project_exit_code(tmp_path):
    assert main(["-d", str(tmp_path / "nowhere")]) == ExitCodes.FILE_ERROR.value


def test_missing_config_exit_code(project_dir):
    assert main(["-d", str(project_dir), "-c", str(project_dir / "absent.yml")]) == ExitCodes.FILE_ERROR.value


def test_unwritable_output_exit_code(project_dir):
    out = project_dir / "no-such-dir" / "out.xml"
    assert main(["-d", str(project_dir), "-o", str(out)]) == ExitCodes.FILE_ERROR.value


def test_logfile_receives_counts(project_dir, tmp_path):
    log_file = tmp_path / "run.log"
    assert main(["-d", str(project_dir), "--logfile", str(log_file)]) == ExitCodes.SUCCESS.value
    for handler in logging.getLogger().handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "Dependencies count: 3" in text
    assert "Plugins count: 1" in text
