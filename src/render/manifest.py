"""Serialize an aggregate descriptor into the dependency manifest POM."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Iterable, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from coordinates.models import ArtifactCoordinate, PluginDescriptor, RepositoryDescriptor
from errors import RenderError

if TYPE_CHECKING:
    from aggregate.pipeline import AggregateDescriptor

logger = logging.getLogger(__name__)

_NS = "{" + Constants.POM_NAMESPACE + "}"

ET.register_namespace("", Constants.POM_NAMESPACE)
ET.register_namespace("xsi", Constants.XSI_NAMESPACE)


def _sub(parent: ET.Element, tag: str, text: Optional[str] = None) -> ET.Element:
    elem = ET.SubElement(parent, f"{_NS}{tag}")
    if text is not None:
        elem.text = text
    return elem


def _required(parent: ET.Element, tag: str, value: Optional[str]) -> ET.Element:
    if value is None:
        raise RenderError(f"Missing value for <{tag}>")
    return _sub(parent, tag, value)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _add_repositories(
    parent: ET.Element, section: str, entry: str, repositories: Iterable[RepositoryDescriptor]
) -> None:
    repositories = list(repositories)
    if not repositories:
        return
    container = _sub(parent, section)
    for repo in repositories:
        node = _sub(container, entry)
        _required(node, "id", repo.id)
        if repo.name is not None:
            _sub(node, "name", repo.name)
        _required(node, "url", repo.url)
        # Flags are only emitted when the source declared them.
        if repo.releases_enabled is not None:
            _sub(_sub(node, "releases"), "enabled", _flag(repo.releases_enabled))
        if repo.snapshots_enabled is not None:
            _sub(_sub(node, "snapshots"), "enabled", _flag(repo.snapshots_enabled))


def _add_dependencies(parent: ET.Element, dependencies: Iterable[ArtifactCoordinate]) -> None:
    dependencies = list(dependencies)
    if not dependencies:
        return
    container = _sub(parent, "dependencies")
    for dep in dependencies:
        # group/artifact/version is all a prefetch needs to pull pom + jar
        node = _sub(container, "dependency")
        _required(node, "groupId", dep.group)
        _required(node, "artifactId", dep.artifact)
        _required(node, "version", dep.version)


def _add_plugins(parent: ET.Element, plugins: Iterable[PluginDescriptor]) -> None:
    plugins = list(plugins)
    if not plugins:
        return
    container = _sub(_sub(parent, "build"), "plugins")
    for plugin in plugins:
        node = _sub(container, "plugin")
        _required(node, "groupId", plugin.group)
        _required(node, "artifactId", plugin.artifact)
        _required(node, "version", plugin.version)
        _add_dependencies(node, plugin.dependencies)


def build_manifest_tree(descriptor: "AggregateDescriptor") -> ET.Element:
    """Build the manifest element tree without serializing it."""
    project = descriptor.project
    root = ET.Element(
        f"{_NS}project",
        {"{" + Constants.XSI_NAMESPACE + "}schemaLocation": Constants.POM_SCHEMA_LOCATION},
    )
    _sub(root, "modelVersion", Constants.POM_MODEL_VERSION)
    _required(root, "groupId", project.group)
    _required(root, "artifactId", f"{project.artifact}{Constants.MANIFEST_ARTIFACT_SUFFIX}")
    _required(root, "version", project.version)
    _sub(root, "packaging", Constants.MANIFEST_PACKAGING)
    if project.name:
        _sub(root, "name", f"{project.name} dependencies")

    _add_repositories(root, "repositories", "repository", descriptor.repositories)
    _add_repositories(root, "pluginRepositories", "pluginRepository", descriptor.plugin_repositories)
    _add_dependencies(root, descriptor.dependencies)
    _add_plugins(root, descriptor.plugins)
    return root


def render_manifest(descriptor: "AggregateDescriptor") -> str:
    """Render the manifest document as text.

    Raises:
        RenderError: when the descriptor holds values that cannot be serialized.
    """
    try:
        root = build_manifest_tree(descriptor)
        ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode")
    except (TypeError, ValueError, AttributeError) as exc:
        raise RenderError(f"Unable to render manifest for {descriptor.project}: {exc}") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "Manifest rendered",
            extra=extra_context(
                event="function_exit",
                component="renderer",
                action="render_manifest",
                outcome="success",
                size=len(body),
            ),
        )
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
