"""Raw pom.xml reader.

Only the sections relevant to dependency aggregation are extracted. Values
are returned exactly as written; inheritance and ``${...}`` interpolation
happen in ``reactor.tree``.
"""
from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from coordinates.models import RepositoryDescriptor
from errors import ProjectReadError

logger = logging.getLogger(__name__)


@dataclass
class RawDependency:
    """A ``<dependency>`` entry before version management and interpolation."""

    group: Optional[str]
    artifact: Optional[str]
    version: Optional[str] = None
    type: Optional[str] = None
    classifier: Optional[str] = None
    scope: Optional[str] = None


@dataclass
class RawPlugin:
    """A ``<plugin>`` entry; group may be omitted in the POM."""

    group: Optional[str]
    artifact: Optional[str]
    version: Optional[str] = None
    dependencies: List[RawDependency] = field(default_factory=list)


@dataclass
class ParentRef:
    group: Optional[str]
    artifact: Optional[str]
    version: Optional[str]
    relative_path: str = Constants.DEFAULT_PARENT_RELATIVE_PATH


@dataclass
class PomDescriptor:  # pylint: disable=too-many-instance-attributes
    """Declarations of a single pom.xml, as written."""

    path: str
    group: Optional[str]
    artifact: Optional[str]
    version: Optional[str]
    name: Optional[str] = None
    parent: Optional[ParentRef] = None
    properties: Dict[str, str] = field(default_factory=dict)
    modules: List[str] = field(default_factory=list)
    repositories: List[RepositoryDescriptor] = field(default_factory=list)
    plugin_repositories: List[RepositoryDescriptor] = field(default_factory=list)
    dependencies: List[RawDependency] = field(default_factory=list)
    managed_dependencies: List[RawDependency] = field(default_factory=list)
    plugins: List[RawPlugin] = field(default_factory=list)
    managed_plugins: List[RawPlugin] = field(default_factory=list)

    @property
    def basedir(self) -> str:
        return os.path.dirname(self.path)

    @property
    def effective_group(self) -> Optional[str]:
        if self.group is None and self.parent is not None:
            return self.parent.group
        return self.group

    @property
    def effective_version(self) -> Optional[str]:
        if self.version is None and self.parent is not None:
            return self.parent.version
        return self.version

    def __str__(self) -> str:
        return f"{self.effective_group}:{self.artifact}:{self.effective_version} ({self.path})"


class _Reader:
    """Namespace-aware child lookups for one document."""

    def __init__(self, root: ET.Element):
        # POMs are normally namespaced, but bare <project> files exist too.
        self.ns = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""

    def child(self, elem: Optional[ET.Element], *path: str) -> Optional[ET.Element]:
        for tag in path:
            if elem is None:
                return None
            elem = elem.find(f"{self.ns}{tag}")
        return elem

    def children(self, elem: Optional[ET.Element], *path: str) -> List[ET.Element]:
        if not path or elem is None:
            return []
        container = self.child(elem, *path[:-1]) if len(path) > 1 else elem
        if container is None:
            return []
        return container.findall(f"{self.ns}{path[-1]}")

    def text(self, elem: Optional[ET.Element], *path: str) -> Optional[str]:
        node = self.child(elem, *path)
        if node is None or node.text is None:
            return None
        value = node.text.strip()
        return value or None

    def flag(self, elem: Optional[ET.Element], *path: str) -> Optional[bool]:
        value = self.text(elem, *path)
        if value is None:
            return None
        return value.lower() == "true"

    def dependency(self, elem: ET.Element) -> RawDependency:
        return RawDependency(
            group=self.text(elem, "groupId"),
            artifact=self.text(elem, "artifactId"),
            version=self.text(elem, "version"),
            type=self.text(elem, "type"),
            classifier=self.text(elem, "classifier"),
            scope=self.text(elem, "scope"),
        )

    def plugin(self, elem: ET.Element) -> RawPlugin:
        return RawPlugin(
            group=self.text(elem, "groupId"),
            artifact=self.text(elem, "artifactId"),
            version=self.text(elem, "version"),
            dependencies=[self.dependency(d) for d in self.children(elem, "dependencies", "dependency")],
        )

    def repository(self, elem: ET.Element) -> Optional[RepositoryDescriptor]:
        repo_id = self.text(elem, "id")
        url = self.text(elem, "url")
        if repo_id is None or url is None:
            return None
        return RepositoryDescriptor(
            id=repo_id,
            url=url,
            name=self.text(elem, "name"),
            releases_enabled=self.flag(elem, "releases", "enabled"),
            snapshots_enabled=self.flag(elem, "snapshots", "enabled"),
        )

    def repositories(self, root: ET.Element, section: str, entry: str) -> List[RepositoryDescriptor]:
        found = []
        for elem in self.children(root, section, entry):
            repo = self.repository(elem)
            if repo is None:
                logger.warning("Skipping <%s> without id or url", entry)
                continue
            found.append(repo)
        return found


def resolve_pom_path(path: str) -> str:
    """Map a directory to its pom.xml; return an absolute, normalized path."""
    path = os.path.abspath(path)
    if os.path.isdir(path):
        path = os.path.join(path, Constants.POM_XML_FILE)
    return os.path.normpath(path)


def read_pom(path: str) -> PomDescriptor:
    """Parse one pom.xml (or the pom.xml inside a directory).

    Raises:
        ProjectReadError: when the file is missing or is not well-formed XML.
    """
    pom_path = resolve_pom_path(path)
    try:
        root = ET.parse(pom_path).getroot()
    except FileNotFoundError as exc:
        raise ProjectReadError(pom_path, "file not found") from exc
    except (OSError, ET.ParseError) as exc:
        raise ProjectReadError(pom_path, str(exc)) from exc

    r = _Reader(root)
    parent = None
    parent_elem = r.child(root, "parent")
    if parent_elem is not None:
        relative = r.child(parent_elem, "relativePath")
        parent = ParentRef(
            group=r.text(parent_elem, "groupId"),
            artifact=r.text(parent_elem, "artifactId"),
            version=r.text(parent_elem, "version"),
            # An empty <relativePath/> disables local lookup.
            relative_path=(
                Constants.DEFAULT_PARENT_RELATIVE_PATH
                if relative is None
                else (relative.text or "").strip()
            ),
        )

    properties: Dict[str, str] = {}
    props_elem = r.child(root, "properties")
    if props_elem is not None:
        for prop in props_elem:
            if not isinstance(prop.tag, str):
                continue
            key = prop.tag[len(r.ns):] if prop.tag.startswith(r.ns) else prop.tag
            properties[key] = (prop.text or "").strip()

    pom = PomDescriptor(
        path=pom_path,
        group=r.text(root, "groupId"),
        artifact=r.text(root, "artifactId"),
        version=r.text(root, "version"),
        name=r.text(root, "name"),
        parent=parent,
        properties=properties,
        modules=[m.text.strip() for m in r.children(root, "modules", "module") if m.text and m.text.strip()],
        repositories=r.repositories(root, "repositories", "repository"),
        plugin_repositories=r.repositories(root, "pluginRepositories", "pluginRepository"),
        dependencies=[r.dependency(d) for d in r.children(root, "dependencies", "dependency")],
        managed_dependencies=[
            r.dependency(d) for d in r.children(root, "dependencyManagement", "dependencies", "dependency")
        ],
        plugins=[r.plugin(p) for p in r.children(root, "build", "plugins", "plugin")],
        managed_plugins=[
            r.plugin(p) for p in r.children(root, "build", "pluginManagement", "plugins", "plugin")
        ],
    )

    if is_debug_enabled(logger):
        logger.debug(
            "Parsed POM",
            extra=extra_context(
                event="function_exit",
                component="pom_reader",
                action="read_pom",
                target=pom_path,
                dependencies=len(pom.dependencies),
                plugins=len(pom.plugins),
                child_modules=len(pom.modules),
            ),
        )
    return pom
