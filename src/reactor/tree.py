"""Project tree navigation and effective module records.

``ProjectTree`` loads pom.xml files on demand, resolves parents through
``<relativePath>``, discovers reactor modules and turns each POM into the
``ModuleRecord`` snapshot consumed by the aggregation pipeline.
"""
from __future__ import annotations

import logging
import os
import re
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from coordinates.models import (
    ArtifactCoordinate,
    ModuleRecord,
    PluginDescriptor,
    ProjectIdentity,
    RepositoryDescriptor,
)
from errors import ProjectReadError

from .pom import PomDescriptor, RawDependency, RawPlugin, read_pom, resolve_pom_path

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EXPRESSION = re.compile(r"\$\{([^}]+)\}")

CENTRAL_REPOSITORY = RepositoryDescriptor(
    id=Constants.CENTRAL_REPO_ID,
    url=Constants.CENTRAL_REPO_URL,
    name=Constants.CENTRAL_REPO_NAME,
    snapshots_enabled=False,
)


def find_top_level(
    module: T, parent_of: Callable[[T], Optional[T]], max_depth: int = Constants.MAX_PARENT_DEPTH
) -> T:
    """Follow parent links until a module has no resolvable parent.

    Raises:
        ProjectReadError: when the chain is longer than ``max_depth``, which
            only happens for cyclic parent declarations.
    """
    current = module
    for _ in range(max_depth):
        parent = parent_of(current)
        if parent is None:
            return current
        current = parent
    raise ProjectReadError(str(module), f"parent chain exceeds {max_depth} levels")


def interpolate(value: Optional[str], properties: Dict[str, str]) -> Optional[str]:
    """Substitute known ``${...}`` expressions; unknown ones stay verbatim."""
    if value is None or "${" not in value:
        return value
    for _ in range(Constants.MAX_INTERPOLATION_PASSES):
        expanded = _EXPRESSION.sub(lambda m: properties.get(m.group(1), m.group(0)), value)
        if expanded == value:
            break
        value = expanded
    return value


def _dependency_key(dep: RawDependency) -> Tuple[Optional[str], Optional[str], str, Optional[str]]:
    return (dep.group, dep.artifact, dep.type or Constants.DEFAULT_TYPE, dep.classifier)


class ProjectTree:
    """Loads and caches the POMs of one project tree."""

    def __init__(self, include_super_pom: bool = True):
        self.include_super_pom = include_super_pom
        self._poms: Dict[str, PomDescriptor] = {}

    def load(self, path: str) -> PomDescriptor:
        """Read the POM at ``path`` (file or directory) once and cache it."""
        pom_path = resolve_pom_path(path)
        pom = self._poms.get(pom_path)
        if pom is None:
            pom = read_pom(pom_path)
            self._poms[pom_path] = pom
        return pom

    def parent_of(self, pom: PomDescriptor) -> Optional[PomDescriptor]:
        """Return the local parent POM, or None when it cannot be resolved.

        A parent resolves only if ``relativePath`` names an existing file
        whose groupId and artifactId match the ``<parent>`` declaration once
        both are interpolated with that file's own properties.
        """
        ref = pom.parent
        if ref is None or not ref.relative_path:
            return None
        candidate = resolve_pom_path(os.path.join(pom.basedir, ref.relative_path))
        if not os.path.isfile(candidate):
            return None
        parent = self.load(candidate)
        parent_props = self.properties(parent, [parent])
        declared = (interpolate(ref.group, parent_props), interpolate(ref.artifact, parent_props))
        found = (interpolate(parent.effective_group, parent_props), interpolate(parent.artifact, parent_props))
        if declared != found:
            if is_debug_enabled(logger):
                logger.debug(
                    "Parent reference does not match relativePath target",
                    extra=extra_context(
                        event="decision",
                        component="project_tree",
                        action="parent_of",
                        outcome="mismatch",
                        target=candidate,
                    ),
                )
            return None
        return parent

    def lineage(self, pom: PomDescriptor) -> List[PomDescriptor]:
        """The POM followed by its resolvable ancestors, nearest first."""
        chain = [pom]
        current = pom
        while True:
            parent = self.parent_of(current)
            if parent is None:
                return chain
            if any(parent is seen for seen in chain):
                raise ProjectReadError(pom.path, "cyclic parent declaration")
            chain.append(parent)
            current = parent

    def top_level(self, pom: PomDescriptor) -> PomDescriptor:
        return find_top_level(pom, self.parent_of)

    def reactor(self, root: PomDescriptor) -> List[PomDescriptor]:
        """Collect ``root`` and its ``<modules>``, depth-first, parents first.

        Raises:
            ProjectReadError: when a declared module has no POM.
        """
        ordered: List[PomDescriptor] = []
        visited = set()

        def visit(pom: PomDescriptor) -> None:
            if pom.path in visited:
                return
            visited.add(pom.path)
            ordered.append(pom)
            for module in pom.modules:
                visit(self.load(os.path.join(pom.basedir, module)))

        visit(root)
        return ordered

    def properties(self, pom: PomDescriptor, lineage: List[PomDescriptor]) -> Dict[str, str]:
        """Merged user properties plus the ``project.*`` built-ins."""
        props: Dict[str, str] = {}
        for ancestor in reversed(lineage):
            props.update(ancestor.properties)

        builtins = {
            "groupId": pom.effective_group,
            "artifactId": pom.artifact,
            "version": pom.effective_version,
            "name": pom.name,
            "basedir": pom.basedir,
        }
        if pom.parent is not None:
            builtins.update({
                "parent.groupId": pom.parent.group,
                "parent.artifactId": pom.parent.artifact,
                "parent.version": pom.parent.version,
            })
        for key, value in builtins.items():
            if value is None:
                continue
            props[f"project.{key}"] = value
            props[f"pom.{key}"] = value
        props["basedir"] = pom.basedir
        return props

    def identity(self, pom: PomDescriptor) -> ProjectIdentity:
        props = self.properties(pom, self.lineage(pom))
        return self._identity(pom, props)

    def _identity(self, pom: PomDescriptor, props: Dict[str, str]) -> ProjectIdentity:
        group = interpolate(pom.effective_group, props)
        artifact = interpolate(pom.artifact, props)
        version = interpolate(pom.effective_version, props)
        if group is None or artifact is None or version is None:
            raise ProjectReadError(pom.path, "groupId, artifactId and version must be known")
        return ProjectIdentity(group=group, artifact=artifact, version=version, name=interpolate(pom.name, props))

    def effective(self, pom: PomDescriptor) -> ModuleRecord:
        """Build the module snapshot: inherited, managed and interpolated."""
        lineage = self.lineage(pom)
        props = self.properties(pom, lineage)

        def expand(value: Optional[str]) -> Optional[str]:
            return interpolate(value, props)

        managed_versions: Dict[Tuple[Optional[str], Optional[str], str, Optional[str]], str] = {}
        managed_plugins: Dict[Tuple[str, Optional[str]], RawPlugin] = {}
        for ancestor in reversed(lineage):
            for dep in ancestor.managed_dependencies:
                expanded = RawDependency(
                    group=expand(dep.group),
                    artifact=expand(dep.artifact),
                    type=expand(dep.type),
                    classifier=expand(dep.classifier),
                )
                if dep.version is not None:
                    managed_versions[_dependency_key(expanded)] = expand(dep.version)
            for plugin in ancestor.managed_plugins:
                managed_plugins[(expand(plugin.group) or Constants.DEFAULT_PLUGIN_GROUP, expand(plugin.artifact))] = plugin

        def coordinate(dep: RawDependency, managed: bool) -> Optional[ArtifactCoordinate]:
            raw = RawDependency(
                group=expand(dep.group),
                artifact=expand(dep.artifact),
                version=expand(dep.version),
                type=expand(dep.type),
                classifier=expand(dep.classifier),
                scope=expand(dep.scope),
            )
            if raw.version is None and managed:
                raw.version = managed_versions.get(_dependency_key(raw))
            if raw.group is None or raw.artifact is None or raw.version is None:
                logger.warning(
                    "Skipping dependency %s:%s in %s: incomplete coordinates",
                    raw.group, raw.artifact, pom.path,
                )
                return None
            return ArtifactCoordinate(
                group=raw.group,
                artifact=raw.artifact,
                version=raw.version,
                type=raw.type or Constants.DEFAULT_TYPE,
                classifier=raw.classifier,
                scope=raw.scope,
            )

        def plugin_descriptor(plugin: RawPlugin) -> Optional[PluginDescriptor]:
            group = expand(plugin.group) or Constants.DEFAULT_PLUGIN_GROUP
            artifact = expand(plugin.artifact)
            managed = managed_plugins.get((group, artifact))
            version = expand(plugin.version)
            raw_deps = list(plugin.dependencies)
            if managed is not None:
                if version is None:
                    version = expand(managed.version)
                declared = {(d.group, d.artifact) for d in raw_deps}
                raw_deps.extend(d for d in managed.dependencies if (d.group, d.artifact) not in declared)
            if artifact is None or version is None:
                logger.warning("Skipping plugin %s:%s in %s: version unknown", group, artifact, pom.path)
                return None
            deps = tuple(c for c in (coordinate(d, managed=False) for d in raw_deps) if c is not None)
            return PluginDescriptor(group=group, artifact=artifact, version=version, dependencies=deps)

        def repositories(attr: str) -> Tuple[RepositoryDescriptor, ...]:
            merged: List[RepositoryDescriptor] = []
            seen_ids = set()
            for ancestor in lineage:
                for repo in getattr(ancestor, attr):
                    repo_id = expand(repo.id)
                    if repo_id in seen_ids:
                        continue
                    seen_ids.add(repo_id)
                    merged.append(RepositoryDescriptor(
                        id=repo_id,
                        url=expand(repo.url),
                        name=expand(repo.name),
                        releases_enabled=repo.releases_enabled,
                        snapshots_enabled=repo.snapshots_enabled,
                    ))
            if self.include_super_pom and Constants.CENTRAL_REPO_ID not in seen_ids:
                merged.append(CENTRAL_REPOSITORY)
            return tuple(merged)

        dependencies = [
            c for ancestor in lineage for c in (coordinate(d, managed=True) for d in ancestor.dependencies)
            if c is not None
        ]
        plugins = [
            p for ancestor in lineage for p in (plugin_descriptor(pl) for pl in ancestor.plugins)
            if p is not None
        ]

        record = ModuleRecord(
            identity=self._identity(pom, props),
            repositories=repositories("repositories"),
            plugin_repositories=repositories("plugin_repositories"),
            dependencies=tuple(dependencies),
            plugins=tuple(plugins),
            basedir=pom.basedir,
        )
        if is_debug_enabled(logger):
            logger.debug(
                "Built module record",
                extra=extra_context(
                    event="function_exit",
                    component="project_tree",
                    action="effective",
                    target=pom.path,
                    ancestors=len(lineage) - 1,
                    dependencies=len(record.dependencies),
                    plugins=len(record.plugins),
                ),
            )
        return record
