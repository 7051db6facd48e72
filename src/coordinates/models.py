"""Data models for build coordinates, repositories and module records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from constants import Constants


@dataclass(frozen=True)
class ArtifactCoordinate:
    """A single Maven-style coordinate for a library dependency.

    ``scope`` is carried for information only; it takes no part in identity
    or ordering because the aggregate manifest normalizes it away.
    """

    group: str
    artifact: str
    version: str
    type: str = Constants.DEFAULT_TYPE
    classifier: Optional[str] = None
    scope: Optional[str] = None

    def identity_key(self) -> Tuple[str, str, str, str, Optional[str]]:
        return (self.group, self.artifact, self.version, self.type, self.classifier)

    def sort_key(self) -> Tuple[str, str, str, str, bool, str]:
        # An absent classifier sorts before any present one, including "".
        return (
            self.group,
            self.artifact,
            self.version,
            self.type,
            self.classifier is not None,
            self.classifier or "",
        )

    def to_coord_str(self) -> str:
        """Render as ``group:artifact:version[:type[:classifier]]``.

        The type segment is dropped when it is the default and no classifier
        follows it, so the output parses back to an equal identity key.
        """
        coord = f"{self.group}:{self.artifact}:{self.version}"
        if self.classifier is not None:
            return f"{coord}:{self.type}:{self.classifier}"
        if self.type != Constants.DEFAULT_TYPE:
            return f"{coord}:{self.type}"
        return coord

    def __str__(self) -> str:
        return self.to_coord_str()


@dataclass(frozen=True)
class PluginDescriptor:
    """A build plugin together with the dependencies it declares for itself."""

    group: str
    artifact: str
    version: str
    dependencies: Tuple[ArtifactCoordinate, ...] = ()

    def identity_key(self) -> Tuple[str, str, str]:
        return (self.group, self.artifact, self.version)

    def sort_key(self) -> Tuple[str, str, str]:
        return self.identity_key()

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class RepositoryDescriptor:
    """An artifact source repository.

    Identity is the full structure: the same id bound to another URL in a
    different module is a different repository.
    """

    id: str
    url: str
    name: Optional[str] = None
    releases_enabled: Optional[bool] = None
    snapshots_enabled: Optional[bool] = None

    def identity_key(self) -> Tuple[str, str, Optional[str], Optional[bool], Optional[bool]]:
        return (self.id, self.url, self.name, self.releases_enabled, self.snapshots_enabled)

    def sort_key(self) -> Tuple[str, str]:
        return (self.id, self.url)


@dataclass(frozen=True)
class ProjectIdentity:
    """Identity of the top-level project of a reactor."""

    group: str
    artifact: str
    version: str
    name: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class ModuleRecord:
    """Snapshot of one module as reported by the project graph provider.

    Every sequence keeps the module's own declaration order.
    """

    identity: ProjectIdentity
    repositories: Tuple[RepositoryDescriptor, ...] = ()
    plugin_repositories: Tuple[RepositoryDescriptor, ...] = ()
    dependencies: Tuple[ArtifactCoordinate, ...] = ()
    plugins: Tuple[PluginDescriptor, ...] = ()
    basedir: Optional[str] = None
