"""Inclusion/exclusion policy for repositories and in-tree dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence

from coordinates.models import ArtifactCoordinate, ProjectIdentity, RepositoryDescriptor


@dataclass(frozen=True)
class RepositoryFilter:
    """Allow-list and deny-list composition over repository id and URL.

    Empty include sets allow everything on their axis. Exclude sets always
    subtract, whatever the include sets hold.
    """

    include_ids: FrozenSet[str] = field(default_factory=frozenset)
    include_urls: FrozenSet[str] = field(default_factory=frozenset)
    exclude_ids: FrozenSet[str] = field(default_factory=frozenset)
    exclude_urls: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_lists(
        cls,
        include_ids: Iterable[str] = (),
        include_urls: Iterable[str] = (),
        exclude_ids: Iterable[str] = (),
        exclude_urls: Iterable[str] = (),
    ) -> "RepositoryFilter":
        return cls(
            include_ids=frozenset(include_ids),
            include_urls=frozenset(include_urls),
            exclude_ids=frozenset(exclude_ids),
            exclude_urls=frozenset(exclude_urls),
        )

    def accepts(self, repo: RepositoryDescriptor) -> bool:
        if self.include_ids and repo.id not in self.include_ids:
            return False
        if self.include_urls and repo.url not in self.include_urls:
            return False
        if repo.id in self.exclude_ids:
            return False
        return repo.url not in self.exclude_urls

    def apply(self, repositories: Sequence[RepositoryDescriptor]) -> List[RepositoryDescriptor]:
        """Return the accepted repositories in input order."""
        return [repo for repo in repositories if self.accepts(repo)]


def is_self_reference(dependency: ArtifactCoordinate, project: ProjectIdentity) -> bool:
    """True when the dependency points at a module of the same project tree."""
    return dependency.group == project.group


def exclude_self_references(
    dependencies: Sequence[ArtifactCoordinate], project: ProjectIdentity
) -> List[ArtifactCoordinate]:
    return [dep for dep in dependencies if not is_self_reference(dep, project)]
