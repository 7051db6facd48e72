"""Deterministic orderings for every output collection.

Python compares ``str`` by code point, so the orderings below do not
depend on locale settings.
"""

from __future__ import annotations

from typing import Iterable, List

from coordinates.models import ArtifactCoordinate, PluginDescriptor, RepositoryDescriptor


def sort_dependencies(dependencies: Iterable[ArtifactCoordinate]) -> List[ArtifactCoordinate]:
    """Order by (group, artifact, version, type, classifier); no classifier first."""
    return sorted(dependencies, key=ArtifactCoordinate.sort_key)


def sort_plugins(plugins: Iterable[PluginDescriptor]) -> List[PluginDescriptor]:
    return sorted(plugins, key=PluginDescriptor.sort_key)


def sort_repositories(repositories: Iterable[RepositoryDescriptor]) -> List[RepositoryDescriptor]:
    """Order by (id, url).

    ``sorted`` is stable, so entries sharing id and URL but differing in
    name or flags keep their collection order.
    """
    return sorted(repositories, key=RepositoryDescriptor.sort_key)
