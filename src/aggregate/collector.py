"""Flatten per-module declarations into single intermediate sequences."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from coordinates.models import (
    ArtifactCoordinate,
    ModuleRecord,
    PluginDescriptor,
    RepositoryDescriptor,
)
from coordinates.parser import parse_coordinates

from .dedup import distinct_by_key

logger = logging.getLogger(__name__)


@dataclass
class CollectedDeclarations:
    """Raw flattened sequences, not yet filtered, deduplicated or sorted."""

    repositories: List[RepositoryDescriptor]
    plugin_repositories: List[RepositoryDescriptor]
    plugins: List[PluginDescriptor]
    dependencies: List[ArtifactCoordinate]


def collect(
    modules: Sequence[ModuleRecord], additional_artifacts: Iterable[str] = ()
) -> CollectedDeclarations:
    """Concatenate every module's declarations in module order.

    Dependencies are the module-level ones first, then the ones declared by
    each distinct build plugin, then the parsed additional artifacts. A
    plugin repeated in a later module adds no dependencies of its own; only
    the first-seen declaration contributes.

    Raises:
        CoordinateParseError: when an additional artifact is malformed.
    """
    # Parse first so a malformed entry aborts before any work is reported.
    extra = parse_coordinates(additional_artifacts)

    repositories = [repo for module in modules for repo in module.repositories]
    plugin_repositories = [repo for module in modules for repo in module.plugin_repositories]
    plugins = [plugin for module in modules for plugin in module.plugins]

    dependencies = [dep for module in modules for dep in module.dependencies]
    distinct_plugins = distinct_by_key(plugins, PluginDescriptor.identity_key)
    dependencies.extend(dep for plugin in distinct_plugins for dep in plugin.dependencies)
    dependencies.extend(extra)

    if is_debug_enabled(logger):
        logger.debug(
            "Collected module declarations",
            extra=extra_context(
                event="function_exit",
                component="collector",
                action="collect",
                modules=len(modules),
                repositories=len(repositories),
                plugin_repositories=len(plugin_repositories),
                plugins=len(plugins),
                dependencies=len(dependencies),
                additional_artifacts=len(extra),
            ),
        )

    return CollectedDeclarations(
        repositories=repositories,
        plugin_repositories=plugin_repositories,
        plugins=plugins,
        dependencies=dependencies,
    )
