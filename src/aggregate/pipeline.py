"""Aggregation pipeline driver.

Runs collection, repository policy, self-reference exclusion,
deduplication and ordering over a snapshot of module records, then hands
the result to the manifest renderer and writer.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from coordinates.models import (
    ArtifactCoordinate,
    ModuleRecord,
    PluginDescriptor,
    ProjectIdentity,
    RepositoryDescriptor,
)
from render.manifest import render_manifest
from render.writer import write_manifest

from .collector import collect
from .dedup import Deduplicator
from .ordering import sort_dependencies, sort_plugins, sort_repositories
from .policy import RepositoryFilter, exclude_self_references

logger = logging.getLogger(__name__)


@dataclass
class AggregationConfig:
    """User-tunable inputs of a run; every list defaults to empty."""

    include_only_repo_ids: List[str] = field(default_factory=list)
    include_only_repo_urls: List[str] = field(default_factory=list)
    excluded_repo_ids: List[str] = field(default_factory=list)
    excluded_repo_urls: List[str] = field(default_factory=list)
    additional_artifacts: List[str] = field(default_factory=list)

    def repository_filter(self) -> RepositoryFilter:
        return RepositoryFilter.from_lists(
            include_ids=self.include_only_repo_ids,
            include_urls=self.include_only_repo_urls,
            exclude_ids=self.excluded_repo_ids,
            exclude_urls=self.excluded_repo_urls,
        )


@dataclass
class AggregateDescriptor:
    """Final, filtered, deduplicated and sorted collections."""

    project: ProjectIdentity
    repositories: List[RepositoryDescriptor]
    plugin_repositories: List[RepositoryDescriptor]
    dependencies: List[ArtifactCoordinate]
    plugins: List[PluginDescriptor]


def aggregate(
    modules: Sequence[ModuleRecord],
    project: ProjectIdentity,
    config: Optional[AggregationConfig] = None,
) -> AggregateDescriptor:
    """Flatten, filter, deduplicate and sort the declarations of ``modules``.

    Args:
        modules: Module records in reactor order.
        project: Identity of the top-level project.
        config: Repository policy and additional artifacts.

    Returns:
        AggregateDescriptor with the four final collections.

    Raises:
        CoordinateParseError: when an additional artifact is malformed.
    """
    config = config or AggregationConfig()
    collected = collect(modules, config.additional_artifacts)
    repo_filter = config.repository_filter()

    repositories = Deduplicator(RepositoryDescriptor.identity_key).apply(
        repo_filter.apply(collected.repositories)
    )
    plugin_repositories = Deduplicator(RepositoryDescriptor.identity_key).apply(
        repo_filter.apply(collected.plugin_repositories)
    )
    plugins = Deduplicator(PluginDescriptor.identity_key).apply(collected.plugins)
    dependencies = Deduplicator(ArtifactCoordinate.identity_key).apply(
        exclude_self_references(collected.dependencies, project)
    )

    if is_debug_enabled(logger):
        logger.debug(
            "Aggregated declarations",
            extra=extra_context(
                event="decision",
                component="pipeline",
                action="aggregate",
                dropped_repositories=len(collected.repositories) - len(repositories),
                dropped_plugin_repositories=len(collected.plugin_repositories) - len(plugin_repositories),
                dropped_plugins=len(collected.plugins) - len(plugins),
                dropped_dependencies=len(collected.dependencies) - len(dependencies),
            ),
        )

    return AggregateDescriptor(
        project=project,
        repositories=sort_repositories(repositories),
        plugin_repositories=sort_repositories(plugin_repositories),
        dependencies=sort_dependencies(dependencies),
        plugins=sort_plugins(plugins),
    )


def is_top_level(current: ModuleRecord, top_level: ModuleRecord) -> bool:
    """True when ``current`` is the module the manifest should be produced for."""
    return current.identity == top_level.identity and current.basedir == top_level.basedir


def manifest_path(top_level: ModuleRecord) -> str:
    return os.path.join(top_level.basedir or os.curdir, Constants.MANIFEST_FILE)


def generate(
    current: ModuleRecord,
    top_level: ModuleRecord,
    modules: Sequence[ModuleRecord],
    config: Optional[AggregationConfig] = None,
    output_path: Optional[str] = None,
) -> Optional[str]:
    """Produce the aggregate manifest when ``current`` is the top-level module.

    Args:
        current: Module the tool was invoked for.
        top_level: Top-level module of the tree ``current`` belongs to.
        modules: Every module of the reactor, in reactor order.
        config: Repository policy and additional artifacts.
        output_path: Explicit target; defaults to the top-level base directory.

    Returns:
        Path of the written manifest, or None when ``current`` is not top-level.
    """
    if not is_top_level(current, top_level):
        logger.info("Not a top-level project - skipping.")
        return None

    with Timer() as timer:
        descriptor = aggregate(modules, top_level.identity, config)
        document = render_manifest(descriptor)
        target = output_path or manifest_path(top_level)
        write_manifest(target, document)

    logger.info("Dependencies POM file: %s", target)
    logger.info("Repositories count: %d", len(descriptor.repositories))
    logger.info("Plugin Repositories count: %d", len(descriptor.plugin_repositories))
    logger.info("Dependencies count: %d", len(descriptor.dependencies))
    logger.info("Plugins count: %d", len(descriptor.plugins))
    if is_debug_enabled(logger):
        logger.debug(
            "Manifest generated",
            extra=extra_context(
                event="function_exit",
                component="pipeline",
                action="generate",
                outcome="success",
                duration_ms=timer.duration_ms(),
            ),
        )
    return target
