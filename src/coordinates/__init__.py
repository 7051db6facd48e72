"""Coordinate value types and parsing."""

from .models import (
    ArtifactCoordinate,
    ModuleRecord,
    PluginDescriptor,
    ProjectIdentity,
    RepositoryDescriptor,
)
from .parser import parse_coordinate, parse_coordinates

__all__ = [
    "ArtifactCoordinate",
    "ModuleRecord",
    "PluginDescriptor",
    "ProjectIdentity",
    "RepositoryDescriptor",
    "parse_coordinate",
    "parse_coordinates",
]
