"""Project graph provider backed by pom.xml files."""

from .pom import PomDescriptor, read_pom, resolve_pom_path
from .tree import CENTRAL_REPOSITORY, ProjectTree, find_top_level, interpolate

__all__ = [
    "CENTRAL_REPOSITORY",
    "PomDescriptor",
    "ProjectTree",
    "find_top_level",
    "interpolate",
    "read_pom",
    "resolve_pom_path",
]
