"""Exception hierarchy shared by the aggregation pipeline and its collaborators."""

from __future__ import annotations


class FindDepsError(Exception):
    """Base class for every failure that aborts a manifest generation run."""


class CoordinateParseError(FindDepsError, ValueError):
    """The coordinate string being passed is invalid or malformed."""

    def __init__(self, coords: str) -> None:
        super().__init__(f"Unable to parse artifact coordinates: {coords}")
        self.coords = coords


class ConfigError(FindDepsError):
    """A configuration value has the wrong shape."""


class ProjectReadError(FindDepsError):
    """A module descriptor could not be located or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to read project descriptor {path}: {reason}")
        self.path = path


class RenderError(FindDepsError):
    """The manifest could not be serialized from the aggregated data."""


class ManifestWriteError(FindDepsError):
    """The manifest could not be written to its target location."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to write manifest {path}: {reason}")
        self.path = path
