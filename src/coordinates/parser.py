"""Coordinate string parsing."""

from typing import Iterable, List

from constants import Constants
from errors import CoordinateParseError

from .models import ArtifactCoordinate


def parse_coordinate(coords: str) -> ArtifactCoordinate:
    """Parse ``group:artifact:version[:type[:classifier]]`` into a coordinate.

    Segments map positionally. Three to five non-empty segments are
    accepted; the type defaults to ``jar``. Parsed coordinates carry the
    ``compile`` scope.

    Raises:
        CoordinateParseError: on a wrong segment count or an empty segment.
    """
    parts = coords.strip().split(":")
    if not 3 <= len(parts) <= 5 or any(not part.strip() for part in parts):
        raise CoordinateParseError(coords)
    parts = [part.strip() for part in parts]

    return ArtifactCoordinate(
        group=parts[0],
        artifact=parts[1],
        version=parts[2],
        type=parts[3] if len(parts) > 3 else Constants.DEFAULT_TYPE,
        classifier=parts[4] if len(parts) > 4 else None,
        scope=Constants.ADDITIONAL_ARTIFACT_SCOPE,
    )


def parse_coordinates(values: Iterable[str]) -> List[ArtifactCoordinate]:
    """Parse every string; the first malformed one aborts the whole batch."""
    return [parse_coordinate(value) for value in values]
