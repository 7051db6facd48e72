"""Tests for coordinate string parsing and coordinate keys."""
import pytest

from coordinates.models import ArtifactCoordinate, PluginDescriptor, RepositoryDescriptor
from coordinates.parser import parse_coordinate, parse_coordinates
from errors import CoordinateParseError


def test_three_segments_default_type():
    coord = parse_coordinate("g:a:1.0")
    assert (coord.group, coord.artifact, coord.version) == ("g", "a", "1.0")
    assert coord.type == "jar"
    assert coord.classifier is None
    assert coord.scope == "compile"


def test_four_segments_sets_type():
    coord = parse_coordinate("g:a:1.0:pom")
    assert coord.type == "pom"
    assert coord.classifier is None


def test_five_segments_sets_classifier():
    coord = parse_coordinate("g:a:1.0:jar:sources")
    assert coord.type == "jar"
    assert coord.classifier == "sources"


@pytest.mark.parametrize("raw", ["g:a", "g", "", "g:a:1.0:jar:sources:extra", "g::1.0", "g:a:1.0:"])
def test_malformed_strings_raise(raw):
    with pytest.raises(CoordinateParseError) as exc_info:
        parse_coordinate(raw)
    assert raw in str(exc_info.value)
    assert exc_info.value.coords == raw


def test_surrounding_whitespace_is_ignored():
    assert parse_coordinate("  g:a:1.0 ").identity_key() == ("g", "a", "1.0", "jar", None)


def test_parse_coordinates_aborts_on_first_bad_entry():
    with pytest.raises(CoordinateParseError) as exc_info:
        parse_coordinates(["g:a:1.0", "broken", "x:y:z:w:v:u"])
    assert exc_info.value.coords == "broken"


def test_identity_key_ignores_scope():
    compile_dep = ArtifactCoordinate("g", "a", "1.0", scope="compile")
    test_dep = ArtifactCoordinate("g", "a", "1.0", scope="test")
    assert compile_dep.identity_key() == test_dep.identity_key()
    assert compile_dep != test_dep


def test_to_coord_str_parses_back_to_same_identity():
    for coord in (
        ArtifactCoordinate("g", "a", "1.0"),
        ArtifactCoordinate("g", "a", "1.0", type="pom"),
        ArtifactCoordinate("g", "a", "1.0", classifier="tests"),
        ArtifactCoordinate("g", "a", "1.0", type="zip", classifier="dist"),
    ):
        assert parse_coordinate(coord.to_coord_str()).identity_key() == coord.identity_key()


def test_to_coord_str_omits_default_type():
    assert str(ArtifactCoordinate("g", "a", "1.0")) == "g:a:1.0"
    assert str(ArtifactCoordinate("g", "a", "1.0", type="pom")) == "g:a:1.0:pom"
    assert str(ArtifactCoordinate("g", "a", "1.0", classifier="sources")) == "g:a:1.0:jar:sources"


def test_plugin_identity_excludes_dependencies():
    one = PluginDescriptor("g", "p", "1", (ArtifactCoordinate("x", "y", "1"),))
    other = PluginDescriptor("g", "p", "1")
    assert one.identity_key() == other.identity_key()


def test_repository_identity_is_structural():
    first = RepositoryDescriptor(id="r", url="https://one.example/maven")
    second = RepositoryDescriptor(id="r", url="https://two.example/maven")
    assert first.identity_key() != second.identity_key()
    assert first.identity_key() == RepositoryDescriptor(id="r", url="https://one.example/maven").identity_key()
