"""Tests for repository include/exclude composition and self-reference exclusion."""
from aggregate.policy import RepositoryFilter, exclude_self_references, is_self_reference
from coordinates.models import ArtifactCoordinate, ProjectIdentity, RepositoryDescriptor

R1 = RepositoryDescriptor(id="r1", url="https://one.example/maven")
R2 = RepositoryDescriptor(id="r2", url="https://two.example/maven")
R3 = RepositoryDescriptor(id="r3", url="https://one.example/maven")


def test_no_configuration_accepts_everything():
    assert RepositoryFilter().apply([R1, R2, R3]) == [R1, R2, R3]


def test_include_ids_and_urls_must_both_pass():
    policy = RepositoryFilter.from_lists(include_ids=["r1"], include_urls=[R2.url])
    # r1 passes the id axis but not the url axis; r2 passes url but not id
    assert policy.apply([R1, R2]) == []

    policy = RepositoryFilter.from_lists(include_ids=["r1"], include_urls=[R1.url, R2.url])
    assert policy.apply([R1, R2]) == [R1]


def test_include_ids_only():
    policy = RepositoryFilter.from_lists(include_ids=["r1"])
    assert policy.accepts(R1)
    assert not policy.accepts(R2)


def test_include_urls_only():
    policy = RepositoryFilter.from_lists(include_urls=["https://one.example/maven"])
    assert policy.apply([R1, R2, R3]) == [R1, R3]


def test_exclude_is_subtractive_even_when_included():
    policy = RepositoryFilter.from_lists(include_ids=["r1", "r2"], exclude_ids=["r1"])
    assert policy.apply([R1, R2]) == [R2]

    policy = RepositoryFilter.from_lists(exclude_urls=["https://one.example/maven"])
    assert policy.apply([R1, R2, R3]) == [R2]


def test_order_is_preserved():
    policy = RepositoryFilter.from_lists(exclude_ids=["r2"])
    assert policy.apply([R3, R2, R1]) == [R3, R1]


def test_self_reference_exclusion_by_group():
    project = ProjectIdentity("com.acme", "root", "1.0")
    sibling = ArtifactCoordinate("com.acme", "sibling", "1.0")
    nested_group = ArtifactCoordinate("com.acme.tools", "helper", "1.0")
    external = ArtifactCoordinate("org.lib", "foo", "1.0")

    assert is_self_reference(sibling, project)
    assert not is_self_reference(nested_group, project)
    assert exclude_self_references([sibling, external, nested_group], project) == [external, nested_group]
