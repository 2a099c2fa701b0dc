"""Tests for spec parsing, serialization and dispatch."""

from __future__ import annotations

import pytest

from gcp_status_audit.errors import SpecParseError, StatusFetchError
from gcp_status_audit.results import SpecResult
from gcp_status_audit.specs import (
    CloudSqlInstanceStatusSpec,
    GKEClusterStatusSpec,
    GKENodePoolStatusSpec,
    dump_specs,
    load_specs,
    parse_spec,
    parse_specs,
)
from gcp_status_audit.statuses import ClusterStatus, NodePoolStatus, SqlInstanceStatus

SPEC_DOCUMENT = """\
- operator: GKEClusterStatus
  project: my-project
  location: asia-northeast1
  cluster: c1
  status:
    - Provisioning
    - Running
- operator: GKENodePoolStatus
  project: my-project
  location: asia-northeast1
  cluster: c1
  node_pool: pool-1
  status: [Running]
- operator: CloudSqlInstanceStatus
  project: my-project
  instance: db-1
  status:
    - Runnable
"""

SPECS = [
    GKEClusterStatusSpec("p", "l", "c", (ClusterStatus.Running,)),
    GKEClusterStatusSpec("p", "l", "c", (ClusterStatus.Provisioning, ClusterStatus.Running)),
    GKENodePoolStatusSpec("p", "l", "c", "n", (NodePoolStatus.Running,)),
    GKENodePoolStatusSpec(
        "p", "l", "c", "n", (NodePoolStatus.Provisioning, NodePoolStatus.RunningWithError)
    ),
    CloudSqlInstanceStatusSpec("p", "i", (SqlInstanceStatus.Runnable,)),
    CloudSqlInstanceStatusSpec(
        "p", "i", (SqlInstanceStatus.Maintenance, SqlInstanceStatus.OnlineMaintenance)
    ),
]


def test_parse_document_in_order() -> None:
    """Entries become typed specs in document order."""

    specs = parse_specs(SPEC_DOCUMENT)

    assert specs == [
        GKEClusterStatusSpec(
            "my-project",
            "asia-northeast1",
            "c1",
            (ClusterStatus.Provisioning, ClusterStatus.Running),
        ),
        GKENodePoolStatusSpec(
            "my-project", "asia-northeast1", "c1", "pool-1", (NodePoolStatus.Running,)
        ),
        CloudSqlInstanceStatusSpec("my-project", "db-1", (SqlInstanceStatus.Runnable,)),
    ]


def test_empty_document_has_no_specs() -> None:
    """An empty file is an empty spec list."""

    assert parse_specs("") == []


@pytest.mark.parametrize("spec", SPECS)
def test_round_trip(spec) -> None:
    """Serializing then parsing yields an equal spec."""

    assert parse_spec(spec.to_dict()) == spec
    assert parse_specs(dump_specs([spec])) == [spec]


def test_to_dict_field_order() -> None:
    """Tag first, coordinates in declaration order, status last."""

    spec = GKENodePoolStatusSpec("p", "l", "c", "n", (NodePoolStatus.Running,))

    assert list(spec.to_dict().items()) == [
        ("operator", "GKENodePoolStatus"),
        ("project", "p"),
        ("location", "l"),
        ("cluster", "c"),
        ("node_pool", "n"),
        ("status", ["Running"]),
    ]


def test_dump_specs_layout() -> None:
    """Dumped YAML keeps the tagged field order."""

    spec = CloudSqlInstanceStatusSpec("p", "i", (SqlInstanceStatus.Runnable,))

    assert dump_specs([spec]) == (
        "- operator: CloudSqlInstanceStatus\n"
        "  project: p\n"
        "  instance: i\n"
        "  status:\n"
        "  - Runnable\n"
    )


@pytest.mark.parametrize(
    "entry, message",
    [
        ({"project": "p"}, "missing field 'operator'"),
        ({"operator": "GCEInstanceStatus"}, "unknown operator 'GCEInstanceStatus'"),
        (
            {"operator": "GKEClusterStatus", "project": "p", "location": "l", "status": ["Running"]},
            "missing field 'cluster'",
        ),
        (
            {"operator": "GKEClusterStatus", "project": "p", "location": "l", "cluster": "c"},
            "missing field 'status'",
        ),
        (
            {
                "operator": "GKEClusterStatus",
                "project": "p",
                "location": "l",
                "cluster": "c",
                "status": [],
            },
            "non-empty list",
        ),
        (
            {
                "operator": "GKEClusterStatus",
                "project": "p",
                "location": "l",
                "cluster": "c",
                "status": ["RunningWithError"],
            },
            "Unknown ClusterStatus 'RunningWithError'",
        ),
        (
            {"operator": "CloudSqlInstanceStatus", "project": "p", "instance": 3, "status": ["Runnable"]},
            "field 'instance' must be a non-empty string",
        ),
        (
            {
                "operator": "CloudSqlInstanceStatus",
                "project": "p",
                "instance": "i",
                "cluster": "c",
                "status": ["Runnable"],
            },
            "unexpected field(s): cluster",
        ),
        ("GKEClusterStatus", "expected a mapping"),
    ],
)
def test_parse_errors(entry, message) -> None:
    """Malformed entries are rejected with a descriptive message."""

    with pytest.raises(SpecParseError) as excinfo:
        parse_spec(entry, index=4)

    assert message in str(excinfo.value)
    assert "spec #4" in str(excinfo.value)


def test_parse_specs_rejects_non_list() -> None:
    """The top level of a spec document must be a list."""

    with pytest.raises(SpecParseError, match="Expected a list"):
        parse_specs("operator: GKEClusterStatus\n")


def test_parse_specs_rejects_invalid_yaml() -> None:
    """YAML syntax errors surface as parse errors."""

    with pytest.raises(SpecParseError, match="Invalid YAML"):
        parse_specs("- operator: [unterminated\n")


def test_load_specs_reads_file(tmp_path) -> None:
    """load_specs parses the file at the given path."""

    path = tmp_path / "specs.yaml"
    path.write_text(SPEC_DOCUMENT, encoding="utf-8")

    assert len(load_specs(path)) == 3


def test_load_specs_missing_file(tmp_path) -> None:
    """A missing spec file is reported as a parse error."""

    with pytest.raises(SpecParseError, match="Failed to open spec file"):
        load_specs(tmp_path / "absent.yaml")


def test_specs_are_immutable() -> None:
    """Coordinates cannot be reassigned after construction."""

    spec = SPECS[0]

    with pytest.raises(AttributeError):
        spec.cluster = "other"  # type: ignore[misc]


def test_check_dispatches_to_matching_fetcher(stub_fetchers) -> None:
    """Each variant checks its own resource through the provider."""

    fetchers = stub_fetchers(
        {
            ("my-project", "asia-northeast1", "c1"): ClusterStatus.Degraded,
            ("my-project", "asia-northeast1", "c1", "pool-1"): NodePoolStatus.Running,
            ("my-project", "db-1"): SqlInstanceStatus.Runnable,
        }
    )

    results = [spec.check(fetchers) for spec in parse_specs(SPEC_DOCUMENT)]

    assert results == [
        SpecResult.failure("c1 is Degraded"),
        SpecResult.success("pool-1 is Running"),
        SpecResult.success("db-1 is Runnable"),
    ]


def test_check_propagates_fetch_error(stub_fetchers) -> None:
    """Spec.check leaves fetch errors for the caller to classify."""

    spec = GKEClusterStatusSpec("p", "l", "c", (ClusterStatus.Running,))
    fetchers = stub_fetchers({("p", "l", "c"): StatusFetchError("denied")})

    with pytest.raises(StatusFetchError, match="denied"):
        spec.check(fetchers)


@pytest.mark.parametrize(
    "spec, expected",
    [
        (SPECS[0], "projects/p/locations/l/clusters/c"),
        (SPECS[2], "projects/p/locations/l/clusters/c/nodePools/n"),
        (SPECS[4], "projects/p/instances/i"),
    ],
)
def test_resource_path(spec, expected) -> None:
    """Resource paths follow the Google Cloud resource naming scheme."""

    assert spec.resource_path() == expected
