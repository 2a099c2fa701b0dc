"""Declared expectations and their parsing from spec documents."""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Type, Union

import yaml

from .clients import StatusFetcherProvider
from .clients.cloud_sql import instance_path
from .clients.gke import cluster_path, node_pool_path
from .errors import SpecParseError
from .operators import (
    CloudSqlInstanceStatusOperator,
    GKEClusterStatusOperator,
    GKENodePoolStatusOperator,
)
from .results import SpecResult
from .statuses import ClusterStatus, NodePoolStatus, ResourceStatus, SqlInstanceStatus

OPERATOR_KEY = "operator"
STATUS_KEY = "status"


@dataclass(frozen=True)
class GKEClusterStatusSpec:
    """Expect a GKE cluster to be in one of ``status``."""

    project: str
    location: str
    cluster: str
    status: Tuple[ClusterStatus, ...]

    operator = "GKEClusterStatus"
    status_type = ClusterStatus

    def check(self, fetchers: StatusFetcherProvider) -> SpecResult:
        return GKEClusterStatusOperator(
            self.project, self.location, self.cluster, self.status, fetchers.gke()
        ).check()

    def resource_path(self) -> str:
        return cluster_path(self.project, self.location, self.cluster)

    def to_dict(self) -> Dict[str, Any]:
        return _spec_to_dict(self)


@dataclass(frozen=True)
class GKENodePoolStatusSpec:
    """Expect a GKE node pool to be in one of ``status``."""

    project: str
    location: str
    cluster: str
    node_pool: str
    status: Tuple[NodePoolStatus, ...]

    operator = "GKENodePoolStatus"
    status_type = NodePoolStatus

    def check(self, fetchers: StatusFetcherProvider) -> SpecResult:
        return GKENodePoolStatusOperator(
            self.project,
            self.location,
            self.cluster,
            self.node_pool,
            self.status,
            fetchers.gke(),
        ).check()

    def resource_path(self) -> str:
        return node_pool_path(self.project, self.location, self.cluster, self.node_pool)

    def to_dict(self) -> Dict[str, Any]:
        return _spec_to_dict(self)


@dataclass(frozen=True)
class CloudSqlInstanceStatusSpec:
    """Expect a Cloud SQL instance to be in one of ``status``."""

    project: str
    instance: str
    status: Tuple[SqlInstanceStatus, ...]

    operator = "CloudSqlInstanceStatus"
    status_type = SqlInstanceStatus

    def check(self, fetchers: StatusFetcherProvider) -> SpecResult:
        return CloudSqlInstanceStatusOperator(
            self.project, self.instance, self.status, fetchers.cloud_sql()
        ).check()

    def resource_path(self) -> str:
        return instance_path(self.project, self.instance)

    def to_dict(self) -> Dict[str, Any]:
        return _spec_to_dict(self)


Spec = Union[GKEClusterStatusSpec, GKENodePoolStatusSpec, CloudSqlInstanceStatusSpec]

SPEC_TYPES: Mapping[str, Type[Spec]] = MappingProxyType(
    {
        spec_type.operator: spec_type
        for spec_type in (
            GKEClusterStatusSpec,
            GKENodePoolStatusSpec,
            CloudSqlInstanceStatusSpec,
        )
    }
)


def _spec_to_dict(spec: Spec) -> Dict[str, Any]:
    """Return *spec* as a tagged mapping: operator, coordinates, then status."""

    data: Dict[str, Any] = {OPERATOR_KEY: spec.operator}
    for field in fields(spec):
        value = getattr(spec, field.name)
        if field.name == STATUS_KEY:
            data[STATUS_KEY] = [item.name for item in value]
        else:
            data[field.name] = value
    return data


def _coordinate_names(spec_type: Type[Spec]) -> List[str]:
    return [field.name for field in fields(spec_type) if field.name != STATUS_KEY]


def _parse_status(
    spec_type: Type[Spec], raw: Any, where: str
) -> Tuple[ResourceStatus, ...]:
    if not isinstance(raw, list) or not raw:
        raise SpecParseError(f"{where}: 'status' must be a non-empty list of status names")
    statuses = []
    for item in raw:
        if not isinstance(item, str):
            raise SpecParseError(f"{where}: status values must be strings, got {item!r}")
        try:
            statuses.append(spec_type.status_type.from_name(item))
        except ValueError as exc:
            raise SpecParseError(f"{where}: {exc}") from None
    return tuple(statuses)


def parse_spec(entry: Any, *, index: int | None = None) -> Spec:
    """Build a spec variant from one tagged mapping.

    The ``operator`` key selects the variant; every coordinate field and
    ``status`` are required and no other keys are accepted.
    """

    where = f"spec #{index}" if index is not None else "spec"
    if not isinstance(entry, Mapping):
        raise SpecParseError(f"{where}: expected a mapping, got {type(entry).__name__}")

    tag = entry.get(OPERATOR_KEY)
    if tag is None:
        raise SpecParseError(f"{where}: missing field '{OPERATOR_KEY}'")
    spec_type = SPEC_TYPES.get(tag) if isinstance(tag, str) else None
    if spec_type is None:
        valid = ", ".join(SPEC_TYPES)
        raise SpecParseError(f"{where}: unknown operator '{tag}'. Valid operators: {valid}")
    where = f"{where} ({tag})"

    coordinates = _coordinate_names(spec_type)
    allowed = {OPERATOR_KEY, STATUS_KEY, *coordinates}
    unexpected = sorted(str(key) for key in entry if key not in allowed)
    if unexpected:
        raise SpecParseError(f"{where}: unexpected field(s): {', '.join(unexpected)}")

    values: Dict[str, Any] = {}
    for name in coordinates:
        if name not in entry:
            raise SpecParseError(f"{where}: missing field '{name}'")
        value = entry[name]
        if not isinstance(value, str) or not value:
            raise SpecParseError(f"{where}: field '{name}' must be a non-empty string")
        values[name] = value

    if STATUS_KEY not in entry:
        raise SpecParseError(f"{where}: missing field '{STATUS_KEY}'")
    values[STATUS_KEY] = _parse_status(spec_type, entry[STATUS_KEY], where)
    return spec_type(**values)


def parse_specs(document: str) -> List[Spec]:
    """Parse a YAML document holding an ordered list of spec entries."""

    try:
        data = yaml.safe_load(document)
    except yaml.YAMLError as exc:
        raise SpecParseError(f"Invalid YAML: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise SpecParseError(
            f"Expected a list of specs at the top level, got {type(data).__name__}"
        )
    return [parse_spec(entry, index=index) for index, entry in enumerate(data, start=1)]


def load_specs(path: str | Path) -> List[Spec]:
    """Read and parse the spec file at *path*."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to open spec file {path}: {exc}") from exc
    try:
        return parse_specs(text)
    except SpecParseError as exc:
        raise SpecParseError(f"Failed to parse spec file {path}: {exc}") from exc


def dump_specs(specs: List[Spec]) -> str:
    """Serialize *specs* back into the YAML form accepted by :func:`parse_specs`."""

    return yaml.safe_dump(
        [spec.to_dict() for spec in specs],
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


__all__ = [
    "CloudSqlInstanceStatusSpec",
    "GKEClusterStatusSpec",
    "GKENodePoolStatusSpec",
    "SPEC_TYPES",
    "Spec",
    "dump_specs",
    "load_specs",
    "parse_spec",
    "parse_specs",
]
