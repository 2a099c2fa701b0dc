"""Status enumerations for the resource kinds the audit understands."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Type, TypeVar, Union

from .errors import UnknownStatusError

S = TypeVar("S", bound="ResourceStatus")


class ResourceStatus(Enum):
    """Base for closed status sets.

    Member names double as the tokens used in spec files and reports. Members
    compare by identity only; no ordering is implied.
    """

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_name(cls: Type[S], name: str) -> S:
        """Return the member called *name* or raise :class:`ValueError`."""

        try:
            return cls[name]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(
                f"Unknown {cls.__name__} '{name}'. Valid values: {valid}"
            ) from None


class ClusterStatus(ResourceStatus):
    """Lifecycle states of a GKE cluster."""

    Unspecified = "Unspecified"
    Provisioning = "Provisioning"
    Running = "Running"
    Reconciling = "Reconciling"
    Stopping = "Stopping"
    Error = "Error"
    Degraded = "Degraded"


class NodePoolStatus(ResourceStatus):
    """Lifecycle states of a GKE node pool."""

    Unspecified = "Unspecified"
    Provisioning = "Provisioning"
    Running = "Running"
    RunningWithError = "RunningWithError"
    Reconciling = "Reconciling"
    Stopping = "Stopping"
    Error = "Error"


class SqlInstanceStatus(ResourceStatus):
    """States of a Cloud SQL instance."""

    Unspecified = "Unspecified"
    Runnable = "Runnable"
    Suspended = "Suspended"
    PendingDelete = "PendingDelete"
    PendingCreate = "PendingCreate"
    Maintenance = "Maintenance"
    Failed = "Failed"
    OnlineMaintenance = "OnlineMaintenance"


# Integer codes used by google.container.v1 Cluster.Status / NodePool.Status.
_GKE_CLUSTER_CODES: Dict[int, ClusterStatus] = {
    0: ClusterStatus.Unspecified,
    1: ClusterStatus.Provisioning,
    2: ClusterStatus.Running,
    3: ClusterStatus.Reconciling,
    4: ClusterStatus.Stopping,
    5: ClusterStatus.Error,
    6: ClusterStatus.Degraded,
}

_GKE_NODE_POOL_CODES: Dict[int, NodePoolStatus] = {
    0: NodePoolStatus.Unspecified,
    1: NodePoolStatus.Provisioning,
    2: NodePoolStatus.Running,
    3: NodePoolStatus.RunningWithError,
    4: NodePoolStatus.Reconciling,
    5: NodePoolStatus.Stopping,
    6: NodePoolStatus.Error,
}

# State names returned by the Cloud SQL Admin API (sqladmin v1).
_SQL_INSTANCE_STATES: Dict[str, SqlInstanceStatus] = {
    "SQL_INSTANCE_STATE_UNSPECIFIED": SqlInstanceStatus.Unspecified,
    "RUNNABLE": SqlInstanceStatus.Runnable,
    "SUSPENDED": SqlInstanceStatus.Suspended,
    "PENDING_DELETE": SqlInstanceStatus.PendingDelete,
    "PENDING_CREATE": SqlInstanceStatus.PendingCreate,
    "MAINTENANCE": SqlInstanceStatus.Maintenance,
    "FAILED": SqlInstanceStatus.Failed,
    "ONLINE_MAINTENANCE": SqlInstanceStatus.OnlineMaintenance,
}


def cluster_status_from_api(code: Union[int, object]) -> ClusterStatus:
    """Translate a ``Cluster.Status`` proto value into :class:`ClusterStatus`."""

    return _lookup_code(_GKE_CLUSTER_CODES, code, "cluster status")


def node_pool_status_from_api(code: Union[int, object]) -> NodePoolStatus:
    """Translate a ``NodePool.Status`` proto value into :class:`NodePoolStatus`."""

    return _lookup_code(_GKE_NODE_POOL_CODES, code, "node pool status")


def sql_instance_status_from_api(state: object) -> SqlInstanceStatus:
    """Translate a Cloud SQL ``state`` string into :class:`SqlInstanceStatus`."""

    if state is None:
        # The Admin API omits the field when it is unspecified.
        return SqlInstanceStatus.Unspecified
    try:
        return _SQL_INSTANCE_STATES[str(state)]
    except KeyError:
        raise UnknownStatusError(f"Unrecognized SQL instance state: {state!r}") from None


def _lookup_code(table: Dict[int, S], code: object, label: str) -> S:
    try:
        return table[int(code)]  # type: ignore[call-overload]
    except (KeyError, TypeError, ValueError):
        raise UnknownStatusError(f"Unrecognized {label}: {code!r}") from None


__all__ = [
    "ClusterStatus",
    "NodePoolStatus",
    "ResourceStatus",
    "SqlInstanceStatus",
    "cluster_status_from_api",
    "node_pool_status_from_api",
    "sql_instance_status_from_api",
]
