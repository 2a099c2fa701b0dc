"""Status fetcher interfaces and the default Google Cloud provider."""
from __future__ import annotations

from typing import Optional, Protocol

from ..statuses import ClusterStatus, NodePoolStatus, SqlInstanceStatus


class GKEStatusFetcher(Protocol):
    """Retrieves live GKE cluster and node pool status."""

    def fetch_cluster_status(
        self, project: str, location: str, cluster: str
    ) -> ClusterStatus:
        ...

    def fetch_node_pool_status(
        self, project: str, location: str, cluster: str, node_pool: str
    ) -> NodePoolStatus:
        ...


class CloudSqlStatusFetcher(Protocol):
    """Retrieves live Cloud SQL instance status."""

    def fetch_sql_instance_status(self, project: str, instance: str) -> SqlInstanceStatus:
        ...


class StatusFetcherProvider(Protocol):
    """Hands out a fetcher per check.

    Implementations may return a new fetcher on every call or share one, as
    long as a shared fetcher is safe to use from several threads.
    """

    def gke(self) -> GKEStatusFetcher:
        ...

    def cloud_sql(self) -> CloudSqlStatusFetcher:
        ...


class GoogleCloudFetchers:
    """Provider backed by the real GKE and Cloud SQL Admin APIs."""

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def gke(self) -> GKEStatusFetcher:
        return GKEClient(timeout=self.timeout)

    def cloud_sql(self) -> CloudSqlStatusFetcher:
        return CloudSqlClient(timeout=self.timeout)


from .cloud_sql import CloudSqlClient  # noqa: E402
from .gke import GKEClient  # noqa: E402


__all__ = [
    "CloudSqlClient",
    "CloudSqlStatusFetcher",
    "GKEClient",
    "GKEStatusFetcher",
    "GoogleCloudFetchers",
    "StatusFetcherProvider",
]
