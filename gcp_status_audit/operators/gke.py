"""Operators for GKE clusters and node pools."""
from __future__ import annotations

from typing import Iterable

from ..clients import GKEStatusFetcher
from ..statuses import ClusterStatus, NodePoolStatus
from . import StatusOperator


class GKEClusterStatusOperator(StatusOperator[ClusterStatus]):
    """Check that a GKE cluster is in one of the acceptable states."""

    status_type = ClusterStatus

    def __init__(
        self,
        project: str,
        location: str,
        cluster: str,
        status: Iterable[ClusterStatus],
        client: GKEStatusFetcher,
    ) -> None:
        super().__init__(cluster, status)
        self.project = project
        self.location = location
        self.cluster = cluster
        self.client = client

    def fetch(self) -> ClusterStatus:
        return self.client.fetch_cluster_status(self.project, self.location, self.cluster)


class GKENodePoolStatusOperator(StatusOperator[NodePoolStatus]):
    """Check that a GKE node pool is in one of the acceptable states."""

    status_type = NodePoolStatus

    def __init__(
        self,
        project: str,
        location: str,
        cluster: str,
        node_pool: str,
        status: Iterable[NodePoolStatus],
        client: GKEStatusFetcher,
    ) -> None:
        super().__init__(node_pool, status)
        self.project = project
        self.location = location
        self.cluster = cluster
        self.node_pool = node_pool
        self.client = client

    def fetch(self) -> NodePoolStatus:
        return self.client.fetch_node_pool_status(
            self.project, self.location, self.cluster, self.node_pool
        )


__all__ = ["GKEClusterStatusOperator", "GKENodePoolStatusOperator"]
