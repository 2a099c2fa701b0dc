"""GKE status fetcher backed by the Kubernetes Engine API."""
from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import ContextManager, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import container_v1

from ..errors import fetch_error_from_exception
from ..statuses import (
    ClusterStatus,
    NodePoolStatus,
    cluster_status_from_api,
    node_pool_status_from_api,
)

logger = logging.getLogger(__name__)


def cluster_path(project: str, location: str, cluster: str) -> str:
    """Return the fully qualified resource name of a cluster."""

    return f"projects/{project}/locations/{location}/clusters/{cluster}"


def node_pool_path(project: str, location: str, cluster: str, node_pool: str) -> str:
    """Return the fully qualified resource name of a node pool."""

    return f"{cluster_path(project, location, cluster)}/nodePools/{node_pool}"


class GKEClient:
    """Fetch cluster and node pool status with ``ClusterManagerClient``.

    A client is opened for each request and closed afterwards, so credential
    lookup failures surface as fetch errors for the spec being checked. A
    *client* passed in by the caller is used as is and left open.
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        client: Optional[container_v1.ClusterManagerClient] = None,
    ) -> None:
        self.timeout = timeout
        self._client = client

    def _cluster_manager(self) -> ContextManager[container_v1.ClusterManagerClient]:
        if self._client is not None:
            return nullcontext(self._client)
        return container_v1.ClusterManagerClient()

    def fetch_cluster_status(
        self, project: str, location: str, cluster: str
    ) -> ClusterStatus:
        name = cluster_path(project, location, cluster)
        logger.debug("get cluster %s", name)
        try:
            with self._cluster_manager() as client:
                response = client.get_cluster(
                    name=name, retry=None, timeout=self.timeout
                )
        except (GoogleAPIError, GoogleAuthError) as exc:
            raise fetch_error_from_exception(f"Failed to get cluster {name}", exc) from exc
        return cluster_status_from_api(response.status)

    def fetch_node_pool_status(
        self, project: str, location: str, cluster: str, node_pool: str
    ) -> NodePoolStatus:
        name = node_pool_path(project, location, cluster, node_pool)
        logger.debug("get node pool %s", name)
        try:
            with self._cluster_manager() as client:
                response = client.get_node_pool(
                    name=name, retry=None, timeout=self.timeout
                )
        except (GoogleAPIError, GoogleAuthError) as exc:
            raise fetch_error_from_exception(f"Failed to get node pool {name}", exc) from exc
        return node_pool_status_from_api(response.status)


__all__ = ["GKEClient", "cluster_path", "node_pool_path"]
