"""Operator for Cloud SQL instances."""
from __future__ import annotations

from typing import Iterable

from ..clients import CloudSqlStatusFetcher
from ..statuses import SqlInstanceStatus
from . import StatusOperator


class CloudSqlInstanceStatusOperator(StatusOperator[SqlInstanceStatus]):
    """Check that a Cloud SQL instance is in one of the acceptable states."""

    status_type = SqlInstanceStatus

    def __init__(
        self,
        project: str,
        instance: str,
        status: Iterable[SqlInstanceStatus],
        client: CloudSqlStatusFetcher,
    ) -> None:
        super().__init__(instance, status)
        self.project = project
        self.instance = instance
        self.client = client

    def fetch(self) -> SqlInstanceStatus:
        return self.client.fetch_sql_instance_status(self.project, self.instance)


__all__ = ["CloudSqlInstanceStatusOperator"]
