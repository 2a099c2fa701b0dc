"""Cloud SQL status fetcher backed by the Cloud SQL Admin API."""
from __future__ import annotations

import logging
from contextlib import contextmanager, nullcontext
from typing import Any, ContextManager, Iterator, Mapping, Optional

import google.auth
import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient import discovery
from googleapiclient.errors import Error as ApiClientError

from ..errors import StatusFetchError, fetch_error_from_exception
from ..statuses import SqlInstanceStatus, sql_instance_status_from_api

logger = logging.getLogger(__name__)

SCOPES = ("https://www.googleapis.com/auth/cloud-platform",)


def instance_path(project: str, instance: str) -> str:
    """Return the resource name of a Cloud SQL instance."""

    return f"projects/{project}/instances/{instance}"


class CloudSqlClient:
    """Fetch instance state with the discovery-based ``sqladmin`` v1 client.

    ``httplib2`` connections are not thread safe, so each fetch builds its own
    authorised transport and closes it afterwards. A *service* passed in by
    the caller is used as is and left open.
    """

    def __init__(self, *, timeout: Optional[float] = None, service: Any = None) -> None:
        self.timeout = timeout
        self._service = service

    @contextmanager
    def _open_sqladmin(self) -> Iterator[Any]:
        credentials, _ = google.auth.default(scopes=list(SCOPES))
        http = httplib2.Http(timeout=self.timeout)
        try:
            authorized = google_auth_httplib2.AuthorizedHttp(credentials, http=http)
            yield discovery.build("sqladmin", "v1", http=authorized, cache_discovery=False)
        finally:
            http.close()

    def _sqladmin(self) -> ContextManager[Any]:
        if self._service is not None:
            return nullcontext(self._service)
        return self._open_sqladmin()

    def fetch_sql_instance_status(self, project: str, instance: str) -> SqlInstanceStatus:
        name = instance_path(project, instance)
        logger.debug("get sql instance %s", name)
        try:
            with self._sqladmin() as service:
                response = (
                    service.instances()
                    .get(project=project, instance=instance)
                    .execute(num_retries=0)
                )
        except (
            GoogleAuthError,
            ApiClientError,
            httplib2.HttpLib2Error,
            OSError,
            ValueError,
        ) as exc:
            # ValueError: the JSON model rejects a response body it cannot decode.
            raise fetch_error_from_exception(
                f"Failed to get SQL instance {name}", exc
            ) from exc
        if not isinstance(response, Mapping):
            raise StatusFetchError(
                f"Failed to get SQL instance {name}: malformed response "
                f"({type(response).__name__})"
            )
        return sql_instance_status_from_api(response.get("state"))


__all__ = ["CloudSqlClient", "instance_path"]
