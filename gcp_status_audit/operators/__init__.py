"""Operators that compare live resource status with declared expectations."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Tuple, Type, TypeVar

from ..results import SpecResult
from ..statuses import ResourceStatus

S = TypeVar("S", bound=ResourceStatus)


class StatusOperator(ABC, Generic[S]):
    """Evaluate one resource against its acceptable status set.

    Subclasses set :attr:`status_type` and implement :meth:`fetch`; the
    comparison itself is shared so every kind reports ``"<name> is <status>"``
    in the same way.
    """

    status_type: Type[S]

    def __init__(self, resource_name: str, status: Iterable[S]) -> None:
        acceptable = tuple(status)
        if not acceptable:
            raise ValueError("At least one acceptable status is required")
        for value in acceptable:
            if not isinstance(value, self.status_type):
                raise TypeError(
                    f"{type(self).__name__} expects {self.status_type.__name__} values, "
                    f"got {value!r}"
                )
        self.resource_name = resource_name
        self.status: Tuple[S, ...] = acceptable

    @abstractmethod
    def fetch(self) -> S:
        """Return the live status of the resource.

        Raises :class:`~gcp_status_audit.errors.StatusFetchError` when the
        status cannot be retrieved.
        """

    def check(self) -> SpecResult:
        """Fetch the live status and compare it with the acceptable set.

        Fetch failures propagate unchanged to the caller.
        """

        return self.compare(self.fetch())

    def compare(self, live_status: S) -> SpecResult:
        """Return Success when *live_status* is acceptable, Failure otherwise."""

        if not isinstance(live_status, self.status_type):
            raise TypeError(
                f"{type(self).__name__} cannot compare {live_status!r}; "
                f"expected a {self.status_type.__name__}"
            )
        description = f"{self.resource_name} is {live_status}"
        if live_status in self.status:
            return SpecResult.success(description)
        return SpecResult.failure(description)


from .cloud_sql import CloudSqlInstanceStatusOperator  # noqa: E402
from .gke import GKEClusterStatusOperator, GKENodePoolStatusOperator  # noqa: E402

__all__ = [
    "CloudSqlInstanceStatusOperator",
    "GKEClusterStatusOperator",
    "GKENodePoolStatusOperator",
    "StatusOperator",
]
