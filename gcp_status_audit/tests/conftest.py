"""Shared fixtures: stand-in status fetchers for checks without network access."""

from __future__ import annotations

import sys
import threading
import time
from pathlib import Path
from typing import Dict, Tuple, Union

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from gcp_status_audit.statuses import ClusterStatus, NodePoolStatus, SqlInstanceStatus


Answer = Union[ClusterStatus, NodePoolStatus, SqlInstanceStatus, Exception]


class StubFetchers:
    """Provider returning canned statuses keyed by resource coordinates.

    An :class:`Exception` stored as the answer is raised instead of returned.
    ``delays`` lets tests make selected lookups slower than others.
    """

    def __init__(self, answers: Dict[Tuple[str, ...], Answer], delays=None) -> None:
        self.answers = answers
        self.delays: Dict[Tuple[str, ...], float] = delays or {}
        self.calls: list[Tuple[str, ...]] = []
        self._lock = threading.Lock()

    def _answer(self, key: Tuple[str, ...]):
        with self._lock:
            self.calls.append(key)
        if key in self.delays:
            time.sleep(self.delays[key])
        answer = self.answers[key]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def gke(self) -> "StubFetchers":
        return self

    def cloud_sql(self) -> "StubFetchers":
        return self

    def fetch_cluster_status(self, project, location, cluster):
        return self._answer((project, location, cluster))

    def fetch_node_pool_status(self, project, location, cluster, node_pool):
        return self._answer((project, location, cluster, node_pool))

    def fetch_sql_instance_status(self, project, instance):
        return self._answer((project, instance))


@pytest.fixture
def stub_fetchers():
    """Return a factory building :class:`StubFetchers`."""

    return StubFetchers
