"""Declarative status assertions for Google Cloud resources."""

from __future__ import annotations

__version__ = "0.1.0"

from .core import run_specs
from .errors import SpecParseError, StatusFetchError, UnknownStatusError
from .report import Record, Report
from .results import ResultCode, SpecResult
from .specs import (
    CloudSqlInstanceStatusSpec,
    GKEClusterStatusSpec,
    GKENodePoolStatusSpec,
    Spec,
    load_specs,
    parse_specs,
)
from .statuses import ClusterStatus, NodePoolStatus, SqlInstanceStatus

__all__ = [
    "CloudSqlInstanceStatusSpec",
    "ClusterStatus",
    "GKEClusterStatusSpec",
    "GKENodePoolStatusSpec",
    "NodePoolStatus",
    "Record",
    "Report",
    "ResultCode",
    "Spec",
    "SpecParseError",
    "SpecResult",
    "SqlInstanceStatus",
    "StatusFetchError",
    "UnknownStatusError",
    "load_specs",
    "parse_specs",
    "run_specs",
]
