"""Aggregation of spec outcomes into a deterministic report."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List

import yaml

from .results import ResultCode, SpecResult
from .specs import Spec


@dataclass(frozen=True)
class Record:
    """One checked spec paired with its outcome."""

    spec: Spec
    spec_result: SpecResult

    def resource_name(self) -> str:
        return self.spec.resource_path()

    def to_dict(self) -> Dict[str, Any]:
        return {"spec": self.spec.to_dict(), "spec_result": self.spec_result.to_dict()}


class Report:
    """Ordered collection of :class:`Record` objects for one run.

    Records keep the order in which they were added; nothing is sorted or
    de-duplicated, so identical specs yield separate entries.
    """

    def __init__(self) -> None:
        self._records: List[Record] = []

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    def record_ok(self, spec: Spec, spec_result: SpecResult) -> None:
        """Append the Success/Failure outcome produced for *spec*."""

        self._records.append(Record(spec, spec_result))

    def record_error(self, spec: Spec, error: BaseException) -> None:
        """Append an Error outcome for *spec* describing *error*."""

        self._records.append(Record(spec, SpecResult.error(str(error))))

    def _count(self, code: ResultCode) -> int:
        return sum(1 for record in self._records if record.spec_result.code is code)

    def total_record_count(self) -> int:
        return len(self._records)

    def success_record_count(self) -> int:
        return self._count(ResultCode.SUCCESS)

    def failure_record_count(self) -> int:
        return self._count(ResultCode.FAILURE)

    def error_record_count(self) -> int:
        return self._count(ResultCode.ERROR)

    def is_all_green(self) -> bool:
        """Return ``True`` when every record succeeded (or there are none)."""

        return self.total_record_count() == self.success_record_count()

    def summary(self) -> Dict[str, int]:
        return {
            "total": self.total_record_count(),
            "success": self.success_record_count(),
            "failure": self.failure_record_count(),
            "error": self.error_record_count(),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "detail": [record.to_dict() for record in self._records],
        }

    def render(self) -> str:
        """Return the report as a YAML document with a stable layout."""

        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )


__all__ = ["Record", "Report"]
