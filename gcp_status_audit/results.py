"""Outcome model for a single spec check."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ResultCode(str, Enum):
    """Three-way classification of a check."""

    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"


@dataclass(frozen=True)
class SpecResult:
    """Classification and human readable description of one check."""

    code: ResultCode
    description: str

    @classmethod
    def success(cls, description: str) -> "SpecResult":
        return cls(ResultCode.SUCCESS, description)

    @classmethod
    def failure(cls, description: str) -> "SpecResult":
        return cls(ResultCode.FAILURE, description)

    @classmethod
    def error(cls, description: str) -> "SpecResult":
        return cls(ResultCode.ERROR, description)

    @property
    def is_success(self) -> bool:
        return self.code is ResultCode.SUCCESS

    def to_dict(self) -> Dict[str, str]:
        """Return the ``code``/``description`` mapping used in reports."""

        return {"code": self.code.value, "description": self.description}


__all__ = ["ResultCode", "SpecResult"]
