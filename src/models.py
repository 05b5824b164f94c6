#!/usr/bin/env python3
"""
Data models for CI Triage Helper
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Conclusion(Enum):
    """Terminal outcome of a job or step as reported by GitHub"""
    SUCCESS = "success"
    FAILURE = "failure"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    ACTION_REQUIRED = "action_required"
    SKIPPED = "skipped"
    NEUTRAL = "neutral"
    OTHER = "other"

    @classmethod
    def parse(cls, value) -> "Conclusion":
        """Map a raw API value to a member, unknown or missing values become OTHER"""
        if value is None:
            return cls.OTHER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER

    @property
    def is_failure(self) -> bool:
        return self in FAILURE_CONCLUSIONS


FAILURE_CONCLUSIONS = frozenset({
    Conclusion.FAILURE,
    Conclusion.TIMED_OUT,
    Conclusion.CANCELLED,
    Conclusion.ACTION_REQUIRED,
})


@dataclass(frozen=True)
class Step:
    name: str
    conclusion: Conclusion

    @classmethod
    def from_api(cls, data: dict) -> "Step":
        return cls(
            name=data.get("name") or "",
            conclusion=Conclusion.parse(data.get("conclusion")),
        )


@dataclass(frozen=True)
class Job:
    """A job of a workflow run, steps kept in execution order"""
    id: int
    name: str
    conclusion: Conclusion
    steps: Tuple[Step, ...] = ()

    @classmethod
    def from_api(cls, data: dict) -> "Job":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            conclusion=Conclusion.parse(data.get("conclusion")),
            steps=tuple(Step.from_api(step) for step in data.get("steps") or []),
        )


@dataclass(frozen=True)
class RunContext:
    """Identifies the workflow run being triaged"""
    owner: str
    repo: str
    run_id: str
    workflow_name: str

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class FailureLocation:
    """The failed job and, when one could be found, its failed step"""
    job: Job
    step: Optional[Step] = None


@dataclass(frozen=True)
class TrimmedLog:
    tail_text: str
    original_line_count: int
    retained_line_count: int
