"""
Per-row stage outcomes.

Both reimport stages report through the same contract: one RowOutcome per
processed row, collected into a StageReport.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class RowOutcome:
    """
    Result of processing one spreadsheet row.

    `row` is the 1-based line number in the CSV file, counting the header,
    so the first data row is row 2 (what a spreadsheet app shows).
    """
    row: int
    status: OutcomeStatus
    message: str = ""

    @classmethod
    def success(cls, row: int, message: str = "") -> "RowOutcome":
        return cls(row, OutcomeStatus.SUCCESS, message)

    @classmethod
    def skipped(cls, row: int, reason: str) -> "RowOutcome":
        return cls(row, OutcomeStatus.SKIPPED, reason)

    @classmethod
    def failed(cls, row: int, reason: str) -> "RowOutcome":
        return cls(row, OutcomeStatus.FAILED, reason)

    def __str__(self) -> str:
        return f"Row {self.row}: {self.message}" if self.message else f"Row {self.row}: {self.status.value}"


@dataclass
class StageReport:
    """
    Structured report for one stage run.

    `blocked` is set when a precondition pass rejected the input and no remote
    mutation was attempted; the outcomes then list the violations.
    """
    stage: str
    outcomes: List[RowOutcome] = field(default_factory=list)
    blocked: bool = False

    def add(self, outcome: RowOutcome) -> None:
        self.outcomes.append(outcome)

    def _with_status(self, status: OutcomeStatus) -> List[RowOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def failures(self) -> List[RowOutcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def successes(self) -> List[RowOutcome]:
        return self._with_status(OutcomeStatus.SUCCESS)

    @property
    def skips(self) -> List[RowOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def ok(self) -> bool:
        return not self.blocked and not self.failures

    def counts(self) -> Dict[str, int]:
        return {status.value: len(self._with_status(status)) for status in OutcomeStatus}
