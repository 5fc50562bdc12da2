"""Threshold gate: pass/fail decision on the performance score."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from psi_report.exceptions import ThresholdNotMetError

logger = logging.getLogger(__name__)


class GateState(Enum):
    """Lifecycle of a threshold evaluation."""

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class ThresholdGate:
    """Compares one performance score against the configured threshold.

    The gate starts PENDING and moves to PASSED or FAILED exactly once:
    score < threshold fails, anything else passes.
    """

    def __init__(self, threshold: int):
        self.threshold = threshold
        self.state = GateState.PENDING
        self.score = None

    def evaluate(self, score: int) -> GateState:
        """Evaluate a 0-100 score.

        Raises:
            RuntimeError: If the gate was already evaluated
        """
        if self.state is not GateState.PENDING:
            raise RuntimeError(f"Threshold gate already evaluated ({self.state.value})")

        self.score = score
        self.state = GateState.FAILED if score < self.threshold else GateState.PASSED
        logger.debug(f"Threshold gate: score={score} threshold={self.threshold} -> {self.state.value}")
        return self.state


@dataclass(frozen=True)
class ReportOk:
    """Report rendered and the score met the threshold."""

    report: str
    score: int
    threshold: int

    passed = True

    def raise_for_threshold(self) -> None:
        return None


@dataclass(frozen=True)
class ThresholdFailed:
    """Report rendered but the score is below the threshold."""

    report: str
    score: int
    threshold: int

    passed = False

    @property
    def message(self) -> str:
        return f"Threshold of {self.threshold} not met with score of {self.score}"

    def raise_for_threshold(self) -> None:
        raise ThresholdNotMetError(self.score, self.threshold)


ReportOutcome = Union[ReportOk, ThresholdFailed]


def check_threshold(report: str, score: int, threshold: int) -> ReportOutcome:
    """Run a fresh gate and wrap the rendered report in its outcome."""
    gate = ThresholdGate(threshold)
    if gate.evaluate(score) is GateState.FAILED:
        return ThresholdFailed(report=report, score=score, threshold=threshold)
    return ReportOk(report=report, score=score, threshold=threshold)
