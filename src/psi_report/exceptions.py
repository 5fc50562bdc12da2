"""
Custom exceptions for the PSI report renderer.

Every error raised on purpose by the package derives from PSIReportError,
so callers can tell a policy outcome or a bad payload apart from a crash.
"""

from typing import Any, Optional


class PSIReportError(Exception):
    """Base exception for all psi-report errors."""

    # The CLI prints a traceback for unexpected failures only
    show_traceback = True

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Input-shape errors
# =============================================================================


class PayloadError(PSIReportError, ValueError):
    """Audit payload is missing a required field or has the wrong type."""

    def __init__(self, path: str, problem: str) -> None:
        super().__init__(f"Invalid audit payload at '{path}': {problem}", {"path": path})
        self.path = path


class AuditLookupError(PSIReportError, KeyError):
    """An auditRef names an audit that is absent from lighthouseResult.audits."""

    def __init__(self, audit_id: str) -> None:
        super().__init__(f"Audit '{audit_id}' referenced by auditRefs is missing", {"audit_id": audit_id})
        self.audit_id = audit_id

    # KeyError.__str__ would repr() the message
    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigurationError(PSIReportError, ValueError):
    """Invalid configuration value (threshold, format, environment)."""

    pass


# =============================================================================
# Policy outcome
# =============================================================================


class ThresholdNotMetError(PSIReportError):
    """Performance score is below the configured threshold.

    This is an expected result, not a crash, so no traceback is shown.
    """

    show_traceback = False

    def __init__(self, score: int, threshold: int) -> None:
        super().__init__(
            f"Threshold of {threshold} not met with score of {score}",
            {"score": score, "threshold": threshold},
        )
        self.score = score
        self.threshold = threshold


# =============================================================================
# PageSpeed Insights API errors
# =============================================================================


class PSIRequestError(PSIReportError):
    """Fetching a report from the PageSpeed Insights API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, {"status_code": status_code} if status_code else None)
        self.status_code = status_code
