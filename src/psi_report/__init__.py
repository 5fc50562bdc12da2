"""Render PageSpeed Insights performance reports and gate them on a threshold."""

__version__ = "0.1.0"

from psi_report.config import Config, ReportOptions, resolve_threshold
from psi_report.exceptions import (
    AuditLookupError,
    ConfigurationError,
    PayloadError,
    PSIReportError,
    PSIRequestError,
    ThresholdNotMetError,
)
from psi_report.extractors import (
    build_render_input,
    field_data,
    lab_data,
    opportunities,
    overview,
    sort_records,
)
from psi_report.formatters import format_duration, format_percentage, humanize_url
from psi_report.formats import get_renderer
from psi_report.links import enrich_title, get_link
from psi_report.models import AuditPayload, LabeledRecord, RenderInput
from psi_report.output_manager import OutputManager
from psi_report.pipeline import run_report
from psi_report.threshold import (
    GateState,
    ReportOk,
    ReportOutcome,
    ThresholdFailed,
    ThresholdGate,
)
from psi_report.external import PageSpeedInsightsAPI

__all__ = [
    # Pipeline
    "run_report",
    "build_render_input",
    "overview",
    "field_data",
    "lab_data",
    "opportunities",
    "sort_records",
    "get_renderer",
    "OutputManager",
    "PageSpeedInsightsAPI",
    # Formatting
    "format_duration",
    "format_percentage",
    "humanize_url",
    "enrich_title",
    "get_link",
    # Models
    "AuditPayload",
    "LabeledRecord",
    "RenderInput",
    # Threshold
    "GateState",
    "ThresholdGate",
    "ReportOk",
    "ThresholdFailed",
    "ReportOutcome",
    # Config
    "Config",
    "ReportOptions",
    "resolve_threshold",
    # Errors
    "PSIReportError",
    "PayloadError",
    "AuditLookupError",
    "ConfigurationError",
    "ThresholdNotMetError",
    "PSIRequestError",
]
