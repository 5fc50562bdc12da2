"""Report pipeline: payload in, rendered report and threshold outcome out."""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from psi_report.config import Config, ReportOptions, resolve_threshold
from psi_report.constants import FORMAT_CLI, PERSISTED_FORMAT
from psi_report.extractors import build_render_input
from psi_report.formats import get_renderer, resolve_format
from psi_report.formatters import humanize_url
from psi_report.models import AuditPayload
from psi_report.output_manager import OutputManager
from psi_report.threshold import ReportOutcome, check_threshold

logger = logging.getLogger(__name__)


async def run_report(
    payload: Union[AuditPayload, Mapping[str, Any]],
    options: Optional[ReportOptions] = None,
    config: Optional[Config] = None,
    emit: Callable[[str], Any] = print,
    output_manager: Optional[OutputManager] = None,
) -> ReportOutcome:
    """Render one PageSpeed Insights payload and apply the threshold gate.

    Stages run strictly in order: resolve renderer and threshold, extract,
    render, emit, persist (optional), gate. The report is always emitted
    before the gate is evaluated, so a failing score still produces output.

    Args:
        payload: Raw API response or an already validated AuditPayload
        options: Report options (format, strategy, threshold, links, file output)
        config: Runtime configuration; persistence_enabled gates file writes.
            Defaults to Config.from_env()
        emit: Sink for the rendered report (stdout by default)
        output_manager: Writer for persisted files (built from options.file_path by default)

    Returns:
        ReportOk or ThresholdFailed

    Raises:
        PayloadError: If the payload shape is invalid
        AuditLookupError: If an auditRef points to a missing audit
        ConfigurationError: If the threshold override or PSI_THRESHOLD is invalid
    """
    options = options or ReportOptions()
    config = config or Config.from_env()

    format_name = resolve_format(options.format)
    renderer = get_renderer(format_name)
    threshold = resolve_threshold(options.threshold, config)

    if not isinstance(payload, AuditPayload):
        payload = AuditPayload.from_dict(payload)

    url = humanize_url(payload.id)
    logger.debug(f"Rendering {url} ({options.strategy}) as {format_name}, threshold={threshold}")

    # Terminal hyperlinks only make sense on a terminal
    hyperlinks = config.hyperlinks and format_name == FORMAT_CLI
    render_input = build_render_input(payload, url, options, threshold, hyperlinks=hyperlinks)
    rendered = renderer(render_input)

    emit(rendered)

    if options.to_file and format_name == PERSISTED_FORMAT and config.persistence_enabled:
        manager = output_manager or OutputManager(options.file_path)
        manager.save(url, options.strategy, rendered, payload.raw)
    elif options.to_file:
        logger.debug(
            f"Skipping file output (format={format_name}, persistence_enabled={config.persistence_enabled})"
        )

    outcome = check_threshold(rendered, render_input.performance, threshold)
    if not outcome.passed:
        logger.info(outcome.message)
    return outcome
