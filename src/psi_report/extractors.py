"""Extract labeled report sections from a PageSpeed Insights payload.

Each extractor turns one slice of the audit payload into a list of
LabeledRecord rows ready for display. Apart from the overview, every
section is sorted by label.
"""

import logging
import re
from typing import Iterable, Mapping, Optional

from psi_report.config import ReportOptions
from psi_report.constants import (
    LABEL_PERFORMANCE,
    LABEL_STRATEGY,
    LABEL_URL,
    METRICS_GROUP,
    OPPORTUNITIES_GROUP,
)
from psi_report.formatters import format_duration, format_percentage
from psi_report.links import enrich_title
from psi_report.models import AuditPayload, LabeledRecord, RecordList, RenderInput

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def sort_records(records: Iterable[LabeledRecord]) -> RecordList:
    """Stable ascending sort by label (code-point order, case-sensitive)."""
    return sorted(records, key=lambda record: record.label)


def overview(url: str, strategy: str, payload: AuditPayload) -> RecordList:
    """Fixed-order summary: URL, Strategy, Performance. Not sorted."""
    return [
        LabeledRecord(label=LABEL_URL, value=url),
        LabeledRecord(label=LABEL_STRATEGY, value=strategy),
        LabeledRecord(label=LABEL_PERFORMANCE, value=format_percentage(payload.performance_score)),
    ]


def field_data(metrics: Optional[Mapping[str, float]]) -> RecordList:
    """Real-user (CrUX) metric percentiles, one row per metric.

    Args:
        metrics: Metric name -> percentile in milliseconds; None or empty yields []
    """
    if not metrics:
        return []

    records = [
        LabeledRecord(label=name, value=format_duration(percentile))
        for name, percentile in metrics.items()
    ]
    return sort_records(records)


def lab_data(payload: AuditPayload) -> RecordList:
    """Lighthouse lab metrics from the "metrics" audit group.

    Raises:
        AuditLookupError: If a metrics auditRef has no matching audit
    """
    records = []
    for ref in payload.refs_in_group(METRICS_GROUP):
        audit = payload.get_audit(ref.id)
        records.append(
            LabeledRecord(label=audit.title, value=_WHITESPACE.sub("", audit.display_value))
        )
    return sort_records(records)


def opportunities(payload: AuditPayload, links: bool = False, hyperlinks: bool = True) -> RecordList:
    """Load opportunities with a positive estimated saving.

    Labels are link-enriched before sorting, so link markup is part of
    the sort key.

    Args:
        payload: Validated audit payload
        links: Attach documentation links to titles
        hyperlinks: Use terminal hyperlinks instead of "title (url)"

    Raises:
        AuditLookupError: If a load-opportunities auditRef has no matching audit
    """
    records = []
    for ref in payload.refs_in_group(OPPORTUNITIES_GROUP):
        audit = payload.get_audit(ref.id)
        if not audit.is_opportunity_with_savings:
            continue

        records.append(
            LabeledRecord(
                label=enrich_title(audit.title, audit.description, links, hyperlinks),
                value=format_duration(audit.details.overall_savings_ms),
            )
        )
    return sort_records(records)


def build_render_input(
    payload: AuditPayload,
    url: str,
    options: ReportOptions,
    threshold: int,
    hyperlinks: bool = True,
) -> RenderInput:
    """Run all four extractors and freeze the result for a renderer.

    Args:
        payload: Validated audit payload
        url: Humanized page URL shown in the overview
        options: Report options (strategy, links)
        threshold: Resolved threshold
        hyperlinks: Use terminal hyperlinks for enriched titles
    """
    render_input = RenderInput(
        overview=tuple(overview(url, options.strategy, payload)),
        field_data=tuple(field_data(payload.field_metrics)),
        lab_data=tuple(lab_data(payload)),
        opportunities=tuple(opportunities(payload, options.links, hyperlinks)),
        threshold=threshold,
    )
    logger.debug(
        f"Extracted {len(render_input.field_data)} field, {len(render_input.lab_data)} lab, "
        f"{len(render_input.opportunities)} opportunity rows for {url}"
    )
    return render_input
