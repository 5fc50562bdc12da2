"""Machine-readable JSON report."""

import json
from typing import Iterable

from psi_report.models import LabeledRecord, RenderInput


def _as_object(records: Iterable[LabeledRecord]) -> dict[str, str]:
    return {record.label: record.value for record in records}


def render(render_input: RenderInput) -> str:
    """Render the four sections as a JSON object keyed by label."""
    document = {
        "overview": _as_object(render_input.overview),
        "fieldData": _as_object(render_input.field_data),
        "labData": _as_object(render_input.lab_data),
        "opportunities": _as_object(render_input.opportunities),
        "threshold": render_input.threshold,
        "passed": render_input.passed,
    }
    return json.dumps(document, indent=2, ensure_ascii=False)
