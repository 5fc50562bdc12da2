"""Plain-text report for terminals."""

from typing import Sequence

from psi_report.links import strip_terminal_links
from psi_report.models import LabeledRecord, RenderInput

SECTION_RULE = "-" * 60


def _visible_length(text: str) -> int:
    return len(strip_terminal_links(text))


def _render_section(title: str, records: Sequence[LabeledRecord]) -> list[str]:
    width = max(_visible_length(record.label) for record in records) + 1
    lines = [title, SECTION_RULE]
    for record in records:
        padding = " " * (width - _visible_length(record.label))
        lines.append(f"{record.label}:{padding} {record.value}")
    return lines


def render(render_input: RenderInput) -> str:
    """Render non-empty sections followed by the threshold line."""
    sections = [
        ("Summary", render_input.overview),
        ("Field Data", render_input.field_data),
        ("Lab Data", render_input.lab_data),
        ("Opportunities", render_input.opportunities),
    ]

    blocks = []
    for title, records in sections:
        if records:
            blocks.append("\n".join(_render_section(title, records)))

    score = render_input.performance
    if score is None or render_input.passed:
        verdict = f"Threshold: {render_input.threshold}"
    else:
        verdict = f"Threshold: {render_input.threshold} (not met, score {score})"
    blocks.append(verdict)

    return "\n\n".join(blocks)
