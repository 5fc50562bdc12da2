"""Shared fixtures: a trimmed PageSpeed Insights v5 response."""

import copy

import pytest

SAMPLE_PAYLOAD = {
    "id": "https://example.com/page/",
    "loadingExperience": {
        "id": "https://example.com/page/",
        "metrics": {
            "LARGEST_CONTENTFUL_PAINT_MS": {"percentile": 2500, "category": "AVERAGE"},
            "FIRST_INPUT_DELAY_MS": {"percentile": 12, "category": "FAST"},
            "CUMULATIVE_LAYOUT_SHIFT_SCORE": {"percentile": 5, "category": "FAST"},
        },
        "overall_category": "AVERAGE",
    },
    "lighthouseResult": {
        "requestedUrl": "https://example.com/page/",
        "finalUrl": "https://example.com/page/",
        "categories": {
            "performance": {
                "id": "performance",
                "score": 0.873,
                "auditRefs": [
                    {"id": "first-contentful-paint", "weight": 10, "group": "metrics"},
                    {"id": "speed-index", "weight": 10, "group": "metrics"},
                    {"id": "largest-contentful-paint", "weight": 25, "group": "metrics"},
                    {"id": "render-blocking-resources", "weight": 0, "group": "load-opportunities"},
                    {"id": "unused-css-rules", "weight": 0, "group": "load-opportunities"},
                    {"id": "uses-text-compression", "weight": 0, "group": "load-opportunities"},
                    {"id": "offscreen-images", "weight": 0, "group": "load-opportunities"},
                    {"id": "total-byte-weight", "weight": 0, "group": "load-opportunities"},
                    {"id": "dom-size", "weight": 0, "group": "diagnostics"},
                    {"id": "network-requests", "weight": 0},
                ],
            }
        },
        "audits": {
            "first-contentful-paint": {
                "id": "first-contentful-paint",
                "title": "First Contentful Paint",
                "description": "First Contentful Paint marks the time at which the first text or image is painted.",
                "displayValue": "1.2 s",
            },
            "speed-index": {
                "id": "speed-index",
                "title": "Speed Index",
                "description": "Speed Index shows how quickly the contents of a page are visibly populated.",
                "displayValue": "3.4 s",
            },
            "largest-contentful-paint": {
                "id": "largest-contentful-paint",
                "title": "Largest Contentful Paint",
                "description": "Largest Contentful Paint marks the time at which the largest text or image is painted.",
                "displayValue": "2.5 s",
            },
            "render-blocking-resources": {
                "id": "render-blocking-resources",
                "title": "Eliminate render-blocking resources",
                "description": "Resources are blocking the first paint of your page. "
                               "[Learn more](https://web.dev/render-blocking-resources/).",
                "details": {"type": "opportunity", "overallSavingsMs": 1234, "items": []},
            },
            "unused-css-rules": {
                "id": "unused-css-rules",
                "title": "Reduce unused CSS",
                "description": "Reduce unused rules from stylesheets. [Learn more](https://web.dev/unused-css-rules/).",
                "details": {"type": "opportunity", "overallSavingsMs": 0, "items": []},
            },
            "uses-text-compression": {
                "id": "uses-text-compression",
                "title": "Enable text compression",
                "description": "Text-based resources should be served with compression.",
                "details": {"type": "opportunity", "overallSavingsMs": 1, "items": []},
            },
            "offscreen-images": {
                "id": "offscreen-images",
                "title": "Defer offscreen images",
                "description": "Consider lazy-loading offscreen and hidden images.",
            },
            "total-byte-weight": {
                "id": "total-byte-weight",
                "title": "Avoids enormous network payloads",
                "description": "Large network payloads cost users real money.",
                "displayValue": "Total size was 1,024 KiB",
                "details": {"type": "table", "overallSavingsMs": 500, "items": []},
            },
            "dom-size": {
                "id": "dom-size",
                "title": "Avoids an excessive DOM size",
                "displayValue": "512 elements",
            },
            "network-requests": {
                "id": "network-requests",
                "title": "Network Requests",
            },
        },
    },
}


@pytest.fixture
def raw_payload():
    """A fresh deep copy of the sample response, safe to mutate."""
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def payload(raw_payload):
    """The sample response validated into an AuditPayload."""
    from psi_report.models import AuditPayload

    return AuditPayload.from_dict(raw_payload)
