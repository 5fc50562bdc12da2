# src/psi_report/constants.py
"""Centralized constants for the PSI report renderer.

User-configurable values (threshold, format, strategy) are resolved in
config.py; the values here are fixed by the PageSpeed Insights schema.
"""

# =============================================================================
# Threshold
# =============================================================================

# Performance score (0-100) below which a run is marked failed
DEFAULT_THRESHOLD = 70

MIN_THRESHOLD = 0
MAX_THRESHOLD = 100


# =============================================================================
# Audit groups (lighthouseResult.categories.performance.auditRefs[].group)
# =============================================================================

METRICS_GROUP = "metrics"
OPPORTUNITIES_GROUP = "load-opportunities"

# details.type of audits that estimate a time saving
OPPORTUNITY_DETAILS_TYPE = "opportunity"


# =============================================================================
# Report labels
# =============================================================================

LABEL_URL = "URL"
LABEL_STRATEGY = "Strategy"
LABEL_PERFORMANCE = "Performance"


# =============================================================================
# Output formats and strategies
# =============================================================================

FORMAT_CLI = "cli"
FORMAT_JSON = "json"
DEFAULT_FORMAT = FORMAT_CLI

# Only this format is persisted when writing to file
PERSISTED_FORMAT = FORMAT_JSON

STRATEGIES = ("mobile", "desktop")
DEFAULT_STRATEGY = "mobile"


# =============================================================================
# Persistence
# =============================================================================

SHORT_REPORT_SUFFIX = "_short.json"
FULL_REPORT_SUFFIX = "_full.json"
