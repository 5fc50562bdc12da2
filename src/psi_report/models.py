"""Data models for PSI report rendering."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from psi_report.constants import LABEL_PERFORMANCE, OPPORTUNITY_DETAILS_TYPE
from psi_report.exceptions import AuditLookupError, PayloadError


@dataclass(frozen=True)
class LabeledRecord:
    """One display row: a label and its pre-formatted value."""

    label: str
    value: str

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label:
            raise ValueError("LabeledRecord label must be a non-empty string")
        if not isinstance(self.value, str):
            raise ValueError(f"LabeledRecord value for '{self.label}' must be a string")


RecordList = list[LabeledRecord]


@dataclass(frozen=True)
class RenderInput:
    """Everything a renderer needs; built once per report."""

    overview: tuple[LabeledRecord, ...]
    field_data: tuple[LabeledRecord, ...]
    lab_data: tuple[LabeledRecord, ...]
    opportunities: tuple[LabeledRecord, ...]
    threshold: int

    @property
    def performance(self) -> Optional[int]:
        """Performance score from the overview, if present."""
        for record in self.overview:
            if record.label == LABEL_PERFORMANCE:
                return int(record.value)
        return None

    @property
    def passed(self) -> Optional[bool]:
        score = self.performance
        if score is None:
            return None
        return score >= self.threshold


# =============================================================================
# Audit payload (PageSpeed Insights v5 response)
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_mapping(value: Any, path: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise PayloadError(path, f"expected an object, got {type(value).__name__}")
    return value


def _require_key(container: Mapping, key: str, path: str) -> Any:
    if key not in container:
        raise PayloadError(f"{path}.{key}" if path else key, "missing")
    return container[key]


@dataclass
class AuditRef:
    """Reference placing an audit into a category group."""

    id: str
    group: Optional[str] = None


@dataclass
class AuditDetails:
    """Subset of audit details used for opportunities."""

    type: Optional[str] = None
    overall_savings_ms: Optional[float] = None


@dataclass
class Audit:
    """A single Lighthouse audit."""

    id: str
    title: str
    description: str = ""
    display_value: str = ""
    details: Optional[AuditDetails] = None

    @property
    def is_opportunity_with_savings(self) -> bool:
        """True for opportunity audits that save strictly more than 0 ms."""
        return (
            self.details is not None
            and self.details.type == OPPORTUNITY_DETAILS_TYPE
            and self.details.overall_savings_ms is not None
            and self.details.overall_savings_ms > 0
        )


@dataclass
class AuditPayload:
    """Validated view over a raw PageSpeed Insights response."""

    id: str
    performance_score: float
    audit_refs: list[AuditRef] = field(default_factory=list)
    audits: dict[str, Audit] = field(default_factory=dict)
    field_metrics: dict[str, float] = field(default_factory=dict)  # metric name -> percentile (ms)
    raw: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuditPayload":
        """Validate and convert a raw API response.

        Args:
            data: Decoded JSON body of a runPagespeed response

        Returns:
            AuditPayload

        Raises:
            PayloadError: If a required field is missing or has the wrong type
        """
        data = _require_mapping(data, "$")

        page_id = _require_key(data, "id", "")
        if not isinstance(page_id, str) or not page_id:
            raise PayloadError("id", "expected a non-empty string")

        lighthouse = _require_mapping(
            _require_key(data, "lighthouseResult", ""), "lighthouseResult"
        )
        categories = _require_mapping(
            _require_key(lighthouse, "categories", "lighthouseResult"),
            "lighthouseResult.categories",
        )
        performance = _require_mapping(
            _require_key(categories, "performance", "lighthouseResult.categories"),
            "lighthouseResult.categories.performance",
        )

        score = _require_key(performance, "score", "lighthouseResult.categories.performance")
        if not _is_number(score) or not 0 <= score <= 1:
            raise PayloadError(
                "lighthouseResult.categories.performance.score",
                f"expected a number in [0, 1], got {score!r}",
            )

        refs_raw = performance.get("auditRefs", [])
        if not isinstance(refs_raw, list):
            raise PayloadError("lighthouseResult.categories.performance.auditRefs", "expected a list")
        audit_refs = [cls._parse_ref(ref, index) for index, ref in enumerate(refs_raw)]

        audits_raw = _require_mapping(
            _require_key(lighthouse, "audits", "lighthouseResult"),
            "lighthouseResult.audits",
        )
        audits = {
            audit_id: cls._parse_audit(audit_id, audit)
            for audit_id, audit in audits_raw.items()
        }

        loading_experience = data.get("loadingExperience") or {}
        loading_experience = _require_mapping(loading_experience, "loadingExperience")
        metrics_raw = loading_experience.get("metrics") or {}
        metrics_raw = _require_mapping(metrics_raw, "loadingExperience.metrics")
        field_metrics = {}
        for name, metric in metrics_raw.items():
            path = f"loadingExperience.metrics.{name}"
            percentile = _require_key(_require_mapping(metric, path), "percentile", path)
            if not _is_number(percentile):
                raise PayloadError(f"{path}.percentile", f"expected a number, got {percentile!r}")
            field_metrics[name] = percentile

        return cls(
            id=page_id,
            performance_score=score,
            audit_refs=audit_refs,
            audits=audits,
            field_metrics=field_metrics,
            raw=dict(data),
        )

    @staticmethod
    def _parse_ref(ref: Any, index: int) -> AuditRef:
        path = f"lighthouseResult.categories.performance.auditRefs[{index}]"
        ref = _require_mapping(ref, path)
        ref_id = _require_key(ref, "id", path)
        if not isinstance(ref_id, str):
            raise PayloadError(f"{path}.id", "expected a string")
        return AuditRef(id=ref_id, group=ref.get("group"))

    @staticmethod
    def _parse_audit(audit_id: str, audit: Any) -> Audit:
        path = f"lighthouseResult.audits.{audit_id}"
        audit = _require_mapping(audit, path)

        title = _require_key(audit, "title", path)
        if not isinstance(title, str) or not title:
            raise PayloadError(f"{path}.title", "expected a non-empty string")

        details = None
        details_raw = audit.get("details")
        if details_raw:
            details_raw = _require_mapping(details_raw, f"{path}.details")
            savings = details_raw.get("overallSavingsMs")
            if savings is not None and not _is_number(savings):
                raise PayloadError(f"{path}.details.overallSavingsMs", "expected a number")
            details = AuditDetails(type=details_raw.get("type"), overall_savings_ms=savings)

        return Audit(
            id=audit_id,
            title=title,
            description=audit.get("description") or "",
            display_value=audit.get("displayValue") or "",
            details=details,
        )

    def get_audit(self, audit_id: str) -> Audit:
        """Look up an audit referenced by an auditRef.

        Raises:
            AuditLookupError: If the audit is absent
        """
        try:
            return self.audits[audit_id]
        except KeyError:
            raise AuditLookupError(audit_id) from None

    def refs_in_group(self, group: str) -> list[AuditRef]:
        """AuditRefs of the performance category belonging to a group."""
        return [ref for ref in self.audit_refs if ref.group == group]
