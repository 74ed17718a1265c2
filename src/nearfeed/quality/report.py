"""
Offline catalog quality report.

Goal: a deterministic view of "will the nearby feed rank these listings sensibly?"
The main thing it surfaces is listings without coordinates: the feed ranks them as
if they sat at (0, 0), which is rarely what product wants.

Used by:
- CLI `quality-report`
- API `/api/quality`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import ValidationError

from nearfeed.catalog.loader import Catalog, load_catalog
from nearfeed.config.settings import Settings
from nearfeed.core.env import resolve_project_path
from nearfeed.domain.models import Property, Vehicle

_SAMPLE = 8


@dataclass(frozen=True)
class Issue:
    severity: str  # "info" | "warning" | "error"
    code: str
    message: str
    count: int = 1
    sample: list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "count": int(self.count),
            "sample": list(self.sample or []),
        }


def _keys(kind: str, items: Sequence[Property | Vehicle]) -> list[str]:
    return [f"{kind}-{it.id}" for it in items]


def _duplicate_ids(kind: str, items: Sequence[Property | Vehicle]) -> list[str]:
    ids = [it.id for it in items]
    return sorted({f"{kind}-{i}" for i in ids if ids.count(i) > 1})


def catalog_issues(catalog: Catalog) -> list[Issue]:
    issues: list[Issue] = []

    dup = _duplicate_ids("property", catalog.properties) + _duplicate_ids("vehicle", catalog.vehicles)
    if dup:
        issues.append(
            Issue(
                severity="error",
                code="CATALOG_DUPLICATE_ID",
                message="Duplicate listing ids within a catalog; detail keys become ambiguous.",
                count=len(dup),
                sample=dup[:_SAMPLE],
            )
        )

    missing = _keys("property", [p for p in catalog.properties if not p.has_coordinate]) + _keys(
        "vehicle", [v for v in catalog.vehicles if not v.has_coordinate]
    )
    if missing:
        issues.append(
            Issue(
                severity="warning",
                code="MISSING_COORDINATES",
                message="Some listings have no coordinates and are ranked as if at (0, 0).",
                count=len(missing),
                sample=missing[:_SAMPLE],
            )
        )

    def _out_of_range(it: Property | Vehicle) -> bool:
        c = it.coordinate
        return not (-90 <= c.lat <= 90 and -180 <= c.lon <= 180)

    bad = _keys("property", [p for p in catalog.properties if _out_of_range(p)]) + _keys(
        "vehicle", [v for v in catalog.vehicles if _out_of_range(v)]
    )
    if bad:
        issues.append(
            Issue(
                severity="error",
                code="CATALOG_BAD_COORDS",
                message="Some listings have out-of-range coordinates.",
                count=len(bad),
                sample=bad[:_SAMPLE],
            )
        )

    no_image = _keys("property", [p for p in catalog.properties if not p.image]) + _keys(
        "vehicle", [v for v in catalog.vehicles if not v.image]
    )
    if no_image:
        issues.append(
            Issue(
                severity="info",
                code="CATALOG_MISSING_IMAGE",
                message="Some listings have no image URL.",
                count=len(no_image),
                sample=no_image[:_SAMPLE],
            )
        )

    return issues


def build_quality_report(settings: Settings, catalog: Catalog | None = None) -> dict[str, Any]:
    """Load the catalog (unless given) and summarize its issues."""
    paths = {
        "properties_path": str(resolve_project_path(settings.catalog.properties_path)),
        "vehicles_path": str(resolve_project_path(settings.catalog.vehicles_path)),
    }

    if catalog is None:
        try:
            catalog = load_catalog(settings)
        except (OSError, ValueError, ValidationError) as e:
            issue = Issue(severity="error", code="CATALOG_LOAD_FAILED", message=str(e))
            return {
                "overall": {"severity": "error", "issue_count": 1},
                "paths": paths,
                "counts": {"properties": 0, "vehicles": 0},
                "issues": [issue.as_dict()],
            }

    issues = catalog_issues(catalog)

    severity_rank = {"error": 3, "warning": 2, "info": 1}
    worst = "info"
    for i in issues:
        if severity_rank.get(i.severity, 0) > severity_rank.get(worst, 0):
            worst = i.severity

    return {
        "overall": {"severity": worst, "issue_count": len(issues)},
        "paths": paths,
        "counts": {"properties": len(catalog.properties), "vehicles": len(catalog.vehicles)},
        "issues": [i.as_dict() for i in issues],
    }
