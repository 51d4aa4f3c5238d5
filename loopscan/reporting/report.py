# Report aggregation and JSON persistence.

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Sequence

from loopscan.findings.models import (
    SEVERITY_ORDER,
    Finding,
    ScanReport,
    SeveritySummary,
    SkippedFile,
)

logger = logging.getLogger(__name__)

# Keys written to the persisted document
JSON_REPORT_FIELDS = {"generated_at", "target", "findings", "summary"}


def summarize(findings: Sequence[Finding]) -> SeveritySummary:
    """Count findings per severity. The counts always sum to len(findings)."""
    counts = {severity.value: 0 for severity in SEVERITY_ORDER}
    for f in findings:
        counts[f.severity.value] += 1
    return SeveritySummary(total=len(findings), **counts)


def aggregate(
    findings: Iterable[Finding],
    target: str | Path = "",
    skipped: Iterable[SkippedFile] = (),
    generated_at: Optional[datetime] = None,
) -> ScanReport:
    """Build the ScanReport for one run, keeping findings in the order given."""
    findings = tuple(findings)
    return ScanReport(
        generated_at=generated_at or datetime.now(timezone.utc),
        target=str(target),
        findings=findings,
        summary=summarize(findings),
        skipped=tuple(skipped),
    )


def report_to_json(report: ScanReport) -> str:
    """Serialize generatedAt, target, findings (untruncated) and summary."""
    return report.model_dump_json(by_alias=True, include=JSON_REPORT_FIELDS, indent=2)


def write_json_report(report: ScanReport, output: Path) -> None:
    """Persist the report; parent directories are created as needed."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report_to_json(report) + "\n", encoding="utf-8")
    logger.info("Report saved to %s (%d finding(s))", output, len(report.findings))
