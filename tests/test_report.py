"""Tests for report aggregation, the finding models and JSON persistence."""

import itertools
import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from loopscan.findings.models import (
    SEVERITY_ORDER,
    Finding,
    FindingType,
    ScanReport,
    Severity,
    SkippedFile,
)
from loopscan.reporting.report import aggregate, report_to_json, summarize, write_json_report


def _finding(severity: Severity, line: int = 1, code: str | None = None) -> Finding:
    return Finding(
        file="src/a.js",
        line=line,
        type=FindingType.INFINITE_WHILE,
        severity=severity,
        description="while(true) unconditional loop with no exit",
        code=code,
    )


def test_summarize_empty():
    summary = summarize([])
    assert summary.total == 0
    assert [summary.count(s) for s in SEVERITY_ORDER] == [0, 0, 0, 0]


@pytest.mark.parametrize("size", [0, 1, 2, 5])
def test_summary_partitions_findings(size):
    """Per-severity counts always sum to the number of findings."""
    for combo in itertools.product(SEVERITY_ORDER, repeat=size):
        findings = [_finding(s, line=i + 1) for i, s in enumerate(combo)]
        summary = aggregate(findings).summary
        assert summary.total == len(findings)
        assert sum(summary.count(s) for s in SEVERITY_ORDER) == len(findings)
        for s in SEVERITY_ORDER:
            assert summary.count(s) == combo.count(s)


def test_aggregate_keeps_order_and_target():
    findings = [_finding(Severity.LOW, 3), _finding(Severity.CRITICAL, 1)]
    report = aggregate(findings, target="./src")
    assert report.findings == tuple(findings)
    assert report.target == "./src"
    assert report.generated_at.tzinfo is not None
    assert report.by_severity(Severity.CRITICAL) == [findings[1]]


def test_finding_is_immutable():
    finding = _finding(Severity.HIGH)
    with pytest.raises(ValidationError):
        finding.line = 2


def test_finding_rejects_unknown_severity():
    with pytest.raises(ValidationError):
        Finding(file="a.js", line=1, type="infinite-while", severity="fatal", description="x")


def test_finding_rejects_line_zero():
    with pytest.raises(ValidationError):
        Finding(file="a.js", line=0, type="infinite-while", severity="low", description="x")


def test_json_report_shape():
    long_code = "while (true) { " + "x++; " * 40 + "}"
    report = aggregate(
        [_finding(Severity.CRITICAL, code=long_code)],
        target="./src",
        skipped=[SkippedFile(path="src/bad.js", reason="not valid UTF-8")],
        generated_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    data = json.loads(report_to_json(report))
    assert set(data) == {"generatedAt", "target", "findings", "summary"}
    assert data["generatedAt"].startswith("2026-01-02T03:04:05")
    assert data["target"] == "./src"
    assert data["summary"] == {"total": 1, "critical": 1, "high": 0, "medium": 0, "low": 0}
    finding = data["findings"][0]
    assert finding["type"] == "infinite-while"
    assert finding["severity"] == "critical"
    assert finding["code"] == long_code


def test_json_round_trips_into_report():
    report = aggregate([_finding(Severity.MEDIUM)], target="t")
    loaded = ScanReport.model_validate_json(report_to_json(report))
    assert loaded.findings == report.findings
    assert loaded.summary == report.summary


def test_write_json_report_creates_parents(tmp_path):
    output = tmp_path / "reports" / "loops.json"
    write_json_report(aggregate([], target="src"), output)
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["findings"] == []
    assert data["summary"]["total"] == 0
