# Pydantic data models for scan output: Severity, FindingType, Finding, ScanReport.

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Fixed four-level classification, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Rendering and summary order
SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
)


class FindingType(str, Enum):
    """Closed set of tags, one per detector sub-pattern."""

    INFINITE_WHILE = "infinite-while"
    INFINITE_FOR = "infinite-for"
    UNBOUNDED_RECURSION = "unbounded-recursion"
    BLOCKING_LOOP = "blocking-loop"
    EMPTY_PROMISE_ALL = "empty-promise-all"
    UNRESOLVED_PROMISE = "unresolved-promise"
    LISTENER_LEAK = "listener-leak"
    UNSAFE_CONSTRUCT = "unsafe-construct"
    UNDOCUMENTED_MODULE = "undocumented-module"


class Finding(BaseModel):
    """A single issue reported by a rule (e.g. while(true) with no exit at line 42)."""

    file: str
    line: int = Field(..., ge=1, description="1-based line number")
    type: FindingType
    severity: Severity
    description: str
    code: Optional[str] = None
    suggestion: Optional[str] = None

    model_config = {"frozen": True}


class SeveritySummary(BaseModel):
    """Per-severity counts; always a partition of the findings they were built from."""

    total: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    model_config = {"frozen": True}

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.value)


class SkippedFile(BaseModel):
    """A file the scan could not read. Reported as a note, never as a finding."""

    path: str
    reason: str

    model_config = {"frozen": True}


class ScanReport(BaseModel):
    """Output of one scan: findings in detector x file order plus their summary."""

    generated_at: datetime = Field(..., alias="generatedAt")
    target: str
    findings: tuple[Finding, ...] = ()
    summary: SeveritySummary = Field(default_factory=SeveritySummary)
    skipped: tuple[SkippedFile, ...] = ()

    model_config = {"frozen": True, "populate_by_name": True}

    def by_severity(self, severity: Severity) -> list[Finding]:
        return [f for f in self.findings if f.severity == severity]

    @property
    def is_clean(self) -> bool:
        return not self.findings
