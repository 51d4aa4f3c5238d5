# Unsafe construct detection: eval, HTML injection sinks, string timers, empty catch blocks

from __future__ import annotations

import re
from typing import Any

from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule

UNSAFE_PATTERNS: tuple[tuple[re.Pattern[str], Severity, str, str], ...] = (
    (
        re.compile(r"\beval\s*\("),
        Severity.CRITICAL,
        "Dangerous eval() usage",
        "Parse data with JSON.parse or dispatch through a lookup table",
    ),
    (
        re.compile(r"\.innerHTML\s*=(?!=)"),
        Severity.HIGH,
        "XSS risk: innerHTML assignment",
        "Assign textContent or build nodes with createElement",
    ),
    (
        re.compile(r"\bdocument\.write\s*\("),
        Severity.HIGH,
        "XSS risk: document.write",
        "Insert content through DOM APIs",
    ),
    (
        re.compile(r"\bset(?:Timeout|Interval)\s*\(\s*[\"'][^\"']*[\"']\s*,"),
        Severity.HIGH,
        "Timer called with a string (evaluated like eval)",
        "Pass a function instead of a string",
    ),
    (
        re.compile(r"\bcatch\s*(?:\([^)]*\))?\s*\{\s*\}"),
        Severity.HIGH,
        "Empty catch block swallows errors",
        "Log or rethrow the error",
    ),
)


class UnsafeConstructsRule(Rule):
    """Flags constructs that evaluate strings, inject HTML or swallow errors."""

    id = "unsafe-constructs"
    name = "Unsafe construct"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        findings: list[Finding] = []
        for regex, severity, description, suggestion in UNSAFE_PATTERNS:
            for m in regex.finditer(source.text):
                findings.append(
                    self.finding(
                        source,
                        m.start(),
                        FindingType.UNSAFE_CONSTRUCT,
                        severity,
                        description,
                        suggestion=suggestion,
                    )
                )
        return tuple(findings)
