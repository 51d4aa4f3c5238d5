# Promise deadlock detection: Promise.all([]) and executors that can never settle

from __future__ import annotations

import re
from typing import Any

from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule

_EMPTY_ALL_RE = re.compile(r"\bPromise\.all\s*\(\s*\[\s*\]\s*\)")

# new Promise(() => ...), new Promise(async () => ...), new Promise(function () ...)
_NO_PARAM_EXECUTOR_RE = re.compile(
    r"\bnew\s+Promise\s*\(\s*(?:async\s+)?(?:\(\s*\)\s*=>|function\s*\w*\s*\(\s*\))"
)

_PATTERNS = (
    (
        _EMPTY_ALL_RE,
        FindingType.EMPTY_PROMISE_ALL,
        "Promise.all with empty array (may indicate logic error)",
        "Check that the list of operations is populated before awaiting it",
    ),
    (
        _NO_PARAM_EXECUTOR_RE,
        FindingType.UNRESOLVED_PROMISE,
        "Promise never resolves (no resolve/reject callback)",
        "Accept and call resolve/reject in the executor",
    ),
)


class PromiseDeadlockRule(Rule):
    """Flags promise constructs that resolve trivially or never settle."""

    id = "promise-deadlock"
    name = "Promise deadlock"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        findings: list[Finding] = []
        for regex, type_, description, suggestion in _PATTERNS:
            for m in regex.finditer(source.text):
                findings.append(
                    self.finding(
                        source,
                        m.start(),
                        type_,
                        Severity.HIGH,
                        description,
                        suggestion=suggestion,
                    )
                )
        return tuple(findings)
