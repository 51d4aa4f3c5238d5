# Undocumented module detection: files with no doc block and no comment line

from __future__ import annotations

import re
from typing import Any

from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule

_DOC_BLOCK_RE = re.compile(r"/\*\*.*?\*/", re.DOTALL)


def is_documented(text: str) -> bool:
    """A `/** ... */` block or any line starting with `//` or `*` counts as documentation."""
    if _DOC_BLOCK_RE.search(text):
        return True
    return any(line.strip().startswith(("//", "*")) for line in text.split("\n"))


class UndocumentedModuleRule(Rule):
    id = "undocumented-module"
    name = "Undocumented module"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        if not source.text.strip() or is_documented(source.text):
            return ()
        return (
            self.finding(
                source,
                0,
                FindingType.UNDOCUMENTED_MODULE,
                Severity.LOW,
                "Module has no doc comment or inline comments",
                code="",
                suggestion="Add a /** ... */ header describing what the module exports",
            ),
        )
