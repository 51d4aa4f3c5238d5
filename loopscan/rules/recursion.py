# Unbounded recursion detection: self-calling named functions without a textual base case

from __future__ import annotations

import re
from typing import Any

from loopscan.blocks import find_block_end
from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule

# `function name(...) {` with the opening brace as the last character of the match
_FUNCTION_RE = re.compile(r"(?:\basync\s+)?\bfunction\s+(\w+)\s*\([^)]*\)\s*\{")

# `if (...) { ... return ... }` with no nested braces
_GUARDED_RETURN_RE = re.compile(r"\bif\s*\([^)]+\)\s*\{[^}]*\breturn\b[^}]*\}")


def _calls(name: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(name) + r"\s*\(")


def _has_base_case(name: str, body: str) -> bool:
    """
    Textual base-case check, not control flow.

    True when the body has a `return` not immediately followed by a call to
    name, or an if-block ending in a return. `return x + f(n - 1)` counts as
    a base case and `if (n) f(n - 1); return f(n);` does not; both are
    expected misses of the heuristic.
    """
    plain_return = re.compile(r"\breturn\b(?!\s*" + re.escape(name) + r"\s*\()")
    return bool(plain_return.search(body) or _GUARDED_RETURN_RE.search(body))


class RecursionRule(Rule):
    """Flags named functions that call themselves and have no visible base case."""

    id = "unbounded-recursion"
    name = "Unbounded recursion"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        text = source.text
        findings: list[Finding] = []
        for m in _FUNCTION_RE.finditer(text):
            name = m.group(1)
            brace = m.end() - 1
            body = text[brace : find_block_end(text, brace)]
            if not _calls(name).search(body):
                continue
            if _has_base_case(name, body):
                continue
            findings.append(
                self.finding(
                    source,
                    m.start(),
                    FindingType.UNBOUNDED_RECURSION,
                    Severity.HIGH,
                    f"Function '{name}' may have unbounded recursion",
                    code=f"function {name}(...)",
                    suggestion="Add a base case to prevent stack overflow",
                )
            )
        return tuple(findings)
