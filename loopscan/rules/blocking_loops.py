# Blocking loop detection: while/for loops calling I/O-looking functions without await

from __future__ import annotations

import re
from typing import AbstractSet, Any

from loopscan.blocks import find_block_end
from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule, has_keyword

# Call names that suggest network or disk access
DEFAULT_IO_CALL_NAMES: frozenset[str] = frozenset({"fetch", "readFile", "query", "request"})

_LOOP_RE = re.compile(r"\b(while|for)\s*\([^)]+\)\s*\{")


def io_call_pattern(names: AbstractSet[str]) -> re.Pattern[str]:
    """Regex matching a call to any of names, e.g. `db.query(`."""
    alternatives = "|".join(re.escape(n) for n in sorted(names))
    return re.compile(r"\b(?:" + alternatives + r")\s*\(")


class BlockingLoopRule(Rule):
    """
    Flags synchronous loops that look like they wait on I/O.

    A loop is reported when its block (resolved from the header's brace)
    mentions an I/O-suggestive call and contains no `await`.
    """

    id = "blocking-loop"
    name = "Blocking loop"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        names = getattr(config, "io_call_names", None)
        if names is None:
            names = DEFAULT_IO_CALL_NAMES
        if not names:
            return ()
        io_call = io_call_pattern(names)
        text = source.text
        findings: list[Finding] = []
        for m in _LOOP_RE.finditer(text):
            block = text[m.start() : find_block_end(text, m.end() - 1)]
            if not io_call.search(block) or has_keyword(block, "await"):
                continue
            keyword = m.group(1)
            description = (
                "Potentially blocking synchronous loop with async operations"
                if keyword == "while"
                else "Potentially blocking synchronous for loop with async operations"
            )
            findings.append(
                self.finding(
                    source,
                    m.start(),
                    FindingType.BLOCKING_LOOP,
                    Severity.MEDIUM,
                    description,
                    code=block.split("\n")[0].strip(),
                    suggestion="Use await or convert to async iterator",
                )
            )
        return tuple(findings)
