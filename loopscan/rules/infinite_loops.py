# Unconditional loop detection: while(true) / for(;;) loops whose block has no break or return

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from loopscan.blocks import find_next_block
from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule, has_keyword


@dataclass(frozen=True)
class _LoopPattern:
    regex: re.Pattern[str]
    type: FindingType
    description: str
    suggestion: str


_WHILE_SUGGESTION = "Add break condition or use setInterval/setTimeout for async loops"
_FOR_SUGGESTION = "Add loop termination condition or break statement"

LOOP_PATTERNS: tuple[_LoopPattern, ...] = (
    _LoopPattern(
        re.compile(r"\bwhile\s*\(\s*true\s*\)"),
        FindingType.INFINITE_WHILE,
        "while(true) unconditional loop with no exit",
        _WHILE_SUGGESTION,
    ),
    _LoopPattern(
        re.compile(r"\bwhile\s*\(\s*1\s*\)"),
        FindingType.INFINITE_WHILE,
        "while(1) unconditional loop with no exit",
        _WHILE_SUGGESTION,
    ),
    _LoopPattern(
        re.compile(r"\bwhile\s*\(\s*!!true\s*\)"),
        FindingType.INFINITE_WHILE,
        "Obfuscated unconditional while loop with no exit",
        _WHILE_SUGGESTION,
    ),
    _LoopPattern(
        re.compile(r"\bfor\s*\(\s*;\s*;\s*\)"),
        FindingType.INFINITE_FOR,
        "for(;;) unconditional loop with no exit",
        _FOR_SUGGESTION,
    ),
    _LoopPattern(
        re.compile(r"\bfor\s*\(\s*;\s*true\s*;\s*\)"),
        FindingType.INFINITE_FOR,
        "for(;true;) unconditional loop with no exit",
        _FOR_SUGGESTION,
    ),
)


class InfiniteLoopRule(Rule):
    """
    Flags always-true loops with no way out.

    The block is resolved from the first `{` after the loop header, and the
    text from the loop keyword to the end of that block is searched for a
    `break` or `return` keyword. Nested blocks are part of that text, so a
    `break` of an inner loop also counts as an exit.
    """

    id = "infinite-loops"
    name = "Unconditional loop"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        text = source.text
        findings: list[Finding] = []
        for pattern in LOOP_PATTERNS:
            for m in pattern.regex.finditer(text):
                _, block_end = find_next_block(text, m.end())
                if has_keyword(text[m.start() : block_end], "break", "return"):
                    continue
                findings.append(
                    self.finding(
                        source,
                        m.start(),
                        pattern.type,
                        Severity.CRITICAL,
                        pattern.description,
                        suggestion=pattern.suggestion,
                    )
                )
        return tuple(findings)
