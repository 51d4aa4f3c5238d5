# Rule interface (abstract base class): defines the contract all detectors implement.
# Concrete rules (infinite_loops, recursion, etc.) subclass Rule and implement run().

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from loopscan.context import SourceFile, line_number, line_text
from loopscan.findings.models import Finding, FindingType, Severity


class Rule(ABC):
    """
    Abstract base class for all detectors.

    Subclasses must define:
    - id: str: unique rule identifier (e.g. "infinite-loops")
    - name: str: human-readable rule name (e.g. "Unconditional loop")
    - run(source, config) -> tuple[Finding, ...]: scan one file's text

    The scanner calls run() once per file. Rules are pure functions of
    source.text: they keep no state between files and never raise on
    malformed input, they just report fewer findings.
    """

    id: str
    name: str

    @abstractmethod
    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        """
        Scan one file and return its findings in match order.

        Args:
            source: The file being scanned (path and full text).
            config: Scanner config (loopscan.config.Config) or None, in which
                    case module defaults apply.

        Returns:
            Tuple of Finding objects, empty if nothing matched.
        """
        ...

    def finding(
        self,
        source: SourceFile,
        offset: int,
        type: FindingType,
        severity: Severity,
        description: str,
        code: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> Finding:
        """Build a Finding at offset; code defaults to the stripped source line."""
        line = line_number(source.text, offset)
        if code is None:
            code = line_text(source.text, line)
        return Finding(
            file=source.path,
            line=line,
            type=type,
            severity=severity,
            description=description,
            code=code or None,
            suggestion=suggestion,
        )


def has_keyword(text: str, *keywords: str) -> bool:
    """True if any keyword appears as a whole word in text."""
    pattern = r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")\b"
    return re.search(pattern, text) is not None
