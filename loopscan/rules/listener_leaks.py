# Event listener leak detection: events subscribed with on() but never unsubscribed

from __future__ import annotations

import re
from typing import Any

from loopscan.context import SourceFile
from loopscan.findings.models import Finding, FindingType, Severity
from loopscan.rules.base import Rule

_SUBSCRIBE_RE = re.compile(r"\b(?:on|addListener)\s*\(\s*['\"]([^'\"]+)['\"]\s*,")
_UNSUBSCRIBE_RE = re.compile(r"\b(?:off|removeListener)\s*\(\s*['\"]([^'\"]+)['\"]\s*,")


class ListenerLeakRule(Rule):
    """
    Compares event names across the whole file: every name passed to
    on()/addListener() must also be passed to off()/removeListener()
    somewhere. Leaks are reported once per event, at the first subscription.
    """

    id = "listener-leak"
    name = "Event listener leak"

    def run(self, source: SourceFile, config: Any) -> tuple[Finding, ...]:
        text = source.text
        first_seen: dict[str, int] = {}
        for m in _SUBSCRIBE_RE.finditer(text):
            first_seen.setdefault(m.group(1), m.start())
        removed = {m.group(1) for m in _UNSUBSCRIBE_RE.finditer(text)}

        return tuple(
            self.finding(
                source,
                offset,
                FindingType.LISTENER_LEAK,
                Severity.LOW,
                f"Event listener '{event}' added but never removed",
                suggestion="Call .off() or .removeListener() when done",
            )
            for event, offset in first_seen.items()
            if event not in removed
        )
