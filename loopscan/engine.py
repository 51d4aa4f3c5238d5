"""Scan engine: Collector -> rules per file -> ScanReport."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from loopscan.config import Config, get_default_config, get_enabled_rules
from loopscan.context import SourceFile, load_sources
from loopscan.findings.models import Finding, ScanReport
from loopscan.reporting.report import aggregate
from loopscan.rules.base import Rule
from loopscan.traversal import find_source_files

logger = logging.getLogger(__name__)


def scan_source(
    source: SourceFile,
    rules: Sequence[Rule],
    config: Config | None = None,
) -> tuple[Finding, ...]:
    """Run every rule on one file, concatenating results in rule order."""
    findings: tuple[Finding, ...] = ()
    for rule in rules:
        findings += rule.run(source, config)
    logger.debug("%s: %d finding(s)", source.path, len(findings))
    return findings


def scan(source: SourceFile, config: Config | None = None) -> tuple[Finding, ...]:
    """Scan one file with the rules of config (default rules when None)."""
    if config is None:
        config = get_default_config()
    return scan_source(source, get_enabled_rules(config), config)


def scan_sources(
    sources: Sequence[SourceFile],
    config: Config | None = None,
) -> tuple[Finding, ...]:
    """Scan files in the given order; findings are grouped file by file."""
    if config is None:
        config = get_default_config()
    rules = get_enabled_rules(config)
    findings: tuple[Finding, ...] = ()
    for source in sources:
        findings += scan_source(source, rules, config)
    return findings


def scan_directory(target: Path, config: Config | None = None) -> ScanReport:
    """
    Scan every source file under target and aggregate the results.

    Raises:
        NotFoundError: target is missing; nothing is read.

    Unreadable files end up in ScanReport.skipped and the scan goes on.
    """
    if config is None:
        config = get_default_config()

    paths = find_source_files(
        target,
        extensions=config.extensions,
        ignore_dirs=config.ignore_dirs,
    )
    sources, skipped = load_sources(paths, max_file_size=config.max_file_size)
    logger.info("Scanning %d file(s), %d skipped", len(sources), len(skipped))

    findings = scan_sources(sources, config)
    return aggregate(findings, target=target, skipped=skipped)
