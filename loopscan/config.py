from __future__ import annotations

"""
Scanner configuration: which detectors run, in what order, and the fixed
tables they read.

The tables (extensions, ignore list, I/O call names) are copied from the
module-level defaults so a test harness can pass smaller ones through a
Config instead of patching module state.
"""

from dataclasses import dataclass, field
from typing import AbstractSet, List, Sequence

from loopscan.rules.base import Rule
from loopscan.rules.blocking_loops import DEFAULT_IO_CALL_NAMES, BlockingLoopRule
from loopscan.rules.infinite_loops import InfiniteLoopRule
from loopscan.rules.listener_leaks import ListenerLeakRule
from loopscan.rules.promises import PromiseDeadlockRule
from loopscan.rules.recursion import RecursionRule
from loopscan.rules.undocumented_modules import UndocumentedModuleRule
from loopscan.rules.unsafe_constructs import UnsafeConstructsRule
from loopscan.traversal import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_DIRS

# Files above this size are skipped rather than scanned (1 MiB)
DEFAULT_MAX_FILE_SIZE = 1_048_576


def core_rules() -> List[Rule]:
    """The five loop/async detectors, in report order."""
    return [
        InfiniteLoopRule(),
        RecursionRule(),
        BlockingLoopRule(),
        PromiseDeadlockRule(),
        ListenerLeakRule(),
    ]


def extended_rules() -> List[Rule]:
    """Code-hygiene detectors that only run with --extended."""
    return [
        UnsafeConstructsRule(),
        UndocumentedModuleRule(),
    ]


@dataclass
class Config:
    """
    Scanner configuration.

    rules run in list order for every file; that order is part of the report
    contract. Left unset, rules are the core detectors, so a Config built
    only to swap a table still scans. max_file_size=None disables the size cap.
    """

    rules: Sequence[Rule] = field(default_factory=core_rules)
    extensions: AbstractSet[str] = DEFAULT_EXTENSIONS
    ignore_dirs: AbstractSet[str] = DEFAULT_IGNORE_DIRS
    io_call_names: AbstractSet[str] = DEFAULT_IO_CALL_NAMES
    max_file_size: int | None = DEFAULT_MAX_FILE_SIZE


def get_default_config(extended: bool = False) -> Config:
    """
    Return the default configuration.

    extended=True appends the hygiene detectors after the core ones, so the
    core findings keep their order.
    """
    rules = core_rules()
    if extended:
        rules.extend(extended_rules())
    return Config(rules=rules)


def get_enabled_rules(config: Config | None = None) -> Sequence[Rule]:
    """Return the rules of the given config (or of the default config)."""
    if config is None:
        config = get_default_config()
    return config.rules
