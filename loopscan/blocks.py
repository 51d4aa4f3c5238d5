# Block-boundary resolution: find the `}` matching an opening `{` in raw source text.

import logging
import re

logger = logging.getLogger(__name__)

QUOTE_CHARS = frozenset({"'", '"', "`"})

_OPEN_BRACE_RE = re.compile(r"\{")


def find_block_end(text: str, start: int) -> int:
    """
    Return the offset one past the `}` that closes the block opened at start.

    Braces inside '...', "..." and `...` literals are not counted. A quote
    closes only on the same character when the previous character is not a
    backslash. That is a single-level check: "\\\\" followed by a quote is
    treated as escaped.

    If no matching brace exists the text length is returned. An unterminated
    string keeps the scan "inside a string" until end of text, so any brace
    after it is ignored and the result is also len(text).
    """
    depth = 0
    quote = None
    for i in range(start, len(text)):
        ch = text[i]
        if quote is not None:
            if ch == quote and text[i - 1] != "\\":
                quote = None
            continue
        if ch in QUOTE_CHARS:
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return len(text)


def find_next_block(text: str, pos: int) -> tuple[int, int]:
    """
    Locate the first `{` at or after pos and resolve its block.

    Returns (brace_offset, block_end). Without any further `{` both values
    are len(text), i.e. the block degrades to "rest of file".
    """
    m = _OPEN_BRACE_RE.search(text, pos)
    if m is None:
        logger.debug("No opening brace after offset %d", pos)
        return len(text), len(text)
    return m.start(), find_block_end(text, m.start())
