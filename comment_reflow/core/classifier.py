"""Predicates classifying a single physical line of a comment."""

from typing import Optional

from comment_reflow.core.registry import PatternRegistry


def is_block_open(line: str, registry: Optional[PatternRegistry] = None) -> bool:
    """Line starts, after leading whitespace, with a block opener."""

    registry = registry or PatternRegistry.default()
    return registry.match_block_open(line) is not None


def is_block_close(line: str, registry: Optional[PatternRegistry] = None) -> bool:
    """Line ends, before trailing whitespace, with a block closer."""

    registry = registry or PatternRegistry.default()
    return registry.match_block_close(line) is not None


def is_single_line_block(line: str, registry: Optional[PatternRegistry] = None) -> bool:
    """Open, content and close on one line, e.g. ``/* note */``."""

    registry = registry or PatternRegistry.default()
    opener = registry.match_block_open(line)
    if opener is None or "\n" in line:
        return False
    rest = line[len(opener.text):]
    return registry.match_block_close(rest) is not None


def is_break(line: str, registry: Optional[PatternRegistry] = None) -> bool:
    """Empty line or a lone line marker: a paragraph boundary."""

    registry = registry or PatternRegistry.default()
    stripped = line.strip()
    if not stripped:
        return True
    return any(entry.token == stripped for entry in registry.entries("line_marker"))
