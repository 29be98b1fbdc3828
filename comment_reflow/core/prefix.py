from typing import List, Optional, Sequence

from comment_reflow.config import EXTRA_INDENT
from comment_reflow.core.models import CommentEnvelope, OpeningMarker
from comment_reflow.core.registry import PatternRegistry

_STYLE_TO_OPENING = {
    "block": OpeningMarker.BLOCK,
    "doc": OpeningMarker.DOC,
    "markup": OpeningMarker.MARKUP,
    "range": OpeningMarker.RANGE,
}


def _leading_whitespace(text: str) -> str:
    return text[: len(text) - len(text.lstrip())]


def get_comment_prefix(line: str, registry: Optional[PatternRegistry] = None) -> str:
    """Returns the first line comment prefix.

    `  // Example` -> `  // `
    `  Example` -> `  `
    """

    registry = registry or PatternRegistry.default()
    match = registry.match_prefix(line)
    return match.text if match else _leading_whitespace(line)


def get_comment_suffix(line: str, registry: Optional[PatternRegistry] = None) -> str:
    """Returns the last line comment suffix.

    `  // Example` -> ``
    `  /* Example */` -> ` */`
    """

    registry = registry or PatternRegistry.default()
    match = registry.match_block_close(line)
    return match.text if match else ""


def normalize_prefix(raw_prefix: str, registry: Optional[PatternRegistry] = None) -> str:
    """Returns the prefix used for every content line of the comment.

    `//` -> `// `
    `  # ` -> `  # `
    `  /* ` -> `   * `
    `  /** ` -> `   * `
    `  {/* ` -> `    * `
    `  <!-- ` -> `  `
    """

    if not raw_prefix.strip():
        return raw_prefix

    registry = registry or PatternRegistry.default()
    match = registry.match_prefix(raw_prefix)
    if match is None:
        return raw_prefix

    entry = match.entry
    if entry.kind == "line_marker":
        return f"{match.indent}{match.token} "
    if not entry.continuation:
        return match.indent
    return f"{match.indent}{' ' * entry.indent_levels}{entry.continuation} "


def needs_extra_indent(raw_prefix: str, registry: Optional[PatternRegistry] = None) -> bool:
    """Plain block and markup comments reserve extra width; doc blocks don't."""

    registry = registry or PatternRegistry.default()
    match = registry.match_block_open(raw_prefix)
    return bool(match and match.entry.extra_indent)


def get_available_length(prefix: str, max_width: int, extra_indent: bool = False) -> int:
    """Returns the number of characters available inside the comment."""

    return max_width - len(prefix) - (EXTRA_INDENT if extra_indent else 0)


def detect_envelope(
    lines: Sequence[str], registry: Optional[PatternRegistry] = None
) -> CommentEnvelope:
    """Describe how the comment made of *lines* opens and closes."""

    registry = registry or PatternRegistry.default()
    if not lines:
        return CommentEnvelope(opening=OpeningMarker.NONE, first_line_prefix="")

    match = registry.match_prefix(lines[0])
    if match is None:
        return CommentEnvelope(
            opening=OpeningMarker.NONE,
            first_line_prefix=_leading_whitespace(lines[0]),
        )

    if match.is_block_open:
        return CommentEnvelope(
            opening=_STYLE_TO_OPENING[match.entry.style],
            first_line_prefix=match.text,
            opener_token=match.token,
            closing_token=_closing_token(lines, [match.entry.close], match.text, registry),
            line_token=match.entry.continuation,
        )

    # A bare `*` line may be the middle of a block, so it may carry a closer.
    closes = [
        entry.close
        for entry in registry.entries("block_open")
        if entry.continuation and entry.continuation == match.token
    ]
    return CommentEnvelope(
        opening=OpeningMarker.LINE,
        first_line_prefix=match.text,
        closing_token=_closing_token(lines, closes, match.text, registry),
        line_token=match.token,
    )


def _closing_token(
    lines: Sequence[str],
    candidates: List[Optional[str]],
    first_prefix: str,
    registry: PatternRegistry,
) -> Optional[str]:
    last = lines[-1]
    if len(lines) == 1:
        # The opener itself must not be read as the closer (`/*/`).
        last = last[len(first_prefix):]
    match = registry.match_block_close(last)
    if match and match.token in candidates:
        return match.token
    return None
