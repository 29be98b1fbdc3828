import logging
import re
from functools import lru_cache
from typing import List, Optional, Sequence

from comment_reflow.config import DEFAULT_MAX_WIDTH
from comment_reflow.core.chunker import split_into_chunks
from comment_reflow.core.classifier import is_single_line_block
from comment_reflow.core.models import Chunk, CommentEnvelope, LineRole, WrappedLine
from comment_reflow.core.prefix import (
    detect_envelope,
    get_available_length,
    needs_extra_indent,
    normalize_prefix,
)
from comment_reflow.core.registry import PatternRegistry
from comment_reflow.core.wrapping import wrap_chunk
from comment_reflow.settings import comment_reflow_logger

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_into_lines(text: str) -> List[str]:
    """Splits the text into physical lines, ignoring blank ones."""

    return [line for line in _LINE_BREAK_RE.split(text) if line.strip()]


def strip_formatting(
    lines: Sequence[str],
    envelope: CommentEnvelope,
    registry: Optional[PatternRegistry] = None,
) -> List[str]:
    """Returns the comment text as clean lines without any comment markers.

    Only the markers of the detected envelope are removed, so a Markdown
    bullet in plain text is kept. Paragraph breaks are squashed.
    """

    registry = registry or PatternRegistry.default()
    last = len(lines) - 1
    clean: List[str] = []

    for index, line in enumerate(lines):
        if index == last and envelope.closing_token:
            suffix = registry.match_block_close(line)
            if suffix is not None:
                line = line[: len(line) - len(suffix.text)]

        if index == 0 and envelope.opener_token:
            line = line[len(envelope.first_line_prefix):]
        elif envelope.line_token:
            marker = registry.match_line_marker(line, envelope.line_token)
            if marker is not None:
                line = line[len(marker.text):]

        line = line.strip()
        if line:
            clean.append(line)

    return clean


class CommentReflower:
    """Reflow one comment or text paragraph to a maximum line width."""

    def __init__(
        self,
        registry: Optional[PatternRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or comment_reflow_logger(__name__)
        self._registry = registry or PatternRegistry.default()

    def reflow(self, text: str, max_width: int = DEFAULT_MAX_WIDTH) -> str:
        max_width = max(max_width, 1)

        if "\n" not in text and len(text) <= max_width:
            self._logger.debug("Single line fits in %d columns, nothing to do", max_width)
            return text

        lines = split_into_lines(text)
        if not lines:
            return text

        envelope = detect_envelope(lines, self._registry)
        self._logger.debug(
            "Reflowing %d line(s) to width %d, envelope: %s",
            len(lines),
            max_width,
            envelope.opening.value,
        )

        clean_lines = strip_formatting(lines, envelope, self._registry)
        chunks = split_into_chunks(clean_lines, self._registry)

        prefix = normalize_prefix(envelope.first_line_prefix, self._registry)
        available = get_available_length(
            prefix,
            max_width,
            extra_indent=needs_extra_indent(envelope.first_line_prefix, self._registry),
        )

        content = self._wrap_chunks(chunks, available)
        self._logger.debug(
            "Wrapped %d chunk(s) into %d line(s) of at most %d characters",
            len(chunks),
            len(content),
            available,
        )

        if self._is_unchanged(content, clean_lines, lines, envelope, max_width):
            self._logger.debug("Wrapping is a no-op, returning the input unchanged")
            return text

        output = self._restore_delimiters(content, envelope, prefix)
        return "\n".join(line.render(prefix) for line in output)

    # --- Private helpers ---
    def _wrap_chunks(self, chunks: Sequence[Chunk], max_width: int) -> List[WrappedLine]:
        wrapped: List[WrappedLine] = []
        for chunk in chunks:
            for index, line in enumerate(wrap_chunk(chunk, max_width, self._registry)):
                role = LineRole.FIRST if index == 0 else LineRole.CONTINUATION
                wrapped.append(WrappedLine(text=line, role=role))
        return wrapped

    def _is_unchanged(
        self,
        content: Sequence[WrappedLine],
        clean_lines: Sequence[str],
        lines: Sequence[str],
        envelope: CommentEnvelope,
        max_width: int,
    ) -> bool:
        if [line.text.strip() for line in content] != list(clean_lines):
            return False
        if any(len(line) > max_width for line in lines):
            return False

        # A fitting `/* note */` stays on one line even with blank lines around it.
        if len(lines) == 1 and is_single_line_block(lines[0], self._registry):
            return True

        # Delimiters sharing a line with text still have to move to their own.
        if envelope.opener_token and lines[0].strip() != envelope.opener_token:
            return False
        if envelope.closing_token and lines[-1].strip() != envelope.closing_token:
            return False
        return True

    def _restore_delimiters(
        self,
        content: Sequence[WrappedLine],
        envelope: CommentEnvelope,
        prefix: str,
    ) -> List[WrappedLine]:
        output: List[WrappedLine] = []

        if envelope.opener_token:
            output.append(WrappedLine(envelope.first_line_prefix.rstrip(), LineRole.OPENER))

        output.extend(content)

        if envelope.closing_token:
            indent = prefix[: len(prefix) - len(prefix.lstrip())]
            output.append(WrappedLine(f"{indent}{envelope.closing_token}", LineRole.CLOSER))

        return output


@lru_cache(maxsize=1)
def _default_reflower() -> CommentReflower:
    return CommentReflower()


def reflow(text: str, max_width: int = DEFAULT_MAX_WIDTH) -> str:
    """Wrap a single paragraph of a code comment, Markdown or plain text."""

    return _default_reflower().reflow(text, max_width)
