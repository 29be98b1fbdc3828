import textwrap
from typing import List, Optional

from comment_reflow.core.models import Chunk
from comment_reflow.core.registry import PatternRegistry


class _MarkerAwareWrapper(textwrap.TextWrapper):
    """TextWrapper that never starts a line with a list bullet, number or tag.

    A word the registry would read as an item marker (` - `, `2.`, `@user`,
    `NOTE:`) is kept together with the word before it, so wrapping the result
    again finds the same paragraph instead of a new item.
    """

    def __init__(self, registry: PatternRegistry, **kwargs) -> None:
        super().__init__(**kwargs)
        self._registry = registry

    def _split_chunks(self, text: str) -> List[str]:
        chunks: List[str] = []
        for chunk in super()._split_chunks(text):
            if chunk.strip() and len(chunks) >= 2 and self._registry.match_item(chunk) is not None:
                space = chunks.pop()
                chunk = chunks.pop() + space + chunk
            chunks.append(chunk)
        return chunks


def wrap_text_block(
    text: str,
    max_width: int,
    initial_indent: str = "",
    subsequent_indent: str = "",
    registry: Optional[PatternRegistry] = None,
) -> List[str]:
    """Greedily pack the words of *text* into lines of at most *max_width*.

    Words are never broken, so a word longer than the width gets a line of
    its own. Indents count towards the width.
    """

    words = text.split()
    if not words:
        return []

    wrapper = _MarkerAwareWrapper(
        registry or PatternRegistry.default(),
        width=max(max_width, 1),
        initial_indent=initial_indent,
        subsequent_indent=subsequent_indent,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return wrapper.wrap(" ".join(words))


def wrap_item(chunk: Chunk, max_width: int, registry: Optional[PatternRegistry] = None) -> List[str]:
    """Wrap a list item or tag line with a hanging indent.

    The marker is kept verbatim on the first line and continuation lines are
    indented by the chunk's marker width. Doc tags use a fixed width that can
    differ from the marker length, so the first line is measured with the
    marker itself.
    """

    marker = chunk.marker_text
    if not marker[-1:].isspace():
        marker += " "

    lines = wrap_text_block(
        chunk.body,
        max_width,
        initial_indent=marker,
        subsequent_indent=" " * chunk.marker_width,
        registry=registry,
    )
    return lines or [chunk.marker_text.rstrip()]


def wrap_chunk(chunk: Chunk, max_width: int, registry: Optional[PatternRegistry] = None) -> List[str]:
    if chunk.is_structured:
        return wrap_item(chunk, max_width, registry)
    return wrap_text_block(chunk.text, max_width, registry=registry)
