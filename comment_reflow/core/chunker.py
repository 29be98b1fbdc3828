from typing import List, Optional, Sequence

from comment_reflow.core.classifier import is_break
from comment_reflow.core.models import Chunk, ChunkKind, ItemMarker
from comment_reflow.core.registry import PatternRegistry


def split_into_chunks(
    lines: Sequence[str], registry: Optional[PatternRegistry] = None
) -> List[Chunk]:
    """Group clean lines into paragraph and structured-item chunks.

    A list bullet, number or tag starts a new chunk; any other line joins the
    current one. We assume free text only appears before the first item, so
    text following an item is that item's continuation. A break line closes
    the current chunk without starting a new one.
    """

    registry = registry or PatternRegistry.default()
    chunks: List[Chunk] = []
    current: List[str] = []
    marker: Optional[ItemMarker] = None

    def flush() -> None:
        if current:
            chunks.append(_make_chunk(current, marker))
            current.clear()

    for line in lines:
        if is_break(line, registry):
            flush()
            marker = None
            continue

        item = registry.match_item(line)
        if item is not None:
            flush()
            marker = item
        elif not current:
            marker = None

        current.append(line)

    flush()
    return chunks


def _make_chunk(lines: List[str], marker: Optional[ItemMarker]) -> Chunk:
    if marker is None:
        return Chunk(kind=ChunkKind.PARAGRAPH, lines=tuple(lines))
    return Chunk(
        kind=marker.kind,
        lines=tuple(lines),
        marker_text=marker.text,
        marker_width=marker.width,
    )
