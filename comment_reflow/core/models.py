from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OpeningMarker(str, Enum):
    NONE = "none"
    LINE = "line"
    BLOCK = "block"
    DOC = "doc"
    MARKUP = "markup"
    RANGE = "range"


class ChunkKind(str, Enum):
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    ORDERED_LIST_ITEM = "ordered_list_item"
    TAG_LINE = "tag_line"


class LineRole(str, Enum):
    OPENER = "opener"
    FIRST = "first"
    CONTINUATION = "continuation"
    CLOSER = "closer"


@dataclass(frozen=True)
class CommentEnvelope:
    """Outer shell of a comment: how it opens, closes and prefixes line 1."""

    opening: OpeningMarker
    first_line_prefix: str
    opener_token: Optional[str] = None
    closing_token: Optional[str] = None
    line_token: Optional[str] = None


@dataclass(frozen=True)
class Chunk:
    """Run of clean lines wrapped as one unit."""

    kind: ChunkKind
    lines: Tuple[str, ...]
    marker_text: str = ""
    marker_width: int = 0

    @property
    def is_structured(self) -> bool:
        return self.kind is not ChunkKind.PARAGRAPH

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def body(self) -> str:
        """Chunk text without its leading marker."""

        return self.text[len(self.marker_text):]


@dataclass(frozen=True)
class WrappedLine:
    text: str
    role: LineRole

    def render(self, prefix: str) -> str:
        if self.role in (LineRole.OPENER, LineRole.CLOSER):
            return self.text
        return f"{prefix}{self.text}"


@dataclass(frozen=True)
class ItemMarker:
    """Leading marker of a structured item as matched by the registry."""

    kind: ChunkKind
    text: str
    width: int
