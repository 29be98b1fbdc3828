import re
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from comment_reflow.config import DEFAULT_MAX_WIDTH

PatternKind = Literal[
    "line_marker",
    "block_open",
    "block_close",
    "list_item",
    "checklist",
    "ordered_list_item",
    "doc_tag",
    "free_tag",
]

BlockStyle = Literal["block", "doc", "markup", "range"]


class PatternSpec(BaseModel):
    """One entry of the pattern file.

    Markers are given either as a literal ``token`` or as a ``regex``; block
    openers additionally describe how their continuation lines look.
    """

    name: str
    kind: PatternKind
    token: Optional[str] = None
    regex: Optional[str] = None
    priority: int = 0
    ignore_case: bool = False
    style: Optional[BlockStyle] = None
    close: Optional[str] = None
    continuation: Optional[str] = None
    indent_levels: int = 0
    extra_indent: bool = False

    @model_validator(mode="after")
    def check_matcher(self) -> "PatternSpec":
        if (self.token is None) == (self.regex is None):
            raise ValueError(f"Pattern {self.name!r} needs exactly one of 'token' or 'regex'")
        if self.token == "":
            raise ValueError(f"Pattern {self.name!r} has an empty token")
        if self.kind == "block_open" and (self.style is None or self.token is None):
            raise ValueError(f"Block opener {self.name!r} needs a 'token' and a 'style'")
        return self

    @field_validator("indent_levels")
    @classmethod
    def check_indent_levels(cls, value: int) -> int:
        if value < 0:
            raise ValueError("indent_levels must not be negative")
        return value

    @property
    def source(self) -> str:
        """Regular expression source matching this entry."""

        return re.escape(self.token) if self.token is not None else self.regex


class ReflowRequest(BaseModel):
    text: str
    max_width: int = DEFAULT_MAX_WIDTH

    @field_validator("max_width")
    @classmethod
    def check_max_width(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"max_width must be a positive integer, got {value}")
        return value


class ReflowResponse(BaseModel):
    original: str
    reflowed: str

    @property
    def changed(self) -> bool:
        return self.original != self.reflowed
