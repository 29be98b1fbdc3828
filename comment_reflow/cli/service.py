import logging
import re
import sys
from typing import Callable, List, Optional, TextIO

from pydantic import ValidationError

from comment_reflow.config import DEFAULT_MAX_WIDTH
from comment_reflow.core.reflower import CommentReflower
from comment_reflow.errors import InvalidWidthError
from comment_reflow.schemas import ReflowRequest, ReflowResponse
from comment_reflow.settings import comment_reflow_logger

# Blank lines, kept as separators when reflowing paragraph by paragraph
_PARAGRAPH_BREAK_RE = re.compile(r"((?:\r?\n)[ \t]*(?:\r?\n[ \t]*)*\r?\n)")


class CommentReflowService:
    def __init__(
        self,
        reflower_factory: Callable[[], CommentReflower] = CommentReflower,
        logger: Optional[logging.Logger] = None,
        source: Optional[TextIO] = None,
        stdin: Optional[TextIO] = None,
        isatty: Optional[Callable[[], bool]] = None,
    ) -> None:
        self._logger = logger or comment_reflow_logger(__name__)
        self._reflower_factory = reflower_factory
        self._source = source
        self._stdin = stdin or sys.stdin
        self._isatty = isatty or self._stdin.isatty

    # --- Public API ---
    def read_input(self) -> str:
        if self._source is not None:
            self._logger.debug("Reading text from %s", getattr(self._source, "name", "source"))
            return self._source.read().rstrip("\r\n")

        if not self._isatty():
            self._logger.debug("Reading text from stdin...")
            return self._stdin.read().rstrip("\r\n")

        self._logger.debug("No file given and stdin is a terminal")
        return ""

    def reflow(
        self,
        text: str,
        max_width: int = DEFAULT_MAX_WIDTH,
        paragraphs: bool = False,
    ) -> ReflowResponse:
        try:
            request = ReflowRequest(text=text, max_width=max_width)
        except ValidationError as error:
            raise InvalidWidthError(f"Width must be a positive integer, got {max_width}") from error

        reflower = self._reflower_factory()
        parts = self._split_paragraphs(request.text) if paragraphs else [request.text]
        self._logger.debug("Reflowing %d paragraph(s) at width %d", len(parts), request.max_width)

        reflowed = "".join(
            part if _PARAGRAPH_BREAK_RE.fullmatch(part) else reflower.reflow(part, request.max_width)
            for part in parts
        )
        return ReflowResponse(original=request.text, reflowed=reflowed)

    # --- Private helpers ---
    @staticmethod
    def _split_paragraphs(text: str) -> List[str]:
        return [part for part in _PARAGRAPH_BREAK_RE.split(text) if part]
