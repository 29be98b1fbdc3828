import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from comment_reflow.config import DOC_TAG_INDENT, PATTERNS_PATH
from comment_reflow.core.models import ChunkKind, ItemMarker
from comment_reflow.errors import PatternRegistryError
from comment_reflow.schemas import PatternSpec
from comment_reflow.settings import comment_reflow_logger

# Structured item kinds in match order: list forms win over tag forms.
_ITEM_KINDS: Tuple[Tuple[str, ChunkKind], ...] = (
    ("list_item", ChunkKind.LIST_ITEM),
    ("ordered_list_item", ChunkKind.ORDERED_LIST_ITEM),
    ("doc_tag", ChunkKind.TAG_LINE),
    ("free_tag", ChunkKind.TAG_LINE),
)

_ITEM_END = r"(?:\s+|$)"


@dataclass(frozen=True)
class PrefixMatch:
    """Comment marker found at the start of a line."""

    entry: PatternSpec
    indent: str
    token: str
    text: str

    @property
    def is_block_open(self) -> bool:
        return self.entry.kind == "block_open"


@dataclass(frozen=True)
class SuffixMatch:
    token: str
    text: str


class PatternRegistry:
    """Ordered table of the markers the reflow pipeline recognises."""

    def __init__(
        self,
        entries: Iterable[PatternSpec],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or comment_reflow_logger(__name__)
        self._entries: Dict[str, List[PatternSpec]] = {}
        for entry in sorted(entries, key=lambda e: (-e.priority, -len(e.token or e.regex))):
            self._entries.setdefault(entry.kind, []).append(entry)

        self._prefixes = self._compile(
            self.entries("block_open") + self.entries("line_marker"),
            r"^(\s*)({source})(\s*)",
        )
        self._suffixes = self._compile(self.entries("block_close"), r"(\s*)({source})(\s*)$")
        self._items = self._compile_items()

        self._logger.debug(
            "Pattern registry ready: %s",
            ", ".join(f"{kind}={len(items)}" for kind, items in self._entries.items()),
        )

    # --- Construction ---
    @classmethod
    def from_yaml(
        cls,
        yaml_path: Union[str, Path],
        logger: Optional[logging.Logger] = None,
    ) -> "PatternRegistry":
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as err:
            raise PatternRegistryError(f"Cannot read pattern file {yaml_path}: {err}") from err

        if not isinstance(data, dict):
            raise PatternRegistryError(f"Pattern file {yaml_path} must contain a mapping")

        entries = []
        for item in data.get("patterns") or []:
            raw = item.get("pattern", {}) if isinstance(item, dict) else item
            try:
                entries.append(PatternSpec.model_validate(raw))
            except ValidationError as err:
                raise PatternRegistryError(f"Invalid pattern in {yaml_path}: {err}") from err

        return cls(entries, logger=logger)

    @classmethod
    def default(cls) -> "PatternRegistry":
        return _default_registry()

    # --- Lookups ---
    def entries(self, kind: str) -> List[PatternSpec]:
        return list(self._entries.get(kind, []))

    # --- Matching ---
    def match_prefix(self, line: str) -> Optional[PrefixMatch]:
        """Return the block opener or line marker starting *line*."""

        for entry, regex in self._prefixes:
            match = regex.match(line)
            if match:
                return PrefixMatch(
                    entry=entry,
                    indent=match.group(1),
                    token=match.group(2),
                    text=match.group(0),
                )
        return None

    def match_block_open(self, line: str) -> Optional[PrefixMatch]:
        match = self.match_prefix(line)
        return match if match and match.is_block_open else None

    def match_line_marker(self, line: str, token: Optional[str] = None) -> Optional[PrefixMatch]:
        """Return the line marker starting *line*, optionally only *token*."""

        for entry, regex in self._prefixes:
            if entry.kind != "line_marker" or (token is not None and entry.token != token):
                continue
            match = regex.match(line)
            if match:
                return PrefixMatch(
                    entry=entry,
                    indent=match.group(1),
                    token=match.group(2),
                    text=match.group(0),
                )
        return None

    def match_block_close(self, line: str) -> Optional[SuffixMatch]:
        for _, regex in self._suffixes:
            match = regex.search(line)
            if match:
                return SuffixMatch(token=match.group(2), text=match.group(0))
        return None

    def match_item(self, line: str) -> Optional[ItemMarker]:
        """Return the list bullet, number or tag starting a clean *line*."""

        for chunk_kind, kind, regex in self._items:
            match = regex.match(line)
            if match:
                marker = match.group(0)
                if kind == "doc_tag":
                    width = DOC_TAG_INDENT
                else:
                    # A bare marker (`-` alone on its line) gets a space when wrapped.
                    width = len(marker) if marker[-1:].isspace() else len(marker) + 1
                return ItemMarker(kind=chunk_kind, text=marker, width=width)
        return None

    # --- Private helpers ---
    def _compile(
        self, entries: List[PatternSpec], template: str
    ) -> List[Tuple[PatternSpec, re.Pattern]]:
        compiled = []
        for entry in entries:
            source = entry.source
            if entry.ignore_case:
                source = f"(?i:{source})"
            try:
                compiled.append((entry, re.compile(template.format(source=source))))
            except re.error as err:
                self._logger.warning("Bad regex for %s: %s", entry.name, err)
        return compiled

    def _compile_items(self) -> List[Tuple[ChunkKind, str, re.Pattern]]:
        checklist = "|".join(
            f"(?i:{e.source})" if e.ignore_case else e.source
            for e in self._entries.get("checklist", [])
        )
        list_template = r"^(?:{source})"
        if checklist:
            list_template += r"(?:\s+(?:" + checklist.replace("{", "{{").replace("}", "}}") + "))?"

        items = []
        for kind, chunk_kind in _ITEM_KINDS:
            template = list_template if kind == "list_item" else r"^(?:{source})"
            for _, regex in self._compile(self._entries.get(kind, []), template + _ITEM_END):
                items.append((chunk_kind, kind, regex))
        return items


@lru_cache(maxsize=1)
def _default_registry() -> PatternRegistry:
    return PatternRegistry.from_yaml(PATTERNS_PATH)
