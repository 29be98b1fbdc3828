import logging

import pytest

from comment_reflow.core.models import ChunkKind
from comment_reflow.core.registry import PatternRegistry
from comment_reflow.errors import PatternRegistryError


@pytest.fixture
def registry() -> PatternRegistry:
    return PatternRegistry.default()


def _write(tmp_path, content: str):
    path = tmp_path / "patterns.yml"
    path.write_text(content, encoding="utf-8")
    return path


def test_default_registry_is_cached():
    assert PatternRegistry.default() is PatternRegistry.default()


def test_line_markers_are_ordered_longest_first(registry):
    assert [entry.token for entry in registry.entries("line_marker")] == ["//", "#", "*"]


def test_block_openers_try_longer_tokens_first(registry):
    tokens = [entry.token for entry in registry.entries("block_open")]

    assert tokens.index("/**") < tokens.index("/*")
    assert tokens.index("{/*") < tokens.index("/*")


@pytest.mark.parametrize(
    "line, token, indent, text",
    [
        ("// Example", "//", "", "// "),
        ("  /** Example", "/**", "  ", "  /** "),
        ("  {/* Example", "{/*", "  ", "  {/* "),
        ("/*Example", "/*", "", "/*"),
        ("\t# Example", "#", "\t", "\t# "),
        (" * Example", "*", " ", " * "),
        ("<!-- Example", "<!--", "", "<!-- "),
    ],
)
def test_match_prefix(registry, line, token, indent, text):
    match = registry.match_prefix(line)

    assert match is not None
    assert match.token == token
    assert match.indent == indent
    assert match.text == text


def test_match_prefix_returns_none_for_plain_text(registry):
    assert registry.match_prefix("Example") is None
    assert registry.match_prefix("- item") is None


def test_match_line_marker_can_be_limited_to_one_token(registry):
    assert registry.match_line_marker("# heading", "//") is None
    assert registry.match_line_marker("// note", "//").text == "// "
    assert registry.match_line_marker("/* block") is None


@pytest.mark.parametrize(
    "line, token, text",
    [
        ("Example */", "*/", " */"),
        ("Example */}  ", "*/}", " */}  "),
        ("Example-->", "-->", "-->"),
    ],
)
def test_match_block_close(registry, line, token, text):
    match = registry.match_block_close(line)

    assert match.token == token
    assert match.text == text


@pytest.mark.parametrize(
    "line, kind, marker, width",
    [
        ("- Eins", ChunkKind.LIST_ITEM, "- ", 2),
        ("* Zwei", ChunkKind.LIST_ITEM, "* ", 2),
        ("+ Drei", ChunkKind.LIST_ITEM, "+ ", 2),
        ("- [ ] Polizei", ChunkKind.LIST_ITEM, "- [ ] ", 6),
        ("* [x] Polizei", ChunkKind.LIST_ITEM, "* [x] ", 6),
        ("- [X] Polizei", ChunkKind.LIST_ITEM, "- [X] ", 6),
        ("1. First", ChunkKind.ORDERED_LIST_ITEM, "1. ", 3),
        ("12. Twelfth", ChunkKind.ORDERED_LIST_ITEM, "12. ", 4),
        ("@param foo Something", ChunkKind.TAG_LINE, "@param ", 4),
        ("@returns", ChunkKind.TAG_LINE, "@returns", 4),
        ("TODO: Fix it", ChunkKind.TAG_LINE, "TODO: ", 6),
        ("FIXME(ana): Fix it", ChunkKind.TAG_LINE, "FIXME(ana): ", 12),
        ("- TODO: Fix it", ChunkKind.LIST_ITEM, "- ", 2),
        ("-", ChunkKind.LIST_ITEM, "-", 2),
        ("2.", ChunkKind.ORDERED_LIST_ITEM, "2.", 3),
        ("NOTE:", ChunkKind.TAG_LINE, "NOTE:", 6),
    ],
)
def test_match_item(registry, line, kind, marker, width):
    item = registry.match_item(line)

    assert item.kind is kind
    assert item.text == marker
    assert item.width == width


@pytest.mark.parametrize(
    "line",
    ["-Eins", "*emphasis*", "Hello world", "HTTP is a protocol", "Todo: lowercase", "1.5 litres", "email@example.com"],
)
def test_match_item_ignores_plain_text(registry, line):
    assert registry.match_item(line) is None


def test_from_yaml_supports_a_custom_dialect(tmp_path):
    path = _write(
        tmp_path,
        """
patterns:
  - pattern:
      name: lisp
      kind: line_marker
      token: ";;"
  - pattern:
      name: bullet
      kind: list_item
      regex: "[-]"
""",
    )

    registry = PatternRegistry.from_yaml(path)

    assert registry.match_prefix(";; note").token == ";;"
    assert registry.match_prefix("// note") is None
    assert registry.match_item("- item") is not None
    assert registry.match_item("@param foo") is None


def test_from_yaml_skips_bad_regex_with_warning(tmp_path, caplog):
    path = _write(
        tmp_path,
        """
patterns:
  - pattern:
      name: broken
      kind: doc_tag
      regex: "[unclosed"
  - pattern:
      name: doc-tag
      kind: doc_tag
      regex: "@\\\\w+"
""",
    )

    with caplog.at_level(logging.WARNING):
        registry = PatternRegistry.from_yaml(path, logger=logging.getLogger("test.registry"))

    assert "Bad regex for broken" in caplog.text
    assert registry.match_item("@param foo").text == "@param "


def test_from_yaml_missing_file_raises(tmp_path):
    with pytest.raises(PatternRegistryError):
        PatternRegistry.from_yaml(tmp_path / "missing.yml")


@pytest.mark.parametrize(
    "content",
    [
        "patterns: [unclosed",
        "- just\n- a list\n",
        "patterns:\n  - pattern:\n      name: both\n      kind: line_marker\n      token: '//'\n      regex: '//'\n",
        "patterns:\n  - pattern:\n      name: opener\n      kind: block_open\n      token: '/*'\n",
        "patterns:\n  - pattern:\n      name: odd\n      kind: unknown\n      token: '%%'\n",
    ],
)
def test_from_yaml_invalid_content_raises(tmp_path, content):
    path = _write(tmp_path, content)

    with pytest.raises(PatternRegistryError):
        PatternRegistry.from_yaml(path)
