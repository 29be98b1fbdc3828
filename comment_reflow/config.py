from pathlib import Path

DEFAULT_MAX_WIDTH = 80

# Doc tags wrap to a fixed hanging indent:
# https://google.github.io/styleguide/jsguide.html#jsdoc-line-wrapping
DOC_TAG_INDENT = 4

# Width reserved by /* and {/* comments on top of their prefix
EXTRA_INDENT = 2

PATTERNS_PATH = Path(__file__).parent / "core" / "files" / "patterns.yml"
