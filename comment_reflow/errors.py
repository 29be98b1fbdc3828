class CommentReflowError(Exception):
    """Base exception for comment reflow errors."""


class PatternRegistryError(CommentReflowError):
    """Raised when the pattern file cannot be loaded or validated."""


class InvalidWidthError(CommentReflowError):
    """Raised when a requested line width is not a positive integer."""
