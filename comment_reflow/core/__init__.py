from comment_reflow.core.reflower import CommentReflower, reflow
from comment_reflow.core.registry import PatternRegistry

__all__ = ["CommentReflower", "PatternRegistry", "reflow"]
