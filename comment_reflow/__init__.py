from comment_reflow.core.reflower import CommentReflower, reflow

__all__ = ["CommentReflower", "reflow"]
