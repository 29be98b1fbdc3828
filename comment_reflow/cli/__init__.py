from .main import run_comment_reflow

__all__ = ["run_comment_reflow"]
