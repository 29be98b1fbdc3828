import sys
from pathlib import Path
from typing import Optional, TextIO

import click

from comment_reflow.config import DEFAULT_MAX_WIDTH
from comment_reflow.core.reflower import CommentReflower
from comment_reflow.core.registry import PatternRegistry
from comment_reflow.settings import set_comment_reflow_log_level

from .controller import CommentReflowController
from .service import CommentReflowService


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--width",
    "-w",
    type=int,
    default=DEFAULT_MAX_WIDTH,
    show_default=True,
    help="Maximum line width.",
)
@click.option("--paragraphs", "-p", is_flag=True, help="Reflow each blank-line separated paragraph on its own.")
@click.option("--copy", "-c", "copy_to_clipboard", is_flag=True, help="Copy the result to the clipboard.")
@click.option(
    "--patterns",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with comment patterns to use instead of the built-in ones.",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.argument("source", type=click.File("r"), required=False)
def run_comment_reflow(
    width: int,
    paragraphs: bool,
    copy_to_clipboard: bool,
    patterns: Optional[Path],
    debug: bool,
    source: Optional[TextIO],
) -> None:
    """Reflow a comment or text paragraph read from SOURCE or stdin.

    \b
    Usage:
      comment-reflow [--width N] [--paragraphs] [--copy] [FILE]
      pbpaste | comment-reflow -w 72
    """
    if debug:
        set_comment_reflow_log_level("DEBUG")

    def reflower_factory() -> CommentReflower:
        registry = PatternRegistry.from_yaml(patterns) if patterns else None
        return CommentReflower(registry=registry)

    service = CommentReflowService(reflower_factory=reflower_factory, source=source)
    controller = CommentReflowController(service, copy_to_clipboard=copy_to_clipboard)

    sys.exit(controller.run(max_width=width, paragraphs=paragraphs))
