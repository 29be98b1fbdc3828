import logging
from typing import Callable, Optional

import click
import pyperclip

from comment_reflow.config import DEFAULT_MAX_WIDTH
from comment_reflow.errors import CommentReflowError, InvalidWidthError, PatternRegistryError
from comment_reflow.schemas import ReflowResponse
from comment_reflow.settings import comment_reflow_logger

from .service import CommentReflowService


class CommentReflowController:
    """Main controller orchestrating the CLI workflow."""

    def __init__(
        self,
        reflow_service: CommentReflowService,
        logger: Optional[logging.Logger] = None,
        clipboard_copy: Callable[[str], None] = pyperclip.copy,
        echo: Callable[..., None] = click.echo,
        echo_err: Optional[Callable[[str], None]] = None,
        *,
        copy_to_clipboard: bool = False,
    ) -> None:
        self._logger = logger or comment_reflow_logger(__name__)
        self._clipboard_copy = clipboard_copy
        self._echo = echo
        self._echo_err = echo_err or (lambda message: self._echo(message, err=True))
        self._copy_to_clipboard = copy_to_clipboard
        self.reflow_service = reflow_service

    # --- Public API ---
    def run(self, max_width: int = DEFAULT_MAX_WIDTH, paragraphs: bool = False) -> int:
        self._logger.debug("Starting CLI controller run")
        text = self.reflow_service.read_input()

        if not text.strip():
            self._logger.warning("No input text")
            self._echo_err("No text to reflow. Pass a file or pipe text to stdin.")
            return 1

        try:
            result = self.reflow_service.reflow(text, max_width, paragraphs=paragraphs)
        except InvalidWidthError as error:
            self._echo_err(f"Invalid width: {error}")
            return 1
        except PatternRegistryError as error:
            self._echo_err(f"Could not load comment patterns: {error}")
            return 1
        except CommentReflowError as error:
            self._echo_err(f"An error occurred: {error}")
            return 1

        self._display(result)
        return 0

    # --- Private helpers ---
    def _display(self, result: ReflowResponse) -> None:
        self._logger.debug("Input %s", "reflowed" if result.changed else "already fits")
        self._echo(result.reflowed)

        if self._copy_to_clipboard:
            self._logger.debug("Copying reflowed text to clipboard")
            self._clipboard_copy(result.reflowed)
            self._echo_err("Reflowed text copied to clipboard.")
