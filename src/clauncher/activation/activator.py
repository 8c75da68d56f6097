"""Dispatches a chosen result's action token."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pyperclip

from clauncher.config import ActivationConfig
from clauncher.errors import ActivationError
from clauncher.system.launcher import PlatformLauncher
from clauncher.types import (
    ActionRef,
    AppAction,
    ClipboardAction,
    PathAction,
    ResultAction,
    TerminalAction,
    UrlAction,
    parse_action_ref,
)

logger = logging.getLogger(__name__)


class Activator:
    """Turns an `action_ref` token into a platform side effect.

    - `terminal:<cmd>` runs the command in a new terminal window.
    - `clip:<content>` puts the content back on the clipboard.
    - `result:<value>` is display-only; it is copied to the clipboard only when
      `copy_results_to_clipboard` is enabled.
    - URLs go to the browser or the platform URI handler, paths to the
      platform opener, anything else is launched as a curated app identifier.

    Malformed tokens raise `ValueError`. Launch and clipboard failures raise
    `ActivationError`; neither is fatal to the process.
    """

    def __init__(
        self,
        launcher: PlatformLauncher,
        *,
        config: ActivationConfig | None = None,
        clipboard_writer: Callable[[str], None] | None = None,
    ) -> None:
        self.launcher = launcher
        self.config = config or ActivationConfig()
        self._write_clipboard = clipboard_writer or pyperclip.copy

    def activate(self, action_ref: str) -> ActionRef:
        action = parse_action_ref(action_ref)
        try:
            self._dispatch(action)
        except (OSError, pyperclip.PyperclipException) as exc:
            logger.warning("activation of %s failed: %s", type(action).__name__, exc)
            raise ActivationError(action_ref, str(exc)) from exc
        logger.info("activated %s", type(action).__name__)
        return action

    def _dispatch(self, action: ActionRef) -> None:
        if isinstance(action, ResultAction):
            if self.config.copy_results_to_clipboard:
                self._write_clipboard(action.value)
            return
        if isinstance(action, ClipboardAction):
            self._write_clipboard(action.content)
            return
        if isinstance(action, TerminalAction):
            self.launcher.run_in_terminal(action.command)
            return
        if isinstance(action, UrlAction):
            self.launcher.open_url(action.url)
            return
        if isinstance(action, PathAction):
            self.launcher.open_target(action.path)
            return
        if isinstance(action, AppAction):
            self.launcher.launch_app(action.identifier)
            return
        raise ValueError(f"Unsupported action: {action!r}")
