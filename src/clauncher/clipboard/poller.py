"""Background clipboard poller feeding the shared history."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import pyperclip

from clauncher.clipboard.history import ClipboardHistory
from clauncher.config import ClipboardConfig

logger = logging.getLogger(__name__)


class ClipboardPoller:
    """Polls the system clipboard on a fixed interval from a daemon thread.

    Only changed content is recorded. Platform access failures are logged and
    retried on the next tick; they never stop the loop.
    """

    def __init__(
        self,
        history: ClipboardHistory,
        *,
        config: ClipboardConfig | None = None,
        reader: Callable[[], str] | None = None,
    ) -> None:
        self.history = history
        self.config = config or history.config
        self._reader = reader or pyperclip.paste
        self._last_seen: str | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def poll_once(self) -> bool:
        """Read the clipboard once; return True when a new entry was recorded."""
        try:
            content = self._reader()
        except (pyperclip.PyperclipException, OSError) as exc:
            logger.warning("clipboard read failed, retrying next tick: %s", exc)
            return False

        if not isinstance(content, str) or content == self._last_seen:
            return False
        self._last_seen = content
        return self.history.record(content)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="clipboard-poller", daemon=True
        )
        self._thread.start()
        logger.info(
            "clipboard poller started (interval=%.2fs, capacity=%d)",
            self.config.poll_interval_seconds,
            self.config.capacity,
        )

    def stop(self, timeout: float | None = 2.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("clipboard poller stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.config.poll_interval_seconds)
