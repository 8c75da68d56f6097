"""Shared domain models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

_URL_SCHEME = re.compile(r"^(?:https?://|mailto:|ms-settings:|file://)", re.IGNORECASE)

TERMINAL_SCHEME = "terminal:"
RESULT_SCHEME = "result:"
CLIPBOARD_SCHEME = "clip:"


@dataclass(frozen=True, slots=True)
class PathAction:
    """Open a filesystem path with the platform default handler."""

    path: str

    def serialize(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class UrlAction:
    url: str

    def serialize(self) -> str:
        return self.url


@dataclass(frozen=True, slots=True)
class AppAction:
    """Launch a curated application by platform identifier (`calc.exe`, `code`)."""

    identifier: str

    def serialize(self) -> str:
        return self.identifier


@dataclass(frozen=True, slots=True)
class TerminalAction:
    command: str

    def serialize(self) -> str:
        return f"{TERMINAL_SCHEME}{self.command}"


@dataclass(frozen=True, slots=True)
class ResultAction:
    """Display-only calculator value."""

    value: str

    def serialize(self) -> str:
        return f"{RESULT_SCHEME}{self.value}"


@dataclass(frozen=True, slots=True)
class ClipboardAction:
    content: str

    def serialize(self) -> str:
        return f"{CLIPBOARD_SCHEME}{self.content}"


ActionRef = Union[PathAction, UrlAction, AppAction, TerminalAction, ResultAction, ClipboardAction]


def parse_action_ref(token: str) -> ActionRef:
    """Turn a host-boundary token back into its `ActionRef` variant.

    Reserved schemes are recognized first. Anything that looks like a URL is a
    `UrlAction`; tokens containing a path separator are paths; the rest are
    curated application identifiers.
    """

    if not token or not token.strip():
        raise ValueError("action_ref must be a non-empty string")
    if token.startswith(TERMINAL_SCHEME):
        command = token[len(TERMINAL_SCHEME) :].strip()
        if not command:
            raise ValueError("terminal action requires a command")
        return TerminalAction(command=command)
    if token.startswith(RESULT_SCHEME):
        return ResultAction(value=token[len(RESULT_SCHEME) :])
    if token.startswith(CLIPBOARD_SCHEME):
        return ClipboardAction(content=token[len(CLIPBOARD_SCHEME) :])
    if _URL_SCHEME.match(token):
        return UrlAction(url=token)
    if "/" in token or "\\" in token:
        return PathAction(path=token)
    return AppAction(identifier=token)


@dataclass(slots=True)
class SearchResult:
    """One ranked, actionable launcher entry."""

    label: str
    action: ActionRef
    is_actionable: bool = True
    score: int = 0

    @property
    def action_ref(self) -> str:
        return self.action.serialize()

    def as_dict(self) -> dict[str, object]:
        return {
            "label": self.label,
            "action_ref": self.action_ref,
            "is_actionable": self.is_actionable,
            "score": self.score,
        }


@dataclass(frozen=True, slots=True)
class ClipboardEntry:
    """A captured clipboard string as held in the bounded history."""

    content: str
    is_sensitive: bool = False
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One entry yielded by a file enumerator."""

    name: str
    path: str
    is_executable_hint: bool = False


@dataclass(slots=True)
class SourceTrace:
    """Trace record for one source invocation during a fan-out."""

    name: str
    produced: int
    latency_ms: float
