import pyperclip
import pytest

from clauncher.activation.activator import Activator
from clauncher.config import ActivationConfig
from clauncher.errors import ActivationError
from clauncher.system.launcher import AppRoot, CuratedApp, PlatformLauncher
from clauncher.types import ResultAction, TerminalAction


class RecordingLauncher(PlatformLauncher):
    name = "recording"

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def app_roots(self) -> list[AppRoot]:
        return []

    def curated_apps(self) -> list[CuratedApp]:
        return []

    def open_target(self, target: str) -> None:
        self._record("open", target)

    def launch_app(self, identifier: str) -> None:
        self._record("launch", identifier)

    def run_in_terminal(self, command: str) -> None:
        self._record("terminal", command)

    def _record(self, kind: str, value: str) -> None:
        if self.fail:
            raise FileNotFoundError(f"no handler for {value}")
        self.calls.append((kind, value))


def test_activator_dispatches_by_action_kind() -> None:
    launcher = RecordingLauncher()
    copied: list[str] = []
    activator = Activator(launcher, clipboard_writer=copied.append)

    assert activator.activate("terminal:echo hi") == TerminalAction(command="echo hi")
    activator.activate("/home/user/report.pdf")
    activator.activate("gnome-calculator")
    activator.activate("mailto:someone%40example.com")
    activator.activate("clip:copied text")

    assert launcher.calls == [
        ("terminal", "echo hi"),
        ("open", "/home/user/report.pdf"),
        ("launch", "gnome-calculator"),
        ("open", "mailto:someone%40example.com"),
    ]
    assert copied == ["copied text"]


def test_result_action_is_display_only_by_default() -> None:
    launcher = RecordingLauncher()
    copied: list[str] = []

    action = Activator(launcher, clipboard_writer=copied.append).activate("result:42")

    assert action == ResultAction(value="42")
    assert launcher.calls == []
    assert copied == []


def test_result_action_copied_when_configured() -> None:
    copied: list[str] = []
    activator = Activator(
        RecordingLauncher(),
        config=ActivationConfig(copy_results_to_clipboard=True),
        clipboard_writer=copied.append,
    )

    activator.activate("result:3.5")

    assert copied == ["3.5"]


def test_launch_failure_raises_activation_error() -> None:
    activator = Activator(RecordingLauncher(fail=True), clipboard_writer=lambda _: None)

    with pytest.raises(ActivationError) as exc_info:
        activator.activate("terminal:ls")

    assert exc_info.value.action_ref == "terminal:ls"
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_clipboard_write_failure_raises_activation_error() -> None:
    def _writer(_: str) -> None:
        raise pyperclip.PyperclipException("no copy/paste mechanism")

    activator = Activator(RecordingLauncher(), clipboard_writer=_writer)

    with pytest.raises(ActivationError):
        activator.activate("clip:text")


def test_malformed_token_is_value_error() -> None:
    with pytest.raises(ValueError):
        Activator(RecordingLauncher(), clipboard_writer=lambda _: None).activate("  ")
