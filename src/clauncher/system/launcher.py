"""Per-OS launch capabilities, selected once at startup."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
import webbrowser
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppRoot:
    """A directory scanned by the executable index.

    `extensions` are lower-case suffixes including the dot. An empty tuple
    means "any file the enumerator flags as executable".
    """

    path: Path
    extensions: tuple[str, ...] = ()
    max_depth: int | None = None


@dataclass(frozen=True, slots=True)
class CuratedApp:
    label: str
    identifier: str


class PlatformLauncher(ABC):
    """Platform capability used by the executable index and the activator."""

    name: str = "generic"

    @abstractmethod
    def app_roots(self) -> list[AppRoot]:
        """Well-known application install locations."""

    @abstractmethod
    def curated_apps(self) -> list[CuratedApp]:
        """Common system utilities, in display order."""

    @abstractmethod
    def open_target(self, target: str) -> None:
        """Open a path or URI with the platform default handler."""

    @abstractmethod
    def launch_app(self, identifier: str) -> None:
        """Launch a curated application identifier."""

    @abstractmethod
    def run_in_terminal(self, command: str) -> None:
        """Run a shell command in a new visible terminal window."""

    def open_url(self, url: str) -> None:
        if url.lower().startswith(("http://", "https://")):
            if not webbrowser.open(url):
                raise OSError(f"No browser available for {url}")
            return
        self.open_target(url)


def _spawn(args: list[str]) -> None:
    logger.debug("spawning %s", args)
    kwargs: dict[str, object] = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    if os.name == "posix":
        kwargs["start_new_session"] = True
    subprocess.Popen(args, **kwargs)  # noqa: S603


class WindowsLauncher(PlatformLauncher):
    name = "windows"

    def app_roots(self) -> list[AppRoot]:
        program_files = os.environ.get("PROGRAMFILES", r"C:\Program Files")
        program_files_x86 = os.environ.get("PROGRAMFILES(X86)", r"C:\Program Files (x86)")
        local_programs = Path.home() / "AppData" / "Local" / "Programs"
        return [
            AppRoot(Path(program_files), (".exe",)),
            AppRoot(Path(program_files_x86), (".exe",)),
            AppRoot(local_programs, (".exe",)),
        ]

    def curated_apps(self) -> list[CuratedApp]:
        return [
            CuratedApp("Calculator", "calc.exe"),
            CuratedApp("Notepad", "notepad.exe"),
            CuratedApp("VS Code", "code"),
            CuratedApp("PowerShell", "powershell.exe"),
            CuratedApp("File Explorer", "explorer.exe"),
            CuratedApp("Command Prompt", "cmd.exe"),
            CuratedApp("Settings", "ms-settings:"),
            CuratedApp("Control Panel", "control.exe"),
            CuratedApp("Task Manager", "taskmgr.exe"),
        ]

    def open_target(self, target: str) -> None:
        if target.lower().startswith(("http://", "https://", "mailto:", "ms-settings:")):
            _spawn(["cmd", "/C", "start", "", target])
            return
        startfile = getattr(os, "startfile", None)
        if startfile is None:
            raise OSError("os.startfile is unavailable on this platform")
        startfile(target)

    def launch_app(self, identifier: str) -> None:
        _spawn(["cmd", "/C", "start", "", identifier])

    def run_in_terminal(self, command: str) -> None:
        _spawn(["cmd", "/C", "start", "powershell", "-NoExit", "-Command", command])


class MacLauncher(PlatformLauncher):
    name = "macos"

    def app_roots(self) -> list[AppRoot]:
        return [
            AppRoot(Path("/Applications"), (".app",)),
            AppRoot(Path("/System/Applications"), (".app",)),
            AppRoot(Path.home() / "Applications", (".app",)),
        ]

    def curated_apps(self) -> list[CuratedApp]:
        return [
            CuratedApp("Calculator", "open -a Calculator"),
            CuratedApp("TextEdit", "open -a TextEdit"),
            CuratedApp("VS Code", "open -a 'Visual Studio Code'"),
            CuratedApp("Terminal", "open -a Terminal"),
            CuratedApp("Finder", "open -a Finder"),
            CuratedApp("System Settings", "open -a 'System Settings'"),
            CuratedApp("Activity Monitor", "open -a 'Activity Monitor'"),
        ]

    def open_target(self, target: str) -> None:
        _spawn(["open", target])

    def launch_app(self, identifier: str) -> None:
        _spawn(shlex.split(identifier))

    def run_in_terminal(self, command: str) -> None:
        escaped = command.replace("\\", "\\\\").replace('"', '\\"')
        _spawn(["osascript", "-e", f'tell application "Terminal" to do script "{escaped}"'])


class LinuxLauncher(PlatformLauncher):
    name = "linux"

    def app_roots(self) -> list[AppRoot]:
        home = Path.home()
        return [
            AppRoot(Path("/usr/share/applications"), (".desktop",)),
            AppRoot(Path("/usr/local/share/applications"), (".desktop",)),
            AppRoot(home / ".local" / "share" / "applications", (".desktop",)),
            AppRoot(Path("/var/lib/flatpak/exports/share/applications"), (".desktop",)),
            AppRoot(home / ".local" / "bin", (), max_depth=1),
        ]

    def curated_apps(self) -> list[CuratedApp]:
        return [
            CuratedApp("Calculator", "gnome-calculator"),
            CuratedApp("Text Editor", "gnome-text-editor"),
            CuratedApp("VS Code", "code"),
            CuratedApp("Terminal", "x-terminal-emulator"),
            CuratedApp("Files", "nautilus"),
            CuratedApp("Settings", "gnome-control-center"),
            CuratedApp("System Monitor", "gnome-system-monitor"),
        ]

    def open_target(self, target: str) -> None:
        if target.endswith(".desktop") and shutil.which("gtk-launch"):
            _spawn(["gtk-launch", Path(target).stem])
            return
        _spawn(["xdg-open", target])

    def launch_app(self, identifier: str) -> None:
        _spawn(shlex.split(identifier))

    def run_in_terminal(self, command: str) -> None:
        _spawn(["x-terminal-emulator", "-e", "sh", "-c", command])


_LAUNCHERS: dict[str, type[PlatformLauncher]] = {
    "windows": WindowsLauncher,
    "win32": WindowsLauncher,
    "macos": MacLauncher,
    "darwin": MacLauncher,
    "linux": LinuxLauncher,
}


def detect_platform_launcher(platform: str | None = None) -> PlatformLauncher:
    """Pick the launcher for `platform` (defaults to `sys.platform`).

    `linux*` and `freebsd*` platform strings map to the Linux launcher.
    """

    key = (platform or sys.platform).lower()
    launcher_cls = _LAUNCHERS.get(key)
    if launcher_cls is None:
        if key.startswith("linux") or key.startswith("freebsd"):
            launcher_cls = LinuxLauncher
        else:
            raise ValueError(f"Unsupported platform: {platform or sys.platform}")
    launcher = launcher_cls()
    logger.info("using %s platform launcher", launcher.name)
    return launcher
