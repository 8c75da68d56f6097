"""Source and file-enumerator contracts plus the default walker."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from clauncher.types import FileEntry, SearchResult

logger = logging.getLogger(__name__)

LAUNCHABLE_EXTENSIONS = frozenset(
    {".exe", ".lnk", ".app", ".desktop", ".appimage", ".bat", ".cmd"}
)
_BUNDLE_SUFFIX = ".app"


class ResultSource(Protocol):
    """Independent producer of candidate results for one data source."""

    name: str

    def produce(self, query_lower: str) -> list[SearchResult]:
        """Return candidates for an already lower-cased query."""


class FileEnumerator(Protocol):
    """Bounded-depth, lazy listing of the files under one root."""

    def entries(self, root: Path, max_depth: int) -> Iterator[FileEntry]:
        """Yield entries no deeper than `max_depth` levels below `root`."""


def has_launchable_extension(name: str) -> bool:
    return Path(name).suffix.lower() in LAUNCHABLE_EXTENSIONS


class WalkEnumerator:
    """`os.walk` based enumerator.

    Depth follows the usual walker convention: files directly inside `root` are
    at depth 1. Directories and files are visited in sorted order so repeated
    listings of an unchanged tree are identical. macOS `.app` bundles are
    yielded as entries and not descended into. Unreadable directories are
    skipped, as are names that cannot be encoded as UTF-8 (undecodable POSIX
    bytes surface as lone surrogates and cannot be displayed or serialized).
    """

    def __init__(self, *, follow_links: bool = False) -> None:
        self.follow_links = follow_links

    def entries(self, root: Path, max_depth: int) -> Iterator[FileEntry]:
        root_str = os.fspath(root)
        base_depth = root_str.rstrip(os.sep).count(os.sep)

        for dirpath, dirnames, filenames in os.walk(
            root_str, onerror=self._on_error, followlinks=self.follow_links
        ):
            depth = dirpath.rstrip(os.sep).count(os.sep) - base_depth
            dirnames[:] = sorted(name for name in dirnames if self._displayable(dirpath, name))
            bundles = [name for name in dirnames if name.lower().endswith(_BUNDLE_SUFFIX)]
            if bundles:
                dirnames[:] = [name for name in dirnames if name not in bundles]
            if depth + 1 >= max_depth:
                dirnames[:] = []
            if depth + 1 > max_depth:
                continue

            for name in bundles:
                yield FileEntry(name=name, path=os.path.join(dirpath, name), is_executable_hint=True)
            for name in sorted(filenames):
                if not self._displayable(dirpath, name):
                    continue
                path = os.path.join(dirpath, name)
                yield FileEntry(
                    name=name,
                    path=path,
                    is_executable_hint=self._is_executable(name, path),
                )

    @staticmethod
    def _is_executable(name: str, path: str) -> bool:
        if has_launchable_extension(name):
            return True
        if os.name != "posix":
            return False
        return os.path.isfile(path) and os.access(path, os.X_OK)

    @staticmethod
    def _displayable(dirpath: str, name: str) -> bool:
        try:
            os.path.join(dirpath, name).encode("utf-8")
        except UnicodeEncodeError:
            logger.debug("skipping undecodable entry %r in %r", name, dirpath)
            return False
        return True

    @staticmethod
    def _on_error(exc: OSError) -> None:
        logger.debug("skipping unreadable directory %s: %s", exc.filename, exc)
