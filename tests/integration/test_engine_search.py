from collections.abc import Iterator
from pathlib import Path

import pytest

from clauncher.clipboard.history import ClipboardHistory
from clauncher.config import LauncherSettings, SearchConfig
from clauncher.engine import LauncherEngine, create_engine
from clauncher.scoring.fuzzy import FuzzyScorer
from clauncher.sources.base import WalkEnumerator
from clauncher.system.launcher import AppRoot, CuratedApp, PlatformLauncher
from clauncher.types import FileEntry, TerminalAction


class FakeLauncher(PlatformLauncher):
    name = "fake"

    def __init__(self, apps_dir: Path) -> None:
        self.apps_dir = apps_dir
        self.calls: list[tuple[str, str]] = []

    def app_roots(self) -> list[AppRoot]:
        return [AppRoot(self.apps_dir, (".exe",))]

    def curated_apps(self) -> list[CuratedApp]:
        return [
            CuratedApp("Calculator", "calc"),
            CuratedApp("Notepad", "notepad"),
            CuratedApp("Terminal", "terminal-app"),
        ]

    def open_target(self, target: str) -> None:
        self.calls.append(("open", target))

    def launch_app(self, identifier: str) -> None:
        self.calls.append(("launch", identifier))

    def run_in_terminal(self, command: str) -> None:
        self.calls.append(("terminal", command))


class CountingEnumerator(WalkEnumerator):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def entries(self, root: Path, max_depth: int) -> Iterator[FileEntry]:
        self.calls += 1
        return super().entries(root, max_depth)


@pytest.fixture
def workspace(tmp_path: Path) -> dict[str, Path]:
    documents = tmp_path / "Documents"
    apps = tmp_path / "apps"
    (documents / "projects").mkdir(parents=True)
    (apps / "Notepad++").mkdir(parents=True)

    (documents / "notes.txt").write_text("n")
    (documents / "notepad_setup.exe").write_text("x")
    (documents / "readme.md").write_text("r")
    (documents / "projects" / "budget.xlsx").write_text("b")
    (apps / "Notepad++" / "Notepad++.exe").write_text("x")
    return {"documents": documents, "apps": apps}


def _build(
    workspace: dict[str, Path],
    *,
    parallel: bool = True,
    history: ClipboardHistory | None = None,
    enumerator: WalkEnumerator | None = None,
) -> tuple[LauncherEngine, FakeLauncher]:
    launcher = FakeLauncher(workspace["apps"])
    settings = LauncherSettings(search=SearchConfig(parallel_sources=parallel))
    engine = create_engine(
        settings,
        launcher=launcher,
        history=history,
        enumerator=enumerator,
        search_roots=[workspace["documents"]],
        clipboard_writer=lambda _: None,
    )
    return engine, launcher


def test_web_shortcut_returns_single_encoded_url(workspace: dict[str, Path]) -> None:
    engine, _ = _build(workspace)
    with engine:
        results = engine.search("gh: fast api")

    assert len(results) == 1
    assert results[0].action_ref == "https://github.com/search?q=fast%20api"
    assert results[0].label == "GitHub: fast api"
    assert results[0].score == 10000


def test_terminal_command_result(workspace: dict[str, Path]) -> None:
    engine, _ = _build(workspace)
    with engine:
        results = engine.search(">  echo hi  ")

    assert [(item.action_ref, item.score) for item in results] == [("terminal:echo hi", 20000)]


@pytest.mark.parametrize(("query", "value"), [("2+2", "4"), ("10 * (3-1)", "20")])
def test_calculator_label_embeds_value(workspace: dict[str, Path], query: str, value: str) -> None:
    engine, _ = _build(workspace)
    with engine:
        results = engine.search(query)

    assert len(results) == 1
    assert results[0].label == f"{query} = {value}"
    assert results[0].action_ref == f"result:{value}"


def test_gibberish_is_not_a_calculation(workspace: dict[str, Path]) -> None:
    engine, _ = _build(workspace)
    with engine:
        response = engine.run("gibberish")

    assert response.trace.route == "fan_out"
    assert all(not item.action_ref.startswith("result:") for item in response.results)


def test_empty_query_returns_curated_view_without_filesystem_access(
    workspace: dict[str, Path],
) -> None:
    enumerator = CountingEnumerator()
    engine, _ = _build(workspace, enumerator=enumerator)
    with engine:
        results = engine.search("   ")

    assert [item.label for item in results] == ["Calculator", "Notepad", "Terminal"]
    assert [item.score for item in results] == [1000, 900, 800]
    assert enumerator.calls == 0


def test_fan_out_sorted_bounded_and_fuzzy_matching(workspace: dict[str, Path]) -> None:
    engine, _ = _build(workspace)
    scorer = FuzzyScorer()
    with engine:
        results = engine.search("Note")

    assert [item.label for item in results] == [
        "Notepad++.exe",
        "notepad_setup.exe",
        "notes.txt",
        "Notepad",
    ]
    scores = [item.score for item in results]
    assert scores == sorted(scores, reverse=True)
    assert len(results) <= 20
    assert all(scorer.matches(item.label.lower(), "note") for item in results)


def test_fan_out_trace_lists_sources_in_order(workspace: dict[str, Path]) -> None:
    engine, _ = _build(workspace)
    with engine:
        response = engine.run("budget")

    assert [item.label for item in response.results] == ["budget.xlsx"]
    assert [trace.name for trace in response.trace.source_traces] == [
        "directory",
        "executables",
        "curated_apps",
    ]
    assert engine.trace_store.get(response.trace.trace_id).result_count == 1


def test_search_is_idempotent_and_parallel_matches_sequential(
    workspace: dict[str, Path],
) -> None:
    parallel, _ = _build(workspace, parallel=True)
    sequential, _ = _build(workspace, parallel=False)
    with parallel, sequential:
        first = [item.as_dict() for item in parallel.search("e")]
        second = [item.as_dict() for item in parallel.search("e")]
        third = [item.as_dict() for item in sequential.search("e")]

    assert first
    assert first == second == third


def test_clipboard_lookup_filters_and_masks(workspace: dict[str, Path]) -> None:
    history = ClipboardHistory()
    history.record("the SECRET recipe")
    history.record("token: secret42!")
    history.record("unrelated")
    engine, _ = _build(workspace, history=history)
    with engine:
        results = engine.search("clip:secret")

    assert [item.label for item in results] == [
        "[sensitive content hidden]",
        "the SECRET recipe",
    ]
    assert all(item.action_ref.startswith("clip:") for item in results)


def test_conversion_query(workspace: dict[str, Path]) -> None:
    engine, _ = _build(workspace)
    with engine:
        response = engine.run("100 usd to brl")

    assert response.trace.route == "conversion"
    assert [item.label for item in response.results] == ["Convert 100 usd to brl"]
    assert response.results[0].action_ref == (
        "https://www.google.com/search?q=100%20usd%20to%20brl"
    )


def test_activate_delegates_to_platform_launcher(workspace: dict[str, Path]) -> None:
    engine, launcher = _build(workspace)
    with engine:
        action = engine.activate("terminal:echo hi")

    assert action == TerminalAction(command="echo hi")
    assert launcher.calls == [("terminal", "echo hi")]


def test_injected_empty_history_is_shared_with_engine(workspace: dict[str, Path]) -> None:
    history = ClipboardHistory()
    engine, _ = _build(workspace, history=history)
    history.record("copied later")
    with engine:
        results = engine.search("clip:")

    assert [item.label for item in results] == ["copied later"]


@pytest.mark.parametrize("query", ["9" * 320 + "*2", "+".join(["1"] * 1000)])
def test_unevaluable_math_falls_back_to_fan_out(workspace: dict[str, Path], query: str) -> None:
    engine, _ = _build(workspace)
    with engine:
        response = engine.run(query)

    assert response.trace.route == "fan_out"
    assert all(not item.action_ref.startswith("result:") for item in response.results)
