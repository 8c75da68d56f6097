from concurrent.futures import ThreadPoolExecutor

import pytest

from clauncher.sources.registry import SourceRegistry
from clauncher.types import AppAction, SearchResult


class StaticSource:
    def __init__(self, name: str, labels: list[str]) -> None:
        self.name = name
        self.labels = labels

    def produce(self, query_lower: str) -> list[SearchResult]:
        return [
            SearchResult(label=label, action=AppAction(identifier=label), score=1)
            for label in self.labels
            if query_lower in label
        ]


def test_source_registry_produces_by_name() -> None:
    registry = SourceRegistry()
    registry.register(StaticSource("apps", ["notepad", "nano"]))

    assert [result.label for result in registry.produce("apps", "note")] == ["notepad"]

    with pytest.raises(KeyError):
        registry.produce("missing", "note")


def test_duplicate_source_registration_rejected() -> None:
    registry = SourceRegistry()
    source = StaticSource("apps", ["notepad"])

    registry.register(source)
    with pytest.raises(ValueError):
        registry.register(source)


def test_produce_all_keeps_registration_order_on_executor() -> None:
    registry = SourceRegistry()
    registry.register(StaticSource("first", ["na-1", "na-2"]))
    registry.register(StaticSource("second", ["na-3"]))
    registry.register(StaticSource("third", ["na-4", "other"]))

    sequential, _ = registry.produce_all("na")
    with ThreadPoolExecutor(max_workers=3) as executor:
        parallel, traces = registry.produce_all("na", executor=executor)

    assert [result.label for result in sequential] == ["na-1", "na-2", "na-3", "na-4"]
    assert [result.label for result in parallel] == [result.label for result in sequential]
    assert registry.names() == ["first", "second", "third"]
    assert [trace.name for trace in traces] == ["first", "second", "third"]
    assert [trace.produced for trace in traces] == [2, 1, 1]
