"""Unit tests for PushStream delivery semantics and its combinators."""

from __future__ import annotations

import asyncio
from typing import List

import pytest

from pushstream.streams import (
    FoldResult,
    IterableSource,
    Observer,
    PushStream,
    StreamCompletedError,
)


class RecordingObserver(Observer):
    def __init__(self) -> None:
        self.events: List[tuple] = []
        self.streams: List[PushStream] = []

    def on_subscribe(self, stream: PushStream) -> None:
        self.events.append(("subscribe",))
        self.streams.append(stream)

    def on_next(self, stream: PushStream, element) -> None:
        self.events.append(("next", element))
        self.streams.append(stream)

    def on_complete(self, stream: PushStream) -> None:
        self.events.append(("complete",))
        self.streams.append(stream)

    @property
    def values(self) -> list:
        return [event[1] for event in self.events if event[0] == "next"]

    @property
    def completions(self) -> int:
        return sum(1 for event in self.events if event[0] == "complete")


def test_pushed_values_are_seen_in_order_followed_by_one_completion():
    stream: PushStream[str] = PushStream()
    observer = stream.subscribe(RecordingObserver())

    stream.push_all_and_complete("testElement1", "testElement2")

    assert observer.events == [
        ("subscribe",),
        ("next", "testElement1"),
        ("next", "testElement2"),
        ("complete",),
    ]
    assert all(s is stream for s in observer.streams)


def test_observers_are_notified_in_subscription_order():
    stream: PushStream[int] = PushStream()
    calls: List[str] = []
    stream.foreach(lambda value: calls.append(f"a{value}"))
    stream.foreach(lambda value: calls.append(f"b{value}"))

    stream.push(1)
    stream.push(2)

    assert calls == ["a1", "b1", "a2", "b2"]
    assert stream.observer_count == 2
    assert stream.pushed_count == 2


def test_late_subscriber_only_sees_subsequent_elements():
    stream: PushStream[str] = PushStream()
    early = stream.subscribe(RecordingObserver())
    stream.push_all("a", "b")

    late = stream.subscribe(RecordingObserver())
    stream.push("c")
    stream.push_completion()

    assert early.values == ["a", "b", "c"]
    assert late.values == ["c"]
    assert late.completions == 1


def test_structural_observer_without_on_subscribe_can_subscribe():
    class LineCollector:
        def __init__(self) -> None:
            self.lines: List[str] = []
            self.done = False

        def on_next(self, stream: PushStream, element: str) -> None:
            self.lines.append(element)

        def on_complete(self, stream: PushStream) -> None:
            self.done = True

    stream: PushStream[str] = PushStream()
    collector = stream.subscribe(LineCollector())

    stream.push_all_and_complete("a", "b")

    assert collector.lines == ["a", "b"]
    assert collector.done is True


def test_observer_subscribed_during_push_starts_with_next_element():
    stream: PushStream[int] = PushStream()
    late = RecordingObserver()

    def subscribe_late(value: int) -> None:
        if value == 1:
            stream.subscribe(late)

    stream.foreach(subscribe_late)
    stream.push_all_and_complete(1, 2)

    assert late.values == [2]
    assert late.completions == 1


def test_push_is_depth_first_through_the_chain():
    stream: PushStream[int] = PushStream()
    calls: List[str] = []
    stream.foreach(lambda value: calls.append(f"first{value}"))
    stream.map(lambda value: value * 10).foreach(lambda value: calls.append(f"mapped{value}"))
    stream.foreach(lambda value: calls.append(f"last{value}"))

    stream.push(1)

    assert calls == ["first1", "mapped10", "last1"]


def test_push_after_completion_raises():
    stream: PushStream[int] = PushStream(name="numbers")
    observer = stream.subscribe(RecordingObserver())
    stream.push_completion()

    with pytest.raises(StreamCompletedError, match="push"):
        stream.push(1)
    with pytest.raises(StreamCompletedError):
        stream.push_completion()
    with pytest.raises(StreamCompletedError, match="subscribe"):
        stream.subscribe(RecordingObserver())

    assert stream.completed is True
    assert observer.values == []
    assert observer.completions == 1


def test_observer_errors_propagate_to_the_pusher():
    stream: PushStream[str] = PushStream()

    def explode(_value: str) -> None:
        raise ValueError("boom")

    stream.foreach(explode)

    with pytest.raises(ValueError, match="boom"):
        stream.push("x")


def test_map_emits_mapped_values():
    stream: PushStream[str] = PushStream()
    mapped = stream.map(lambda value: value + "z")
    observer = mapped.subscribe(RecordingObserver())

    stream.push_all_and_complete("x", "y")

    assert observer.values == ["xz", "yz"]
    assert observer.completions == 1
    assert mapped.completed is True


def test_map_with_state_threads_state_through_elements():
    stream: PushStream[str] = PushStream()

    def mapper(state: int, value: str):
        return state + 1, f"{value}_{state}"

    observer = stream.map_with_state(1, mapper).subscribe(RecordingObserver())
    stream.push_all_and_complete("a", "b")

    assert observer.values == ["a_1", "b_2"]
    assert observer.completions == 1


def test_flat_map_expands_each_element_in_order():
    stream: PushStream[str] = PushStream()
    observer = stream.flat_map(lambda value: [value + "_1", value + "_2"]).subscribe(RecordingObserver())

    stream.push_all_and_complete("a", "b")

    assert observer.values == ["a_1", "a_2", "b_1", "b_2"]
    assert observer.completions == 1


def test_flat_map_allows_empty_expansions():
    stream: PushStream[int] = PushStream()
    observer = stream.flat_map(lambda value: range(value)).subscribe(RecordingObserver())

    stream.push_all_and_complete(0, 2, 0, 1)

    assert observer.values == [0, 1, 0]


@pytest.mark.parametrize(
    "folder, expected",
    [
        (lambda total, value: total + value, 15),
        (lambda count, _value: count + 1, 5),
    ],
)
def test_fold_resolves_only_after_completion(folder, expected):
    stream: PushStream[int] = PushStream()
    result = stream.fold(0, folder)

    stream.push_all(1, 2, 3, 4, 5)
    assert result.done() is False
    with pytest.raises(RuntimeError):
        result.result()

    stream.push_completion()

    assert result.done() is True
    assert result.result() == expected


def test_fold_result_is_awaitable_once_resolved():
    stream: PushStream[int] = PushStream()
    result = stream.fold(0, lambda total, value: total + value)
    stream.push_all_and_complete(1, 2, 3)

    async def consume() -> int:
        return await result

    assert asyncio.run(consume()) == 6


def test_fold_result_rejects_double_resolution_and_runs_callbacks():
    result: FoldResult[int] = FoldResult()
    seen: List[int] = []
    result.add_done_callback(lambda r: seen.append(r.result()))

    result.resolve(7)
    result.add_done_callback(lambda r: seen.append(r.result() * 2))

    assert seen == [7, 14]
    with pytest.raises(RuntimeError, match="ya fue resuelto"):
        result.resolve(8)


def test_empty_upstream_completes_downstreams_and_resolves_fold_to_initial():
    stream: PushStream[int] = PushStream()
    mapped = stream.map(str).subscribe(RecordingObserver())
    stateful = stream.map_with_state(0, lambda s, v: (s, v)).subscribe(RecordingObserver())
    flat = stream.flat_map(lambda v: [v, v]).subscribe(RecordingObserver())
    folded = stream.fold(42, lambda acc, v: acc + v)

    stream.push_completion()

    for observer in (mapped, stateful, flat):
        assert observer.values == []
        assert observer.completions == 1
    assert folded.result() == 42


def test_iterable_source_pushes_elements_then_completes():
    source = IterableSource(["a", "b", "c"])
    observer = source.stream.subscribe(RecordingObserver())
    lengths = source.stream.map(len).fold(0, lambda total, n: total + n)

    source.start()

    assert observer.values == ["a", "b", "c"]
    assert observer.completions == 1
    assert lengths.result() == 3
    assert source.stream.completed is True
