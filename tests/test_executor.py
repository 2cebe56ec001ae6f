"""Tests for sequential dependency-ordered execution."""

from __future__ import annotations

import itertools

import pytest

from jobgraph.dag.graph import JobGraph
from jobgraph.errors import CycleDetected, JobExecutionFailed
from jobgraph.scheduler.executor import TopologicalExecutor
from runners.recording import RecordingJobRunner

DIAMOND = {"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]}


def assert_dependency_order(graph: JobGraph, order: list[str]) -> None:
    position = {name: i for i, name in enumerate(order)}
    for name in graph.job_names():
        for dep in graph.dependencies_of(name):
            assert position[dep] < position[name], f"{dep} must complete before {name}"


def test_diamond_runs_a_first_and_d_last() -> None:
    graph = JobGraph.from_mapping(DIAMOND)
    runner = RecordingJobRunner()

    events = TopologicalExecutor().run(graph, runner)

    assert runner.calls[0] == "A"
    assert runner.calls[-1] == "D"
    assert set(runner.calls[1:3]) == {"B", "C"}
    assert [e.job_name for e in events] == runner.calls
    assert [e.index for e in events] == [0, 1, 2, 3]


def test_dependencies_run_before_declared_order() -> None:
    # Sink declared first: its closure is executed depth-first
    graph = JobGraph.from_mapping({"D": ["B", "C"], "C": ["A"], "B": ["A"], "A": []})
    runner = RecordingJobRunner()

    TopologicalExecutor().run(graph, runner)

    assert runner.calls == ["A", "B", "C", "D"]


def test_each_job_runs_exactly_once() -> None:
    # "base" is shared by every other job
    mapping = {"base": []}
    for i in range(10):
        mapping[f"mid{i}"] = ["base"]
    mapping["top"] = [f"mid{i}" for i in range(10)] + ["base"]
    graph = JobGraph.from_mapping(mapping)
    runner = RecordingJobRunner()

    TopologicalExecutor().run(graph, runner)

    assert runner.counts() == {name: 1 for name in graph.job_names()}
    assert_dependency_order(graph, runner.calls)


@pytest.mark.parametrize(
    "order",
    list(itertools.permutations(["A", "B", "C", "D"])),
)
def test_order_property_holds_for_any_declaration_order(order: tuple) -> None:
    graph = JobGraph.from_mapping({name: DIAMOND[name] for name in order})
    runner = RecordingJobRunner()

    TopologicalExecutor().run(graph, runner)

    assert sorted(runner.calls) == ["A", "B", "C", "D"]
    assert_dependency_order(graph, runner.calls)


def test_completion_callback_receives_every_event() -> None:
    graph = JobGraph.from_mapping(DIAMOND)
    received = []

    events = TopologicalExecutor().run(graph, RecordingJobRunner(), on_complete=received.append)

    assert received == events
    assert all(e.timestamp.tzinfo is not None for e in events)


def test_runner_failure_aborts_remaining_jobs() -> None:
    graph = JobGraph.from_mapping({"A": [], "B": ["A"], "C": ["B"], "D": ["C"]})
    runner = RecordingJobRunner(fail=["B"])
    received = []

    with pytest.raises(JobExecutionFailed) as exc:
        TopologicalExecutor().run(graph, runner, on_complete=received.append)

    assert exc.value.job_name == "B"
    assert isinstance(exc.value.cause, RuntimeError)
    assert exc.value.__cause__ is exc.value.cause
    assert runner.calls == ["A"]
    assert [e.job_name for e in received] == ["A"]


def test_unvalidated_cycle_is_detected() -> None:
    graph = JobGraph.from_mapping({"A": ["B"], "B": ["A"]})
    runner = RecordingJobRunner()

    with pytest.raises(CycleDetected):
        TopologicalExecutor().run(graph, runner)
    assert runner.calls == []


def test_executor_is_reusable() -> None:
    graph = JobGraph.from_mapping(DIAMOND)
    executor = TopologicalExecutor()

    first, second = RecordingJobRunner(), RecordingJobRunner()
    executor.run(graph, first)
    executor.run(graph, second)

    assert first.calls == second.calls
    assert len(second.calls) == 4


def test_long_chain_runs_without_recursion() -> None:
    mapping = {"job0": []}
    for i in range(1, 5000):
        mapping[f"job{i}"] = [f"job{i - 1}"]
    # Declare the tail first so the whole chain is entered from one root
    graph = JobGraph.from_mapping(dict(reversed(list(mapping.items()))))
    runner = RecordingJobRunner()

    TopologicalExecutor().run(graph, runner)

    assert runner.calls == [f"job{i}" for i in range(5000)]
