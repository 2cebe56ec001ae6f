"""Tests for runtime configuration and wiring."""

from __future__ import annotations

from pathlib import Path

import pytest

from jobgraph.runtime.main import RuntimeConfig, build_pipeline, main
from jobgraph.scheduler.executor import TopologicalExecutor
from jobgraph.scheduler.parallel import ParallelExecutor
from runners import RecordingJobRunner
from schemas.job_events import CompletionEvent


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("JOBS_FILE", "JOB_RUNNER", "JOB_DELAY", "MAX_WORKERS", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)

    config = RuntimeConfig.from_env([])

    assert config == RuntimeConfig()


def test_config_from_env_and_argv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOBS_FILE", "env.yaml")
    monkeypatch.setenv("JOB_RUNNER", "recording")
    monkeypatch.setenv("JOB_DELAY", "0")
    monkeypatch.setenv("MAX_WORKERS", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert RuntimeConfig.from_env([]).jobs_file == Path("env.yaml")

    config = RuntimeConfig.from_env(["cli.yaml"])
    assert config.jobs_file == Path("cli.yaml")
    assert config.runner == "recording"
    assert config.delay == 0.0
    assert config.max_workers == 3
    assert config.log_level == "DEBUG"


def test_negative_worker_count_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_WORKERS", "-2")

    with pytest.raises(ValueError, match="MAX_WORKERS"):
        RuntimeConfig.from_env([])
    with pytest.raises(ValueError):
        RuntimeConfig(max_workers=-1)


def test_build_pipeline_picks_executor(tmp_path: Path) -> None:
    jobs_file = tmp_path / "jobs.yaml"
    jobs_file.write_text("jobs:\n  A: {}\n  B: {dependencies: [A]}\n")

    sequential = build_pipeline(RuntimeConfig(jobs_file=jobs_file, runner="recording"))
    parallel = build_pipeline(RuntimeConfig(jobs_file=jobs_file, runner="recording", max_workers=2))

    assert isinstance(sequential.executor, TopologicalExecutor)
    assert isinstance(parallel.executor, ParallelExecutor)
    assert isinstance(sequential.runner, RecordingJobRunner)

    sequential.run()
    assert sequential.runner.calls == ["A", "B"]


def test_main_runs_jobs_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    jobs_file = tmp_path / "jobs.yaml"
    jobs_file.write_text("jobs:\n  A: {}\n  B: {dependencies: [A]}\n")
    monkeypatch.setenv("JOB_DELAY", "0")
    monkeypatch.setenv("JOB_RUNNER", "console")
    monkeypatch.delenv("MAX_WORKERS", raising=False)
    caplog.set_level("INFO")

    main([str(jobs_file)])

    assert "Job done: A" in caplog.text
    assert "Job done: B" in caplog.text
    assert "All jobs done" in caplog.text


def test_main_raises_on_invalid_graph(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    jobs_file = tmp_path / "jobs.yaml"
    jobs_file.write_text("jobs:\n  A: {dependencies: [B]}\n  B: {dependencies: [A]}\n")
    monkeypatch.setenv("JOB_DELAY", "0")

    with pytest.raises(Exception, match="cycle"):
        main([str(jobs_file)])


def test_completion_event_serializes() -> None:
    from datetime import datetime, timezone

    event = CompletionEvent(job_name="build", index=2, timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert event.to_dict() == {"job_name": "build", "index": 2, "timestamp": "2024-01-01T00:00:00+00:00"}
    assert CompletionEvent.from_json(event.to_json()) == event
