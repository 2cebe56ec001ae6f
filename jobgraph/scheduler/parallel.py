"""
Parallel Executor

Runs independent branches of a job graph concurrently on a thread pool while
keeping the dependency order and exactly-once guarantees.
"""

import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging

from ..dag.graph import JobGraph, JobRunner
from ..dag.validator import StructuralValidator
from ..errors import CycleDetected, JobExecutionFailed
from .executor import CompletionCallback
from schemas.job_events import CompletionEvent

logger = logging.getLogger(__name__)


class ParallelExecutor:
    """
    Schedules ready jobs onto a ThreadPoolExecutor.

    All scheduling state (remaining dependency counts, the ready queue) is
    owned by the thread that calls run(). A job is submitted once, only after
    every dependency has completed, so no two workers can race on it.

    Fail-fast: after the first failure no new jobs are submitted, jobs already
    in flight are allowed to finish, then JobExecutionFailed is raised.

    Example usage:
        executor = ParallelExecutor(max_workers=4)
        events = executor.run(graph, runner)
    """

    def __init__(self, max_workers: Optional[int] = None):
        """
        Args:
            max_workers: Thread pool size (default: CPU count - 1, at least 1)
        """
        if max_workers is None:
            max_workers = max(1, (os.cpu_count() or 2) - 1)
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers

    def run(
        self,
        graph: JobGraph,
        runner: JobRunner,
        on_complete: Optional[CompletionCallback] = None,
    ) -> List[CompletionEvent]:
        """
        Execute all jobs in the graph.

        Returns:
            Completion events in completion order

        Raises:
            CycleDetected: If some jobs can never become ready
            JobExecutionFailed: For the first job whose runner raised
        """
        remaining: Dict[str, int] = {
            name: len(set(graph.dependencies_of(name))) for name in graph.job_names()
        }
        ready: List[str] = [name for name, count in remaining.items() if count == 0]
        events: List[CompletionEvent] = []
        failure: Optional[JobExecutionFailed] = None
        in_flight: Dict[Future, str] = {}

        logger.info(f"Executing {len(graph)} jobs with {self.max_workers} workers")

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            while ready or in_flight:
                # Submit everything currently ready, in declaration order
                while ready and failure is None:
                    name = ready.pop(0)
                    logger.debug(f"Submitting job '{name}'")
                    in_flight[pool.submit(runner.run, name)] = name

                if not in_flight:
                    break

                done, _ = wait(list(in_flight), return_when=FIRST_COMPLETED)
                for future in done:
                    name = in_flight.pop(future)
                    error = future.exception()

                    if error is not None:
                        logger.error(f"Job '{name}' failed: {error}")
                        if failure is None:
                            failure = JobExecutionFailed(name, error)
                        continue

                    event = CompletionEvent(
                        job_name=name,
                        index=len(events),
                        timestamp=datetime.now(timezone.utc),
                    )
                    events.append(event)
                    if on_complete is not None:
                        on_complete(event)

                    for dependent in graph.dependents_of(name):
                        remaining[dependent] -= 1
                        if remaining[dependent] == 0:
                            ready.append(dependent)

        if failure is not None:
            raise failure from failure.cause

        if len(events) != len(graph):
            stuck = [name for name, count in remaining.items() if count > 0]
            cycle = StructuralValidator(graph).find_cycle() or stuck
            raise CycleDetected(cycle[0], cycle)

        logger.info(f"Executed {len(events)} jobs")
        return events
