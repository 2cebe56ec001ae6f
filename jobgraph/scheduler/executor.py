"""
Topological Executor

Executes every job of a validated graph exactly once, after all of its
dependencies, and reports each completion.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Set
import logging

from ..dag.graph import JobGraph, JobRunner
from ..errors import CycleDetected, JobExecutionFailed
from schemas.job_events import CompletionEvent

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[CompletionEvent], None]


class TopologicalExecutor:
    """
    Runs jobs depth-first in dependency order on the calling thread.

    The executor:
    1. Walks job names in declaration order
    2. For each job not yet executed, executes its dependency closure first
    3. Invokes runner.run(job_name) once per job
    4. Emits a CompletionEvent per job

    The executed set is created per run() call, so one executor can be reused
    across graphs and runs.

    Example usage:
        graph = JobGraph.from_mapping({"A": [], "B": ["A"]})
        StructuralValidator(graph).validate()

        executor = TopologicalExecutor()
        events = executor.run(graph, runner, on_complete=print)

        [e.job_name for e in events]  # ["A", "B"]
    """

    def run(
        self,
        graph: JobGraph,
        runner: JobRunner,
        on_complete: Optional[CompletionCallback] = None,
    ) -> List[CompletionEvent]:
        """
        Execute all jobs in the graph.

        Args:
            graph: Job graph, expected to be validated
            runner: Supplies the effect of running one job
            on_complete: Called with each CompletionEvent as it happens

        Returns:
            Completion events in execution order

        Raises:
            UnknownJob: If a dependency is missing from the graph
            CycleDetected: If a job is reached again while its dependencies
                           are still being executed
            JobExecutionFailed: If the runner raises; remaining jobs are not run
        """
        executed: Set[str] = set()
        events: List[CompletionEvent] = []

        logger.info(f"Executing {len(graph)} jobs")

        for root in graph.job_names():
            if root in executed:
                continue

            in_progress = {root}
            stack = [(root, iter(graph.dependencies_of(root)))]

            while stack:
                job_name, pending = stack[-1]

                for dep in pending:
                    if dep in executed:
                        continue
                    if dep in in_progress:
                        path = [name for name, _ in stack]
                        raise CycleDetected(dep, path[path.index(dep):] + [dep])
                    in_progress.add(dep)
                    stack.append((dep, iter(graph.dependencies_of(dep))))
                    break
                else:
                    stack.pop()
                    in_progress.discard(job_name)
                    self._execute(job_name, runner)
                    executed.add(job_name)

                    event = CompletionEvent(
                        job_name=job_name,
                        index=len(events),
                        timestamp=datetime.now(timezone.utc),
                    )
                    events.append(event)
                    if on_complete is not None:
                        on_complete(event)

        logger.info(f"Executed {len(events)} jobs")
        return events

    def _execute(self, job_name: str, runner: JobRunner) -> None:
        logger.debug(f"Running job '{job_name}'")
        try:
            runner.run(job_name)
        except Exception as e:
            logger.error(f"Job '{job_name}' failed: {e}")
            raise JobExecutionFailed(job_name, e) from e
