"""
Job Pipeline

Coordinates validation and execution of one job graph.
"""

from pathlib import Path
from typing import List, Optional, Protocol
import logging

from ..config.loader import ConfigLoader
from ..dag.graph import JobGraph, JobRunner
from ..dag.validator import StructuralValidator
from ..errors import ValidationError
from ..scheduler.executor import CompletionCallback, TopologicalExecutor
from schemas.job_events import CompletionEvent

logger = logging.getLogger(__name__)


class GraphExecutor(Protocol):
    """Anything that can execute a validated graph (sequential or parallel)"""

    def run(
        self,
        graph: JobGraph,
        runner: JobRunner,
        on_complete: Optional[CompletionCallback] = None,
    ) -> List[CompletionEvent]:
        ...


class JobPipeline:
    """
    Validates a job graph, then executes it.

    The pipeline:
    1. Runs structural validation (cycle, connectivity, start/end jobs)
    2. Reports the verdict before anything executes
    3. Executes every job exactly once in dependency order
    4. Forwards completion events to the caller

    A validation failure is terminal: no job is run.

    Example usage:
        pipeline = JobPipeline.from_yaml(Path("config/jobs.yaml"), ConsoleJobRunner())
        events = pipeline.run()
    """

    def __init__(
        self,
        graph: JobGraph,
        runner: JobRunner,
        executor: Optional[GraphExecutor] = None,
        on_complete: Optional[CompletionCallback] = None,
    ):
        """
        Args:
            graph: Job graph to run
            runner: Supplies the effect of each job
            executor: Execution strategy (default: TopologicalExecutor)
            on_complete: Called with each CompletionEvent
        """
        self.graph = graph
        self.runner = runner
        self.executor = executor or TopologicalExecutor()
        self.on_complete = on_complete

    @classmethod
    def from_yaml(cls, path: Path, runner: JobRunner, **kwargs) -> "JobPipeline":
        """Load the graph from a YAML file or directory"""
        graph = ConfigLoader().load_graph(path)
        return cls(graph, runner, **kwargs)

    def validate(self) -> None:
        """
        Raises:
            ValidationError: The first structural failure found
        """
        try:
            StructuralValidator(self.graph).validate()
        except ValidationError as e:
            logger.error(f"DAG is invalid ({e.kind}): {e}")
            raise
        logger.info("DAG is valid")

    def run(self) -> List[CompletionEvent]:
        """
        Validate and execute.

        Returns:
            Completion events in execution order

        Raises:
            ValidationError: If the graph is not a valid DAG (nothing runs)
            JobExecutionFailed: If a job fails (remaining jobs do not run)
        """
        self.validate()
        events = self.executor.run(self.graph, self.runner, on_complete=self.on_complete)
        logger.info("All jobs done")
        return events
