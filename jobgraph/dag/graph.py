"""
Job Graph Model

Defines the immutable job graph and the protocol for job runners.
Each job is identified by name and lists the jobs that must complete before it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Protocol, Sequence, Tuple
import logging

from ..errors import DanglingDependency, DuplicateJob, UnknownJob

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Job:
    """
    A named job and its dependencies.

    Examples:
        - Source job: Job(name="checkout")
        - Dependent job: Job(name="test", dependencies=("build",))

    Attributes:
        name: Unique job identifier
        dependencies: Names of jobs that must complete before this job runs,
                      in declaration order
    """
    name: str
    dependencies: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # A bare string would otherwise be split into single-character names
        if isinstance(self.dependencies, str):
            raise TypeError(
                f"Job '{self.name}' dependencies must be a sequence of names, "
                f"got string {self.dependencies!r}"
            )
        # Accept any sequence but store a tuple so the job stays hashable
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


class JobGraph:
    """
    Immutable mapping from job name to Job.

    Construction is all-or-nothing: duplicate names or dependencies on
    undeclared jobs raise before any graph is returned. Iteration and
    job_names() follow declaration order.

    Example usage:
        graph = JobGraph.from_mapping({
            "A": [],
            "B": ["A"],
            "C": ["A"],
            "D": ["B", "C"],
        })

        graph.job_names()          # ("A", "B", "C", "D")
        graph.dependencies_of("D") # ("B", "C")
        graph.dependents_of("A")   # ("B", "C")
    """

    def __init__(self, jobs: Iterable[Job]):
        """
        Build the graph from job definitions.

        Args:
            jobs: Job definitions in declaration order

        Raises:
            DuplicateJob: If a name is declared more than once
            DanglingDependency: If a job depends on an undeclared name
        """
        jobs = list(jobs)
        names = [j.name for j in jobs]
        if len(set(names)) != len(names):
            raise DuplicateJob([n for n in names if names.count(n) > 1])

        by_name: Dict[str, Job] = {j.name: j for j in jobs}
        dependents: Dict[str, List[str]] = {name: [] for name in by_name}

        for job in jobs:
            for dep in job.dependencies:
                if dep not in by_name:
                    raise DanglingDependency(job.name, dep)
                if job.name not in dependents[dep]:
                    dependents[dep].append(job.name)

        self._jobs: Mapping[str, Job] = MappingProxyType(by_name)
        self._names: Tuple[str, ...] = tuple(names)
        self._dependents: Dict[str, Tuple[str, ...]] = {
            name: tuple(deps) for name, deps in dependents.items()
        }

        logger.debug(f"Built job graph with {len(self._names)} jobs: {list(self._names)}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Optional[Sequence[str]]]) -> "JobGraph":
        """
        Build a graph from {name: [dependency names]}.

        A None dependency list is treated as empty.
        """
        return cls(Job(name=name, dependencies=deps or ()) for name, deps in mapping.items())

    def get(self, name: str) -> Job:
        """
        Look up a job by name.

        Raises:
            UnknownJob: If the name is not part of the graph
        """
        try:
            return self._jobs[name]
        except KeyError:
            raise UnknownJob(name) from None

    def job_names(self) -> Tuple[str, ...]:
        """All job names in declaration order"""
        return self._names

    def dependencies_of(self, name: str) -> Tuple[str, ...]:
        """Direct dependencies of a job (empty if none)"""
        return self.get(name).dependencies

    def dependents_of(self, name: str) -> Tuple[str, ...]:
        """Jobs that list `name` as a direct dependency, in declaration order"""
        if name not in self._jobs:
            raise UnknownJob(name)
        return self._dependents[name]

    def sources(self) -> List[str]:
        """Jobs with no dependencies"""
        return [name for name in self._names if not self._jobs[name].dependencies]

    def sinks(self) -> List[str]:
        """Jobs that no other job depends on"""
        referenced = {dep for job in self._jobs.values() for dep in job.dependencies}
        return [name for name in self._names if name not in referenced]

    def to_mapping(self) -> Dict[str, List[str]]:
        return {name: list(self._jobs[name].dependencies) for name in self._names}

    def __contains__(self, name: object) -> bool:
        return name in self._jobs

    def __iter__(self) -> Iterator[Job]:
        return (self._jobs[name] for name in self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"JobGraph({self.to_mapping()!r})"


class JobRunner(Protocol):
    """
    Protocol for job runners.

    A runner supplies the effect of executing one job. The engine only
    guarantees ordering and exactly-once invocation; whatever the runner
    does (print, sleep, spawn a process) is opaque to it.

    Example implementation:
        class PrintRunner:
            def run(self, job_name: str) -> None:
                print(f"running {job_name}")

    Raising from run() marks the job as failed and aborts the run.
    """

    def run(self, job_name: str) -> None:
        ...
