"""
Job Graph Errors

Exception hierarchy for graph construction, structural validation,
configuration loading and job execution.
"""

from typing import List, Optional, Sequence


class JobGraphError(Exception):
    """Base class for all job graph errors"""


# ---------------------------------------------------------------------
# Graph definition
# ---------------------------------------------------------------------

class GraphDefinitionError(JobGraphError, ValueError):
    """The declared jobs do not form a well-defined graph"""


class DuplicateJob(GraphDefinitionError):
    """A job name was declared more than once"""

    def __init__(self, names: Sequence[str]):
        self.names = sorted(set(names))
        super().__init__(f"Duplicate job names found: {self.names}")


class DanglingDependency(GraphDefinitionError):
    """A job depends on a name that is not declared in the graph"""

    def __init__(self, job: str, dependency: str):
        self.job = job
        self.dependency = dependency
        super().__init__(
            f"Job '{job}' depends on unknown job '{dependency}'"
        )


class UnknownJob(GraphDefinitionError):
    """Lookup of a job name that is not part of the graph"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown job: '{name}'")


# ---------------------------------------------------------------------
# Structural validation
# ---------------------------------------------------------------------

class ValidationError(JobGraphError, ValueError):
    """
    Structural validation failure.

    Attributes:
        kind: Short machine-readable failure kind
              ("cycle", "components", "entry_exit")
    """
    kind = "invalid"


class CycleDetected(ValidationError):
    """The graph contains a dependency cycle"""
    kind = "cycle"

    def __init__(self, node: str, cycle: Optional[List[str]] = None):
        self.node = node
        self.cycle = list(cycle) if cycle else [node]
        super().__init__(
            f"DAG contains a cycle: {' -> '.join(self.cycle)}"
        )


class MultipleComponents(ValidationError):
    """The undirected view of the graph is not exactly one connected component"""
    kind = "components"

    def __init__(self, count: int, components: Optional[List[List[str]]] = None):
        self.count = count
        self.components = components or []
        super().__init__(
            f"DAG must have exactly one connectivity component, found {count}: "
            f"{self.components}"
        )


class NoEntryOrExitPoint(ValidationError):
    """The graph has no source job or no sink job"""
    kind = "entry_exit"

    def __init__(self, sources: Sequence[str], sinks: Sequence[str]):
        self.sources = list(sources)
        self.sinks = list(sinks)
        missing = []
        if not self.sources:
            missing.append("start job (no dependencies)")
        if not self.sinks:
            missing.append("end job (nothing depends on it)")
        super().__init__(
            f"DAG does not have a start and end job: missing {' and '.join(missing)}"
        )


# ---------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------

class JobExecutionFailed(JobGraphError):
    """A job runner raised while executing a job"""

    def __init__(self, job_name: str, cause: BaseException):
        self.job_name = job_name
        self.cause = cause
        super().__init__(f"Job '{job_name}' failed: {cause}")


# ---------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------

class ConfigError(JobGraphError, ValueError):
    """Malformed job graph configuration"""
