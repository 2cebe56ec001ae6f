"""
Structural Validator

Checks that a job graph is a well-structured DAG before anything runs:
no cycles, exactly one connected component, and at least one start job
and one end job.
"""

from collections import deque
from enum import Enum
from typing import Dict, List, Optional, Set
import logging

from .graph import JobGraph
from ..errors import CycleDetected, MultipleComponents, NoEntryOrExitPoint

logger = logging.getLogger(__name__)


class _Mark(Enum):
    """DFS node color"""
    IN_PROGRESS = "in_progress"
    DONE = "done"


class StructuralValidator:
    """
    Runs structural checks over a JobGraph.

    The validator:
    1. Detects cycles (three-color DFS over dependency edges)
    2. Counts connected components (BFS over the undirected view)
    3. Verifies at least one source and one sink job exist

    Each check is an independent predicate. validate() runs them in that
    order and raises the first failure.

    Example usage:
        graph = JobGraph.from_mapping({"A": [], "B": ["A"]})
        validator = StructuralValidator(graph)

        validator.has_cycle()               # False
        validator.connected_components()    # [["A", "B"]]
        validator.validate()                # raises on failure
    """

    def __init__(self, graph: JobGraph):
        """
        Args:
            graph: Job graph to check (read only)
        """
        self.graph = graph

    # -----------------------------------------------------------------
    # Acyclicity
    # -----------------------------------------------------------------

    def find_cycle(self) -> Optional[List[str]]:
        """
        Find a dependency cycle using depth-first search.

        Every job is used as a DFS root if it was not reached from an earlier
        root, so isolated components are checked too. The work stack holds
        (job, remaining dependencies) frames; the jobs on it are exactly the
        in-progress set, so reaching one of them is a back edge.

        Returns:
            Path of job names closing the cycle (first == last), or None
        """
        marks: Dict[str, _Mark] = {}

        for root in self.graph.job_names():
            if root in marks:
                continue

            marks[root] = _Mark.IN_PROGRESS
            stack = [(root, iter(self.graph.dependencies_of(root)))]

            while stack:
                job_name, pending = stack[-1]

                for dep in pending:
                    mark = marks.get(dep)
                    if mark is _Mark.IN_PROGRESS:
                        path = [name for name, _ in stack]
                        return path[path.index(dep):] + [dep]
                    if mark is None:
                        marks[dep] = _Mark.IN_PROGRESS
                        stack.append((dep, iter(self.graph.dependencies_of(dep))))
                        break
                else:
                    marks[job_name] = _Mark.DONE
                    stack.pop()

        return None

    def has_cycle(self) -> bool:
        return self.find_cycle() is not None

    # -----------------------------------------------------------------
    # Connectivity
    # -----------------------------------------------------------------

    def connected_components(self) -> List[List[str]]:
        """
        Group jobs into connected components, treating every dependency
        edge as undirected.

        Returns:
            Components in discovery order; each lists jobs in BFS order
        """
        adjacency: Dict[str, List[str]] = {name: [] for name in self.graph.job_names()}
        for name in self.graph.job_names():
            for dep in self.graph.dependencies_of(name):
                adjacency[dep].append(name)
                adjacency[name].append(dep)

        visited: Set[str] = set()
        components: List[List[str]] = []

        for start in self.graph.job_names():
            if start in visited:
                continue

            component = []
            queue = deque([start])
            visited.add(start)

            while queue:
                current = queue.popleft()
                component.append(current)

                for neighbor in adjacency[current]:
                    if neighbor not in visited:
                        visited.add(neighbor)
                        queue.append(neighbor)

            components.append(component)

        return components

    def has_single_component(self) -> bool:
        return len(self.connected_components()) == 1

    # -----------------------------------------------------------------
    # Entry and exit points
    # -----------------------------------------------------------------

    def has_start_and_end_jobs(self) -> bool:
        """True if at least one job has no dependencies and at least one is nobody's dependency"""
        return bool(self.graph.sources()) and bool(self.graph.sinks())

    # -----------------------------------------------------------------
    # Combined
    # -----------------------------------------------------------------

    def validate(self) -> None:
        """
        Run all checks, fail-fast.

        Acyclicity runs first since the other checks are meaningless on a
        cyclic graph.

        Raises:
            CycleDetected: If a dependency cycle exists
            MultipleComponents: If the component count is not exactly one
            NoEntryOrExitPoint: If there is no source or no sink job
        """
        logger.debug(f"Validating job graph with {len(self.graph)} jobs")

        cycle = self.find_cycle()
        if cycle is not None:
            raise CycleDetected(cycle[0], cycle)
        logger.debug("No cycles detected")

        components = self.connected_components()
        if len(components) != 1:
            raise MultipleComponents(len(components), components)
        logger.debug("Graph has a single connected component")

        sources = self.graph.sources()
        sinks = self.graph.sinks()
        if not sources or not sinks:
            raise NoEntryOrExitPoint(sources, sinks)
        logger.debug(f"Start jobs: {sources}, end jobs: {sinks}")


def validate(graph: JobGraph) -> None:
    """Validate a job graph, raising the first structural failure"""
    StructuralValidator(graph).validate()
