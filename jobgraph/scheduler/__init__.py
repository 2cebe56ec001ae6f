"""
Scheduler Module

Dependency-ordered job execution.
"""

from .executor import TopologicalExecutor
from .parallel import ParallelExecutor

__all__ = [
    "TopologicalExecutor",
    "ParallelExecutor",
]
