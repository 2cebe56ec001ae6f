"""
Job Graph Engine

Validates job dependency graphs and executes jobs in dependency order.
"""

from .dag import Job, JobGraph, JobRunner, StructuralValidator, validate
from .errors import (
    JobGraphError,
    GraphDefinitionError,
    DuplicateJob,
    DanglingDependency,
    UnknownJob,
    ValidationError,
    CycleDetected,
    MultipleComponents,
    NoEntryOrExitPoint,
    JobExecutionFailed,
    ConfigError,
)
from .scheduler import TopologicalExecutor, ParallelExecutor

__all__ = [
    "Job",
    "JobGraph",
    "JobRunner",
    "StructuralValidator",
    "validate",
    "TopologicalExecutor",
    "ParallelExecutor",
    "JobGraphError",
    "GraphDefinitionError",
    "DuplicateJob",
    "DanglingDependency",
    "UnknownJob",
    "ValidationError",
    "CycleDetected",
    "MultipleComponents",
    "NoEntryOrExitPoint",
    "JobExecutionFailed",
    "ConfigError",
]
