"""
DAG Module

Job graph construction and structural validation.
"""

from .graph import Job, JobGraph, JobRunner
from .registry import RunnerRegistry
from .validator import StructuralValidator, validate

__all__ = [
    "Job",
    "JobGraph",
    "JobRunner",
    "RunnerRegistry",
    "StructuralValidator",
    "validate",
]
