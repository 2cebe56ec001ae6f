"""
Runtime Module

Pipeline coordination and process entry point.
"""

from .coordinator import JobPipeline

__all__ = [
    "JobPipeline",
]
