"""
Config Module

YAML job graph configuration loading and validation.
"""

from .loader import ConfigLoader, PipelineConfig, JobConfig

__all__ = [
    "ConfigLoader",
    "PipelineConfig",
    "JobConfig",
]
