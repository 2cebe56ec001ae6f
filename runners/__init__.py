"""
Job Runners

Concrete JobRunner implementations.
"""

from .console import ConsoleJobRunner, create_console_runner
from .recording import RecordingJobRunner, create_recording_runner

__all__ = [
    "ConsoleJobRunner",
    "create_console_runner",
    "RecordingJobRunner",
    "create_recording_runner",
]
