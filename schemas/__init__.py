"""
Event Schemas

Dataclasses for events emitted by the job graph engine.
"""

from .job_events import CompletionEvent

__all__ = [
    "CompletionEvent",
]
