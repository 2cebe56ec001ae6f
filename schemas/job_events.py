"""
Job Event Schemas

Dataclasses for events emitted while a job graph executes.
"""

import json
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CompletionEvent:
    """
    A job finished successfully.

    Attributes:
        job_name: Name of the completed job
        index: 0-based position in the run's completion sequence
        timestamp: When the job completed (UTC)
    """
    job_name: str
    index: int
    timestamp: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "job_name": self.job_name,
            "index": self.index,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "CompletionEvent":
        """Create from dictionary."""
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return cls(
            job_name=data["job_name"],
            index=data["index"],
            timestamp=timestamp,
        )

    @classmethod
    def from_json(cls, json_str: str) -> "CompletionEvent":
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))
