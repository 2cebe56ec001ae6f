"""
Recording Job Runner

Deterministic in-memory runner that records the order jobs were run in.
Useful for tests and dry runs.
"""

import threading
from typing import Dict, Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)


class RecordingJobRunner:
    """
    Records every run(job_name) call.

    Jobs listed in `fail` raise RuntimeError instead of being recorded, which
    lets callers exercise fail-fast behavior. Safe to share between worker
    threads.

    Example usage:
        runner = RecordingJobRunner(fail=["deploy"])
        TopologicalExecutor().run(graph, runner)
        runner.calls  # ["checkout", "build", ...]
    """

    def __init__(self, fail: Optional[Iterable[str]] = None):
        self.fail = set(fail or ())
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def run(self, job_name: str) -> None:
        if job_name in self.fail:
            raise RuntimeError(f"simulated failure in job '{job_name}'")

        with self._lock:
            self.calls.append(job_name)
        logger.debug(f"Recorded job: {job_name}")

    def counts(self) -> Dict[str, int]:
        """How many times each job was run"""
        with self._lock:
            result: Dict[str, int] = {}
            for name in self.calls:
                result[name] = result.get(name, 0) + 1
            return result


def create_recording_runner(fail: Optional[Iterable[str]] = None) -> RecordingJobRunner:
    """Factory function for the runner registry"""
    return RecordingJobRunner(fail=fail)
