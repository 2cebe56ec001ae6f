"""
Console Job Runner

Logs each job as done and waits a fixed delay, simulating work latency.
"""

import time
import logging

logger = logging.getLogger(__name__)


class ConsoleJobRunner:
    """
    Runner that reports "Job done: <name>" and sleeps.

    Runner Protocol:
        - run(job_name) logs completion at INFO
        - blocks for `delay` seconds afterwards
    """

    def __init__(self, delay: float = 1.0, sleep=time.sleep):
        """
        Args:
            delay: Seconds to wait after each job (0 disables waiting)
            sleep: Sleep function, replaceable in tests
        """
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self._sleep = sleep

    def run(self, job_name: str) -> None:
        logger.info(f"Job done: {job_name}")
        if self.delay:
            self._sleep(self.delay)


def create_console_runner(delay: float = 1.0) -> ConsoleJobRunner:
    """Factory function for the runner registry"""
    return ConsoleJobRunner(delay=delay)
