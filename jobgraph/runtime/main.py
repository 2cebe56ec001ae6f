"""
Job Graph Runner - Main Entry Point

Loads a YAML job graph, validates it, and runs every job in dependency order.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from jobgraph.dag.registry import RunnerRegistry
from jobgraph.runtime.coordinator import JobPipeline
from jobgraph.scheduler.executor import TopologicalExecutor
from jobgraph.scheduler.parallel import ParallelExecutor
from runners import create_console_runner, create_recording_runner

logger = logging.getLogger(__name__)


@dataclass
class RuntimeConfig:
    """Process configuration"""
    jobs_file: Path = Path("config/jobs.yaml")
    runner: str = "console"
    delay: float = 1.0
    max_workers: int = 0  # 0 runs jobs sequentially on the main thread
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_workers < 0:
            raise ValueError(f"MAX_WORKERS must be >= 0, got {self.max_workers}")

    @classmethod
    def from_env(cls, argv: Optional[List[str]] = None) -> "RuntimeConfig":
        """
        Create config from environment variables.

        Environment Variables:
            JOBS_FILE: YAML file or directory (default: "config/jobs.yaml")
            JOB_RUNNER: Registered runner type (default: "console")
            JOB_DELAY: Seconds to wait after each job (default: 1.0)
            MAX_WORKERS: Thread pool size, 0 for sequential (default: 0)
            LOG_LEVEL: Logging level (default: "INFO")

        A first positional argument overrides JOBS_FILE.
        """
        argv = list(argv or [])
        jobs_file = argv[0] if argv else os.getenv("JOBS_FILE", "config/jobs.yaml")
        return cls(
            jobs_file=Path(jobs_file),
            runner=os.getenv("JOB_RUNNER", "console"),
            delay=float(os.getenv("JOB_DELAY", "1.0")),
            max_workers=int(os.getenv("MAX_WORKERS", "0")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def setup_runner_registry() -> RunnerRegistry:
    """
    Set up runner registry and register all available runner types.

    Returns:
        Configured RunnerRegistry
    """
    registry = RunnerRegistry()
    registry.register("console", create_console_runner)
    registry.register("recording", create_recording_runner)

    logger.debug(f"Registered {len(registry.list_types())} runner types: {registry.list_types()}")
    return registry


def build_pipeline(config: RuntimeConfig, registry: Optional[RunnerRegistry] = None) -> JobPipeline:
    """Wire loader, runner and executor from configuration"""
    registry = registry or setup_runner_registry()
    runner = registry.create(config.runner, delay=config.delay)

    if config.max_workers > 0:
        executor = ParallelExecutor(max_workers=config.max_workers)
    else:
        executor = TopologicalExecutor()

    return JobPipeline.from_yaml(config.jobs_file, runner, executor=executor)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point"""
    if argv is None:
        argv = sys.argv[1:]
    config = RuntimeConfig.from_env(argv)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logger.info(f"Jobs file: {config.jobs_file}")
    logger.info(f"Runner: {config.runner}, workers: {config.max_workers or 'sequential'}")

    try:
        pipeline = build_pipeline(config)
        pipeline.run()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
