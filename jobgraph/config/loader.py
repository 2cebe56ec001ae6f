"""
Config Loader

Loads job graph definitions from YAML files.
Converts YAML job definitions to a JobGraph for validation and execution.

Expected format:

    jobs:
      checkout:
        dependencies: []
      build:
        dependencies: [checkout]
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
import logging

from ..dag.graph import Job, JobGraph
from ..errors import ConfigError

logger = logging.getLogger(__name__)


class JobConfig(BaseModel):
    """Configuration for a single job"""
    dependencies: List[str] = Field(default_factory=list)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _null_means_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class PipelineConfig(BaseModel):
    """Complete job graph configuration"""
    jobs: Dict[str, JobConfig]

    @field_validator("jobs", mode="before")
    @classmethod
    def _null_job_bodies(cls, value: Any) -> Any:
        # "build:" with no body is a job without dependencies
        if isinstance(value, dict):
            return {name: ({} if body is None else body) for name, body in value.items()}
        return value

    def to_graph(self) -> JobGraph:
        """Build a JobGraph, preserving declaration order"""
        return JobGraph(
            Job(name=name, dependencies=tuple(job.dependencies))
            for name, job in self.jobs.items()
        )


class ConfigLoader:
    """
    Loads and merges job graph configs from YAML.

    The loader:
    1. Reads one YAML file, or every *.yaml file in a directory
    2. Validates each document against PipelineConfig
    3. Merges jobs (identical duplicates allowed, conflicts rejected)
    4. Builds the JobGraph

    Example usage:
        loader = ConfigLoader(Path("config"))
        graph = loader.load_graph("jobs.yaml")
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Args:
            config_dir: Base directory for relative paths (default: cwd)
        """
        self.config_dir = Path(config_dir) if config_dir is not None else Path.cwd()
        logger.info(f"Initialized ConfigLoader with config_dir: {self.config_dir}")

    def load_graph(self, path: str | Path) -> JobGraph:
        """
        Load a job graph from a YAML file or a directory of YAML files.

        Raises:
            ConfigError: If files are missing, malformed or conflicting
            GraphDefinitionError: If jobs reference undeclared dependencies
        """
        target = Path(path)
        if not target.is_absolute():
            target = self.config_dir / target

        if target.is_dir():
            yaml_files = sorted(target.glob("*.yaml"))
            if not yaml_files:
                raise ConfigError(f"No YAML files found in {target}")
        elif target.exists():
            yaml_files = [target]
        else:
            raise ConfigError(f"Job config not found: {target}")

        logger.info(f"Loading {len(yaml_files)} YAML files from {target}")

        configs = [self.load_file(f) for f in yaml_files]
        merged = self._merge_configs(configs)
        graph = merged.to_graph()

        logger.info(f"Loaded job graph: {len(graph)} jobs")
        return graph

    def load_file(self, yaml_file: Path) -> PipelineConfig:
        """Parse and validate one YAML file"""
        try:
            with open(yaml_file) as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load {yaml_file}: {e}")
            raise ConfigError(f"Failed to load {yaml_file}: {e}") from e

        config = self.parse(raw, source=str(yaml_file))
        logger.debug(f"Loaded {Path(yaml_file).name}: {len(config.jobs)} jobs")
        return config

    def parse(self, raw: Any, source: str = "<memory>") -> PipelineConfig:
        """
        Validate an already-parsed YAML document.

        Raises:
            ConfigError: If the document is not a mapping with a jobs mapping
        """
        if not isinstance(raw, dict) or "jobs" not in raw:
            raise ConfigError(f"{source}: expected a mapping with a top-level 'jobs' key")

        try:
            return PipelineConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"{source}: invalid job config: {e}") from e

    def _merge_configs(self, configs: List[PipelineConfig]) -> PipelineConfig:
        """
        Merge multiple configs, validating uniqueness.

        Raises:
            ConfigError: If the same job is defined with different dependencies
        """
        all_jobs: Dict[str, JobConfig] = {}

        for config in configs:
            for name, job in config.jobs.items():
                if name in all_jobs:
                    existing = all_jobs[name]
                    if existing.dependencies != job.dependencies:
                        raise ConfigError(
                            f"Conflicting definitions for job: {name}\n"
                            f"First: {existing.dependencies}\n"
                            f"Second: {job.dependencies}"
                        )
                    logger.debug(f"Job {name} already defined (identical), skipping")
                else:
                    all_jobs[name] = job

        return PipelineConfig(jobs=all_jobs)
