"""YAML configuration for batch extraction runs.

Example::

    log_level: INFO
    output: generated/
    jobs:
      - source: docs/v29/
        version: "29.1"
      - source: snapshots/v28.json
        version: "28"

Relative ``source`` and ``output`` paths are resolved against the directory
of the config file. Quote versions: YAML reads ``29.10`` as the float 29.1.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from rpcdoc.errors import ConfigError, SchemaParseError
from rpcdoc.pipeline import ExtractionJob
from rpcdoc.types.version import Version

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "RPCDOC_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class JobConfig(BaseModel):
    source: Path
    version: Version | None = None

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value):
        if value is None or isinstance(value, Version):
            return value
        try:
            return Version.parse(str(value))
        except SchemaParseError as e:
            raise ValueError(str(e)) from e


class Config(BaseModel):
    log_level: str = "WARNING"
    output: Path | None = None
    jobs: list[JobConfig] = []

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value):
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}', expected one of {', '.join(LOG_LEVELS)}")
        return level

    def extraction_jobs(self) -> list[ExtractionJob]:
        return [ExtractionJob(job.source, job.version) for job in self.jobs]


def load_config(path: Path) -> Config:
    """Load a YAML config file. The RPCDOC_LOG_LEVEL env var overrides log_level."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        data = {**data, "log_level": env_level}

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    base = Path(path).parent
    jobs = [
        job.model_copy(update={"source": job.source if job.source.is_absolute() else base / job.source})
        for job in config.jobs
    ]
    output = config.output
    if output is not None and not output.is_absolute():
        output = base / output
    logger.debug("Loaded config %s with %d jobs", path, len(jobs))
    return config.model_copy(update={"jobs": jobs, "output": output})
