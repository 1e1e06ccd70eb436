"""Extraction jobs: one (source, version) pair in, one validated ApiDefinition out.

Jobs share nothing but the read-only type registry, so their order does
not matter.
"""

import logging
from pathlib import Path
from typing import NamedTuple

from rpcdoc.parser.base import ApiDefinition
from rpcdoc.parser.detect import detect_format
from rpcdoc.parser.helptext import parse_help_directory, parse_method_doc
from rpcdoc.schema.codec import load_file
from rpcdoc.schema.validator import validate
from rpcdoc.types.version import Version

logger = logging.getLogger(__name__)


class ExtractionJob(NamedTuple):
    source: Path
    version: Version | None = None


def load_source(source: Path, version: Version | None = None, fmt: str = "auto") -> ApiDefinition:
    """Load a help directory, a single help document, or a bulk snapshot."""
    if fmt == "auto":
        fmt = detect_format(source)

    if fmt == "helpdir":
        return parse_help_directory(source, version=version)
    elif fmt == "bulk":
        return load_file(source, version=version)
    else:
        method = parse_method_doc(source.stem, source.read_text(encoding="utf-8"))
        definition = ApiDefinition(rpcs={method.name: method}, version=version)
        validate(definition)
        return definition


def run_job(job: ExtractionJob) -> ApiDefinition:
    logger.info("Extracting %s (version: %s)", job.source, job.version or "unspecified")
    definition = load_source(Path(job.source), version=job.version)
    logger.info("Extracted %d methods from %s", len(definition.rpcs), job.source)
    return definition


def run_jobs(jobs: list[ExtractionJob]) -> dict[Version | None, ApiDefinition]:
    """Run every job in order; results are keyed by the definition's version."""
    results: dict[Version | None, ApiDefinition] = {}
    for job in jobs:
        definition = run_job(job)
        if definition.version in results:
            logger.warning("Version %s extracted twice, keeping the last", definition.version)
        results[definition.version] = definition
    return results
