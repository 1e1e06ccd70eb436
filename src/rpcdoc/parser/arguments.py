"""Parser for numbered argument blocks.

Lines look like ``1. "name" (type, optional, ...) description``. Anything
that does not match, such as nested option listings, is skipped.
"""

import logging
import re

from rpcdoc.parser.base import Argument
from rpcdoc.parser.patterns import match_argument, split_type_alternatives

logger = logging.getLogger(__name__)

_SENTENCE_END = re.compile(r"(?<=[.!?])\s")


def _oneline(description: str) -> str:
    return _SENTENCE_END.split(description, maxsplit=1)[0].strip()


def parse_argument_line(line: str) -> Argument | None:
    entry = match_argument(line)
    if entry is None:
        return None

    flags = [f.strip() for f in entry.flags.split(",")]
    type_tags = split_type_alternatives(flags[0]) or ["string"]
    optional = any("optional" in f.lower() for f in flags)
    names = [n for n in entry.name.split("|") if n] or [entry.name]

    return Argument(
        names=names,
        type=type_tags[0],
        type_str=type_tags if len(type_tags) > 1 else None,
        required=not optional,
        description=entry.description,
        oneline_description=_oneline(entry.description),
    )


def parse_arguments(lines: list[str]) -> list[Argument]:
    """Parse every numbered argument entry in source order."""
    arguments = []
    for line in lines:
        argument = parse_argument_line(line)
        if argument is None:
            if line.strip():
                logger.debug("Skipping argument line: %r", line.strip())
            continue
        arguments.append(argument)
    return arguments
