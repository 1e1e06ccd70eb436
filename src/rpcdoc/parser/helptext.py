"""Free-text help document parser.

Turns one method's help text into a Method record, and a directory of
``<method>.txt`` files into an ApiDefinition. Parsing is best-effort: it
never raises on odd input, it only skips what it does not recognise.
"""

import logging
from pathlib import Path
from typing import NamedTuple

from rpcdoc.errors import NoMethodsError
from rpcdoc.parser.arguments import parse_arguments
from rpcdoc.parser.base import ApiDefinition, Method, Result
from rpcdoc.parser.patterns import SectionHeader, match_argument, match_section_header
from rpcdoc.parser.results import build_result_tree, none_result
from rpcdoc.schema.validator import validate
from rpcdoc.types.version import Version

logger = logging.getLogger(__name__)


class MethodHelp(NamedTuple):
    """A raw help block for one method."""

    name: str
    raw: str


def split_sections(text: str) -> tuple[list[str], list[tuple[SectionHeader, list[str]]]]:
    """Split a help document into its preamble and header-delimited sections."""
    preamble: list[str] = []
    sections: list[tuple[SectionHeader, list[str]]] = []
    for line in text.splitlines():
        header = match_section_header(line)
        if header is not None:
            sections.append((header, []))
        elif sections:
            sections[-1][1].append(line)
        else:
            preamble.append(line)
    return preamble, sections


def _trim_blank(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def _is_signature(line: str, name: str) -> bool:
    tokens = line.split()
    return bool(tokens) and tokens[0].strip('"') == name


def extract_description(name: str, preamble: list[str]) -> str:
    """Preamble prose, without the signature line and numbered argument lines."""
    lines = _trim_blank(preamble)
    if lines and _is_signature(lines[0], name):
        lines = lines[1:]
    lines = [line.strip() for line in lines if match_argument(line) is None]
    return "\n".join(_trim_blank(lines))


def parse_method_doc(name: str, text: str) -> Method:
    """Parse one method's help text into a Method."""
    preamble, sections = split_sections(text)

    argument_sections = [lines for header, lines in sections if header.kind == "arguments"]
    if argument_sections:
        argument_lines = [line for lines in argument_sections for line in lines]
    else:
        argument_lines = preamble
    arguments = parse_arguments(argument_lines)

    results: list[Result] = []
    for header, lines in sections:
        if header.kind == "results":
            results.extend(build_result_tree(lines, condition=header.condition))
    if not results:
        results = [none_result()]

    example_lines = [line for header, lines in sections if header.kind == "examples" for line in lines]

    return Method(
        name=name,
        description=extract_description(name, preamble),
        examples="\n".join(_trim_blank(example_lines)),
        argument_names=[a.name for a in arguments],
        arguments=arguments,
        results=results,
    )


def split_help_dump(text: str) -> list[MethodHelp]:
    """Split a full help listing into per-method blocks.

    Blocks are separated by blank lines; the first word of a block is the
    method name. Category headings like ``== Wallet ==`` are ignored.
    """
    methods = []
    for block in text.strip().split("\n\n"):
        lines = [
            line for line in block.strip().splitlines()
            if not line.strip().startswith("==")
        ]
        if not lines or not lines[0].split():
            continue
        methods.append(MethodHelp(name=lines[0].split()[0], raw="\n".join(lines)))
    if not methods:
        raise NoMethodsError("no methods found")
    return methods


def parse_help_directory(docs_dir: Path, version: Version | None = None) -> ApiDefinition:
    """Parse every ``<method>.txt`` under docs_dir and validate the result."""
    rpcs = {}
    for path in sorted(docs_dir.glob("*.txt")):
        text = path.read_text(encoding="utf-8")
        rpcs[path.stem] = parse_method_doc(path.stem, text)
    logger.info("Parsed %d help documents from %s", len(rpcs), docs_dir)

    definition = ApiDefinition(rpcs=rpcs, version=version)
    validate(definition)
    return definition
