"""Parsers for the output of the help index and the version probe.

Running the client binary is the caller's job; these functions only read
what it printed.
"""

import json
import re

from rpcdoc.errors import SchemaParseError
from rpcdoc.types.version import Version

_METHOD_NAME_RE = re.compile(r"^\w+$")


def parse_help_index(output: str) -> list[str]:
    """Method names from a help listing, one per line; headings and junk skipped."""
    names = []
    for line in output.splitlines():
        tokens = line.split()
        if tokens and _METHOD_NAME_RE.match(tokens[0]):
            names.append(tokens[0])
    return names


def extract_version(networkinfo_json: str) -> Version:
    """Read the server version from network-info JSON, e.g. 290100 -> v29.1."""
    try:
        parsed = json.loads(networkinfo_json)
    except json.JSONDecodeError as e:
        raise SchemaParseError(f"Invalid JSON in network info: {e}") from e

    version = parsed.get("version") if isinstance(parsed, dict) else None
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        raise SchemaParseError("Missing 'version' field in network info")
    return Version(version // 10000, (version // 100) % 100)
