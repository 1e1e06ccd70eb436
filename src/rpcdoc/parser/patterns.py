"""Line classifiers for command help text.

Three kinds of lines matter: numbered argument entries, result field lines,
and section headers. Everything else is prose and is skipped by callers.
"""

import re
from typing import NamedTuple

ARGUMENT_RE = re.compile(
    r'^\s*(?P<index>\d+)\.\s+"?(?P<name>[^"\s(]+)"?\s*'
    r"\((?P<flags>[^)]*)\)\s*(?P<description>.*)$"
)

# The hint must open with a type word so that parenthesized prose is not
# mistaken for a field.
_TYPE_WORDS = r"(?:string|str|numeric|number|integer|boolean|bool|hex|amount|json|object|array|null|none|any)"

# A quoted token is a key only when a colon follows it; a bare "hex" or "str"
# is a value placeholder, as in array elements.
RESULT_FIELD_RE = re.compile(
    r'^(?:"(?P<key>[^"]*)"\s*:\s*(?P<value>[^(]*)|"[^"]*"\s*,?|(?P<placeholder>[^\s("]+))?'
    r"\s*(?:\((?P<hint>" + _TYPE_WORDS + r"\b(?:[^()]|\([^()]*\))*)\))?"
    r"\s*(?P<description>.*)$",
    re.IGNORECASE,
)

SECTION_HEADER_RE = re.compile(
    r"^(?P<kind>Arguments|Results?|Returns|Examples)\b\s*"
    r"(?:\((?P<qualifier>[^)]*)\))?[^:]*:\s*$"
)

_SECTION_KINDS = {
    "Arguments": "arguments",
    "Result": "results",
    "Results": "results",
    "Returns": "results",
    "Examples": "examples",
}

# Keyword scan over a result type hint; first match wins.
HINT_KEYWORDS = (
    ("boolean", "boolean"),
    ("numeric", "number"),
    ("json object", "object"),
    ("json array", "array"),
    ("json null", "none"),
    ("hex", "hex"),
)

TYPE_ALIASES = {
    "numeric": "number",
    "json object": "object",
    "json array": "array",
    "json null": "none",
    "null": "none",
    "bool": "boolean",
    "str": "string",
}


class ArgumentLine(NamedTuple):
    index: int
    name: str
    flags: str
    description: str


class ResultLine(NamedTuple):
    key_name: str
    hint: str
    description: str


class SectionHeader(NamedTuple):
    kind: str  # arguments / results / examples
    condition: str


def match_argument(line: str) -> ArgumentLine | None:
    m = ARGUMENT_RE.match(line)
    if not m:
        return None
    return ArgumentLine(
        index=int(m.group("index")),
        name=m.group("name"),
        flags=m.group("flags"),
        description=m.group("description").strip(),
    )


def match_result_field(payload: str) -> ResultLine | None:
    """Classify a stripped result line; None unless it has a quoted key or a type hint."""
    m = RESULT_FIELD_RE.match(payload)
    if not m:
        return None
    key = m.group("key")
    hint = m.group("hint")
    if key is None and hint is None:
        return None
    return ResultLine(
        key_name=key or "",
        hint=(hint or "").strip(),
        description=m.group("description").strip(),
    )


def match_section_header(line: str) -> SectionHeader | None:
    m = SECTION_HEADER_RE.match(line.strip())
    if not m:
        return None
    return SectionHeader(
        kind=_SECTION_KINDS[m.group("kind")],
        condition=(m.group("qualifier") or "").strip(),
    )


def infer_result_type(hint: str) -> str:
    hint = hint.lower()
    for keyword, tag in HINT_KEYWORDS:
        if keyword in hint:
            return tag
    return "string"


def hint_is_optional(hint: str) -> bool:
    return "optional" in hint.lower()


def canonical_type_tag(raw: str) -> str:
    tag = " ".join(raw.lower().split())
    return TYPE_ALIASES.get(tag, tag)


def split_type_alternatives(token: str) -> list[str]:
    """'string or numeric' -> ['string', 'number']."""
    return [canonical_type_tag(t) for t in re.split(r"\s+or\s+", token) if t.strip()]


def leading_depth(line: str) -> int:
    expanded = line.expandtabs(4)
    return len(expanded) - len(expanded.lstrip())
