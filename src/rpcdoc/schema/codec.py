"""Bulk document codec.

Loads a captured API snapshot into an ApiDefinition and writes it back.
Accepted shapes::

    {name: Method}                       flat map
    {name: [Method]}                     discovery output
    {"rpcs": {...}} / {"commands": {...}}  wrapped forms of either

Result ``required`` flags are never read from input; they are derived from
``optional`` on every node. Every loaded definition is validated before it
is returned.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from rpcdoc.errors import SchemaParseError
from rpcdoc.parser.base import ApiDefinition, Method
from rpcdoc.schema.validator import validate
from rpcdoc.types.version import Version

logger = logging.getLogger(__name__)

WRAPPER_KEYS = ("rpcs", "commands")


def _read_document(source) -> dict:
    if isinstance(source, Mapping):
        return dict(source)
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchemaParseError(f"Document is not valid UTF-8: {e}") from e
    if not isinstance(source, str):
        raise SchemaParseError(f"Unsupported source type: {type(source).__name__}")
    if not source.strip():
        return {}

    try:
        data = json.loads(source)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise SchemaParseError(f"Failed to parse API document: {e}") from e
    if not isinstance(data, dict):
        raise SchemaParseError("API document must be a mapping of method names to records")
    return data


def _unwrap(data: dict) -> tuple[dict, str | None]:
    version = data.get("version") if isinstance(data.get("version"), (str, int, float)) else None
    for key in WRAPPER_KEYS:
        if isinstance(data.get(key), dict):
            return data[key], version
    return data, None


def _arguments_from_json_schema(key: str, schema: dict) -> list[dict]:
    """Convert a {"properties": ..., "required": [...]} object into an argument list."""
    required = schema.get("required") or []
    properties = schema.get("properties") or {}
    if (
        not isinstance(properties, dict)
        or not isinstance(required, list)
        or not all(isinstance(prop, dict) for prop in properties.values())
    ):
        raise SchemaParseError(f"Invalid argument schema for '{key}'")
    return [
        {
            "names": [name],
            "type": prop.get("type", "string"),
            "optional": name not in required,
            "description": prop.get("description", ""),
        }
        for name, prop in properties.items()
    ]


def _load_method(key: str, value) -> Method:
    if isinstance(value, list):
        if not value:
            raise SchemaParseError(f"Empty record list for method '{key}'")
        if len(value) > 1:
            logger.debug("Method '%s' has %d records, using the first", key, len(value))
        value = value[0]
    if not isinstance(value, dict):
        raise SchemaParseError(f"Invalid record for method '{key}': expected a mapping")

    record = dict(value)
    record.setdefault("name", key)
    if isinstance(record.get("arguments"), dict):
        record["arguments"] = _arguments_from_json_schema(key, record["arguments"])
    if record.get("arguments") is None:
        record["arguments"] = []
    if record.get("results") is None:
        record["results"] = []

    try:
        return Method.model_validate(record)
    except ValidationError as e:
        raise SchemaParseError(f"Invalid method entry for '{key}': {e}") from e


def load(source, version: Version | None = None) -> ApiDefinition:
    """Load and validate an API definition from a mapping, JSON/YAML text, or bytes."""
    entries, doc_version = _unwrap(_read_document(source))
    if version is None and doc_version is not None:
        version = Version.parse(str(doc_version))

    rpcs = {str(key): _load_method(str(key), value) for key, value in entries.items()}
    definition = ApiDefinition(rpcs=rpcs, version=version)
    validate(definition)
    logger.debug("Loaded %d methods", len(rpcs))
    return definition


def load_file(path: Path, version: Version | None = None) -> ApiDefinition:
    return load(Path(path).read_bytes(), version=version)


def dump(definition: ApiDefinition) -> dict:
    """Serialize a definition to the wrapped ``{"rpcs": ...}`` form."""
    data: dict = {}
    if definition.version is not None:
        data["version"] = definition.version.as_doc_version()
    data["rpcs"] = {
        name: method.model_dump(by_alias=True) for name, method in definition.rpcs.items()
    }
    return data


def dumps(definition: ApiDefinition) -> str:
    return json.dumps(dump(definition), indent=2, ensure_ascii=False)
