"""Auto-detect the kind of documentation source."""

import json
from pathlib import Path

import yaml


def _looks_like_bulk_document(data) -> bool:
    if not isinstance(data, dict):
        return False
    if not data:
        # an empty snapshot
        return True
    if isinstance(data.get("rpcs"), dict) or isinstance(data.get("commands"), dict):
        return True
    return all(isinstance(v, (dict, list)) for v in data.values())


def detect_format(source: Path) -> str:
    """Detect the format of a documentation source.

    Returns: 'helpdir' for a directory of per-method help files, 'bulk' for a
    JSON/YAML snapshot, or 'helptext' for a single help document.
    """
    if source.is_dir():
        return "helpdir"

    text = source.read_text(encoding="utf-8")

    # Try JSON first, it is the common snapshot format
    try:
        if _looks_like_bulk_document(json.loads(text)):
            return "bulk"
    except (json.JSONDecodeError, ValueError):
        pass

    try:
        if _looks_like_bulk_document(yaml.safe_load(text)):
            return "bulk"
    except yaml.YAMLError:
        pass

    return "helptext"
