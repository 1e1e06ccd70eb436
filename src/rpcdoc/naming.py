"""Name normalization and identifier sanitation shared by parser, registry and annotator."""

import re

RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else", "enum",
    "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct", "super",
    "trait", "true", "type", "union", "unsafe", "use", "where", "while", "yield",
})

_NORMALIZE_STRIP = re.compile(r"[_\- ]")


def normalize_field_name(name: str) -> str:
    """Lower-case a field name and strip underscores, hyphens and spaces."""
    return _NORMALIZE_STRIP.sub("", name).lower()


def camel_to_snake_case(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isascii() and ch.isupper():
            if i != 0:
                out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def pascal_case(name: str) -> str:
    """Convert snake_case or kebab-case to PascalCase."""
    return "".join(word[:1].upper() + word[1:] for word in re.split(r"[_\-]", name))


def sanitize_method_name(name: str) -> str:
    return name.replace("-", "_").lower()


def sanitize_field_name(name: str) -> str:
    """Keep ASCII alphanumerics and underscores; prefix a leading digit with '_'."""
    filtered = "".join(
        c.lower() for c in name if (c.isascii() and c.isalnum()) or c == "_"
    )
    if filtered[:1].isdigit():
        return f"_{filtered}"
    return filtered


def field_ident(key_name: str, idx: int) -> str:
    """Identifier for a result field; unnamed fields become field_<idx>."""
    if not key_name:
        return f"field_{idx}"
    ident = sanitize_field_name(camel_to_snake_case(key_name.replace("-", "_")))
    if not ident:
        return f"field_{idx}"
    if ident in RUST_KEYWORDS:
        return f"r#{ident}"
    return ident


def sanitize_doc_comment(comment: str) -> str:
    """Escape backslashes and quotes and join trimmed lines for a doc comment."""
    lines = [
        line.replace("\\", "\\\\").replace('"', '\\"').strip()
        for line in comment.splitlines()
    ]
    return "\n    /// ".join(lines)
