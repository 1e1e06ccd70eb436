"""API version handling."""

from __future__ import annotations

from dataclasses import dataclass

from rpcdoc.errors import SchemaParseError


@dataclass(frozen=True, order=True)
class Version:
    """A (major, minor) API version, ordered by major then minor."""

    major: int
    minor: int = 0

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse strings like 'v29.1', '29.1' or '29'."""
        raw = str(text).strip().lstrip("vV")
        parts = raw.split(".")
        if not raw or len(parts) > 2:
            raise SchemaParseError(
                f"Invalid version format: '{text}'. Expected format like 'v29.1' or '29.1'"
            )
        try:
            major = int(parts[0])
            minor = int(parts[1]) if len(parts) > 1 else 0
        except ValueError as e:
            raise SchemaParseError(f"Invalid version '{text}': {e}") from e
        if major < 0 or minor < 0:
            raise SchemaParseError(f"Invalid version '{text}': negative component")
        return cls(major, minor)

    def as_str(self) -> str:
        """Pretty form, e.g. 'v29.1' or 'v29'."""
        return f"v{self.major}" if self.minor == 0 else f"v{self.major}.{self.minor}"

    def as_module_name(self) -> str:
        """Module name form, e.g. 'v29_1'."""
        return f"v{self.as_number()}"

    def as_doc_version(self) -> str:
        """Documentation label, e.g. '29.1'."""
        return f"{self.major}" if self.minor == 0 else f"{self.major}.{self.minor}"

    def as_number(self) -> str:
        """Numeric form without the leading 'v', e.g. '29_1'."""
        return f"{self.major}" if self.minor == 0 else f"{self.major}_{self.minor}"

    def crate_version(self) -> str:
        """Package version of generated output, e.g. '0.29.1'."""
        return f"0.{self.major}.{self.minor}"

    def __str__(self) -> str:
        return self.as_str()
