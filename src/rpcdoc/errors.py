"""Exception taxonomy for rpcdoc.

Free-text parsing and type categorization never raise; everything here
belongs to bulk-document loading, validation, configuration, or the rule
table itself.
"""


class RpcdocError(Exception):
    """Base class for all rpcdoc errors."""


class SchemaParseError(RpcdocError):
    """Raised when a bulk document is malformed."""


class SchemaValidationError(RpcdocError):
    """Raised when a loaded definition breaks a hard invariant."""


class KeyMismatchError(SchemaValidationError):
    """Raised when a method's own name differs from its key."""

    def __init__(self, key: str, name: str):
        self.key = key
        self.name = name
        super().__init__(f"Method name mismatch: key '{key}' vs method.name '{name}'")


class EmptyNameError(SchemaValidationError):
    """Raised when a method has an empty name."""


class NoMethodsError(RpcdocError):
    """Raised when a help dump contains no method blocks."""


class RuleTableError(RpcdocError):
    """Raised when a category rule table is inconsistent."""


class NumericValidationError(RpcdocError):
    """Raised when a runtime value does not fit its numeric target type."""


class ConfigError(RpcdocError):
    """Raised when a configuration file cannot be loaded."""
