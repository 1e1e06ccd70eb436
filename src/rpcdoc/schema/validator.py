"""Invariant checks for a loaded ApiDefinition.

Name/key consistency is a hard failure. Argument ordering problems are only
warnings: emitters move required arguments to the front anyway.
"""

import logging
import sys

from pydantic import BaseModel

from rpcdoc.errors import EmptyNameError, KeyMismatchError, NumericValidationError
from rpcdoc.parser.base import ApiDefinition, Method

logger = logging.getLogger(__name__)

MAX_MONEY = 21_000_000.0


class OrderingWarning(BaseModel):
    """An optional argument placed directly before a required one."""

    method: str
    optional_argument: str
    required_argument: str

    @property
    def message(self) -> str:
        return (
            f"Method '{self.method}' has argument ordering issue: "
            f"'{self.optional_argument}' (optional) comes before "
            f"'{self.required_argument}' (required)."
        )


class ValidationOutcome(BaseModel):
    """Non-fatal findings of a successful validation run."""

    warnings: list[OrderingWarning] = []


def validate_names(definition: ApiDefinition) -> None:
    """Raise if any method is unnamed or its name differs from its key."""
    for key, method in definition.rpcs.items():
        if not method.name:
            raise EmptyNameError(f"method with empty name found under key '{key}'")
        if method.name != key:
            raise KeyMismatchError(key, method.name)


def check_argument_ordering(method: Method) -> OrderingWarning | None:
    """Return the first optional-before-required pair, if any."""
    args = method.arguments
    for current, following in zip(args, args[1:]):
        if current.optional and following.required:
            return OrderingWarning(
                method=method.name,
                optional_argument=current.name,
                required_argument=following.name,
            )
    return None


def validate_argument_ordering(definition: ApiDefinition) -> dict[str, OrderingWarning]:
    """Check argument order of every method.

    Returns dict of {method_name: warning} for methods with an ordering issue.
    """
    warnings = {}
    for name, method in definition.rpcs.items():
        warning = check_argument_ordering(method)
        if warning is not None:
            logger.warning(warning.message)
            warnings[name] = warning
    return warnings


def validate(definition: ApiDefinition) -> ValidationOutcome:
    """Run all checks. Hard failures raise; ordering issues are returned."""
    validate_names(definition)
    warnings = validate_argument_ordering(definition)
    return ValidationOutcome(warnings=list(warnings.values()))


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_numeric_value(value, target_type: str) -> None:
    """Check a decoded JSON value against a numeric target type.

    Supports ``u64`` (non-negative integers), ``f64`` (any number) and
    ``bitcoin::Amount`` (0 to 21,000,000 with at most 8 decimal places).
    Any other target type is a mismatch.
    """
    if target_type == "u64":
        if not (isinstance(value, int) and not isinstance(value, bool) and value >= 0):
            raise NumericValidationError(f"expected u64, got {value!r}")
    elif target_type == "f64":
        if not _is_number(value):
            raise NumericValidationError(f"expected f64, got {value!r}")
    elif target_type == "bitcoin::Amount":
        if not _is_number(value):
            raise NumericValidationError(f"expected bitcoin::Amount, got {value!r}")
        amount = float(value)
        if amount < 0.0:
            raise NumericValidationError(f"invalid amount: {amount}")
        if amount > MAX_MONEY:
            raise NumericValidationError(f"amount out of range: {amount}")
        reconstructed = round(amount * 1e8) / 1e8
        if abs(reconstructed - amount) > sys.float_info.epsilon:
            raise NumericValidationError(f"invalid amount: {amount}")
    else:
        raise NumericValidationError(f"expected numeric type, got {target_type!r} for {value!r}")
