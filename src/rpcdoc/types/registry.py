"""Type categorization: (schema type tag, field name) -> category -> target type.

Every schema type, numeric sub-domains included, is resolved by the same
algorithm over one static rule table:

1. Normalize the field name (lower-case, strip ``_``, ``-`` and spaces).
2. Among rules for the tag (or the ``*`` wildcard) whose pattern matches,
   pick the one with the longest normalized pattern. Ties go to the higher
   priority, then to exact rules, then to the category value, so the
   outcome never depends on table order.
3. With no pattern match, use the tag's pattern-less default rule, then
   the wildcard default.

Lookups never raise; unknown combinations resolve to ``Category.UNKNOWN``.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from rpcdoc.errors import RuleTableError
from rpcdoc.naming import normalize_field_name
from rpcdoc.parser.base import Argument, Result

WILDCARD = "*"


class Category(str, Enum):
    """Output-language-agnostic classification of a field."""

    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"

    TXID = "txid"
    BLOCK_HASH = "block_hash"
    AMOUNT = "amount"

    PORT = "port"
    SMALL_INTEGER = "small_integer"
    LARGE_INTEGER = "large_integer"
    FLOAT = "float"

    TXID_ARRAY = "txid_array"
    STRING_ARRAY = "string_array"
    GENERIC_ARRAY = "generic_array"
    STRUCTURED_OBJECT = "structured_object"
    GENERIC_OBJECT = "generic_object"

    DUMMY = "dummy"
    UNKNOWN = "unknown"


class TargetType(NamedTuple):
    type: str
    default_optional: bool
    serialization_hint: str | None


AMOUNT_HINT = '#[serde(deserialize_with = "amount_from_btc_float")]'

TARGET_TYPES = MappingProxyType({
    Category.STRING: TargetType("String", False, None),
    Category.BOOLEAN: TargetType("bool", False, None),
    Category.NULL: TargetType("()", False, None),
    Category.TXID: TargetType("bitcoin::Txid", False, None),
    Category.BLOCK_HASH: TargetType("bitcoin::BlockHash", False, None),
    Category.AMOUNT: TargetType("bitcoin::Amount", False, AMOUNT_HINT),
    Category.PORT: TargetType("u16", False, None),
    Category.SMALL_INTEGER: TargetType("u32", False, None),
    Category.LARGE_INTEGER: TargetType("u64", False, None),
    Category.FLOAT: TargetType("f64", False, None),
    Category.TXID_ARRAY: TargetType("Vec<bitcoin::Txid>", False, None),
    Category.STRING_ARRAY: TargetType("Vec<String>", False, None),
    Category.GENERIC_ARRAY: TargetType("Vec<serde_json::Value>", False, None),
    Category.STRUCTURED_OBJECT: TargetType("serde_json::Value", False, None),
    Category.GENERIC_OBJECT: TargetType("serde_json::Value", False, None),
    Category.DUMMY: TargetType("String", True, None),
    Category.UNKNOWN: TargetType("serde_json::Value", False, None),
})

CATEGORY_DESCRIPTIONS = MappingProxyType({
    Category.STRING: "Generic string values",
    Category.BOOLEAN: "Boolean true/false values",
    Category.NULL: "Null/empty values",
    Category.TXID: "Transaction IDs",
    Category.BLOCK_HASH: "Block hashes",
    Category.AMOUNT: "Monetary amounts with satoshi precision",
    Category.PORT: "Network port numbers (0-65535)",
    Category.SMALL_INTEGER: "Small bounded integers",
    Category.LARGE_INTEGER: "Large integers for counts, heights, timestamps",
    Category.FLOAT: "Floating-point values for rates and probabilities",
    Category.TXID_ARRAY: "Arrays of transaction IDs",
    Category.STRING_ARRAY: "Arrays of strings (addresses, keys, etc.)",
    Category.GENERIC_ARRAY: "Generic arrays with dynamic content",
    Category.STRUCTURED_OBJECT: "Structured objects",
    Category.GENERIC_OBJECT: "Dynamic JSON objects",
    Category.DUMMY: "Optional dummy fields for testing",
    Category.UNKNOWN: "Unknown or unrecognized types",
})


class CategoryRule(NamedTuple):
    schema_type: str
    pattern: str | None
    category: Category
    exact: bool = False
    priority: int = 0


def _rules(schema_type: str, category: Category, *patterns: str) -> tuple[CategoryRule, ...]:
    return tuple(CategoryRule(schema_type, p, category) for p in patterns)


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    # Defaults, one per schema type
    CategoryRule("string", None, Category.STRING),
    CategoryRule("boolean", None, Category.BOOLEAN),
    CategoryRule("null", None, Category.NULL),
    CategoryRule("none", None, Category.NULL),
    CategoryRule("hex", None, Category.STRING),
    CategoryRule("amount", None, Category.AMOUNT),
    CategoryRule("number", None, Category.LARGE_INTEGER),
    CategoryRule("array", None, Category.GENERIC_ARRAY),
    CategoryRule("object", None, Category.GENERIC_OBJECT),
    CategoryRule("object_dynamic", None, Category.GENERIC_OBJECT),
    CategoryRule(WILDCARD, None, Category.UNKNOWN),
    # Chain-specific strings
    *_rules("string", Category.TXID, "txid"),
    *_rules("string", Category.BLOCK_HASH, "blockhash"),
    *_rules("hex", Category.TXID, "txid"),
    *_rules("hex", Category.BLOCK_HASH, "blockhash"),
    # Monetary amounts
    *_rules("number", Category.AMOUNT, "amount", "balance"),
    # Amount-typed fields that are really rates or limits
    *_rules(
        "amount", Category.FLOAT,
        "balance", "fee_rate", "estimated_feerate", "maxfeerate", "maxburnamount",
        "relayfee", "incrementalfee", "incrementalrelayfee",
    ),
    # Floating rates, probabilities and difficulties
    *_rules(
        "number", Category.FLOAT,
        "fee", "rate", "feerate", "fee_rate", "maxfeerate", "maxburnamount", "relayfee",
        "incrementalfee", "incrementalrelayfee", "difficulty", "probability",
        "percentage", "verificationprogress",
    ),
    *_rules("number", Category.PORT, "port"),
    # Small bounded counts
    *_rules(
        "number", Category.SMALL_INTEGER,
        "nrequired", "minconf", "maxconf", "locktime", "version", "verbosity", "checklevel",
    ),
    CategoryRule("number", "n", Category.SMALL_INTEGER, exact=True),
    # Large counts, heights and timestamps
    *_rules(
        "number", Category.LARGE_INTEGER,
        "blocks", "nblocks", "maxtries", "height", "count", "index", "size", "time",
        "conf_target", "skip", "nodeid", "peer_id", "wait",
    ),
    # Arrays
    *_rules("array", Category.STRING_ARRAY, "keys", "address", "addresses", "wallets"),
    *_rules("array", Category.TXID_ARRAY, "txids"),
    # Objects
    *_rules("object", Category.GENERIC_OBJECT, "options", "query_options"),
    *_rules("object", Category.STRUCTURED_OBJECT, "transaction"),
    # Dummy fields
    CategoryRule("string", "dummy", Category.DUMMY, priority=1),
    CategoryRule("number", "dummy", Category.DUMMY, priority=1),
)


class _CompiledRule(NamedTuple):
    rule: CategoryRule
    normalized: str


class TypeRegistry:
    """Resolves field categories and target types from a fixed rule table."""

    def __init__(self, rules: tuple[CategoryRule, ...] = CATEGORY_RULES):
        patterned: dict[str, list[_CompiledRule]] = {}
        defaults: dict[str, CategoryRule] = {}
        for rule in rules:
            if rule.pattern is None:
                if rule.schema_type in defaults:
                    raise RuleTableError(
                        f"More than one default rule for schema type '{rule.schema_type}'"
                    )
                defaults[rule.schema_type] = rule
            else:
                patterned.setdefault(rule.schema_type, []).append(
                    _CompiledRule(rule, normalize_field_name(rule.pattern))
                )
        self._rules = tuple(rules)
        self._patterned = MappingProxyType({k: tuple(v) for k, v in patterned.items()})
        self._defaults = MappingProxyType(defaults)

    @property
    def rules(self) -> tuple[CategoryRule, ...]:
        return self._rules

    def _candidates(self, schema_type: str) -> tuple[_CompiledRule, ...]:
        own = self._patterned.get(schema_type, ())
        if schema_type == WILDCARD:
            return own
        return own + self._patterned.get(WILDCARD, ())

    def categorize(self, schema_type: str, field_name: str) -> Category:
        """Resolve the category of a field. Never raises."""
        name = normalize_field_name(field_name or "")
        best = None
        best_key = None
        for compiled in self._candidates(schema_type):
            pattern = compiled.normalized
            if compiled.rule.exact:
                matched = name == pattern
            else:
                matched = pattern in name
            if not matched:
                continue
            key = (len(pattern), compiled.rule.priority, compiled.rule.exact, compiled.rule.category.value)
            if best_key is None or key > best_key:
                best, best_key = compiled.rule, key
        if best is not None:
            return best.category

        default = self._defaults.get(schema_type) or self._defaults.get(WILDCARD)
        return default.category if default is not None else Category.UNKNOWN

    def resolve_target_type(self, category: Category) -> TargetType:
        return TARGET_TYPES.get(category, TARGET_TYPES[Category.UNKNOWN])

    def categorize_result(self, result: Result) -> Category:
        # Unnamed nodes are categorized by their description.
        name = result.key_name or result.description
        return self.categorize(result.type_, name)

    def categorize_argument(self, argument: Argument) -> Category:
        return self.categorize(argument.type_, argument.name)

    def map_result_type(self, result: Result) -> tuple[str, bool]:
        """Target type and optionality of a result field."""
        target = self.resolve_target_type(self.categorize_result(result))
        return target.type, target.default_optional or result.optional

    def map_argument_type(self, argument: Argument) -> tuple[str, bool]:
        """Target type and optionality of an argument."""
        target = self.resolve_target_type(self.categorize_argument(argument))
        return target.type, target.default_optional or argument.optional


DEFAULT_REGISTRY = TypeRegistry()
