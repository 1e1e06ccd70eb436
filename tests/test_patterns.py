from rpcdoc.parser.patterns import (
    canonical_type_tag,
    hint_is_optional,
    infer_result_type,
    leading_depth,
    match_argument,
    match_result_field,
    match_section_header,
    split_type_alternatives,
)


class TestSectionHeaders:
    def test_plain_headers(self):
        assert match_section_header("Arguments:").kind == "arguments"
        assert match_section_header("Result:").kind == "results"
        assert match_section_header("Examples:").kind == "examples"

    def test_qualifier_becomes_condition(self):
        header = match_section_header("Result (for verbosity = 1):")
        assert header.kind == "results"
        assert header.condition == "for verbosity = 1"

    def test_prose_is_not_a_header(self):
        assert match_section_header("Returns the height of the chain.") is None
        assert match_section_header("Result of the call") is None


class TestArgumentLines:
    def test_quoted_name(self):
        entry = match_argument('1. "blockhash"    (string, required) The block hash')
        assert entry.index == 1
        assert entry.name == "blockhash"
        assert entry.flags == "string, required"
        assert entry.description == "The block hash"

    def test_unquoted_name(self):
        entry = match_argument("2. verbosity (numeric, optional, default=1) 0 for hex")
        assert entry.name == "verbosity"

    def test_non_argument_line(self):
        assert match_argument('     "address": amount,  (numeric, required) a pair') is None


class TestResultLines:
    def test_bare_quoted_value_is_not_a_key(self):
        field = match_result_field('"hex",   (string) The transaction id')
        assert field.key_name == ""
        assert field.hint == "string"
        assert field.description == "The transaction id"
        assert match_result_field('"str"') is None

    def test_key_value_and_hint(self):
        field = match_result_field('"txid" : "hex",   (string) The transaction id')
        assert field.key_name == "txid"
        assert field.hint == "string"
        assert field.description == "The transaction id"

    def test_hint_only(self):
        field = match_result_field("(numeric) The current block count")
        assert field.key_name == ""
        assert field.hint == "numeric"

    def test_placeholder_with_hint(self):
        field = match_result_field("{    (json object)")
        assert field.key_name == ""
        assert field.hint == "json object"

    def test_nested_parentheses_in_hint(self):
        field = match_result_field('"fee" : n,  (numeric, optional (deprecated)) fee paid')
        assert field.hint == "numeric, optional (deprecated)"
        assert field.description == "fee paid"

    def test_brackets_and_prose_are_skipped(self):
        assert match_result_field("}") is None
        assert match_result_field("],") is None
        assert match_result_field("...") is None
        assert match_result_field("The returned value (if any) is listed below") is None


class TestTypeTags:
    def test_infer_result_type(self):
        assert infer_result_type("json object") == "object"
        assert infer_result_type("json array") == "array"
        assert infer_result_type("numeric, optional") == "number"
        assert infer_result_type("boolean") == "boolean"
        assert infer_result_type("json null") == "none"
        assert infer_result_type("string") == "string"
        assert infer_result_type("") == "string"

    def test_hint_is_optional(self):
        assert hint_is_optional("numeric, optional")
        assert not hint_is_optional("numeric")

    def test_canonical_type_tag(self):
        assert canonical_type_tag("Numeric") == "number"
        assert canonical_type_tag("json  object") == "object"
        assert canonical_type_tag("hex") == "hex"

    def test_split_type_alternatives(self):
        assert split_type_alternatives("numeric or string") == ["number", "string"]
        assert split_type_alternatives("string") == ["string"]


class TestLeadingDepth:
    def test_spaces_and_tabs(self):
        assert leading_depth("    x") == 4
        assert leading_depth("\tx") == 4
        assert leading_depth("x") == 0
