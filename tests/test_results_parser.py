from rpcdoc.parser.results import ResultTreeBuilder, build_result_tree, none_result

BLOCKCHAIN_INFO = """\
{                                 (json object)
  "chain" : "str",                (string) current network name
  "blocks" : n,                   (numeric) the height of the chain
  "softforks" : {                 (json object) status of softforks
    "xxxx" : {                    (json object) name of the softfork
      "type" : "str",             (string) one of "buried", "bip9"
      "active" : true|false       (boolean) true if the rules are enforced
    }
  },
  "warnings" : "str"              (string) any network warnings
}""".splitlines()


class TestResultTree:
    def test_nested_object(self):
        roots = build_result_tree(BLOCKCHAIN_INFO)
        assert len(roots) == 1
        root = roots[0]
        assert root.type_ == "object"
        assert root.key_name == ""
        assert [r.key_name for r in root.inner] == ["chain", "blocks", "softforks", "warnings"]

        softforks = root.inner[2]
        assert softforks.type_ == "object"
        assert [r.key_name for r in softforks.inner] == ["xxxx"]
        xxxx = softforks.inner[0]
        assert [r.key_name for r in xxxx.inner] == ["type", "active"]
        assert xxxx.inner[1].type_ == "boolean"

    def test_siblings_at_equal_depth_do_not_nest(self):
        roots = build_result_tree([
            '"a" : n,   (numeric) first',
            '"b" : n,   (numeric) second',
        ])
        assert [r.key_name for r in roots] == ["a", "b"]
        assert roots[0].inner == []

    def test_dedent_by_several_levels(self):
        roots = build_result_tree([
            '"outer" : {          (json object)',
            '  "mid" : {          (json object)',
            '    "leaf" : n       (numeric) leaf value',
            "  }",
            "}",
            '"next" : n           (numeric) after the object',
        ])
        assert [r.key_name for r in roots] == ["outer", "next"]
        assert roots[0].inner[0].key_name == "mid"
        assert roots[0].inner[0].inner[0].key_name == "leaf"

    def test_irregular_indentation_steps(self):
        roots = build_result_tree([
            "{            (json object)",
            '     "a" : n (numeric) five spaces in',
            ' "b" : n     (numeric) one space in',
            "}",
        ])
        assert len(roots) == 1
        assert [r.key_name for r in roots[0].inner] == ["a", "b"]

    def test_scalar_with_children_is_promoted(self):
        roots = build_result_tree([
            '"details" : "str"   (string) details',
            '  "code" : n        (numeric) error code',
        ])
        assert roots[0].type_ == "object"
        assert roots[0].inner[0].key_name == "code"

    def test_array_elements(self):
        roots = build_result_tree([
            '"txids" : [      (json array)',
            '  "hex",         (string) transaction id',
            "  ...",
            "]",
        ])
        txids = roots[0]
        assert txids.type_ == "array"
        assert len(txids.inner) == 1
        assert txids.inner[0].type_ == "string"
        assert txids.inner[0].key_name == ""

    def test_unnamed_array_element(self):
        roots = build_result_tree([
            "[           (json array)",
            "  n,        (numeric) block height",
            "]",
        ])
        assert roots[0].type_ == "array"
        assert roots[0].inner[0].key_name == ""
        assert roots[0].inner[0].type_ == "number"

    def test_optional_and_required_flags(self):
        roots = build_result_tree([
            "{                    (json object)",
            '  "pruneheight" : n  (numeric, optional) last pruned height',
            '  "blocks" : n       (numeric) chain height',
            "}",
        ])
        pruneheight, blocks = roots[0].inner
        assert pruneheight.optional is True
        assert pruneheight.required is False
        assert blocks.required is True

    def test_condition_set_on_top_level_nodes(self):
        roots = build_result_tree(
            ['{   (json object)', '  "hex" : "str"  (string) raw block'],
            condition="for verbosity = 0",
        )
        assert roots[0].condition == "for verbosity = 0"
        assert roots[0].inner[0].condition == ""

    def test_no_matching_lines(self):
        assert build_result_tree(["{", "}", "Nothing of interest here"]) == []

    def test_blank_lines_ignored(self):
        roots = build_result_tree(["", '"hex"   (string) the hex', "   "])
        assert len(roots) == 1


class TestResultTreeBuilder:
    def test_builder_resets_after_finish(self):
        builder = ResultTreeBuilder()
        builder.feed('"a" : n   (numeric) a')
        assert len(builder.finish()) == 1
        assert builder.finish() == []


class TestNoneResult:
    def test_none_result(self):
        r = none_result()
        assert r.type_ == "none"
        assert r.inner == []
        assert r.required is True
