"""
Redundant-comment rule scenarios over real parse trees.
"""

import pytest

from codegraph_comments.config import CommentContextPolicy, ContextHandling, LintSettings, Sensitivity
from codegraph_comments.models import Severity
from codegraph_comments.rules import MESSAGE_ID, RULE_ID, RedundantCommentRule


class TestObviousComments:
    """Comments that restate the next statement are flagged."""

    def test_increment(self, lint_js):
        findings = lint_js(
            """
            let i = 0;
            // increment i
            i++;
            """
        )

        assert len(findings) == 1
        finding = findings[0]
        assert finding.rule_id == RULE_ID
        assert finding.message_id == MESSAGE_ID
        assert finding.line == 2
        assert finding.column == 0
        assert finding.severity is Severity.WARNING
        assert finding.data == {"comment": "increment i", "construct": "update"}
        assert finding.message == (
            "Comment 'increment i' appears to restate the code. Comments should explain 'why', not 'what'."
        )

    def test_return(self, lint_js):
        findings = lint_js(
            """
            function sum(items) {
              let total = 0;
              // returns the total
              return total;
            }
            """
        )

        assert [f.line for f in findings] == [3]
        assert findings[0].data["construct"] == "return"

    @pytest.mark.parametrize(
        "comment,code",
        [
            ("// call init", "init();"),
            ("// declare count", "let count = 0;"),
            ("// set x to 5", "x = 5;"),
            ("// loop through items", "for (const item of items) {}"),
            ("// check if", "if (ready) {}"),
            ("// throw error", "throw new Error('x');"),
            ("/* decrement count */", "count--;"),
        ],
    )
    def test_restating_comments(self, lint_js, comment, code):
        findings = lint_js(f"{comment}\n{code}\n")
        assert len(findings) == 1

    def test_python(self, lint_py):
        findings = lint_py(
            """
            count = 0
            # increment count
            count += 1
            """
        )

        assert len(findings) == 1
        assert findings[0].data["construct"] == "update"

    @pytest.mark.parametrize(
        "source,line,construct",
        [
            ("def f(total):\n    # returns the total\n    return total\n", 2, "return"),
            ("for item in items:\n    # increment count\n    count += 1\n", 2, "update"),
            ("if ready:\n    start()\nelse:\n    # call stop\n    stop()\n", 4, "call"),
            ("while True:\n    if done:\n        # break loop\n        break\n", 3, "break"),
            ("# function load\n@cached\n@retry(3)\ndef load():\n    pass\n", 1, "function_def"),
            ("# class Loader\n@dataclass\nclass Loader:\n    pass\n", 1, "class_def"),
        ],
    )
    def test_python_nested_and_decorated(self, lint_py, source, line, construct):
        findings = lint_py(source)

        assert [f.line for f in findings] == [line]
        assert findings[0].data["construct"] == construct

    def test_blank_line_between_comment_and_code(self, lint_js):
        findings = lint_js("// call init\n\n\ninit();\n")
        assert len(findings) == 1


class TestExplanatoryComments:
    """Comments that explain intent are left alone."""

    def test_why_indicator(self, lint_js):
        findings = lint_js(
            """
            let i = 0;
            // increment i because the loop requires zero-based adjustment
            i++;
            """
        )
        assert findings == []

    def test_unrelated_comment(self, lint_js):
        assert lint_js("// keeps the worker warm between jobs\ninit();\n") == []

    def test_long_comment(self, lint_js):
        assert lint_js("// increment i so every later lookup stays aligned with rows\ni++;\n") == []

    @pytest.mark.parametrize(
        "comment",
        [
            "// TODO: increment i",
            "// eslint-disable-next-line no-plusplus",
            "/** increment i */",
            "// see https://example.com/increment-i",
            "// `i` increment",
        ],
    )
    def test_skipped_categories(self, lint_js, comment):
        assert lint_js(f"{comment}\ni++;\n") == []

    def test_end_of_file_comment(self, lint_js):
        findings = lint_js(
            """
            init();
            // call init
            """
        )
        assert findings == []

    def test_comment_before_empty_statement(self, lint_js):
        assert lint_js("// call init\n;\n") == []


class TestTrailingComments:
    def test_trailing_comment_checks_own_line(self, lint_js):
        findings = lint_js("let i = 0;\ni++; // increment i\n")

        assert len(findings) == 1
        assert findings[0].line == 2
        assert findings[0].column == 5

    def test_trailing_disabled(self, lint_js):
        assert lint_js("let i = 0;\ni++; // increment i\n", check_trailing_comments=False) == []

    def test_leading_disabled(self, lint_js):
        source = "let i = 0;\n// increment i\ni++;\n"

        assert lint_js(source, check_leading_comments=False) == []
        assert len(lint_js(source, check_trailing_comments=False)) == 1

    def test_python_trailing(self, lint_py):
        assert len(lint_py("x = 1  # set x\n")) == 1


class TestSensitivity:
    SOURCE = "// check if x is ready\nif (x.ready) {}\n"

    def test_medium_tolerates_partial_overlap(self, lint_js):
        assert lint_js(self.SOURCE, sensitivity=Sensitivity.MEDIUM) == []

    def test_high_flags_partial_overlap(self, lint_js):
        assert len(lint_js(self.SOURCE, sensitivity=Sensitivity.HIGH)) == 1

    def test_low_only_exact(self, lint_js):
        source = "function sum() {\n  // returns the total\n  return total;\n}\n"

        assert lint_js(source, sensitivity=Sensitivity.LOW) == []
        assert len(lint_js(source, sensitivity=Sensitivity.MEDIUM)) == 1


class TestOptions:
    def test_ignore_patterns(self, lint_js):
        source = "let i = 0;\n// increment i\ni++;\n"

        assert lint_js(source, ignore_patterns=["^increment"]) == []
        assert len(lint_js(source, ignore_patterns=["^decrement"])) == 1

    def test_invalid_ignore_pattern_is_reported_and_ignored(self, caches, parse_js):
        rule = RedundantCommentRule(LintSettings(ignore_patterns=["(unclosed", "^nothing"]), caches)

        assert len(rule.config_warnings) == 1
        assert "(unclosed" in rule.config_warnings[0]
        assert len(rule.ignore_patterns) == 1
        assert len(rule.check(parse_js("// increment i\ni++;\n"))) == 1

    def test_strict_inline_context_is_error(self, lint_js):
        policy = CommentContextPolicy(inline_comments=ContextHandling.STRICT)
        findings = lint_js("// increment i\ni++;\n", comment_context=policy)

        assert findings[0].severity is Severity.ERROR

    def test_skip_inline_context(self, lint_js):
        policy = CommentContextPolicy(inline_comments=ContextHandling.SKIP)
        assert lint_js("// increment i\ni++;\n", comment_context=policy) == []

    def test_long_comment_text_truncated_in_message(self, lint_js):
        name = "a" * 60
        findings = lint_js(f"// call {name}\n{name}();\n")

        shown = findings[0].data["comment"]
        assert len(shown) == 50
        assert shown.endswith("...")
        assert shown in findings[0].message


class TestRuleState:
    def test_deterministic(self, caches, parse_js):
        rule = RedundantCommentRule(LintSettings(), caches)
        parsed = parse_js("// increment i\ni++;\n// call init\ninit();\n")

        first = [f.to_dict() for f in rule.check(parsed)]
        second = [f.to_dict() for f in rule.check(parsed)]

        assert first == second
        assert len(first) == 2

    def test_file_without_comments(self, lint_js):
        assert lint_js("let i = 0;\ni++;\n") == []
