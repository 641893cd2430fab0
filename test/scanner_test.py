import pytest

from mustgen.scanner import (
    DEFAULT_TAG,
    TagMatch,
    first_leading_comment,
    match_tag,
    must_name,
    resolve_target_name,
    scan_package,
)
from mustgen.syntax import Block, Comment, FuncDecl


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Divide", "MustDivide"),
        ("DoThing", "MustDoThing"),
        ("doThing", "mustDoThing"),
        ("x", "mustX"),
        ("X", "MustX"),
        ("parseURL", "mustParseURL"),
    ],
)
def test_must_name(name, expected):
    assert must_name(name) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("//@gen_must", "MustDivide"),
        ("//@gen_must   ", "MustDivide"),
        ("//@gen_must: SafeDivide", "SafeDivide"),
        ("//@gen_must:SafeDivide", "SafeDivide"),
        ("//@gen_must :  SafeDivide  ", "SafeDivide"),
        ("//@gen_must:", "MustDivide"),
        ("//@gen_must_legacy", None),
        ("//@gen_must please", None),
        ("// @gen_must", None),
        ("/*@gen_must*/", None),
        ("// Divide divides", None),
    ],
)
def test_resolve_target_name(text, expected):
    assert resolve_target_name(text, DEFAULT_TAG, "Divide") == expected


class TestFirstLeadingComment:
    body = Block(start=100, end=200, first_statement=150)

    def test_comment_before_first_statement(self):
        inside = Comment(110, 121, "//@gen_must")
        assert first_leading_comment(self.body, [Comment(10, 20, "// doc"), inside]) == inside

    def test_comment_after_first_statement(self):
        assert first_leading_comment(self.body, [Comment(160, 171, "//@gen_must")]) is None

    def test_only_the_first_comment_counts(self):
        comments = [Comment(160, 171, "// trailing"), Comment(110, 121, "//@gen_must")]
        # comments are in source order, so the first one inside the span decides
        assert first_leading_comment(self.body, sorted(comments, key=lambda c: c.start)).start == 110

    def test_no_comment_in_body(self):
        assert first_leading_comment(self.body, [Comment(10, 20, "// doc"), Comment(250, 260, "// next")]) is None

    def test_empty_body(self):
        body = Block(start=100, end=120, first_statement=None)
        comment = Comment(105, 116, "//@gen_must")
        assert first_leading_comment(body, [comment]) == comment

    def test_comment_right_after_closing_brace(self):
        assert first_leading_comment(self.body, [Comment(200, 211, "//@gen_must")]) is None


def test_match_tag_without_body():
    decl = FuncDecl(name="linkname", body=None)
    assert match_tag(decl, [Comment(0, 11, "//@gen_must")]) is None


def _matches(package, tag=DEFAULT_TAG):
    return [(m.decl.qualified_name, m.target_name) for m in scan_package(package, tag)]


def test_scan_support_package(testpkg):
    assert _matches(testpkg) == [
        ("Divide", "MustDivide"),
        ("divide", "mustDivide"),
        ("Split", "SafeSplit"),
        ("Validate", "MustValidate"),
        ("Sum", "MustSum"),
        ("Max", "MustMax"),
        ("Wrap", "MustWrap"),
        ("Box", "MustBox"),
        ("TypeA.Name", "MustName"),
        ("TypeA.Reset", "MustReset"),
        ("TypeB.Get", "MustGet"),
        ("TypeC.Pair", "MustPair"),
    ]


def test_marker_positions(load_source):
    package = load_source(
        """
        package p

        //@gen_must
        func Outside() error {
            return nil
        }

        func AfterStatement() error {
            x := 1
            //@gen_must
            _ = x
            return nil
        }

        func SameLine() error {
            x := 1 //@gen_must
            _ = x
            return nil
        }

        func NotFirst() error {
            // some explanation
            //@gen_must
            return nil
        }

        func Block() error {
            /*@gen_must*/
            return nil
        }

        func Leading() error {
            //@gen_must

            // more comments
            return nil
        }

        func External() error
        """
    )
    assert _matches(package) == [("Leading", "MustLeading")]


def test_nested_function_literal_comment_does_not_count(load_source):
    package = load_source(
        """
        package p

        func Run() error {
            f := func() error {
                //@gen_must
                return nil
            }
            return f()
        }
        """
    )
    assert _matches(package) == []


def test_comment_after_empty_body_does_not_count(load_source):
    package = load_source("package p\n\nfunc Noop() {}//@gen_must\n")
    assert _matches(package) == []


def test_custom_tag(load_source):
    package = load_source(
        """
        package p

        func A() error {
            //@must
            return nil
        }

        func B() error {
            //@must: NoFail
            return nil
        }

        func C() error {
            //@gen_must
            return nil
        }
        """
    )
    assert _matches(package, tag="@must") == [("A", "MustA"), ("B", "NoFail")]


def test_tag_match_value(load_source):
    package = load_source(
        """
        package p

        func A() error {
            //@gen_must
            return nil
        }
        """
    )
    (decl,) = package.files[0].functions
    assert match_tag(decl, package.files[0].comments) == TagMatch(decl, "MustA")
