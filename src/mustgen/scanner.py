"""Find the functions tagged for wrapper generation.

A function opts in with a marker comment placed as the first thing inside its
body::

    func Divide(a, b int) (int, error) {
        //@gen_must
        ...
    }

`//@gen_must: SafeDivide` picks the wrapper name explicitly; otherwise it is
derived from the function name (`Divide` -> `MustDivide`, `divide` -> `mustDivide`).
"""

import logging
import typing
from dataclasses import dataclass

from .syntax import Block, Comment, FuncDecl, Package

logger = logging.getLogger(__name__)

DEFAULT_TAG = "@gen_must"


@dataclass(frozen=True)
class TagMatch:
    decl: FuncDecl
    target_name: str


def must_name(name: str) -> str:
    first = name[:1]
    if first.upper() == first:
        return "Must" + name
    return "must" + first.upper() + name[1:]


def first_leading_comment(body: Block, comments: typing.Iterable[Comment]) -> Comment | None:
    """Return the first comment inside `body`, provided it precedes the first statement.

    `comments` must be in source order.
    """
    for comment in comments:
        if body.start <= comment.start < body.end:
            if body.first_statement is not None and body.first_statement < comment.start:
                return None
            return comment
    return None


def resolve_target_name(comment_text: str, tag: str, function_name: str) -> str | None:
    """Name of the wrapper requested by a comment, or None if the comment is not a marker."""
    prefix = "//" + tag
    if not comment_text.startswith(prefix):
        return None
    rest = comment_text[len(prefix) :].strip()
    if rest.startswith(":"):
        return rest[1:].strip() or must_name(function_name)
    if rest:
        # e.g. //@gen_must_legacy, a different marker
        return None
    return must_name(function_name)


def match_tag(decl: FuncDecl, comments: typing.Iterable[Comment], tag: str = DEFAULT_TAG) -> TagMatch | None:
    if decl.body is None:
        return None
    comment = first_leading_comment(decl.body, comments)
    if comment is None:
        return None
    target_name = resolve_target_name(comment.text, tag, decl.name)
    if target_name is None:
        return None
    return TagMatch(decl, target_name)


def scan_package(package: Package, tag: str = DEFAULT_TAG) -> typing.Iterator[TagMatch]:
    """Yield a `TagMatch` for every tagged function, in file then source order."""
    for source_file, decl in package.functions():
        match = match_tag(decl, source_file.comments, tag)
        if match is None:
            logger.debug("%s: %s is not tagged", source_file.path, decl.qualified_name)
            continue
        logger.debug("%s: %s -> %s", source_file.path, decl.qualified_name, match.target_name)
        yield match
