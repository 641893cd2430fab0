"""Load a Go package from source files using tree-sitter.

The loader is the only part of mustgen that reads from disk. It parses every
requested file, checks that they form exactly one package and converts the
concrete syntax tree into the model in `mustgen.syntax`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import tree_sitter
import tree_sitter_go

from .exceptions import NoPackageFound, ParseError
from .syntax import (
    BinaryType,
    Block,
    Comment,
    Field,
    FuncDecl,
    Ident,
    IndexListType,
    IndexType,
    Package,
    PointerType,
    SourceFile,
    TypeExpr,
    UnaryType,
    UnsupportedType,
    VariadicType,
)

logger = logging.getLogger(__name__)

GO_LANGUAGE = tree_sitter.Language(tree_sitter_go.language())

# Node kinds that all stand for a plain (unqualified) name.
_IDENT_KINDS = frozenset({"identifier", "type_identifier", "field_identifier", "package_identifier"})

# Constraint wrappers: a `|`-separated list of terms. Older grammars name them differently.
_TYPE_ELEM_KINDS = frozenset({"type_elem", "type_constraint", "constraint_elem"})


def _text(node: Any) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _named(node: Any) -> list[Any]:
    return [child for child in node.named_children if child.type != "comment"]


def convert_type(node: Any) -> TypeExpr:
    """Convert a tree-sitter type node into a `TypeExpr`.

    Never raises: shapes the generator does not handle become `UnsupportedType`
    so that only tagged functions using them fail later on.
    """
    kind = node.type
    if kind in _IDENT_KINDS:
        return Ident(_text(node))
    if kind == "pointer_type":
        return PointerType(convert_type(_named(node)[-1]))
    if kind == "negated_type":
        operand = _named(node)[-1]
        return UnaryType("~", _text(operand))
    if kind == "union_type":
        left, right = _named(node)[:2]
        return BinaryType(convert_type(left), "|", convert_type(right))
    if kind in _TYPE_ELEM_KINDS:
        terms = [convert_type(term) for term in _named(node)]
        if not terms:
            return UnsupportedType(kind, _text(node))
        result = terms[0]
        for term in terms[1:]:
            result = BinaryType(result, "|", term)
        return result
    if kind == "generic_type":
        base = node.child_by_field_name("type")
        arguments = node.child_by_field_name("type_arguments")
        if base is None or arguments is None:
            base, arguments = _named(node)[:2]
        indices = tuple(convert_type(arg) for arg in _named(arguments))
        if len(indices) == 1:
            return IndexType(convert_type(base), indices[0])
        return IndexListType(convert_type(base), indices)
    return UnsupportedType(kind, _text(node))


def convert_field_list(node: Any | None) -> tuple[Field, ...]:
    """Convert a `parameter_list` or `type_parameter_list` node."""
    if node is None:
        return ()
    fields = []
    for decl in _named(node):
        names = tuple(_text(name) for name in decl.children_by_field_name("name"))
        type_node = decl.child_by_field_name("type")
        if type_node is None:
            type_node = _named(decl)[-1]
        typ = convert_type(type_node)
        if decl.type == "variadic_parameter_declaration":
            typ = VariadicType(typ)
        fields.append(Field(names, typ))
    return tuple(fields)


def convert_results(node: Any | None) -> tuple[Field, ...] | None:
    if node is None:
        return None
    if node.type == "parameter_list":
        return convert_field_list(node)
    # a single unparenthesized result type
    return (Field((), convert_type(node)),)


def _first_statement(block: Any) -> int | None:
    for child in _named(block):
        # newer grammars wrap the statements of a block in a statement_list
        if child.type == "statement_list":
            statements = _named(child)
            if statements:
                return statements[0].start_byte
            continue
        return child.start_byte
    return None


def convert_block(node: Any | None) -> Block | None:
    if node is None:
        return None
    return Block(node.start_byte, node.end_byte, _first_statement(node))


def convert_function(node: Any) -> FuncDecl:
    """Convert a `function_declaration` or `method_declaration` node."""
    receiver = node.child_by_field_name("receiver")
    type_params = node.child_by_field_name("type_parameters")
    return FuncDecl(
        name=_text(node.child_by_field_name("name")),
        params=convert_field_list(node.child_by_field_name("parameters")),
        results=convert_results(node.child_by_field_name("result")),
        receiver=convert_field_list(receiver) if receiver is not None else None,
        type_params=convert_field_list(type_params) if type_params is not None else None,
        body=convert_block(node.child_by_field_name("body")),
    )


def _collect_comments(node: Any, comments: list[Comment]) -> None:
    if node.type == "comment":
        comments.append(Comment(node.start_byte, node.end_byte, _text(node).rstrip()))
        return
    for child in node.children:
        _collect_comments(child, comments)


def parse_source(path: Path, content: bytes | None = None) -> SourceFile:
    """Parse a single Go file.

    Args:
        path: Path of the file, used for error messages and to read it if needed
        content: File contents. If None, reads from path.

    Raises:
        ParseError: if the file is not valid Go or has no package clause
    """
    if content is None:
        content = path.read_bytes()
    parser = tree_sitter.Parser(GO_LANGUAGE)
    tree = parser.parse(content)
    root = tree.root_node
    if root.has_error:
        raise ParseError(f"{path}: syntax error")

    package_name = None
    functions = []
    comments: list[Comment] = []
    try:
        for child in root.named_children:
            if child.type == "package_clause":
                package_name = _text(_named(child)[-1])
            elif child.type in ("function_declaration", "method_declaration"):
                functions.append(convert_function(child))
        _collect_comments(root, comments)
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path}: invalid UTF-8: {exc}") from exc
    if package_name is None:
        raise ParseError(f"{path}: missing package clause")

    comments.sort(key=lambda c: c.start)

    logger.debug("parsed %s: package %s, %d functions", path, package_name, len(functions))
    return SourceFile(path, package_name, tuple(functions), tuple(comments))


def _is_go_source(path: Path) -> bool:
    return path.suffix == ".go" and not path.name.endswith("_test.go")


def resolve_files(patterns: Iterable[str | Path]) -> list[Path]:
    """Expand the command-line arguments into the list of files to load.

    A directory contributes its non-test `.go` files in name order; a file is
    taken as given. A file named more than once is only loaded the first time.
    """
    files: list[Path] = []
    seen: set[Path] = set()
    for pattern in patterns:
        path = Path(pattern)
        if path.is_dir():
            candidates = sorted(p for p in path.iterdir() if p.is_file() and _is_go_source(p))
        elif path.is_file():
            candidates = [path]
        else:
            raise NoPackageFound(f"no package found: {pattern} does not exist")
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                files.append(candidate)
    return files


def load_package(patterns: Iterable[str | Path]) -> Package:
    """Load the single Go package named by `patterns`.

    Raises:
        NoPackageFound: if the patterns resolve to zero files, or to files from
            more than one directory or package clause
        ParseError: if any file fails to parse
    """
    files = resolve_files(patterns)
    if not files:
        raise NoPackageFound()

    sources = [parse_source(path) for path in files]

    directories = {path.resolve().parent for path in files}
    package_names = {source.package_name for source in sources}
    if len(directories) != 1 or len(package_names) != 1:
        logger.debug("found packages %s in %s", sorted(package_names), sorted(map(str, directories)))
        raise NoPackageFound()

    package = Package(package_names.pop(), directories.pop(), sources)
    logger.debug("loaded package %s from %d file(s)", package.name, len(sources))
    return package
