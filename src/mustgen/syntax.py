"""In-memory model of a loaded Go package.

The loader builds these from the tree-sitter syntax tree so the rest of the
generator never touches the parser. Type expressions are limited to the shapes
the wrapper generator knows how to print; everything else is kept as an
`UnsupportedType` carrying its syntax kind and source text.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Ident:
    name: str


@dataclass(frozen=True)
class PointerType:
    x: TypeExpr


@dataclass(frozen=True)
class VariadicType:
    elt: TypeExpr


@dataclass(frozen=True)
class BinaryType:
    """`X op Y` in a type position, e.g. the union `int | float64`."""

    x: TypeExpr
    op: str
    y: TypeExpr


@dataclass(frozen=True)
class UnaryType:
    """`op X` in a type position, e.g. the approximation `~int`.

    Only the operand's source text is kept; it is printed as written."""

    op: str
    source: str


@dataclass(frozen=True)
class IndexType:
    """A generic instantiation with one type argument: `Base[Arg]`."""

    x: TypeExpr
    index: TypeExpr


@dataclass(frozen=True)
class IndexListType:
    """A generic instantiation with several type arguments: `Base[A, B]`."""

    x: TypeExpr
    indices: tuple[TypeExpr, ...]


@dataclass(frozen=True)
class UnsupportedType:
    kind: str
    text: str


TypeExpr = typing.Union[
    Ident,
    PointerType,
    VariadicType,
    BinaryType,
    UnaryType,
    IndexType,
    IndexListType,
    UnsupportedType,
]


@dataclass(frozen=True)
class Field:
    """One entry of a parameter, result, receiver or type parameter list.

    `names` is empty for unnamed entries and holds every name of a grouped
    declaration such as `a, b int`."""

    names: tuple[str, ...]
    type: TypeExpr


@dataclass(frozen=True)
class Comment:
    start: int  # byte offsets into the source file
    end: int
    text: str  # raw text, including the leading // or /*


@dataclass(frozen=True)
class Block:
    start: int  # offset of "{"
    end: int  # offset just past "}"
    first_statement: int | None  # offset of the first statement, None if empty


@dataclass(frozen=True)
class FuncDecl:
    name: str
    params: tuple[Field, ...] = ()
    results: tuple[Field, ...] | None = None
    receiver: tuple[Field, ...] | None = None
    type_params: tuple[Field, ...] | None = None
    body: Block | None = None

    @property
    def receiver_type_name(self) -> str | None:
        """Name of the receiver's base type, without pointer or type arguments."""
        if not self.receiver:
            return None
        typ = self.receiver[0].type
        while not isinstance(typ, (Ident, UnsupportedType)):
            if isinstance(typ, PointerType):
                typ = typ.x
            elif isinstance(typ, (IndexType, IndexListType)):
                typ = typ.x
            else:
                return None
        return typ.name if isinstance(typ, Ident) else None

    @property
    def qualified_name(self) -> str:
        """`Name` for functions, `Type.Name` for methods."""
        recv = self.receiver_type_name
        return f"{recv}.{self.name}" if recv else self.name


@dataclass(frozen=True)
class SourceFile:
    path: Path
    package_name: str
    functions: tuple[FuncDecl, ...] = ()
    comments: tuple[Comment, ...] = ()


@dataclass
class Package:
    name: str
    directory: Path
    files: list[SourceFile] = field(default_factory=list)

    def functions(self) -> typing.Iterator[tuple[SourceFile, FuncDecl]]:
        for source_file in self.files:
            for decl in source_file.functions:
                yield source_file, decl
