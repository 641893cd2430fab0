"""Turn type expressions back into Go source text.

Only the shapes a wrapper signature can carry through unchanged are accepted:
plain names, pointers, variadics, unions, approximations and generic
instantiations. Anything else raises `UnknownFieldType`.
"""

from ..exceptions import UnknownFieldType
from ..syntax import (
    BinaryType,
    Ident,
    IndexListType,
    IndexType,
    PointerType,
    TypeExpr,
    UnaryType,
    UnsupportedType,
    VariadicType,
)

# Binary operators that are legal between two types.
TYPE_OPERATORS = frozenset({"|"})


def format_type_expr(typ: TypeExpr) -> str:
    """
    Format a type expression for code generation.

    Args:
        typ: The type expression from a parameter, result, receiver or type parameter

    Returns:
        The Go source text for the type

    Raises:
        UnknownFieldType: if the expression (or any part of it) has an unsupported shape

    Examples:
        PointerType(Ident("T")) -> "*T"
        IndexListType(Ident("Pair"), (Ident("K"), Ident("V"))) -> "Pair[K, V]"
        BinaryType(Ident("int"), "|", Ident("string")) -> "int | string"
    """
    if isinstance(typ, PointerType):
        return f"*{format_type_expr(typ.x)}"

    elif isinstance(typ, Ident):
        return typ.name

    elif isinstance(typ, VariadicType):
        return f"...{format_type_expr(typ.elt)}"

    elif isinstance(typ, BinaryType):
        if typ.op not in TYPE_OPERATORS:
            raise UnknownFieldType(f"unknown field type: operator {typ.op!r} is not a type operator")
        return f"{format_type_expr(typ.x)} {typ.op} {format_type_expr(typ.y)}"

    elif isinstance(typ, UnaryType):
        # The operand is copied as written rather than reconstructed.
        return f"{typ.op}{typ.source}"

    elif isinstance(typ, IndexType):
        return f"{format_type_expr(typ.x)}[{format_type_expr(typ.index)}]"

    elif isinstance(typ, IndexListType):
        args = ", ".join(format_type_expr(index) for index in typ.indices)
        return f"{format_type_expr(typ.x)}[{args}]"

    elif isinstance(typ, UnsupportedType):
        raise UnknownFieldType(f"unknown field type: {typ.kind} `{typ.text}`")

    raise UnknownFieldType(f"unknown field type: {typ!r}")
