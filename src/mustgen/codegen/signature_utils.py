"""Utilities for parsing and formatting function/method signatures.

Every helper returns a (declaration, usage) pair: the text used when declaring
the wrapper and the text used when forwarding the call to the original.

Names the generator has to invent (receiver and parameter placeholders, result
variables) are checked against `reserved`, the names already declared by the
function, and get a numeric suffix when they are taken.
"""

import typing

from ..exceptions import NoErrorReturn, NoReturnValues
from ..syntax import Field, VariadicType
from .type_translation import format_type_expr

ERROR_TYPE = "error"
ERROR_VAR = "err"
RECEIVER_PLACEHOLDER = "recv"


def _usable(name: str) -> bool:
    return bool(name) and name != "_"


def declared_names(*field_lists: tuple[Field, ...] | None) -> set[str]:
    """All names declared in the given field lists, blanks excluded."""
    names = set()
    for fields in field_lists:
        for field in fields or ():
            names.update(name for name in field.names if _usable(name))
    return names


def fresh_name(base: str, taken: typing.Container[str]) -> str:
    """`base`, or `base_1`, `base_2`... if it is already taken."""
    name = base
    suffix = 0
    while name in taken:
        suffix += 1
        name = f"{base}_{suffix}"
    return name


def parse_receiver(
    receiver: tuple[Field, ...] | None, reserved: typing.AbstractSet[str] = frozenset()
) -> tuple[str, str]:
    """
    Parse a method receiver.

    Args:
        receiver: The receiver field list, or None for plain functions
        reserved: Names the placeholder receiver must not reuse

    Returns:
        Tuple of (receiver_decl, receiver_use):
        - receiver_decl: e.g. "(s *Server)", empty for functions
        - receiver_use: e.g. "s.", empty for functions
    """
    if not receiver:
        return "", ""
    field = receiver[0]
    name = field.names[0] if field.names else ""
    if not _usable(name):
        name = fresh_name(RECEIVER_PLACEHOLDER, reserved)
    typ = format_type_expr(field.type)
    return f"({name} {typ})", f"{name}."


def _expand_fields(
    fields: tuple[Field, ...], placeholder: str, reserved: typing.AbstractSet[str]
) -> tuple[list[str], list[str]]:
    taken = set(reserved) | declared_names(fields)
    declarations = []
    uses = []
    position = 0
    for field in fields:
        typ = format_type_expr(field.type)
        for name in field.names or ("",):
            if not _usable(name):
                name = fresh_name(f"{placeholder}{position}", taken)
                taken.add(name)
            declarations.append(f"{name} {typ}")
            uses.append(f"{name}..." if isinstance(field.type, VariadicType) else name)
            position += 1
    return declarations, uses


def parse_parameters(
    params: tuple[Field, ...] | None, reserved: typing.AbstractSet[str] = frozenset()
) -> tuple[str, str]:
    """
    Parse function parameters into formatted strings.

    Grouped declarations (`a, b int`) are expanded one name at a time.
    Unnamed or blank parameters are given positional names (`arg0`, `arg1`...)
    so they can be forwarded, and a variadic parameter is forwarded as `name...`.

    Returns:
        Tuple of (params_str, call_args_str):
        - params_str: "a int, b int"
        - call_args_str: "a, b"
    """
    if not params:
        return "", ""
    declarations, uses = _expand_fields(params, "arg", reserved)
    return ", ".join(declarations), ", ".join(uses)


def parse_type_parameters(
    type_params: tuple[Field, ...] | None, reserved: typing.AbstractSet[str] = frozenset()
) -> tuple[str, str]:
    """
    Parse a type parameter list.

    Returns:
        Tuple of (type_params_decl, type_params_use), e.g. ("[K comparable, V any]", "[K, V]"),
        or two empty strings when the function is not generic.
    """
    if not type_params:
        return "", ""
    declarations, uses = _expand_fields(type_params, "T", reserved)
    return f"[{', '.join(declarations)}]", f"[{', '.join(uses)}]"


def parse_results(
    results: tuple[Field, ...] | None, reserved: typing.AbstractSet[str] = frozenset()
) -> tuple[list[str], list[str]]:
    """
    Parse a result list that must end in `error`.

    Returns:
        Tuple of (result_types, result_vars), parallel lists with one entry per
        result. Variables are named var0, var1, ... and the last one is `err`,
        unless a parameter already uses the name.

    Raises:
        NoReturnValues: if the function returns nothing
        NoErrorReturn: if the last result is not `error`
    """
    if not results:
        raise NoReturnValues()

    types = []
    for field in results:
        typ = format_type_expr(field.type)
        types.extend([typ] * max(len(field.names), 1))

    if types[-1] != ERROR_TYPE:
        raise NoErrorReturn()

    names = [fresh_name(f"var{i}", reserved) for i in range(len(types) - 1)]
    names.append(fresh_name(ERROR_VAR, reserved))
    return types, names
