"""Main compilation module - generates must wrappers for tagged Go functions."""

from __future__ import annotations

import logging
import typing

from ..exceptions import FunctionNotFound, MustgenError
from ..scanner import DEFAULT_TAG, scan_package
from ..syntax import FuncDecl, Package
from .signature_utils import (
    declared_names,
    parse_parameters,
    parse_receiver,
    parse_results,
    parse_type_parameters,
)

logger = logging.getLogger(__name__)

HEADER = """// Code generated - DO NOT EDIT.
// This file is auto generated by mustgen and any manual changes will be lost.

"""


def compile_header(package_name: str) -> str:
    return f"{HEADER}package {package_name}\n\n"


def _format_results(types: list[str]) -> str:
    # gofmt drops the parentheses around a single unnamed result
    if not types:
        return ""
    if len(types) == 1:
        return f" {types[0]}"
    return f" ({', '.join(types)})"


def compile_function(target_name: str, decl: FuncDecl) -> str:
    """
    Compile a tagged function into its must wrapper.

    Args:
        target_name: Name of the wrapper to generate
        decl: The tagged function or method

    Returns:
        String containing the wrapper's doc comment and definition

    Raises:
        MustgenError: if the signature cannot be reproduced or does not end in `error`.
            The message is prefixed with the function name.
    """
    # generated names must not shadow anything the function declares
    taken = declared_names(decl.receiver, decl.type_params, decl.params)
    try:
        type_params_decl, type_params_use = parse_type_parameters(decl.type_params, taken)
        receiver_decl, receiver_use = parse_receiver(decl.receiver, taken)
        params_decl, params_use = parse_parameters(decl.params, taken)
        result_types, result_vars = parse_results(decl.results, taken)
    except MustgenError as exc:
        raise type(exc)(f"{decl.qualified_name}: {exc}") from exc

    if receiver_decl:
        receiver_decl += " "
    returned = result_vars[:-1]
    error_var = result_vars[-1]

    lines = [
        f"// {target_name} has the behavior of {decl.name}, except it panics on any error.",
        f"func {receiver_decl}{target_name}{type_params_decl}({params_decl}){_format_results(result_types[:-1])} {{",
        f"\t{', '.join(result_vars)} := {receiver_use}{decl.name}{type_params_use}({params_use})",
        f"\tif {error_var} != nil {{",
        f"\t\tpanic({error_var})",
        "\t}",
    ]
    if returned:
        lines.append(f"\treturn {', '.join(returned)}")
    lines.append("}")
    return "\n".join(lines) + "\n\n"


def compile_package(
    package: Package,
    tag: str = DEFAULT_TAG,
    only: typing.Iterable[str] | None = None,
) -> str:
    """
    Generate the wrapper file for a loaded package.

    Args:
        package: The loaded package
        tag: Marker token that opts a function in (without the leading //)
        only: If given, restrict generation to these functions. Methods may be
            named either `Method` or `Type.Method`.

    Returns:
        The generated Go source, not yet passed through gofmt

    Raises:
        FunctionNotFound: if a name in `only` matches no tagged function
    """
    wanted = set(only) if only is not None else None
    seen: set[str] = set()
    parts = [compile_header(package.name)]
    count = 0

    for match in scan_package(package, tag):
        names = {match.decl.name, match.decl.qualified_name}
        if wanted is not None:
            if not names & wanted:
                continue
            seen |= names & wanted
        parts.append(compile_function(match.target_name, match.decl))
        count += 1

    if wanted is not None:
        missing = sorted(wanted - seen)
        if missing:
            raise FunctionNotFound(", ".join(missing))

    logger.debug("generated %d wrapper(s) for package %s", count, package.name)
    return "".join(parts)
