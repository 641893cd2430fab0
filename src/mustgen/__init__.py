from .codegen import compile_package, go_fmt
from .exceptions import (
    FormatError,
    FunctionNotFound,
    MustgenError,
    NoErrorReturn,
    NoPackageFound,
    NoReturnValues,
    ParseError,
    UnknownFieldType,
)
from .loader import load_package
from .scanner import DEFAULT_TAG, scan_package

__all__ = [
    "DEFAULT_TAG",
    "FormatError",
    "FunctionNotFound",
    "MustgenError",
    "NoErrorReturn",
    "NoPackageFound",
    "NoReturnValues",
    "ParseError",
    "UnknownFieldType",
    "compile_package",
    "go_fmt",
    "load_package",
    "scan_package",
]
