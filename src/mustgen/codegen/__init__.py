"""Code generation package for mustgen."""

# Re-export public functions
from .compile import compile_function, compile_header, compile_package
from .gofmt import go_fmt
from .signature_utils import parse_parameters, parse_receiver, parse_results, parse_type_parameters
from .type_translation import format_type_expr

__all__ = [
    # Wrapper synthesis
    "compile_function",
    "compile_header",
    "compile_package",
    "go_fmt",
    # Signature utilities
    "parse_parameters",
    "parse_receiver",
    "parse_results",
    "parse_type_parameters",
    # Type reconstruction
    "format_type_expr",
]
