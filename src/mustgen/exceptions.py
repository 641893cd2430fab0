class MustgenError(Exception):
    """Base class for every error raised while generating must wrappers.

    All of these are terminal: the CLI prints the message and exits."""

    message = "mustgen error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class NoPackageFound(MustgenError):
    message = "no package found"


class UnknownFieldType(MustgenError):
    message = "unknown field type"


class NoReturnValues(MustgenError):
    message = "no return values"


class NoErrorReturn(MustgenError):
    message = "no error returned"


class FunctionNotFound(MustgenError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"function not found: {name}")


class ParseError(MustgenError):
    message = "syntax error"


class FormatError(MustgenError):
    message = "gofmt failed"
