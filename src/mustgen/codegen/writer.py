import typing
from pathlib import Path

STDOUT = "-"


def resolve_output_path(out: str | None, inputs: typing.Sequence[str | Path]) -> Path | None:
    """Where to write the generated file, or None for standard output.

    A relative `out` is placed next to the inputs: inside the input directory
    when a single directory was given, otherwise in the directory of the first
    input path.
    """
    if not out or out == STDOUT:
        return None
    first = Path(inputs[0])
    if len(inputs) == 1 and first.is_dir():
        out_dir = first
    else:
        out_dir = first.parent
    return out_dir / out


def write_output(code: str, path: Path | None, stdout: typing.TextIO) -> None:
    if path is None:
        stdout.write(code)
        return
    path.write_text(code)
