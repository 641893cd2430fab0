"""Canonicalize generated code with the gofmt binary."""

import logging
import os
import subprocess

from ..exceptions import FormatError

logger = logging.getLogger(__name__)

GOFMT_ENV_VAR = "MUSTGEN_GOFMT"


def gofmt_binary() -> str:
    return os.getenv(GOFMT_ENV_VAR, "gofmt")


def go_fmt(source: str) -> str:
    """
    Run gofmt over Go source text.

    Args:
        source: The Go source to format

    Returns:
        The formatted source

    Raises:
        FormatError: if gofmt cannot be run or rejects the source
    """
    binary = gofmt_binary()
    logger.debug("formatting %d bytes with %s", len(source), binary)
    try:
        result = subprocess.run(
            [binary],
            input=source,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise FormatError(f"could not run {binary}: {exc}") from exc

    if result.returncode != 0:
        raise FormatError(f"{binary} failed: {result.stderr.strip()}")
    return result.stdout
