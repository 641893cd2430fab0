"""Allow running mustgen as a module.

This allows the CLI to be invoked as:
    python -m mustgen
"""

from .cli import main

if __name__ == "__main__":
    main()
