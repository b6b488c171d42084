"""Allow ``python -m confsync``."""

from .cli import main

main()
