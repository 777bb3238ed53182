"""Entry point for ``python -m flashvault``."""

from .cli import main

raise SystemExit(main())
