"""Module entry point for ``python -m hub_console``.

Delegates to :func:`hub_console.cli.main` so the module form and the
``hub-console`` console script share argument parsing and exit codes.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
