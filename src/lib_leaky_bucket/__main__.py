"""Module entry point so ``python -m lib_leaky_bucket`` runs the CLI."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
