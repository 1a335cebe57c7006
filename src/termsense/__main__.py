"""termsense CLI bootstrap."""

from __future__ import annotations

from termsense.cli import app

if __name__ == "__main__":
    app()
