#!/usr/bin/env python3
"""
mocked: mock synthesis from interface declarations.

This module is a thin shim that exposes the CLI app from mocked.cli.
The actual implementation lives in mocked/cli/cli.py.

Usage:
    mocked generate [OPTIONS] DECLARATIONS
    mocked inspect [--json] DECLARATIONS
    mocked tiers
"""

from .cli.cli import app, bootstrap

# Call bootstrap at module import time so the console entrypoint
# (mocked.main:app) sees the user .env before any command runs
bootstrap()

if __name__ == "__main__":
    app()
