"""Command line interface for podembed."""

from podembed.cli.main import app

__all__ = ["app"]
