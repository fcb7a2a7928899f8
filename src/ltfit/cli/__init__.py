"""Command-line interface for LTFit."""

from ltfit.cli.app import app

__all__ = ["app"]
