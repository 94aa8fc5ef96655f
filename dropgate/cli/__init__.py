"""
Dropgate command-line interface.

This package provides the CLI for configuring Dropgate and replaying
transfer events from the command line.
"""

from dropgate.cli.main import cli

__all__ = ["cli"]
