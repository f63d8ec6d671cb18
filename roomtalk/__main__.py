"""Roomtalk — python -m roomtalk entry point."""

from .cli import cli

cli()
