"""Roomtalk CLI — command line interface."""

import click
from roomtalk import __version__
from .shared import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="roomtalk")
@click.option("-v", "--verbose", is_flag=True, help="Log lookups and fallbacks to stderr.")
def cli(verbose):
    """Roomtalk — tokenize chat messages into renderable parts"""
    from roomtalk.config import load_settings

    setup_logging(verbose or load_settings().debug)


# Import all command modules (registers commands onto cli group)
from . import cmd_tokenize  # noqa: E402, F401
