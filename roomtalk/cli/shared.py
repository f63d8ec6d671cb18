"""Shared utilities for Roomtalk CLI commands."""

import logging

from rich.console import Console

console = Console()

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Log to stderr; the library itself never configures logging.

    The ``roomtalk`` logger level is set even when the root logger was
    already configured, where ``basicConfig`` does nothing.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=_log_format,
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger("roomtalk").setLevel(level)


def parse_pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    """Parse repeated ``ID=NAME`` option values.

    A bare ``ID`` uses the id as its own name.
    """
    pairs = {}
    for value in values:
        key, sep, name = value.partition("=")
        key = key.strip()
        if not key:
            raise ValueError(f"{option}: empty identifier in {value!r}")
        pairs[key] = name.strip() if sep else key
    return pairs
