"""Tokenizer errors and their user-facing descriptions."""

import asyncio

import httpx


class MessageTooLong(ValueError):
    """Trimmed message exceeds the length limit. Raised before any splitting."""

    def __init__(self, length: int, limit: int):
        super().__init__("Message too long")
        self.length = length
        self.limit = limit


class MotdTooLong(ValueError):
    """Raw message-of-the-day exceeds its own limit."""

    def __init__(self, length: int, limit: int):
        super().__init__("MOTD too long")
        self.length = length
        self.limit = limit


class InvalidMotd(ValueError):
    """MOTD text could not be tokenized."""

    def __init__(self, message: str = "Invalid MOTD"):
        super().__init__(message)


def describe_error(e: Exception) -> str:
    """Classify any exception into a short user-facing message.

    Only the tokenizer's own errors reach callers in normal operation;
    everything else is a bug or an environment problem and gets a generic
    sentence with the type name for the logs.
    """
    if isinstance(e, MessageTooLong):
        return f"Message too long ({e.length} characters, max {e.limit})."
    if isinstance(e, MotdTooLong):
        return f"MOTD too long ({e.length} characters, max {e.limit})."
    if isinstance(e, InvalidMotd):
        return "Invalid MOTD. Keep it short and try again."

    # Lookup services, when the caller chose to let them propagate
    if isinstance(e, httpx.HTTPStatusError):
        return f"Lookup service returned HTTP {e.response.status_code}."
    if isinstance(e, httpx.TimeoutException):
        return "Lookup timed out. Please try again."
    if isinstance(e, httpx.ConnectError):
        return "Cannot connect to lookup service."
    if isinstance(e, asyncio.TimeoutError):
        return "Lookup timed out. Please try again."

    type_name = type(e).__name__
    return f"Something went wrong ({type_name}). Check logs for details."
