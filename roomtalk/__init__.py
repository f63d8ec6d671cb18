"""Roomtalk — chat message tokenizer for room-based file sharing."""

__version__ = "0.3.0"
