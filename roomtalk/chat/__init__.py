"""Chat sub-core — turns raw chat text into renderable tokens.

- Tokens: Text, Break, Url, Room, File and their wire form
- Splitter: lossless, priority-ordered segmentation
- Normalizer: absolute, credential-free URLs
- Classifier: per-segment token decisions with room/file lookups
- Message: the orchestrating entry points
"""

from .classifier import ResolutionState, SegmentClassifier
from .errors import InvalidMotd, MessageTooLong, MotdTooLong, describe_error
from .message import MessageTokenizer, extract_links, to_message, to_plain_text
from .normalize import normalize_url
from .resolvers import HttpResolver, RegistryResolver, as_async, no_resolver, with_timeout
from .splitter import split_segments
from .tokens import Break, File, Room, Text, Token, Url, to_wire

__all__ = [
    # Tokens
    "Break",
    "File",
    "Room",
    "Text",
    "Token",
    "Url",
    "to_wire",
    # Pipeline
    "split_segments",
    "normalize_url",
    "ResolutionState",
    "SegmentClassifier",
    "to_message",
    "MessageTokenizer",
    "to_plain_text",
    "extract_links",
    # Resolvers
    "as_async",
    "no_resolver",
    "with_timeout",
    "RegistryResolver",
    "HttpResolver",
    # Errors
    "MessageTooLong",
    "MotdTooLong",
    "InvalidMotd",
    "describe_error",
]
