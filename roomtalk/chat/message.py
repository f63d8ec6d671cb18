"""Chat message tokenization — the single entry point for raw chat text.

Pipeline order:
1. Trim, enforce the length limit (nothing else runs if it is exceeded)
2. Split into plain/special segments
3. Classify every segment in order against fresh per-message state

Segments are never classified concurrently: cap counting and break
collapsing depend on every earlier outcome, and keeping the order makes
output independent of lookup latency.
"""

import logging
from typing import Iterable, Optional, TYPE_CHECKING

from .classifier import MAX_FILES, MAX_ROOMS, ResolutionState, SegmentClassifier
from .errors import InvalidMotd, MessageTooLong, MotdTooLong
from .normalize import DEFAULT_BASE_URL
from .resolvers import HttpResolver, Resolver, no_resolver, with_timeout
from .splitter import split_segments
from .tokens import Break, File, Room, Text, Token, Url

if TYPE_CHECKING:
    from ..config import RoomtalkSettings

logger = logging.getLogger("roomtalk.chat.message")

MAX_MESSAGE_LENGTH = 300
MAX_MOTD_LENGTH = 500


async def _run(message: str, classifier: SegmentClassifier, max_length: int) -> list[Token]:
    message = message.strip()
    if len(message) > max_length:
        raise MessageTooLong(len(message), max_length)

    state = ResolutionState()
    tokens = []
    for index, segment in enumerate(split_segments(message)):
        token = await classifier.classify(segment, index, state)
        if token is not None:
            tokens.append(token)
    return tokens


async def to_message(
    message: str,
    resolve_room: Optional[Resolver] = None,
    resolve_file: Optional[Resolver] = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
    max_length: int = MAX_MESSAGE_LENGTH,
    max_rooms: int = MAX_ROOMS,
    max_files: int = MAX_FILES,
) -> list[Token]:
    """Tokenize a raw chat message.

    Args:
        message: Text as typed by the user
        resolve_room: Room lookup (sync or async); None resolves nothing
        resolve_file: File lookup (sync or async); None resolves nothing
        base_url: Origin URLs are resolved against
        max_length: Limit on the trimmed message length
        max_rooms: Resolved room references honored per message
        max_files: Resolved file references honored per message

    Returns:
        Tokens in input order

    Raises:
        MessageTooLong: Trimmed message is longer than ``max_length``
    """
    classifier = SegmentClassifier(
        resolve_room,
        resolve_file,
        base_url=base_url,
        max_rooms=max_rooms,
        max_files=max_files,
    )
    return await _run(message, classifier, max_length)


class MessageTokenizer:
    """Tokenizer with resolvers and limits bound once.

    Server code builds one of these at startup and passes only text
    afterwards. Safe to share across concurrent messages: each call gets
    its own ``ResolutionState``.
    """

    def __init__(
        self,
        resolve_room: Optional[Resolver] = None,
        resolve_file: Optional[Resolver] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        max_length: int = MAX_MESSAGE_LENGTH,
        max_rooms: int = MAX_ROOMS,
        max_files: int = MAX_FILES,
        max_motd_length: int = MAX_MOTD_LENGTH,
    ):
        self.classifier = SegmentClassifier(
            resolve_room,
            resolve_file,
            base_url=base_url,
            max_rooms=max_rooms,
            max_files=max_files,
        )
        self.max_length = max_length
        self.max_motd_length = max_motd_length

    @classmethod
    def from_settings(
        cls,
        settings: "RoomtalkSettings",
        resolve_room: Optional[Resolver] = None,
        resolve_file: Optional[Resolver] = None,
    ) -> "MessageTokenizer":
        """Build a tokenizer from settings.

        Explicit resolvers win; otherwise configured lookup URLs become
        HttpResolvers. ``resolver_timeout`` wraps whichever is used.
        """
        timeout = settings.resolver_timeout or 5.0
        if resolve_room is None and settings.room_lookup_url:
            resolve_room = HttpResolver(settings.room_lookup_url, timeout=timeout)
        if resolve_file is None and settings.file_lookup_url:
            resolve_file = HttpResolver(settings.file_lookup_url, timeout=timeout)

        if settings.resolver_timeout:
            resolve_room = with_timeout(resolve_room or no_resolver, settings.resolver_timeout)
            resolve_file = with_timeout(resolve_file or no_resolver, settings.resolver_timeout)

        return cls(
            resolve_room,
            resolve_file,
            base_url=settings.base_url,
            max_length=settings.max_message_length,
            max_rooms=settings.max_rooms,
            max_files=settings.max_files,
            max_motd_length=settings.max_motd_length,
        )

    async def tokenize(self, message: str) -> list[Token]:
        """Tokenize one message. Raises MessageTooLong."""
        return await _run(message, self.classifier, self.max_length)

    async def tokenize_motd(self, raw: Optional[str]) -> list[Token]:
        """Tokenize a room's message of the day.

        Empty or None means the MOTD is being removed and yields no tokens.

        Raises:
            MotdTooLong: Raw text exceeds ``max_motd_length``
            InvalidMotd: The text could not be tokenized
        """
        if not raw:
            return []
        if len(raw) > self.max_motd_length:
            raise MotdTooLong(len(raw), self.max_motd_length)
        try:
            return await self.tokenize(raw)
        except MessageTooLong as e:
            logger.info(f"Rejected MOTD: {e} ({e.length} > {e.limit})")
            raise InvalidMotd() from e


def to_plain_text(tokens: Iterable[Token]) -> str:
    """Flatten tokens back into readable text for logs and notifications."""
    parts = []
    for token in tokens:
        if isinstance(token, (Text, Url)):
            parts.append(token.value)
        elif isinstance(token, Break):
            parts.append("\n")
        elif isinstance(token, Room):
            parts.append(f"#{token.id}")
        elif isinstance(token, File):
            name = token.fields.get("name")
            parts.append(str(name) if name else f"@{token.fields.get('key', '')}")
    return "".join(parts)


def extract_links(tokens: Iterable[Token]) -> list[str]:
    """Return URL token values in order of first appearance."""
    seen = set()
    links = []
    for token in tokens:
        if isinstance(token, Url) and token.value not in seen:
            seen.add(token.value)
            links.append(token.value)
    return links
