"""Segment classification — turns split segments into tokens.

Segments are classified strictly in order against a per-message
``ResolutionState``. The state is what enforces the room/file caps and
decides whether a line break renders as a break or collapses to a space,
so it must observe every earlier segment before the next one runs.

Lookup failures never abort a message: the segment falls back to the
literal text the user typed.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .normalize import DEFAULT_BASE_URL, normalize_url
from .resolvers import Resolver, as_async
from .tokens import Break, File, Room, Text, Token, Url

logger = logging.getLogger("roomtalk.chat.classifier")

MAX_ROOMS = 10
MAX_FILES = 5

_BREAK_RE = re.compile(r"[\r\n]+")


def _fields(record: Any) -> dict[str, Any]:
    if not isinstance(record, Mapping):
        raise TypeError(f"Resolver returned {type(record).__name__}, expected a mapping")
    return dict(record)


@dataclass
class ResolutionState:
    """Mutable state for one tokenizer call. Never shared between messages."""

    break_count: int = 0
    room_count: int = 0
    file_count: int = 0
    previous_was_text: bool = True


class SegmentClassifier:
    """Classifies one segment at a time.

    Holds the resolvers and limits only; all per-message state lives in
    the ``ResolutionState`` passed to ``classify``, so one classifier can
    serve concurrent messages.
    """

    def __init__(
        self,
        resolve_room: Optional[Resolver] = None,
        resolve_file: Optional[Resolver] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        max_rooms: int = MAX_ROOMS,
        max_files: int = MAX_FILES,
    ):
        self.resolve_room = as_async(resolve_room)
        self.resolve_file = as_async(resolve_file)
        self.base_url = base_url
        self.max_rooms = max_rooms
        self.max_files = max_files

    async def classify(self, segment: str, index: int, state: ResolutionState) -> Optional[Token]:
        """Classify a segment.

        Args:
            segment: Segment text
            index: Position in the split; even = plain text, odd = special
            state: Per-message state, updated in place

        Returns:
            A token, or None for whitespace-only plain text
        """
        if not index % 2:
            if not segment.strip():
                return None
            state.previous_was_text = True
            return Text(segment)

        if segment.startswith("#"):
            return await self._room(segment, state)
        if segment.startswith("@"):
            return await self._file(segment, state)
        if _BREAK_RE.fullmatch(segment):
            return self._line_break(state)
        return self._url(segment, state)

    async def _room(self, segment: str, state: ResolutionState) -> Token:
        room_id = segment[1:]
        if state.room_count < self.max_rooms:
            try:
                record = await self.resolve_room(room_id)
                if record is not None:
                    token = Room(id=room_id, fields=_fields(record))
                    state.room_count += 1
                    state.previous_was_text = True
                    return token
                logger.debug(f"Unknown room #{room_id}")
            except Exception as e:
                logger.warning(f"Room lookup failed for #{room_id}: {e}", exc_info=True)
        else:
            logger.debug(f"Room cap ({self.max_rooms}) reached, #{room_id} left as text")

        state.previous_was_text = True
        return Text(segment)

    async def _file(self, segment: str, state: ResolutionState) -> Token:
        key = segment[1:]
        if state.file_count < self.max_files:
            try:
                record = await self.resolve_file(key)
                if record is not None:
                    token = File(fields=_fields(record))
                    state.file_count += 1
                    # Files render as blocks, so whatever follows starts a new line
                    state.previous_was_text = False
                    return token
                logger.debug(f"Unknown file @{key}")
            except Exception as e:
                logger.warning(f"File lookup failed for @{key}: {e}", exc_info=True)
        else:
            logger.debug(f"File cap ({self.max_files}) reached, @{key} left as text")

        state.previous_was_text = True
        return Text(segment)

    def _line_break(self, state: ResolutionState) -> Token:
        # A break right after a block, or beyond the second real break, is a space
        if not state.previous_was_text or state.break_count > 1:
            state.previous_was_text = True
            return Text(" ")
        state.break_count += 1
        state.previous_was_text = False
        return Break()

    def _url(self, segment: str, state: ResolutionState) -> Token:
        state.previous_was_text = True
        try:
            return Url(normalize_url(segment, self.base_url))
        except ValueError as e:
            logger.warning(f"Could not normalize URL {segment!r}: {e}")
            return Text(segment)
