"""Chat message tokens — the typed output of the tokenizer.

Each token kind maps to a compact wire form consumed by the renderer:

  {"t": "t", "v": "..."}     text
  {"t": "b"}                 line break
  {"t": "u", "v": "https://..."}  normalized URL
  {"t": "r", "id": ..., ...}  resolved room (resolver fields merged)
  {"t": "f", ...}            resolved file (resolver fields merged)
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Union


@dataclass(frozen=True)
class Text:
    value: str
    tag: ClassVar[str] = "t"

    def to_dict(self) -> dict[str, Any]:
        return {"t": self.tag, "v": self.value}


@dataclass(frozen=True)
class Break:
    tag: ClassVar[str] = "b"

    def to_dict(self) -> dict[str, Any]:
        return {"t": self.tag}


@dataclass(frozen=True)
class Url:
    value: str
    tag: ClassVar[str] = "u"

    def to_dict(self) -> dict[str, Any]:
        return {"t": self.tag, "v": self.value}


@dataclass(frozen=True)
class Room:
    """A room reference the room resolver knew about.

    ``fields`` is the resolver's record, kept verbatim. A resolver-supplied
    ``id`` takes precedence over the identifier typed after the sigil.
    Records may hold unhashable values, so Room tokens are unhashable.
    """

    id: str
    fields: dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "r"

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.fields, "t": self.tag}


@dataclass(frozen=True)
class File:
    """A file reference; ``fields`` usually holds key, name, type and href.

    Unhashable for the same reason as Room.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    tag: ClassVar[str] = "f"

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        return {**self.fields, "t": self.tag}


Token = Union[Text, Break, Url, Room, File]


def to_wire(tokens: Iterable[Token]) -> list[dict[str, Any]]:
    """Convert tokens to their wire dicts, preserving order."""
    return [token.to_dict() for token in tokens]
