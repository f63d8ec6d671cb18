"""Lossless splitting of chat text into plain and special segments.

At every scan position the matchers below are tried in order and the
first one that matches wins:

  1. a run of line breaks
  2. ``#room`` sigil
  3. ``@file`` sigil
  4. a URL (with or without scheme)

The result alternates plain text (even indices, possibly empty) and
special segments (odd indices); joining it gives back the input.

All patterns use possessive/atomic constructs, and the URL matcher will
not start in the middle of a word, so adversarial input cannot trigger
runaway backtracking.
"""

import re
from dataclasses import dataclass
from typing import Optional

import tldextract

# Sigil identifiers: ASCII letters of either case, digits, '_' and '-'.
# The identifier is handed to the resolver exactly as typed.
_SIGIL_FLAGS = re.IGNORECASE | re.ASCII

URL_RE = re.compile(
    r"""
    (?<![\w.%+-])                           # not mid-word
    (?P<scheme>(?:https?|ftp|irc)://)?
    (?:[\w.%+-]++(?::[\w.%+-]*+)?@)?        # user[:password]@
    (?:
        (?P<domain>(?:[\w-]++\.)+[^\W\d_]{2,63})
      | (?:[0-9]{1,3}\.){3}[0-9]{1,3}       # IPv4
      | (?P<ipv6>\[[0-9a-f]*+:[0-9a-f:.]*+\])
      | localhost
    )
    (?![\w-])
    (?::[0-9]{2,5})?
    (?:[/?#][^\s")]*(?<![.?!,;:]))?         # path, minus trailing punctuation
    """,
    re.IGNORECASE | re.VERBOSE,
)

# Offline public suffix snapshot; never fetches the live list
_SUFFIXES = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


def is_public_domain(host: str) -> bool:
    """True when ``host`` ends in a known public suffix (``com``, ``co.uk``)."""
    return bool(_SUFFIXES(host.lower()).suffix)


@dataclass(frozen=True)
class Matcher:
    name: str
    pattern: re.Pattern

    def match(self, text: str, pos: int) -> Optional[int]:
        """Return the end of a match starting exactly at ``pos``, or None."""
        m = self.pattern.match(text, pos)
        if m is None or m.end() == pos or not self.accept(m):
            return None
        return m.end()

    def accept(self, m: re.Match) -> bool:
        return True


class UrlMatcher(Matcher):
    """URL matcher that is strict about scheme-less links.

    Without a scheme, a host must end in a real public suffix, so
    ``cat.png`` and ``notes.txt`` stay text, and IPv6 literals are not
    recognised at all. Links with an explicit scheme accept any host.
    """

    def accept(self, m: re.Match) -> bool:
        if m.group("scheme"):
            return True
        if m.group("ipv6"):
            return False
        domain = m.group("domain")
        return domain is None or is_public_domain(domain)


MATCHERS: tuple[Matcher, ...] = (
    Matcher("break", re.compile(r"[\r\n]++")),
    Matcher("room", re.compile(r"#[a-z0-9_-]++", _SIGIL_FLAGS)),
    Matcher("file", re.compile(r"@[a-z0-9_-]++", _SIGIL_FLAGS)),
    UrlMatcher("url", URL_RE),
)


def match_special(text: str, pos: int) -> Optional[tuple[str, int]]:
    """Try each matcher at ``pos`` in priority order.

    Returns:
        Tuple of (matcher_name, end) for the first match, or None
    """
    for matcher in MATCHERS:
        end = matcher.match(text, pos)
        if end is not None:
            return matcher.name, end
    return None


def split_segments(text: str) -> list[str]:
    """Split text into alternating plain/special segments.

    Args:
        text: Trimmed message text

    Returns:
        Odd-length list; ``"".join(result) == text``
    """
    segments = []
    start = pos = 0
    while pos < len(text):
        found = match_special(text, pos)
        if found is None:
            pos += 1
            continue
        _, end = found
        segments.append(text[start:pos])
        segments.append(text[pos:end])
        start = pos = end
    segments.append(text[start:])
    return segments
