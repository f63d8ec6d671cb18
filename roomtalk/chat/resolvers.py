"""Room and file resolvers.

A resolver turns the identifier after a sigil into a metadata record, or
None when nothing by that name exists. Callers may hand the tokenizer
plain functions, coroutine functions, or anything returning an awaitable;
``as_async`` gives all of them the same awaitable calling convention.

Provided resolvers:
- RegistryResolver: in-memory mapping (rooms/files known to this process)
- HttpResolver: remote lookup over HTTP via httpx
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union
from urllib.parse import quote

import httpx

logger = logging.getLogger("roomtalk.chat.resolvers")

Record = Mapping[str, Any]
Resolver = Callable[[str], Union[Optional[Record], Awaitable[Optional[Record]]]]
AsyncResolver = Callable[[str], Awaitable[Optional[Record]]]


async def no_resolver(key: str) -> None:
    """Resolver that knows nothing."""
    return None


def as_async(resolver: Optional[Resolver]) -> AsyncResolver:
    """Wrap a sync-or-async resolver into a coroutine function.

    None becomes ``no_resolver``. Coroutine functions are returned as-is.
    """
    if resolver is None:
        return no_resolver
    if inspect.iscoroutinefunction(resolver):
        return resolver

    async def _resolve(key: str) -> Optional[Record]:
        result = resolver(key)
        if inspect.isawaitable(result):
            result = await result
        return result

    return _resolve


def with_timeout(resolver: Resolver, seconds: float) -> AsyncResolver:
    """Bound every lookup to ``seconds``.

    A timeout raises ``asyncio.TimeoutError`` which the classifier treats
    like any other failed lookup.
    """
    resolve = as_async(resolver)

    async def _resolve(key: str) -> Optional[Record]:
        return await asyncio.wait_for(resolve(key), timeout=seconds)

    return _resolve


class RegistryResolver:
    """Resolver backed by an in-memory dict of identifier -> record."""

    def __init__(self, records: Optional[Mapping[str, Record]] = None):
        self._records: dict[str, dict[str, Any]] = {}
        for key, record in (records or {}).items():
            self.register(key, record)

    def register(self, key: str, record: Record) -> None:
        self._records[key] = dict(record)

    def unregister(self, key: str) -> bool:
        return self._records.pop(key, None) is not None

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    async def __call__(self, key: str) -> Optional[dict[str, Any]]:
        record = self._records.get(key)
        return dict(record) if record is not None else None


class HttpResolver:
    """Resolver that looks records up on a remote service.

    ``url_template`` must contain ``{key}``, e.g.
    ``https://files.example/api/rooms/{key}``. A 404 means "no such
    record"; any other error status raises ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        url_template: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ):
        if "{key}" not in url_template:
            raise ValueError(f"URL template must contain {{key}}: {url_template!r}")
        self.url_template = url_template
        self.timeout = timeout
        self._client = client

    def url_for(self, key: str) -> str:
        return self.url_template.format(key=quote(key, safe=""))

    async def __call__(self, key: str) -> Optional[dict[str, Any]]:
        url = self.url_for(key)
        if self._client is not None:
            response = await self._client.get(url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url)

        if response.status_code == 404:
            return None
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            logger.warning(f"Lookup {url} returned {type(data).__name__}, expected an object")
            return None
        return data
