"""Tests for resolver adapters."""

import asyncio

import httpx
import pytest

from roomtalk.chat.resolvers import (
    HttpResolver,
    RegistryResolver,
    as_async,
    no_resolver,
    with_timeout,
)


class TestAsAsync:
    @pytest.mark.asyncio
    async def test_none_is_no_resolver(self):
        resolve = as_async(None)
        assert resolve is no_resolver
        assert await resolve("anything") is None

    @pytest.mark.asyncio
    async def test_sync_function(self):
        resolve = as_async(lambda key: {"key": key})
        assert await resolve("k") == {"key": "k"}

    @pytest.mark.asyncio
    async def test_coroutine_function_unchanged(self):
        async def resolve(key):
            return {"key": key}

        assert as_async(resolve) is resolve

    @pytest.mark.asyncio
    async def test_function_returning_awaitable(self):
        async def lookup(key):
            return {"key": key}

        resolve = as_async(lambda key: lookup(key))
        assert await resolve("k") == {"key": "k"}

    @pytest.mark.asyncio
    async def test_sync_error_raised_on_await(self):
        def broken(key):
            raise KeyError(key)

        resolve = as_async(broken)
        with pytest.raises(KeyError):
            await resolve("k")


class TestWithTimeout:
    @pytest.mark.asyncio
    async def test_fast_lookup_passes(self):
        resolve = with_timeout(lambda key: {"key": key}, 1.0)
        assert await resolve("k") == {"key": "k"}

    @pytest.mark.asyncio
    async def test_slow_lookup_times_out(self):
        async def slow(key):
            await asyncio.sleep(1)

        with pytest.raises(asyncio.TimeoutError):
            await with_timeout(slow, 0.01)("k")


class TestRegistryResolver:
    @pytest.mark.asyncio
    async def test_register_and_resolve(self):
        registry = RegistryResolver()
        registry.register("lobby", {"name": "Lobby"})
        assert "lobby" in registry
        assert len(registry) == 1
        assert await registry("lobby") == {"name": "Lobby"}

    @pytest.mark.asyncio
    async def test_unknown(self):
        assert await RegistryResolver()("nope") is None

    @pytest.mark.asyncio
    async def test_unregister(self):
        registry = RegistryResolver({"lobby": {"name": "Lobby"}})
        assert registry.unregister("lobby") is True
        assert registry.unregister("lobby") is False
        assert await registry("lobby") is None

    @pytest.mark.asyncio
    async def test_returns_copy(self):
        registry = RegistryResolver({"lobby": {"name": "Lobby"}})
        record = await registry("lobby")
        record["name"] = "changed"
        assert await registry("lobby") == {"name": "Lobby"}

    @pytest.mark.asyncio
    async def test_case_sensitive_keys(self):
        registry = RegistryResolver({"lobby": {}})
        assert await registry("Lobby") is None


# ── HTTP resolver ───────────────────────────────────────────

def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpResolver:
    def test_template_requires_key(self):
        with pytest.raises(ValueError):
            HttpResolver("https://files.example/api/rooms")

    def test_key_is_quoted(self):
        resolver = HttpResolver("https://files.example/api/rooms/{key}")
        assert resolver.url_for("a b/c") == "https://files.example/api/rooms/a%20b%2Fc"

    @pytest.mark.asyncio
    async def test_found(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"id": "lobby", "name": "Lobby"})

        async with _client(handler) as client:
            resolver = HttpResolver("https://files.example/api/rooms/{key}", client=client)
            assert await resolver("lobby") == {"id": "lobby", "name": "Lobby"}
        assert seen == ["https://files.example/api/rooms/lobby"]

    @pytest.mark.asyncio
    async def test_not_found(self):
        async with _client(lambda request: httpx.Response(404)) as client:
            resolver = HttpResolver("https://files.example/api/files/{key}", client=client)
            assert await resolver("nope") is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        async with _client(lambda request: httpx.Response(503)) as client:
            resolver = HttpResolver("https://files.example/api/files/{key}", client=client)
            with pytest.raises(httpx.HTTPStatusError):
                await resolver("abc")

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        async with _client(lambda request: httpx.Response(200, json=["a", "b"])) as client:
            resolver = HttpResolver("https://files.example/api/files/{key}", client=client)
            assert await resolver("abc") is None

    @pytest.mark.asyncio
    async def test_used_by_tokenizer(self):
        from roomtalk.chat import File, Text, to_message

        def handler(request):
            key = request.url.path.rsplit("/", 1)[-1]
            if key == "abc123":
                return httpx.Response(200, json={"key": key, "name": "a.png", "type": "image", "href": "/g/abc123"})
            if key == "broken":
                return httpx.Response(500)
            return httpx.Response(404)

        async with _client(handler) as client:
            resolver = HttpResolver("https://files.example/api/files/{key}", client=client)
            tokens = await to_message("@abc123 @broken @missing", resolve_file=resolver)

        assert isinstance(tokens[0], File)
        assert tokens[1:] == [Text("@broken"), Text("@missing")]
