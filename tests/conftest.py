"""Pytest configuration and shared fixtures."""

import pytest

from roomtalk.chat import RegistryResolver


@pytest.fixture
def rooms():
    """Registry with a few known rooms."""
    return RegistryResolver({
        "lobby": {"id": "lobby", "name": "Lobby"},
        "someroom": {"id": "someroom", "name": "Room someroom"},
    })


@pytest.fixture
def files():
    """Registry with a few known files."""
    return RegistryResolver({
        "abc123": {"key": "abc123", "name": "file.png", "type": "image", "href": "/g/abc123"},
        "def456": {"key": "def456", "name": "notes.txt", "type": "file", "href": "/g/def456"},
    })


@pytest.fixture
def any_room():
    """Room resolver that knows every identifier."""
    async def resolve(room_id):
        return {"id": room_id, "name": f"Room {room_id}"}
    return resolve


@pytest.fixture
def any_file():
    """File resolver (sync) that knows every key."""
    def resolve(key):
        return {"key": key, "name": f"{key}.bin", "type": "file", "href": f"/g/{key}"}
    return resolve
