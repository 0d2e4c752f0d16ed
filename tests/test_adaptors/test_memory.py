"""Tests for InMemoryAdaptor."""

import pytest

from switch_kit import InMemoryAdaptor, NotInitializedError, StorageAdaptor, Switch


@pytest.fixture
async def adaptor():
    adaptor = InMemoryAdaptor()
    await adaptor.init()
    return adaptor


def test_satisfies_protocol():
    assert isinstance(InMemoryAdaptor(), StorageAdaptor)


async def test_get_nonexistent(adaptor):
    result = await adaptor.get("key")
    assert result.ok
    assert result.value is None


async def test_set_and_get(adaptor):
    assert (await adaptor.set("k", "on", {"team": "web"})).ok
    assert (await adaptor.get("k")).value == Switch(value="on", metadata={"team": "web"})


async def test_metadata_defaults_to_empty(adaptor):
    await adaptor.set("k", "on")
    assert (await adaptor.get("k")).value.metadata == {}


async def test_overwrite(adaptor):
    await adaptor.set("k", "on")
    await adaptor.set("k", "off")
    assert (await adaptor.get("k")).value.value == "off"


async def test_seeded():
    adaptor = InMemoryAdaptor({"seed": Switch(value="on")})
    await adaptor.init()
    assert (await adaptor.get("seed")).value == Switch(value="on")


async def test_requires_init():
    adaptor = InMemoryAdaptor()
    with pytest.raises(NotInitializedError):
        await adaptor.get("k")
    with pytest.raises(NotInitializedError):
        await adaptor.set("k", "v")
