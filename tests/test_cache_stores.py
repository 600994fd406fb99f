"""
Tests for the cache store backends and driver selection.
"""

import hashlib
import json
import threading
from unittest.mock import MagicMock

import pytest
import redis

from country_flags.config import Settings
from country_flags.protocols import CacheStore
from country_flags.repositories import (
    FileCacheStore,
    MemoryCacheStore,
    RedisCacheStore,
    create_cache_store,
)


@pytest.fixture(params=["memory", "file"])
def store(request, memory_store, file_store) -> CacheStore:
    """Each local backend in turn."""
    return memory_store if request.param == "memory" else file_store


def test_satisfies_protocol(store):
    """Local backends are structural CacheStores."""
    assert isinstance(store, CacheStore)


def test_get_missing_key_returns_none(store):
    """Absent keys are None, not an error."""
    assert store.get("nonexistent") is None
    assert store.exists("nonexistent") is False


def test_put_and_get(store):
    """Stored values round-trip through the backend."""
    store.put("countries", {"us": "United States"}, 10)
    assert store.get("countries") == {"us": "United States"}
    assert store.exists("countries") is True


def test_put_overwrites(store):
    """A second put replaces the first entry."""
    store.put("key", "old", 10)
    store.put("key", "new", 10)
    assert store.get("key") == "new"


def test_entry_expires(store, clock):
    """Entries vanish once their minutes have elapsed."""
    store.put("key", "value", 5)
    clock.advance(4)
    assert store.get("key") == "value"
    clock.advance(2)
    assert store.get("key") is None
    assert store.exists("key") is False


def test_forget(store):
    """Forget removes one key and tolerates absent keys."""
    store.put("a", 1, 10)
    store.put("b", 2, 10)
    store.forget("a")
    store.forget("missing")
    assert store.get("a") is None
    assert store.get("b") == 2


def test_clear(store):
    """Clear removes everything and reports the count."""
    store.put("a", 1, 10)
    store.put("b", 2, 10)
    assert store.clear() == 2
    assert store.get("a") is None
    assert store.get("b") is None


def test_health_check(store):
    """Local backends are healthy in a writable temp dir."""
    assert store.health_check() is True


def test_memory_store_returns_copies(memory_store):
    """Mutating a returned value does not touch the cached entry."""
    memory_store.put("codes", {"us": "United States"}, 10)
    memory_store.get("codes")["zz"] = "Nowhere"
    assert memory_store.get("codes") == {"us": "United States"}


def _run_concurrently(*targets) -> list[BaseException]:
    errors: list[BaseException] = []

    def guard(target):
        try:
            target()
        except BaseException as e:
            errors.append(e)

    threads = [threading.Thread(target=guard, args=(t,)) for t in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return errors


def test_memory_store_concurrent_get_while_rewriting():
    """Readers never see an error while another thread forgets and re-puts the key."""
    store = MemoryCacheStore()
    store.put("key", {"us": "United States"}, 10)

    def writer():
        for _ in range(2000):
            store.forget("key")
            store.put("key", {"us": "United States"}, 10)

    def reader():
        for _ in range(2000):
            value = store.get("key")
            assert value is None or value == {"us": "United States"}
            store.exists("key")

    assert _run_concurrently(writer, reader, reader, reader, reader) == []


def test_memory_store_concurrent_eviction():
    """Threads churning more keys than max_size never corrupt the store."""
    store = MemoryCacheStore(max_size=8)

    def churn():
        for i in range(500):
            key = f"key-{i % 50}"
            store.put(key, i, 10)
            store.get(key)
            store.get_stats()

    assert _run_concurrently(*[churn] * 8) == []
    assert store.get_stats()["total_entries"] <= 8


def test_file_store_layout(file_store, clock):
    """Entries are md5-named .fpc JSON files with an expiry timestamp."""
    file_store.put("flagcdn:country_codes", {"ua": "Ukraine"}, 1440)

    files = list(file_store.cache_dir.glob("*.fpc"))
    assert len(files) == 1
    assert files[0].name == hashlib.md5(b"flagcdn:country_codes").hexdigest() + ".fpc"

    data = json.loads(files[0].read_text())
    assert data["value"] == {"ua": "Ukraine"}
    assert data["expires"] == clock.now + 1440 * 60
    assert not list(file_store.cache_dir.glob("*.tmp"))


def test_file_store_deletes_expired_file(file_store, clock):
    """Reading an expired entry removes its file."""
    file_store.put("key", "value", 1)
    clock.advance(2)
    assert file_store.get("key") is None
    assert not list(file_store.cache_dir.glob("*.fpc"))


def test_file_store_ignores_corrupt_file(file_store):
    """Unreadable entry files are treated as absent."""
    file_store.put("key", "value", 10)
    path = next(file_store.cache_dir.glob("*.fpc"))
    path.write_text("{not json")
    assert file_store.get("key") is None
    assert file_store.exists("key") is False


@pytest.mark.parametrize("expires", ["x", None, True, [1]])
def test_file_store_ignores_non_numeric_expiry(file_store, expires):
    """An entry file whose expiry is not a number is treated as absent."""
    file_store.put("key", "value", 10)
    path = next(file_store.cache_dir.glob("*.fpc"))
    path.write_text(json.dumps({"expires": expires, "value": 1}))
    assert file_store.get("key") is None
    assert file_store.exists("key") is False


def test_file_store_clear_without_directory(tmp_path):
    """Clearing a store that never wrote anything is a no-op."""
    assert FileCacheStore(cache_dir=tmp_path / "missing").clear() == 0


# ======================================================================
# RedisCacheStore
# ======================================================================


@pytest.fixture
def redis_client() -> MagicMock:
    return MagicMock(spec=redis.Redis)


@pytest.fixture
def redis_store(redis_client, file_store) -> RedisCacheStore:
    return RedisCacheStore(redis_client=redis_client, key_prefix="cache:", fallback=file_store)


def test_redis_put_uses_setex_with_prefix(redis_store, redis_client):
    """Values are JSON-encoded and written with a TTL in seconds."""
    redis_store.put("flagcdn:country_codes", {"us": "United States"}, 1440)

    redis_client.setex.assert_called_once_with(
        "cache:flagcdn:country_codes",
        86400,
        json.dumps({"us": "United States"}),
    )


def test_redis_get_decodes_json(redis_store, redis_client):
    """Stored JSON is decoded on read."""
    redis_client.get.return_value = json.dumps({"ua": "Ukraine"})

    assert redis_store.get("flagcdn:country_codes") == {"ua": "Ukraine"}
    redis_client.get.assert_called_once_with("cache:flagcdn:country_codes")


def test_redis_get_missing(redis_store, redis_client):
    """A missing key reads as None."""
    redis_client.get.return_value = None
    assert redis_store.get("missing") is None


def test_redis_get_undecodable_value(redis_store, redis_client):
    """A value that is not JSON reads as None."""
    redis_client.get.return_value = "not-json"
    assert redis_store.get("key") is None


def test_redis_exists_and_forget(redis_store, redis_client):
    """exists and forget address the prefixed key."""
    redis_client.exists.return_value = 1
    assert redis_store.exists("key") is True
    redis_client.exists.assert_called_once_with("cache:key")

    redis_store.forget("key")
    redis_client.delete.assert_called_once_with("cache:key")


def test_redis_clear_only_prefixed_keys(redis_store, redis_client):
    """Clear scans the prefix and deletes what it finds."""
    redis_client.scan_iter.return_value = iter(["cache:a", "cache:b"])
    redis_client.delete.return_value = 2

    assert redis_store.clear() == 2
    redis_client.scan_iter.assert_called_once_with(match="cache:*")
    redis_client.delete.assert_called_once_with("cache:a", "cache:b")


def test_redis_clear_nothing(redis_store, redis_client):
    """Clear with no matching keys deletes nothing."""
    redis_client.scan_iter.return_value = iter([])
    assert redis_store.clear() == 0
    redis_client.delete.assert_not_called()


def test_redis_errors_fall_back_to_file_store(redis_store, redis_client, file_store):
    """When Redis is down, reads and writes go to the file store."""
    redis_client.setex.side_effect = redis.ConnectionError("down")
    redis_client.get.side_effect = redis.ConnectionError("down")

    redis_store.put("key", {"fr": "France"}, 10)

    assert file_store.get("key") == {"fr": "France"}
    assert redis_store.get("key") == {"fr": "France"}


def test_redis_health_check(redis_store, redis_client):
    """Health reflects PING."""
    redis_client.ping.return_value = True
    assert redis_store.health_check() is True

    redis_client.ping.side_effect = redis.ConnectionError("down")
    assert redis_store.health_check() is False


# ======================================================================
# create_cache_store
# ======================================================================


@pytest.fixture
def config(tmp_path) -> Settings:
    return Settings(cache_driver="file", cache_dir=str(tmp_path / "cache"))


def test_factory_memory(config):
    """The memory driver yields a MemoryCacheStore."""
    assert isinstance(create_cache_store("memory", config=config), MemoryCacheStore)


def test_factory_file(config, tmp_path):
    """The file driver uses the configured directory."""
    store = create_cache_store(config=config)
    assert isinstance(store, FileCacheStore)
    assert store.cache_dir == tmp_path / "cache"


def test_factory_unknown_driver_falls_back_to_file(config):
    """Unknown drivers resolve to the file store."""
    assert isinstance(create_cache_store("memcached", config=config), FileCacheStore)


def test_factory_redis(config):
    """A reachable Redis yields a RedisCacheStore."""
    client = MagicMock(spec=redis.Redis)
    client.ping.return_value = True

    store = create_cache_store("redis", config=config, redis_client=client)

    assert isinstance(store, RedisCacheStore)
    assert store.client is client


def test_factory_unreachable_redis_falls_back_to_file(config):
    """An unreachable Redis yields the file store."""
    client = MagicMock(spec=redis.Redis)
    client.ping.side_effect = redis.ConnectionError("refused")

    assert isinstance(create_cache_store("redis", config=config, redis_client=client), FileCacheStore)


def test_settings_accept_unknown_driver(tmp_path):
    """An unknown cache driver does not fail settings construction."""
    config = Settings(cache_driver="memcached", cache_dir=str(tmp_path / "cache"))
    assert config.cache_driver == "memcached"


def test_factory_unknown_configured_driver_falls_back_to_file(tmp_path):
    """An unknown CACHE_DRIVER from settings resolves to the file store."""
    config = Settings(cache_driver="memcached", cache_dir=str(tmp_path / "cache"))
    store = create_cache_store(config=config)
    assert isinstance(store, FileCacheStore)
    assert store.cache_dir == tmp_path / "cache"


def test_settings_reject_non_positive_ttl():
    """Settings validate the TTL."""
    with pytest.raises(ValueError, match="COUNTRY_CODES_TTL_MINUTES"):
        Settings(country_codes_ttl_minutes=0)
