"""Tests for the change feed behind live subscriptions."""

import asyncio

from fakeredis.aioredis import FakeRedis
from pytest_mock import MockerFixture
from redis.exceptions import ConnectionError as RedisConnectionError

from suds_registry.store.change_feed import ChangeFeed


async def test_local_listener_receives_changes_for_its_collection():
    feed = ChangeFeed()

    async with feed.listen("sudsTypes") as changes:
        await feed.publish("contracts")
        await feed.publish("sudsTypes")

        assert await asyncio.wait_for(anext(changes), timeout=1) == "sudsTypes"


async def test_local_listener_is_removed_on_exit():
    feed = ChangeFeed()

    async with feed.listen("sudsTypes"):
        async with feed.listen("sudsTypes"):
            assert feed.listener_count("sudsTypes") == 2
        assert feed.listener_count("sudsTypes") == 1

    assert feed.listener_count("sudsTypes") == 0


async def test_publish_without_listeners_is_harmless():
    feed = ChangeFeed()

    await feed.publish("sudsTypes")

    assert feed.listener_count("sudsTypes") == 0


async def test_redis_feed_delivers_over_pubsub():
    feed = ChangeFeed(FakeRedis(decode_responses=True), channel_prefix="test_changes")
    assert feed.distributed is True

    async with feed.listen("maintenanceActivities") as changes:
        await feed.publish("maintenanceActivities")

        assert await asyncio.wait_for(anext(changes), timeout=1) == "maintenanceActivities"


async def test_redis_publish_failure_still_reaches_local_listeners(mocker: MockerFixture):
    redis_client = FakeRedis(decode_responses=True)
    feed = ChangeFeed(redis_client)
    mocker.patch.object(redis_client, "publish", side_effect=RedisConnectionError("redis down"))

    async with feed.listen("contracts") as changes:
        assert feed.listener_count("contracts") == 1

        await feed.publish("contracts")

        assert await asyncio.wait_for(anext(changes), timeout=1) == "contracts"

    assert feed.listener_count("contracts") == 0
