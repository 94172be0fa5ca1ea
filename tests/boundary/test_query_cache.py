"""
Test suite for QueryCache.

Tests stale times, scoping, prefix invalidation and in-flight
deduplication.

System role: Verification of the query cache
"""

import asyncio

import pytest

from syntegra.boundary.query_cache import ANONYMOUS_SCOPE, QueryCache, QueryKeys, scope_for_token
from syntegra.models.session import SessionListParams


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestQueryKeys:
    def test_list_keys_share_prefix(self) -> None:
        key = QueryKeys.sessions.list(SessionListParams(page=1, status="active"))

        assert key[: len(QueryKeys.sessions.lists())] == QueryKeys.sessions.lists()
        assert key == QueryKeys.sessions.list(SessionListParams(page=1, status="active"))
        assert key != QueryKeys.sessions.list(SessionListParams(page=2, status="active"))

    def test_question_keys_nest_under_test(self) -> None:
        prefix = QueryKeys.questions.test("t1")

        assert QueryKeys.questions.stats("t1")[: len(prefix)] == prefix
        assert QueryKeys.questions.detail("t2", "q1")[: len(prefix)] != prefix


class TestScopes:
    def test_anonymous_scope(self) -> None:
        assert scope_for_token(None) == ANONYMOUS_SCOPE

    def test_scope_is_stable_and_opaque(self) -> None:
        scope = scope_for_token("secret-token")

        assert scope == scope_for_token("secret-token")
        assert "secret" not in scope
        assert len(scope) == 16


class TestStaleTime:
    def test_entry_expires(self) -> None:
        clock = FakeClock()
        cache = QueryCache(default_stale_seconds=60, clock=clock)
        cache.set("s", ("a",), 1)

        clock.now = 59
        assert cache.get("s", ("a",)) == (True, 1)
        clock.now = 60
        assert cache.get("s", ("a",)) == (False, None)

    def test_scopes_are_isolated(self) -> None:
        cache = QueryCache()
        cache.set("alice", ("a",), 1)

        assert cache.get("bob", ("a",)) == (False, None)


class TestInvalidation:
    def test_prefix_invalidation_across_scopes(self) -> None:
        cache = QueryCache()
        cache.set("alice", QueryKeys.sessions.list({"page": 1}), 1)
        cache.set("bob", QueryKeys.sessions.list({"page": 2}), 2)
        cache.set("bob", QueryKeys.sessions.detail("s1"), 3)

        removed = cache.invalidate(QueryKeys.sessions.lists())

        assert removed == 2
        assert len(cache) == 1
        assert cache.get("bob", QueryKeys.sessions.detail("s1")) == (True, 3)

    def test_remove_exact_key(self) -> None:
        cache = QueryCache()
        cache.set("alice", QueryKeys.tests.detail("t1"), 1)
        cache.set("alice", QueryKeys.tests.detail("t2"), 2)

        assert cache.remove(QueryKeys.tests.detail("t1")) == 1
        assert len(cache) == 1


class TestFetch:
    @pytest.mark.asyncio
    async def test_fetch_caches_value(self) -> None:
        cache = QueryCache()
        calls = []

        async def fetcher():
            calls.append(1)
            return "value"

        assert await cache.fetch("s", ("k",), fetcher) == "value"
        assert await cache.fetch("s", ("k",), fetcher) == "value"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_concurrent_fetches_share_one_call(self) -> None:
        cache = QueryCache()
        release = asyncio.Event()
        calls = []

        async def fetcher():
            calls.append(1)
            await release.wait()
            return "value"

        first = asyncio.create_task(cache.fetch("s", ("k",), fetcher))
        second = asyncio.create_task(cache.fetch("s", ("k",), fetcher))
        await asyncio.sleep(0)
        release.set()

        assert await asyncio.gather(first, second) == ["value", "value"]
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self) -> None:
        cache = QueryCache()
        attempts = []

        async def fetcher():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("boom")
            return "value"

        with pytest.raises(RuntimeError):
            await cache.fetch("s", ("k",), fetcher)

        assert await cache.fetch("s", ("k",), fetcher) == "value"
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_invalidation_during_fetch_is_not_overwritten(self) -> None:
        cache = QueryCache()
        release = asyncio.Event()

        async def slow_fetcher():
            await release.wait()
            return "OLD"

        async def fresh_fetcher():
            return "NEW"

        pending = asyncio.create_task(cache.fetch("s", QueryKeys.sessions.detail("s1"), slow_fetcher))
        await asyncio.sleep(0)
        cache.invalidate(QueryKeys.sessions.all)
        release.set()

        # Callers already waiting still get their answer
        assert await pending == "OLD"
        assert cache.get("s", QueryKeys.sessions.detail("s1")) == (False, None)
        assert await cache.fetch("s", QueryKeys.sessions.detail("s1"), fresh_fetcher) == "NEW"

    @pytest.mark.asyncio
    async def test_fetch_after_invalidation_does_not_join_old_request(self) -> None:
        cache = QueryCache()
        release = asyncio.Event()

        async def slow_fetcher():
            await release.wait()
            return "OLD"

        async def fresh_fetcher():
            return "NEW"

        pending = asyncio.create_task(cache.fetch("s", ("k",), slow_fetcher))
        await asyncio.sleep(0)
        cache.remove(("k",))

        assert await cache.fetch("s", ("k",), fresh_fetcher) == "NEW"
        release.set()
        assert await pending == "OLD"
        assert cache.get("s", ("k",)) == (True, "NEW")


class TestEviction:
    def test_expired_entry_dropped_on_read(self) -> None:
        clock = FakeClock()
        cache = QueryCache(default_stale_seconds=10, clock=clock)
        cache.set("s", ("a",), 1)

        clock.now = 10
        cache.get("s", ("a",))

        assert len(cache) == 0

    def test_expired_entries_evicted_first(self) -> None:
        clock = FakeClock()
        cache = QueryCache(default_stale_seconds=10, clock=clock, max_entries=2)
        cache.set("s", ("old",), 1, stale_seconds=1)
        cache.set("s", ("kept",), 2)
        clock.now = 5

        cache.set("s", ("new",), 3)

        assert len(cache) == 2
        assert cache.get("s", ("kept",)) == (True, 2)
        assert cache.get("s", ("new",)) == (True, 3)

    def test_least_recently_used_evicted(self) -> None:
        cache = QueryCache(max_entries=2)
        cache.set("alice", ("a",), 1)
        cache.set("bob", ("b",), 2)
        cache.get("alice", ("a",))

        cache.set("carol", ("c",), 3)

        assert len(cache) == 2
        assert cache.get("bob", ("b",)) == (False, None)
        assert cache.get("alice", ("a",)) == (True, 1)
