"""
In-process query cache for upstream reads.

Entries are keyed by a tuple built with `QueryKeys` and namespaced by a
scope derived from the caller's bearer token, so users never see each
other's permission-filtered results. Invalidation matches key prefixes
across every scope.

Dependencies: asyncio
System role: Query caching and invalidation
"""

import asyncio
import hashlib
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]

ANONYMOUS_SCOPE = "anonymous"


def _freeze(value: Any) -> Hashable:
    """Turn filter dicts/lists into hashable, order-independent key parts."""
    if value is None:
        return None
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, dict):
        return tuple(sorted((str(k), _freeze(v)) for k, v in value.items() if v is not None))
    if isinstance(value, (list, tuple, set)):
        return tuple(_freeze(item) for item in value)
    return value


class EntityKeys:
    """all / lists / list / details / detail key family for one entity."""

    def __init__(self, root: str) -> None:
        self.all: QueryKey = (root,)

    def lists(self) -> QueryKey:
        return (*self.all, "list")

    def list(self, filters: Any = None) -> QueryKey:
        return (*self.lists(), _freeze(filters))

    def details(self) -> QueryKey:
        return (*self.all, "detail")

    def detail(self, entity_id: str) -> QueryKey:
        return (*self.details(), entity_id)


class _SessionKeys(EntityKeys):
    def stats(self) -> QueryKey:
        return (*self.all, "stats")

    def public(self, code: str) -> QueryKey:
        return (*self.all, "public", code)

    def available_tests(self) -> QueryKey:
        return (*self.all, "available-tests")

    def proctors(self) -> QueryKey:
        return (*self.all, "proctors")


class _TestKeys(EntityKeys):
    def stats(self) -> QueryKey:
        return (*self.all, "stats")

    def filter_options(self) -> QueryKey:
        return (*self.all, "filter-options")


class _ParticipantKeys:
    all: QueryKey = ("session-participants",)

    def session(self, session_id: str) -> QueryKey:
        return (*self.all, session_id)

    def list(self, session_id: str, filters: Any = None) -> QueryKey:
        return (*self.session(session_id), _freeze(filters))


class _QuestionKeys:
    all: QueryKey = ("questions",)

    def test(self, test_id: str) -> QueryKey:
        return (*self.all, test_id)

    def list(self, test_id: str, filters: Any = None) -> QueryKey:
        return (*self.test(test_id), "list", _freeze(filters))

    def detail(self, test_id: str, question_id: str) -> QueryKey:
        return (*self.test(test_id), "detail", question_id)

    def stats(self, test_id: str) -> QueryKey:
        return (*self.test(test_id), "stats")


class _DashboardKeys:
    all: QueryKey = ("dashboard",)

    def admin(self) -> QueryKey:
        return (*self.all, "admin")

    def participant(self) -> QueryKey:
        return (*self.all, "participant")


class _ReportKeys:
    all: QueryKey = ("reports",)

    def individual(self, user_id: str, params: Any = None) -> QueryKey:
        return (*self.all, "individual", user_id, _freeze(params))

    def session_summary(self, session_id: str, params: Any = None) -> QueryKey:
        return (*self.all, "session-summary", session_id, _freeze(params))

    def stats(self) -> QueryKey:
        return (*self.all, "stats")


class QueryKeys:
    """Key factory shared by services, the poller and invalidation."""

    users = EntityKeys("users")
    sessions = _SessionKeys("sessions")
    tests = _TestKeys("tests")
    participants = _ParticipantKeys()
    questions = _QuestionKeys()
    dashboard = _DashboardKeys()
    reports = _ReportKeys()


def scope_for_token(token: str | None) -> str:
    """Stable, non-reversible cache scope for a bearer token."""
    if not token:
        return ANONYMOUS_SCOPE
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]


@dataclass
class _Entry:
    value: Any
    fetched_at: float
    stale_seconds: float

    def is_fresh(self, now: float) -> bool:
        return now - self.fetched_at < self.stale_seconds


class QueryCache:
    """
    Stale-time cache with prefix invalidation.

    Concurrent fetches of the same scoped key share one upstream call. A
    fetch that is still running when its key is invalidated hands its result
    to the callers already waiting on it but does not store it. The map is
    bounded: expired entries are dropped first, then the least recently used.
    """

    def __init__(
        self,
        default_stale_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = 1000,
    ) -> None:
        """
        Initialize cache.

        Args:
            default_stale_seconds: Freshness window when a read gives none
            clock: Monotonic time source (overridable in tests)
            max_entries: Upper bound on stored entries across all scopes
        """
        self._default_stale_seconds = default_stale_seconds
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[tuple[str, QueryKey], _Entry] = {}
        self._in_flight: dict[tuple[str, QueryKey], asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, scope: str, key: QueryKey) -> tuple[bool, Any]:
        """Return (hit, value) for a fresh entry; an expired entry is dropped."""
        scoped_key = (scope, key)
        entry = self._entries.get(scoped_key)
        if entry is None:
            return False, None
        if not entry.is_fresh(self._clock()):
            del self._entries[scoped_key]
            return False, None
        # Most recently used entries live at the end
        self._entries[scoped_key] = self._entries.pop(scoped_key)
        return True, entry.value

    def set(self, scope: str, key: QueryKey, value: Any, stale_seconds: float | None = None) -> None:
        scoped_key = (scope, key)
        self._entries.pop(scoped_key, None)
        self._entries[scoped_key] = _Entry(
            value=value,
            fetched_at=self._clock(),
            stale_seconds=self._default_stale_seconds if stale_seconds is None else stale_seconds,
        )
        self._evict()

    def _evict(self) -> None:
        if len(self._entries) <= self._max_entries:
            return
        now = self._clock()
        expired = [scoped for scoped, entry in self._entries.items() if not entry.is_fresh(now)]
        for scoped in expired:
            del self._entries[scoped]
        while len(self._entries) > self._max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"{__name__}:evict - dropped {oldest[1]}")

    async def fetch(
        self,
        scope: str,
        key: QueryKey,
        fetcher: Callable[[], Awaitable[Any]],
        stale_seconds: float | None = None,
    ) -> Any:
        """
        Return the cached value or load it with `fetcher`.

        Failures are not cached and propagate to every waiting caller.
        """
        hit, value = self.get(scope, key)
        if hit:
            return value

        scoped_key = (scope, key)
        pending = self._in_flight.get(scoped_key)
        if pending is not None:
            return await asyncio.shield(pending)

        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._in_flight[scoped_key] = future
        try:
            value = await fetcher()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved; there may be no other waiter
            future.exception()
            raise
        else:
            # Invalidated mid-flight: the value predates the mutation
            if self._in_flight.get(scoped_key) is future:
                self.set(scope, key, value, stale_seconds)
            future.set_result(value)
            return value
        finally:
            if self._in_flight.get(scoped_key) is future:
                del self._in_flight[scoped_key]

    def _detach_in_flight(self, matches: Callable[[QueryKey], bool]) -> None:
        for scoped in [scoped for scoped in self._in_flight if matches(scoped[1])]:
            del self._in_flight[scoped]

    def invalidate(self, prefix: QueryKey) -> int:
        """
        Drop every entry whose key starts with `prefix`, in all scopes.

        Fetches of matching keys that are still running will not be stored.

        Returns:
            int: Number of entries removed
        """
        doomed = [scoped for scoped in self._entries if scoped[1][: len(prefix)] == prefix]
        for scoped in doomed:
            del self._entries[scoped]
        self._detach_in_flight(lambda key: key[: len(prefix)] == prefix)
        if doomed:
            logger.debug(f"{__name__}:invalidate - {prefix} removed {len(doomed)} entries")
        return len(doomed)

    def remove(self, key: QueryKey) -> int:
        """Drop the exact key in all scopes."""
        doomed = [scoped for scoped in self._entries if scoped[1] == key]
        for scoped in doomed:
            del self._entries[scoped]
        self._detach_in_flight(lambda candidate: candidate == key)
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()
        self._in_flight.clear()
