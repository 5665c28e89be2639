"""Tests for listener chaining, the service registry and hook_all_services."""

import asyncio

import pytest
from unittest.mock import AsyncMock, call

from servicehooks.chain import chain_listeners, hook_all_services
from servicehooks.events import HookedServiceEvent, Phase
from servicehooks.services import Service, ServiceRegistry


class DummyService:
    """Minimal CRUD service."""

    async def index(self, params=None):
        return []

    async def read(self, id, params=None):
        return {"id": id}

    async def create(self, data, params=None):
        return data

    async def modify(self, id, data, params=None):
        return data

    async def update(self, id, data, params=None):
        return data

    async def remove(self, id, params=None):
        return {"id": id}


@pytest.fixture
def event():
    return HookedServiceEvent(Phase.BEFORE, data={"name": "Ada"})


# =============================================================================
# chain_listeners
# =============================================================================


class TestChainListeners:
    @pytest.mark.asyncio
    async def test_runs_in_order(self, event):
        order = []

        async def hook_a(e):
            order.append("a")

        async def hook_b(e):
            order.append("b")

        async def hook_c(e):
            order.append("c")

        await chain_listeners([hook_a, hook_b, hook_c])(event)
        assert order == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_waits_for_each_listener(self, event):
        """A listener sees what the previous one wrote after it awaited."""
        async def slow_writer(e):
            await asyncio.sleep(0.01)
            e.data["written"] = True

        seen = []

        async def reader(e):
            seen.append(e.data.get("written"))

        await chain_listeners([slow_writer, reader])(event)
        assert seen == [True]

    @pytest.mark.asyncio
    async def test_accepts_sync_listeners(self, event):
        order = []

        def sync_hook(e):
            order.append("sync")

        async def async_hook(e):
            order.append("async")

        await chain_listeners([sync_hook, async_hook])(event)
        assert order == ["sync", "async"]

    @pytest.mark.asyncio
    async def test_failure_stops_chain(self, event):
        order = []

        async def hook_a(e):
            order.append("a")

        async def failing(e):
            order.append("failing")
            raise RuntimeError("boom")

        async def hook_c(e):
            order.append("c")

        with pytest.raises(RuntimeError, match="boom"):
            await chain_listeners([hook_a, failing, hook_c])(event)

        assert order == ["a", "failing"]

    @pytest.mark.asyncio
    async def test_earlier_effects_are_kept_on_failure(self, event):
        async def writer(e):
            e.data["touched"] = True

        async def failing(e):
            raise ValueError("nope")

        with pytest.raises(ValueError):
            await chain_listeners([writer, failing])(event)

        assert event.data["touched"] is True

    @pytest.mark.asyncio
    async def test_empty_chain(self, event):
        await chain_listeners([])(event)
        assert event.data == {"name": "Ada"}

    @pytest.mark.asyncio
    async def test_generator_input_is_reusable(self, event):
        calls = []

        async def hook(e):
            calls.append(e)

        chained = chain_listeners(h for h in [hook])
        await chained(event)
        await chained(event)
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_chains_compose(self, event):
        order = []

        async def hook_a(e):
            order.append("a")

        async def hook_b(e):
            order.append("b")

        inner = chain_listeners([hook_a, hook_b])
        await chain_listeners([inner, hook_a])(event)
        assert order == ["a", "b", "a"]


# =============================================================================
# ServiceRegistry
# =============================================================================


class TestServiceRegistry:
    def test_dummy_service_satisfies_protocol(self):
        assert isinstance(DummyService(), Service)

    def test_object_without_crud_methods_is_not_a_service(self):
        assert not isinstance(object(), Service)

    @pytest.mark.asyncio
    async def test_register_and_get(self):
        registry = ServiceRegistry()
        service = DummyService()
        returned = await registry.register("/users/", service)
        assert returned is service
        assert registry.get("users") is service
        assert registry.get("/users") is service
        assert registry.get("missing") is None

    @pytest.mark.asyncio
    async def test_services_keep_registration_order(self):
        registry = ServiceRegistry()
        a, b = DummyService(), DummyService()
        await registry.register("b", b)
        await registry.register("a", a)
        assert list(registry.services) == ["b", "a"]

    @pytest.mark.asyncio
    async def test_listeners_notified_in_order(self):
        registry = ServiceRegistry()
        order = []
        registry.on_service(lambda s: order.append(("sync", s)))

        async def async_listener(s):
            order.append(("async", s))

        registry.on_service(async_listener)
        service = DummyService()
        await registry.register("users", service)
        assert order == [("sync", service), ("async", service)]


# =============================================================================
# hook_all_services
# =============================================================================


class TestHookAllServices:
    @pytest.mark.asyncio
    async def test_runs_on_existing_services(self):
        registry = ServiceRegistry()
        s1, s2 = DummyService(), DummyService()
        await registry.register("one", s1)
        await registry.register("two", s2)

        callback = AsyncMock()
        await hook_all_services(callback)(registry)

        callback.assert_has_awaits([call(s1), call(s2)])
        assert callback.await_count == 2

    @pytest.mark.asyncio
    async def test_runs_on_future_services(self):
        registry = ServiceRegistry()
        s1 = DummyService()
        await registry.register("one", s1)

        callback = AsyncMock()
        await hook_all_services(callback)(registry)

        s2 = DummyService()
        await registry.register("two", s2)

        assert callback.await_count == 2
        callback.assert_awaited_with(s2)

    @pytest.mark.asyncio
    async def test_reregistering_does_not_run_again(self):
        registry = ServiceRegistry()
        s1 = DummyService()
        await registry.register("one", s1)

        callback = AsyncMock()
        await hook_all_services(callback)(registry)
        await registry.register("alias", s1)

        assert callback.await_count == 1

    @pytest.mark.asyncio
    async def test_future_service_runs_once(self):
        registry = ServiceRegistry()
        callback = AsyncMock()
        await hook_all_services(callback)(registry)

        s1 = DummyService()
        await registry.register("one", s1)
        await registry.register("one-again", s1)

        callback.assert_awaited_once_with(s1)

    @pytest.mark.asyncio
    async def test_same_instance_at_two_paths_runs_once(self):
        registry = ServiceRegistry()
        s1 = DummyService()
        await registry.register("one", s1)
        await registry.register("alias", s1)

        callback = AsyncMock()
        await hook_all_services(callback)(registry)

        callback.assert_awaited_once_with(s1)

    @pytest.mark.asyncio
    async def test_sync_callback(self):
        registry = ServiceRegistry()
        s1 = DummyService()
        await registry.register("one", s1)

        hooked = []
        await hook_all_services(hooked.append)(registry)
        assert hooked == [s1]

    @pytest.mark.asyncio
    async def test_unhashable_services(self):
        """Services are tracked by identity, not hash."""

        class UnhashableService(DummyService):
            __hash__ = None

        registry = ServiceRegistry()
        s1, s2 = UnhashableService(), UnhashableService()
        await registry.register("one", s1)
        await registry.register("two", s2)

        hooked = []
        await hook_all_services(hooked.append)(registry)
        assert hooked == [s1, s2]

    @pytest.mark.asyncio
    async def test_separate_initializers_track_separately(self):
        registry = ServiceRegistry()
        s1 = DummyService()
        await registry.register("one", s1)

        first, second = AsyncMock(), AsyncMock()
        await hook_all_services(first)(registry)
        await hook_all_services(second)(registry)

        first.assert_awaited_once_with(s1)
        second.assert_awaited_once_with(s1)
