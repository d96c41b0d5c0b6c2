import asyncio
import logging

from file_browser.core.request_context import (
    DEFAULT_REQUEST_ID,
    accept_request_id,
    get_request_id,
    request_context,
)
from file_browser.core.tasks import LifecycleManager
from file_browser.services import ServiceRegistry


async def test_startup_spawns_sweeper_when_expiry_enabled(settings):
    registry = ServiceRegistry(
        settings.model_copy(update={"session_idle_timeout": 60, "session_sweep_interval": 30})
    )
    await registry.startup()
    assert registry._lifecycle.running
    await registry.shutdown()
    assert not registry._lifecycle.running


async def test_startup_without_expiry_runs_nothing(settings):
    registry = ServiceRegistry(settings)
    await registry.startup()
    assert not registry._lifecycle.running
    await registry.shutdown()


async def test_crashed_task_is_dropped(caplog):
    lifecycle = LifecycleManager(name="test", logger=logging.getLogger("test"))

    async def boom():
        raise RuntimeError("boom")

    task = lifecycle.spawn(boom(), name="boom")
    await asyncio.gather(task, return_exceptions=True)
    await asyncio.sleep(0)
    assert not lifecycle.running
    assert "crashed" in caplog.text


class TestRequestId:
    def test_default_outside_request(self):
        assert get_request_id() == DEFAULT_REQUEST_ID

    def test_context_sets_and_restores(self):
        with request_context("bg:test") as request_id:
            assert request_id == "bg:test"
            assert get_request_id() == "bg:test"
        assert get_request_id() == DEFAULT_REQUEST_ID

    def test_accepts_plain_ids(self):
        assert accept_request_id("abc-123.x") == "abc-123.x"

    def test_replaces_unusable_ids(self):
        assert accept_request_id(None)
        replaced = accept_request_id("bad id\nwith newline")
        assert replaced != "bad id\nwith newline"
        assert len(accept_request_id("x" * 100)) == 32
