"""Tests for the action dispatcher."""

import pytest
from structlog.testing import capture_logs

from sdui.interpreter import ActionBinding, ActionDispatcher, Context, interpret
from sdui.monitoring import metrics_collector


def _actions_total(outcome: str) -> float:
    value = metrics_collector.registry.get_sample_value("sdui_actions_dispatched_total", {"outcome": outcome})
    return value or 0.0


@pytest.mark.unit
def test_row_action_invokes_handler_once_with_item(home_screen, jobs):
    """Dispatching a row's button passes that row's job, exactly once."""
    calls = []
    context = Context(collections={"jobs": jobs}, actions={"startJob": calls.append})
    rows = interpret(home_screen, context).find("jobs").children

    ActionDispatcher(context).trigger(rows[1].find("row-start").action)

    assert calls == [jobs[1]]
    assert len(interpret(home_screen, context).interactive()) == 2


@pytest.mark.unit
def test_missing_handler_logs_once_and_returns():
    before = _actions_total("missing")

    with capture_logs() as logs:
        result = ActionDispatcher(Context()).dispatch("startJob", {"id": "job-1"})

    assert result is None
    assert [entry["event"] for entry in logs] == ["action_not_found"]
    assert logs[0]["action_id"] == "startJob"
    assert _actions_total("missing") == before + 1


@pytest.mark.unit
def test_handler_failure_is_absorbed():
    def explode(item):
        raise RuntimeError("backend down")

    changes = []
    dispatcher = ActionDispatcher(Context(actions={"sync": explode}), on_change=lambda: changes.append(1))

    with capture_logs() as logs:
        dispatcher.dispatch("sync")

    assert logs[0]["event"] == "action_failed"
    assert changes == []


@pytest.mark.unit
def test_on_change_signalled_after_commit():
    changes = []
    state = {"completed": []}
    context = Context(actions={"completeJob": lambda item: state["completed"].append(item["id"])})

    ActionDispatcher(context, on_change=lambda: changes.append(1)).dispatch("completeJob", {"id": "job-9"})

    assert state["completed"] == ["job-9"]
    assert changes == [1]


@pytest.mark.unit
def test_async_handler_without_loop_runs_to_completion():
    calls = []

    async def handler(item):
        calls.append(item)

    result = ActionDispatcher(Context(actions={"skipJob": handler})).dispatch("skipJob", "job-3")

    assert result is None
    assert calls == ["job-3"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_handler_scheduled_on_running_loop():
    calls = []
    changes = []

    async def handler(item):
        calls.append(item)

    dispatcher = ActionDispatcher(Context(actions={"startJob": handler}), on_change=lambda: changes.append(1))
    task = dispatcher.dispatch("startJob", "job-1")

    assert task is not None
    await task
    assert calls == ["job-1"]
    assert changes == [1]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_handler_failure_is_absorbed():
    async def handler(item):
        raise ValueError("rejected")

    dispatcher = ActionDispatcher(Context(actions={"startJob": handler}))
    with capture_logs() as logs:
        await dispatcher.dispatch("startJob", None)

    assert [entry["event"] for entry in logs] == ["action_failed"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_adispatch_awaits_handler():
    calls = []

    async def handler(item):
        calls.append(item)

    await ActionDispatcher(Context(actions={"go": handler})).adispatch("go", 5)

    assert calls == [5]


@pytest.mark.unit
def test_trigger_uses_binding_item():
    calls = []
    ActionDispatcher(Context(actions={"go": calls.append})).trigger(ActionBinding("go", {"id": 1}))

    assert calls == [{"id": 1}]
