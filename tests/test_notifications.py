"""Tests for the self-expiring notification queue."""

import asyncio

from blog_admin_client.notifications import NotificationQueue


def make_queue() -> NotificationQueue:
    return NotificationQueue(success_ttl=0.05, error_ttl=0.15)


async def test_push_returns_unique_ids_in_insertion_order() -> None:
    queue = make_queue()
    first = queue.success("Saved")
    second = queue.error("Failed", "name required")

    assert first != second
    assert [n.id for n in queue.items] == [first, second]
    assert queue.items[1].description == "name required"
    assert queue.items[1].kind == "error"
    queue.clear()


async def test_success_expires_after_timeout() -> None:
    queue = make_queue()
    nid = queue.success("Saved")

    await asyncio.sleep(0.1)

    assert nid not in queue
    assert len(queue) == 0


async def test_error_outlives_success() -> None:
    queue = make_queue()
    ok = queue.success("Saved")
    err = queue.error("Failed")

    await asyncio.sleep(0.1)

    assert ok not in queue
    assert err in queue

    await asyncio.sleep(0.1)
    assert err not in queue


async def test_dismiss_removes_early_and_cancels_timer() -> None:
    queue = make_queue()
    nid = queue.error("Failed")

    assert queue.dismiss(nid) is True
    assert nid not in queue
    assert nid not in queue._timers

    await asyncio.sleep(0.2)
    assert len(queue) == 0


async def test_dismiss_is_idempotent() -> None:
    queue = make_queue()
    nid = queue.success("Saved")
    queue.dismiss(nid)

    assert queue.dismiss(nid) is False
    assert queue.dismiss(12345) is False


async def test_dismiss_does_not_affect_other_timers() -> None:
    queue = make_queue()
    a = queue.error("A")
    b = queue.error("B")
    queue.dismiss(a)

    await asyncio.sleep(0.05)
    assert b in queue

    await asyncio.sleep(0.15)
    assert b not in queue


async def test_clear_cancels_everything() -> None:
    queue = make_queue()
    queue.success("A")
    queue.error("B")

    queue.clear()

    assert queue.items == []
    assert queue._timers == {}
