"""Tests for broadcast targeting and per-connection ordering."""

from arena_server.services.broadcast import (
    BroadcastCoordinator,
    to_all,
    to_others,
    to_sender,
)
from arena_server.services.websocket_service import WebSocketService


def drain(queue):
    messages = []
    while not queue.empty():
        messages.append(queue.get_nowait())
    return messages


def test_targets_resolve_against_live_connections():
    coordinator = BroadcastCoordinator()
    a = coordinator.attach("a")
    b = coordinator.attach("b")
    c = coordinator.attach("c")

    coordinator.publish(to_sender("init", {"id": "a"}, "a"))
    coordinator.publish(to_others("newPlayer", {"id": "a"}, "a"))
    coordinator.publish(to_all("playerDisconnected", "z"))

    assert [m["type"] for m in drain(a)] == ["init", "playerDisconnected"]
    assert [m["type"] for m in drain(b)] == ["newPlayer", "playerDisconnected"]
    assert [m["type"] for m in drain(c)] == ["newPlayer", "playerDisconnected"]


def test_messages_keep_emission_order():
    coordinator = BroadcastCoordinator()
    queue = coordinator.attach("a")

    coordinator.publish_all(to_all("breakableDestroyed", i) for i in range(5))

    assert [m["data"] for m in drain(queue)] == [0, 1, 2, 3, 4]


def test_detached_connections_receive_nothing():
    coordinator = BroadcastCoordinator()
    queue = coordinator.attach("a")
    coordinator.detach("a")
    coordinator.detach("a")

    coordinator.publish(to_all("weaponUsed", {}))
    coordinator.publish(to_sender("init", {}, "a"))

    assert queue.empty()
    assert len(coordinator) == 0


def test_wire_shape():
    assert to_all("breakableDestroyed", "crate").to_message() == {
        "type": "breakableDestroyed",
        "data": "crate",
    }


def test_full_queue_detaches_slow_connection():
    coordinator = BroadcastCoordinator(max_queue_size=3)
    slow = coordinator.attach("slow")
    fast = coordinator.attach("fast")

    for i in range(5):
        coordinator.publish(to_all("breakableDestroyed", i))
        drain(fast)

    assert "slow" not in coordinator
    assert "fast" in coordinator
    assert drain(slow) == [BroadcastCoordinator.CLOSE_SENTINEL]

    coordinator.publish(to_all("weaponUsed", {}))
    assert slow.empty()
    assert [m["type"] for m in drain(fast)] == ["weaponUsed"]


def test_queue_is_bounded_by_default():
    coordinator = BroadcastCoordinator()
    queue = coordinator.attach("a")

    for i in range(coordinator.max_queue_size * 4):
        coordinator.publish(to_all("breakableDestroyed", i))

    assert queue.qsize() <= coordinator.max_queue_size


def test_websocket_service_shares_an_empty_coordinator(make_session):
    coordinator = BroadcastCoordinator()

    service = WebSocketService(make_session(), coordinator)

    assert service.coordinator is coordinator
