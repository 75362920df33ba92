import logging

from prizewheel.core.channel import (
    DEFAULT_CHANNEL,
    ChannelMessage,
    MessageType,
    WheelChannel,
    set_segments_message,
    spin_message,
)
from prizewheel.host import WheelHost
from prizewheel.wheel.component import WheelOptions


def test_channel_delivers_in_subscription_order():
    channel = WheelChannel()
    seen = []
    channel.on_message(lambda m: seen.append(("first", m.type)))
    channel.on_message(lambda m: seen.append(("second", m.type)))

    channel.post(spin_message(2))

    assert channel.name == DEFAULT_CHANNEL
    assert seen == [("first", MessageType.SPIN), ("second", MessageType.SPIN)]


def test_unsubscribe_stops_delivery():
    channel = WheelChannel("test")
    seen = []
    unsubscribe = channel.on_message(seen.append)
    channel.post(spin_message(0))
    unsubscribe()
    unsubscribe()
    channel.post(spin_message(1))
    assert [m.data["index"] for m in seen] == [0]


def test_handler_error_does_not_block_others(caplog):
    channel = WheelChannel()
    seen = []

    def broken(_message):
        raise RuntimeError("boom")

    channel.on_message(broken)
    channel.on_message(seen.append)
    with caplog.at_level(logging.ERROR):
        channel.post(ChannelMessage("custom", {"x": 1}))

    assert len(seen) == 1
    assert "Error in channel handler" in caplog.text


def test_history_is_bounded_and_filterable():
    channel = WheelChannel(history_limit=3)
    for i in range(5):
        channel.post(spin_message(i))
    channel.post(set_segments_message(["a"]))

    history = channel.get_history()
    assert len(history) == 3
    assert history[-1].type == MessageType.SET_SEGMENTS
    assert [m.data["index"] for m in channel.get_history(MessageType.SPIN)] == [3, 4]
    assert len(channel.get_history(limit=1)) == 1


def test_spin_message_carries_options():
    message = spin_message(4, source="panel", duration_ms=900)
    assert message.data == {"index": 4, "duration_ms": 900}
    assert message.source == "panel"


def make_hosted_wheel(make_wheel):
    channel = WheelChannel()
    host = WheelHost(channel)
    wheel = make_wheel(WheelOptions(on_stopped=host.on_stopped))
    host.bind(wheel)
    return channel, host, wheel


def test_host_routes_set_segments(make_wheel):
    channel, _host, wheel = make_hosted_wheel(make_wheel)
    channel.post(set_segments_message(["one", "two", "three"]))
    assert wheel.segments == ["one", "two", "three"]


def test_host_spin_posts_result(make_wheel, scheduler, entries):
    channel, _host, wheel = make_hosted_wheel(make_wheel)
    channel.post(set_segments_message(entries))
    channel.post(spin_message(6, min_turns=1, max_turns=1, duration_ms=200))
    assert wheel.is_spinning

    scheduler.run_until_idle()

    results = channel.get_history(MessageType.RESULT)
    assert len(results) == 1
    assert results[0].data == {"index": 6, "selected": entries[6], "label": "Question 6"}
    assert results[0].source == "wheel"


def test_host_ignores_spin_while_spinning(make_wheel, scheduler, entries):
    channel, host, wheel = make_hosted_wheel(make_wheel)
    channel.post(set_segments_message(entries))
    assert host.spin(1, duration_ms=300)
    assert not host.spin(2, duration_ms=300)

    scheduler.run_until_idle()

    results = channel.get_history(MessageType.RESULT)
    assert [m.data["index"] for m in results] == [1]


def test_host_ignores_invalid_spin(make_wheel, scheduler, entries):
    channel, _host, wheel = make_hosted_wheel(make_wheel)
    channel.post(set_segments_message(entries))
    channel.post(spin_message(42))
    assert not wheel.is_spinning
    assert scheduler.pending == 0
    assert channel.get_history(MessageType.RESULT) == []


def test_closed_host_stops_listening(make_wheel):
    channel, host, wheel = make_hosted_wheel(make_wheel)
    host.close()
    channel.post(set_segments_message(["a", "b"]))
    assert wheel.segments == []


def test_host_drops_spin_with_malformed_options(make_wheel, scheduler, entries):
    channel, _host, wheel = make_hosted_wheel(make_wheel)
    channel.post(set_segments_message(entries))

    channel.post(spin_message(2, duration_ms="1000"))
    scheduler.run_until_idle()
    assert not wheel.is_spinning
    assert channel.get_history(MessageType.RESULT) == []

    channel.post(spin_message(2, duration_ms=100))
    scheduler.run_until_idle()
    assert [m.data["index"] for m in channel.get_history(MessageType.RESULT)] == [2]
