import pytest

from respclient.command import format_command, format_command_argv
from respclient.pubsub import (
    Callback,
    Subscriptions,
    is_spontaneous_push,
    is_subscribe_reply,
    split_command,
)
from respclient.reply import ReplyType, create_array, create_integer, create_string


def _message(kind, *rest):
    return create_array(
        ReplyType.PUSH,
        [create_string(ReplyType.STRING, kind), *rest],
    )


def test_split_command_round_trip_argv():
    argv = [b"SUBSCRIBE", b"news", b"weather"]
    assert split_command(format_command_argv(argv)) == argv


def test_split_command_binary_safe():
    argv = [b"SET", b"k", b"a$b\r\nc", b""]
    assert split_command(format_command_argv(argv)) == argv


def test_split_command_format_string():
    assert split_command(format_command("PSUBSCRIBE %s", "ch.*")) == [b"PSUBSCRIBE", b"ch.*"]


def test_split_command_wire_literal():
    assert split_command(b"*2\r\n$3\r\nGET\r\n$3\r\nkey\r\n") == [b"GET", b"key"]


def test_split_command_without_arguments_raises():
    with pytest.raises(ValueError):
        split_command(b"*0\r\n")


def test_split_command_malformed_header_raises():
    with pytest.raises(ValueError):
        split_command(b"*1\r\n$x\r\nabc\r\n")


def test_split_command_truncated_raises():
    with pytest.raises(ValueError):
        split_command(b"*1\r\n$10\r\nabc\r\n")


@pytest.mark.parametrize(
    "kind",
    [b"subscribe", b"psubscribe", b"unsubscribe", b"punsubscribe",
     b"message", b"pmessage", b"MESSAGE", b"PSubscribe"],
)
def test_subscribe_reply_kinds(kind):
    reply = _message(kind, create_string(ReplyType.STRING, b"ch"), create_integer(1))
    assert is_subscribe_reply(reply) is True
    assert is_spontaneous_push(reply) is False


@pytest.mark.parametrize("kind", [b"invalidate", b"ping", b"smessagex", b"subscribes"])
def test_other_push_is_spontaneous(kind):
    reply = _message(kind, create_string(ReplyType.STRING, b"k"))
    assert is_subscribe_reply(reply) is False
    assert is_spontaneous_push(reply) is True


def test_subscribe_reply_needs_string_first_element():
    reply = create_array(ReplyType.PUSH, [create_integer(3)])
    assert is_subscribe_reply(reply) is False


def test_empty_array_is_not_subscribe_reply():
    assert is_subscribe_reply(create_array(ReplyType.ARRAY, [])) is False


def test_array_message_is_not_spontaneous_push():
    reply = create_array(
        ReplyType.ARRAY,
        [create_string(ReplyType.STRING, b"invalidate")],
    )
    assert is_spontaneous_push(reply) is False


def test_callback_defaults():
    cb = Callback()
    assert cb.fn is None
    assert cb.pending_subs == 1
    assert cb.unsubscribe_sent is False


def test_table_for_selects_table():
    subs = Subscriptions()
    assert subs.table_for(True) is subs.patterns
    assert subs.table_for(False) is subs.channels
    assert subs.patterns is not subs.channels


def test_subscriptions_tables_store_callbacks():
    subs = Subscriptions()
    first = Callback(privdata="a")
    second = Callback(privdata="b", pending_subs=2)
    assert subs.channels.replace(b"news", first) is True
    assert subs.channels.replace(b"news", second) is False
    assert subs.channels.find(b"news") is second
    assert len(subs.channels) == 1
    assert len(subs.patterns) == 0
    subs.channels.delete(b"news")
    assert b"news" not in subs.channels


def test_subscriptions_start_empty():
    subs = Subscriptions()
    assert subs.pending_unsubs == 0
    assert list(subs.replies) == []
    subs.replies.append(Callback(privdata=1))
    assert subs.replies.popleft().privdata == 1