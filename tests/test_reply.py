import pytest

from respclient.reply import (
    Reply,
    ReplyType,
    create_array,
    create_bool,
    create_double,
    create_integer,
    create_nil,
    create_string,
)


def test_string_reply_keeps_bytes():
    r = create_string(ReplyType.STRING, b"hello world")
    assert r.type is ReplyType.STRING
    assert r.data == b"hello world"
    assert r.length == len(b"hello world")


def test_status_and_error_types():
    assert create_string(ReplyType.STATUS, b"OK").type is ReplyType.STATUS
    assert create_string(ReplyType.ERROR, "ERR bad").data == b"ERR bad"


def test_verbatim_splits_header():
    r = create_string(ReplyType.VERB, b"txt:hello")
    assert r.vtype == "txt"
    assert r.data == b"hello"
    assert r.length == len(b"hello")


def test_verbatim_too_short():
    with pytest.raises(ValueError):
        create_string(ReplyType.VERB, b"tx")


def test_string_rejects_non_string_type():
    with pytest.raises(ValueError):
        create_string(ReplyType.INTEGER, b"1")


def test_array_preserves_order():
    children = [create_integer(1), create_nil(), create_string(ReplyType.STRING, b"x")]
    r = create_array(ReplyType.ARRAY, children)
    assert r.elements == children
    assert r.elements[1].type is ReplyType.NIL


def test_array_rejects_scalar_type():
    with pytest.raises(ValueError):
        create_array(ReplyType.STRING, [])


def test_push_detection():
    push = create_array(ReplyType.PUSH, [create_string(ReplyType.STRING, b"invalidate")])
    assert push.is_push() is True
    assert create_array(ReplyType.ARRAY).is_push() is False


def test_integer_reply():
    r = create_integer(-42)
    assert r.type is ReplyType.INTEGER
    assert r.integer == -42


def test_double_keeps_text():
    r = create_double(3.5, b"3.5")
    assert r.dval == 3.5
    assert r.data == b"3.5"
    assert r.type is ReplyType.DOUBLE


@pytest.mark.parametrize("value,expected", [(True, 1), (False, 0), (7, 1), (0, 0)])
def test_bool_normalised(value, expected):
    r = create_bool(value)
    assert r.type is ReplyType.BOOL
    assert r.integer == expected


def test_nil_has_no_payload():
    r = create_nil()
    assert r.data is None
    assert r.length == 0
    assert r.elements == []


def test_replies_compare_by_value():
    assert create_string(ReplyType.STRING, "a") == Reply(ReplyType.STRING, data=b"a")