"""Bookkeeping for publish/subscribe on an asynchronous connection.

Holds the callbacks registered for channels and patterns and the queue of
regular command callbacks issued while subscribed. It also recognises the
replies that belong to the subscription machinery.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Optional, Union

from .hashtable import HashTable, gen_hash
from .reply import Reply, ReplyType

BytesLike = Union[bytes, bytearray, memoryview, str]
ReplyCallback = Callable[[Any, Optional[Reply], Any], None]

# Shortest first element a subscription message can carry ("message").
_MIN_TYPE_LEN = len(b"message")
_SUBSCRIBE_WORDS = (b"subscribe", b"message", b"unsubscribe")


@dataclass
class Callback:
    """A reply callback with the user data handed back to it.

    ``pending_subs`` counts subscribe confirmations still expected for a
    channel or pattern; ``unsubscribe_sent`` marks that an unsubscribe
    for it has already gone out.
    """

    fn: Optional[ReplyCallback] = None
    privdata: Any = None
    pending_subs: int = 1
    unsubscribe_sent: bool = False


class Subscriptions:
    """Channel and pattern callbacks plus the queue used while subscribed."""

    def __init__(self) -> None:
        self.replies: Deque[Callback] = deque()
        self.channels = HashTable(gen_hash)
        self.patterns = HashTable(gen_hash)
        self.pending_unsubs = 0

    def table_for(self, pattern: bool) -> HashTable:
        """The table of pattern callbacks if ``pattern``, else of channels."""
        return self.patterns if pattern else self.channels


def _to_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode()
    return bytes(data)


def split_command(cmd: BytesLike) -> list[bytes]:
    """Split an encoded multi-bulk command into its arguments.

    Raises ValueError when the command holds no bulk argument or a bulk
    header is malformed.
    """
    raw = _to_bytes(cmd)
    args: list[bytes] = []
    pos = 0
    while True:
        start = raw.find(b"$", pos)
        if start == -1:
            break
        cr = raw.find(b"\r", start)
        if cr == -1:
            raise ValueError("bulk header is not terminated")
        try:
            length = int(raw[start + 1:cr])
        except ValueError as exc:
            raise ValueError(f"bad bulk length {raw[start + 1:cr]!r}") from exc
        if length < 0:
            raise ValueError(f"bad bulk length {length}")
        body = cr + 2
        if body + length > len(raw):
            raise ValueError("bulk argument is cut short")
        args.append(raw[body:body + length])
        pos = body + length + 2
    if not args:
        raise ValueError("command holds no arguments")
    return args


def is_subscribe_reply(reply: Reply) -> bool:
    """Whether ``reply`` is a (p)subscribe, (p)unsubscribe or (p)message."""
    if not reply.elements:
        return False
    first = reply.elements[0]
    if first.type is not ReplyType.STRING or first.data is None:
        return False
    data = first.data
    if len(data) < _MIN_TYPE_LEN:
        return False
    name = data[1:] if data[:1].lower() == b"p" else data
    name = name.lower()
    return any(word.startswith(name) for word in _SUBSCRIBE_WORDS)


def is_spontaneous_push(reply: Reply) -> bool:
    """Whether ``reply`` is a push message unrelated to subscriptions."""
    return reply.is_push() and not is_subscribe_reply(reply)