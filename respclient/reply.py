"""Reply objects produced by the protocol reader."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]


class ReplyType(enum.Enum):
    """Type of a protocol reply."""

    STRING = enum.auto()
    ARRAY = enum.auto()
    INTEGER = enum.auto()
    NIL = enum.auto()
    STATUS = enum.auto()
    ERROR = enum.auto()
    DOUBLE = enum.auto()
    BOOL = enum.auto()
    MAP = enum.auto()
    SET = enum.auto()
    ATTR = enum.auto()
    PUSH = enum.auto()
    BIGNUM = enum.auto()
    VERB = enum.auto()


STRING_TYPES = frozenset(
    {ReplyType.ERROR, ReplyType.STATUS, ReplyType.STRING, ReplyType.VERB, ReplyType.BIGNUM}
)
AGGREGATE_TYPES = frozenset(
    {ReplyType.ARRAY, ReplyType.MAP, ReplyType.ATTR, ReplyType.SET, ReplyType.PUSH}
)

_VERB_HEADER = 4  # three-letter content type followed by ':'


@dataclass
class Reply:
    """A single reply; aggregates hold their children in ``elements``."""

    type: ReplyType
    integer: int = 0
    dval: float = 0.0
    data: Optional[bytes] = None
    vtype: Optional[str] = None
    elements: list["Reply"] = field(default_factory=list)

    @property
    def length(self) -> int:
        """Length of the string payload, zero when there is none."""
        return len(self.data) if self.data is not None else 0

    def is_push(self) -> bool:
        """Whether this is an out-of-band push message."""
        return self.type is ReplyType.PUSH


def _to_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode()
    return bytes(data)


def create_string(kind: ReplyType, data: BytesLike) -> Reply:
    """Build a string-like reply; verbatim strings lose their type header."""
    if kind not in STRING_TYPES:
        raise ValueError(f"{kind} is not a string reply type")
    raw = _to_bytes(data)
    if kind is ReplyType.VERB:
        if len(raw) < _VERB_HEADER:
            raise ValueError("verbatim string is shorter than its type header")
        return Reply(kind, vtype=raw[:3].decode("ascii", "replace"), data=raw[_VERB_HEADER:])
    return Reply(kind, data=raw)


def create_array(kind: ReplyType, elements: Iterable[Reply] = ()) -> Reply:
    """Build an aggregate reply holding ``elements`` in order."""
    if kind not in AGGREGATE_TYPES:
        raise ValueError(f"{kind} is not an aggregate reply type")
    return Reply(kind, elements=list(elements))


def create_integer(value: int) -> Reply:
    """Build an integer reply."""
    return Reply(ReplyType.INTEGER, integer=int(value))


def create_double(value: float, text: BytesLike) -> Reply:
    """Build a double reply keeping the server's original text."""
    return Reply(ReplyType.DOUBLE, dval=float(value), data=_to_bytes(text))


def create_nil() -> Reply:
    """Build a nil reply."""
    return Reply(ReplyType.NIL)


def create_bool(value: object) -> Reply:
    """Build a boolean reply whose integer is 1 or 0."""
    return Reply(ReplyType.BOOL, integer=1 if value else 0)