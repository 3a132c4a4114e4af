"""Chained hash table with power-of-two bucket arrays.

The table starts with no buckets, grows to four on the first insertion
and doubles whenever it holds as many entries as it has buckets. New
entries go to the head of their bucket's chain.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Iterator, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]
HashFunction = Callable[[Any], int]
KeyCompare = Callable[[Any, Any], bool]

INITIAL_SIZE = 4
_MAX_SIZE = sys.maxsize
_HASH_SEED = 5381
_HASH_MASK = 0xFFFFFFFF


def gen_hash(data: BytesLike) -> int:
    """Bernstein's hash (``hash * 33 + byte``) as a 32-bit unsigned value."""
    if isinstance(data, str):
        data = data.encode()
    value = _HASH_SEED
    for byte in bytes(data):
        value = (value * 33 + byte) & _HASH_MASK
    return value


def _next_power(size: int) -> int:
    if size >= _MAX_SIZE:
        return _MAX_SIZE
    power = INITIAL_SIZE
    while power < size:
        power *= 2
    return power


class _Entry:
    __slots__ = ("key", "value", "next")

    def __init__(self, key: Any, value: Any, next_entry: Optional["_Entry"]) -> None:
        self.key = key
        self.value = value
        self.next = next_entry


def _equal(first: Any, second: Any) -> bool:
    return first == second


class HashTable:
    """A hash table keyed through a caller-supplied hash and comparison."""

    def __init__(self, hash_function: HashFunction = gen_hash,
                 key_compare: Optional[KeyCompare] = None) -> None:
        self._hash = hash_function
        self._compare = key_compare if key_compare is not None else _equal
        self._table: list[Optional[_Entry]] = []
        self._used = 0

    @property
    def _mask(self) -> int:
        return len(self._table) - 1

    def _bucket(self, key: Any) -> int:
        return self._hash(key) & self._mask

    def _entry(self, key: Any) -> Optional[_Entry]:
        if not self._table:
            return None
        entry = self._table[self._bucket(key)]
        while entry is not None:
            if self._compare(key, entry.key):
                return entry
            entry = entry.next
        return None

    def expand(self, size: int) -> None:
        """Rebuild the table with at least ``size`` buckets.

        Raises ValueError when ``size`` is smaller than the number of entries.
        """
        if size < 0 or self._used > size:
            raise ValueError(f"cannot size table for {size} buckets holding {self._used} entries")
        real_size = _next_power(size)
        new_table: list[Optional[_Entry]] = [None] * real_size
        mask = real_size - 1
        for head in self._table:
            entry = head
            while entry is not None:
                following = entry.next
                index = self._hash(entry.key) & mask
                entry.next = new_table[index]
                new_table[index] = entry
                entry = following
        self._table = new_table

    def _expand_if_needed(self) -> None:
        if not self._table:
            self.expand(INITIAL_SIZE)
        elif self._used == len(self._table):
            self.expand(len(self._table) * 2)

    def _key_index(self, key: Any) -> Optional[int]:
        self._expand_if_needed()
        index = self._bucket(key)
        entry = self._table[index]
        while entry is not None:
            if self._compare(key, entry.key):
                return None
            entry = entry.next
        return index

    def add(self, key: Any, value: Any) -> None:
        """Insert a new entry; raises KeyError if the key is already present."""
        index = self._key_index(key)
        if index is None:
            raise KeyError(key)
        self._table[index] = _Entry(key, value, self._table[index])
        self._used += 1

    def replace(self, key: Any, value: Any) -> bool:
        """Insert or update; True when the key was new, False on update."""
        try:
            self.add(key, value)
        except KeyError:
            entry = self._entry(key)
            if entry is None:
                return False
            entry.value = value
            return False
        return True

    def delete(self, key: Any) -> None:
        """Remove the entry for ``key``; raises KeyError if it is absent."""
        if not self._table:
            raise KeyError(key)
        index = self._bucket(key)
        previous: Optional[_Entry] = None
        entry = self._table[index]
        while entry is not None:
            if self._compare(key, entry.key):
                if previous is None:
                    self._table[index] = entry.next
                else:
                    previous.next = entry.next
                self._used -= 1
                return
            previous = entry
            entry = entry.next
        raise KeyError(key)

    def find(self, key: Any) -> Any:
        """The value stored for ``key``, or None when it is absent."""
        entry = self._entry(key)
        return entry.value if entry is not None else None

    def __contains__(self, key: Any) -> bool:
        return self._entry(key) is not None

    def __len__(self) -> int:
        return self._used

    def __iter__(self) -> Iterator[Any]:
        """Yield keys bucket by bucket; the current key may be deleted meanwhile."""
        table = self._table
        for head in table:
            entry = head
            while entry is not None:
                following = entry.next
                yield entry.key
                entry = following

    def slots(self) -> int:
        """Number of buckets currently allocated."""
        return len(self._table)