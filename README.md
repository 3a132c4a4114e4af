# respclient

`respclient` holds dependency-free building blocks for a client of servers
that speak the RESP protocol:

- `respclient.command` encodes commands into multi-bulk bytes.
- `respclient.reply` defines reply objects.
- `respclient.hashtable` provides the chained hash table used to keep
  subscription callbacks.
- `respclient.pubsub` keeps the publish/subscribe bookkeeping and
  recognises subscription replies.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Formatting commands

```python
from respclient.command import format_command, format_command_argv

format_command("SET %s %b", "foo", b"hello")
# b'*3\r\n$3\r\nSET\r\n$3\r\nfoo\r\n$5\r\nhello\r\n'

format_command_argv([b"RPUSH", b"list", b"a"])
# b'*3\r\n$5\r\nRPUSH\r\n$4\r\nlist\r\n$1\r\na\r\n'
```

Spaces in the format string separate the arguments. In `format_command`,
`%s` inserts a string up to its first NUL byte, `%b` inserts a binary-safe
value, and `%%` inserts a literal `%`. The printf integer conversions
(`d i o u x X`, also with the `hh`, `h`, `l` and `ll` modifiers) and the
floating point conversions (`e E f F g G a A`) format numbers, and they
accept flags, a width and a precision. A bad format string, a missing
argument or an argument of the wrong type raises `FormatError`, which is a
subclass of `ValueError`.

`count_digits(n)` returns the number of decimal digits of `n`.
`bulk_len(n)` returns the number of bytes a bulk string of `n` bytes takes
on the wire.

## Reply objects

`Reply` is a dataclass. Its fields are `type` (a `ReplyType`), `integer`,
`dval`, `data` (bytes), `vtype` and `elements`. The `length` property gives
the length of `data`, and `is_push()` tells you whether the reply is a push
message. The factory functions check the type they are given:

```python
from respclient.reply import ReplyType, create_array, create_string, create_integer

r = create_string(ReplyType.VERB, b"txt:hello")   # vtype "txt", data b"hello"
arr = create_array(ReplyType.ARRAY, [r, create_integer(3)])
```

`create_double(value, text)` keeps the server's original text.
`create_bool` stores 1 or 0 in `integer`. `create_nil()` builds a nil
reply.

## Hash table

`HashTable(hash_function=gen_hash, key_compare=None)` starts with no
buckets. It grows to four buckets on the first insertion and doubles its
bucket count whenever it is full. It offers the following:

- `add` raises `KeyError` when the key is already present.
- `replace` returns `True` for a new key and `False` for an update.
- `delete` raises `KeyError` when the key is absent.
- `find` returns the stored value, or `None` when the key is absent.
- `expand(size)` raises `ValueError` when `size` is smaller than the
  number of entries.
- `in`, `len()`, iteration over keys and `slots()` work as expected.

`gen_hash` is the 32-bit `hash * 33 + byte` hash.

## Pub/sub bookkeeping

`Callback` holds a reply function and its user data, together with
`pending_subs` and `unsubscribe_sent`. `Subscriptions` holds a queue
`replies`, the hash tables `channels` and `patterns` (`table_for(pattern)`
picks one), and a `pending_unsubs` counter.

- `split_command(cmd)` returns the arguments of an encoded command.
- `is_subscribe_reply(reply)` recognises (p)subscribe, (p)unsubscribe and
  (p)message replies.
- `is_spontaneous_push(reply)` is true for push messages that have nothing
  to do with subscriptions.

## What the package does not do

The package does not open connections and does no socket I/O. It cannot
parse incoming bytes into `Reply` objects. It has no blocking or
event-driven client that sends commands and runs callbacks. Those pieces
must be supplied by the program that uses these building blocks.