"""Building blocks for a RESP protocol client: command formatting, replies, a hash table and pub/sub bookkeeping."""

__version__ = "0.1.0"

__all__ = ["reply", "command", "hashtable", "pubsub"]