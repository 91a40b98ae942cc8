"""Address decoding.

An address is split, from the most significant end, into
``tag | set index (s bits) | block offset (b bits)``.
"""

from typing import Tuple


def decode(address: int, s: int, b: int) -> Tuple[int, int]:
    """Return ``(tag, set_index)`` for `address`.

    The geometry is assumed valid (see CacheConfig); nothing here can fail.
    """
    tag = address >> (s + b)
    set_index = (address >> b) & ((1 << s) - 1)
    return tag, set_index


def block_offset(address: int, b: int) -> int:
    return address & ((1 << b) - 1)


__all__ = ["decode", "block_offset"]
