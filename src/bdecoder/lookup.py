"""
Key lookups on decoded Bencode dictionaries.

Absence is an ordinary outcome for optional metainfo fields, so every helper
returns None for a missing key instead of raising.
"""
from typing import Optional, Union

from .errors import BencodeTypeMismatch
from .structure import BencodeDict, BencodeType

Key = Union[bytes, str]


def _key_bytes(key: Key) -> bytes:
    return key.encode() if isinstance(key, str) else bytes(key)


def find(d: BencodeDict, key: Key) -> Optional[BencodeType]:
    """Returns the value of the first pair whose key equals ``key``."""
    if not isinstance(d, BencodeDict):
        raise BencodeTypeMismatch(f"Expected BencodeDict, got {type(d).__name__}")

    key = _key_bytes(key)
    for k, v in d.value:
        if k.value == key:
            return v
    return None


def get_nested_dict(d: BencodeDict, key: Key) -> Optional[BencodeDict]:
    """Like find(), but the value must itself be a dictionary."""
    value = find(d, key)
    if value is None:
        return None
    if not isinstance(value, BencodeDict):
        raise BencodeTypeMismatch(
            f"Value at key {_key_bytes(key)!r} is {type(value).__name__}, not BencodeDict")
    return value


def find_path(d: BencodeDict, *keys: Key) -> Optional[BencodeType]:
    """Follows ``keys`` through nested dictionaries; None as soon as one is missing."""
    value = d
    for key in keys:
        if not isinstance(value, BencodeDict):
            return None
        value = find(value, key)
        if value is None:
            return None
    return value
