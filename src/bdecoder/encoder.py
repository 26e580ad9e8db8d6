"""
Bencode encoder for decoded trees and plain Python values.
"""
from .structure import BencodeBinary, BencodeDict, BencodeInt, BencodeList, BencodeString


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode a bool")

    if isinstance(obj, (int, BencodeInt)):
        value = obj if isinstance(obj, int) else obj.value
        return encode_int(value)

    if isinstance(obj, str):
        return encode_str(obj)

    if isinstance(obj, (BencodeString, BencodeBinary)):
        return encode_bytes(obj.value)

    if isinstance(obj, (bytes, bytearray)):
        return encode_bytes(bytes(obj))

    if isinstance(obj, (list, BencodeList)):
        value = obj if isinstance(obj, list) else obj.value
        return encode_list(value)

    if isinstance(obj, BencodeDict):
        # decoded pairs keep their original order so the bytes round-trip
        return encode_pairs((k.value, v) for k, v in obj.value)

    if isinstance(obj, dict):
        return encode_dict(obj)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode())


def encode_list(lst: list) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_pairs(pairs) -> bytes:
    """Encodes (key, value) pairs in the given order as a bencoded dictionary."""
    result = b"d"
    for key, value in pairs:
        result += encode_bytes(key)
        result += encode(value)
    return result + b"e"


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""

    def key_to_bytes(k):
        return k if isinstance(k, bytes) else k.encode()

    return encode_pairs(
        (key_to_bytes(key), d[key]) for key in sorted(d.keys(), key=key_to_bytes))
