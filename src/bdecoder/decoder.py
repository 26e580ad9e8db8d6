"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
from typing import Tuple

from .errors import (
    AllocationFailure,
    BencodeDecodeError,
    InvalidLeadingZero,
    MalformedInteger,
    MalformedLength,
    NegativeLength,
    NestingTooDeep,
    NonStringKey,
    TruncatedInput,
    UnknownTypeTag,
    UnterminatedContainer,
    UnterminatedInteger,
)
from .markers import (
    END,
    MAX_DEPTH,
    NEGATIVE,
    PIECES_KEY,
    BencodeTag,
    tag_for,
)
from .structure import (
    BencodeBinary,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

__all__ = [
    "BencodeDecodeError",
    "BencodeDecoder",
    "decode",
    "read_integer",
    "read_string_header",
]


# --------------------------
# Grammar shared by both decoding modes
# --------------------------

def read_integer(data: bytes, pos: int) -> Tuple[int, int]:
    """
    Parses ``i<digits>e`` starting at ``pos``.
    Returns the number and the count of bytes consumed, delimiters included.
    """
    end = data.find(b"e", pos + 1)
    if end == -1:
        raise UnterminatedInteger(f"Integer at index {pos} has no terminating 'e'", pos)

    body = data[pos + 1:end]
    negative = body[:1] == b"-"
    digits = body[1:] if negative else body

    # bytes.isdigit() only accepts ASCII 0-9, unlike int() which allows
    # whitespace, '+' and '_'
    if not digits or not digits.isdigit():
        raise MalformedInteger(f"Invalid integer format at index {pos}: {body!r}", pos)

    if digits[:1] == b"0" and (len(digits) > 1 or negative):
        raise InvalidLeadingZero(f"Integer at index {pos} has a leading zero: {body!r}", pos)

    return int(body), end + 1 - pos


def read_string_header(data: bytes, pos: int) -> Tuple[int, int]:
    """
    Parses the ``<length>:`` prefix of a byte string starting at ``pos``.
    Returns the declared length and the index of the first payload byte.
    """
    colon = data.find(b":", pos)
    if colon == -1:
        raise MalformedLength(f"String length at index {pos} is not followed by ':'", pos)

    field = data[pos:colon]
    if field[:1] == b"-" and field[1:].isdigit():
        raise NegativeLength(f"Negative string length at index {pos}: {field!r}", pos)
    if not field.isdigit():
        raise MalformedLength(f"Invalid string length at index {pos}: {field!r}", pos)

    length = int(field)
    start = colon + 1
    if start + length > len(data):
        raise TruncatedInput(
            f"String at index {pos} declares {length} bytes but only "
            f"{len(data) - start} remain", pos)

    return length, start


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode type trees.

    One decoder instance serves one top-level decode: the cursor, the nesting
    depth and the 'pieces' binary hint never outlive it.
    """
    def __init__(self, data: bytes, offset: int = 0, max_depth: int = MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeDecoder requires bytes.")
        self.data = bytes(data)
        if not 0 <= offset <= len(self.data):
            raise ValueError(f"offset {offset} outside of input of {len(self.data)} bytes")
        self.start = offset
        self.i = offset  # cursor index
        self.max_depth = max_depth

    def decode(self) -> BencodeType:
        """Main decode entry point. Decodes one value starting at the offset."""
        try:
            return self._parse_value(0)
        except RecursionError as exc:
            raise NestingTooDeep(
                f"Nesting at index {self.start} exceeds the interpreter stack "
                f"before reaching max_depth={self.max_depth}", self.start) from exc
        except MemoryError as exc:
            raise AllocationFailure(f"Out of memory decoding value at index {self.start}",
                                    self.start) from exc

    @property
    def consumed(self) -> int:
        """Bytes consumed so far, measured from the starting offset."""
        return self.i - self.start

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> int:
        if self.i >= len(self.data):
            raise TruncatedInput(f"Unexpected end of input at index {self.i}", self.i)
        return self.data[self.i]

    def _peek_in(self, container_start: int) -> int:
        """Like _peek, but running out of input means the container never closed."""
        if self.i >= len(self.data):
            raise UnterminatedContainer(
                f"Container at index {container_start} has no closing 'e'", container_start)
        return self.data[self.i]

    def _enter(self, depth: int) -> int:
        depth += 1
        if depth > self.max_depth:
            raise NestingTooDeep(
                f"Nesting deeper than {self.max_depth} at index {self.i}", self.i)
        return depth

    def _span(self, start: int) -> dict:
        # nodes share self.data instead of each copying its own span
        return {"offset": start, "length": self.i - start, "source": self.data}

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, depth: int, binary: bool = False) -> BencodeType:
        ch = self._peek()
        tag = tag_for(ch)

        if tag is BencodeTag.INTEGER:
            return self._parse_int()

        if tag is BencodeTag.STRING:
            return self._parse_string(binary)

        if tag is BencodeTag.LIST:
            return self._parse_list(depth)

        if tag is BencodeTag.DICT:
            return self._parse_dict(depth)

        raise UnknownTypeTag(f"Invalid token at index {self.i}: {bytes((ch,))!r}", self.i)

    def _parse_int(self) -> BencodeInt:
        """Parses an integer from the Bencoded data."""
        start = self.i
        num, consumed = read_integer(self.data, start)
        self.i += consumed
        return BencodeInt(num, **self._span(start))

    def _parse_string(self, binary: bool = False):
        """Parses a byte string, as BencodeBinary when the binary hint is on."""
        start = self.i
        length, payload_start = read_string_header(self.data, start)
        self.i = payload_start + length
        payload = self.data[payload_start:self.i]

        if binary:
            return BencodeBinary(payload, **self._span(start))
        return BencodeString(payload, **self._span(start))

    def _parse_key(self, container_start: int) -> BencodeString:
        ch = self._peek_in(container_start)
        # a '-' still goes through the string parser so it reports NegativeLength
        if tag_for(ch) is not BencodeTag.STRING and ch != NEGATIVE:
            raise NonStringKey(
                f"Dictionary key at index {self.i} is not a byte string: {bytes((ch,))!r}",
                self.i)
        return self._parse_string()

    def _parse_list(self, depth: int) -> BencodeList:
        """Parses a list from the Bencoded data."""
        start = self.i
        depth = self._enter(depth)
        self.i += 1  # skip 'l'
        items = []

        while self._peek_in(start) != END:
            items.append(self._parse_value(depth))

        self.i += 1  # skip 'e'
        return BencodeList(items, **self._span(start))

    def _parse_dict(self, depth: int) -> BencodeDict:
        """Parses a dictionary from the Bencoded data."""
        start = self.i
        depth = self._enter(depth)
        self.i += 1  # skip 'd'
        pairs = []

        while self._peek_in(start) != END:
            key = self._parse_key(start)
            self._peek_in(start)
            # the hint covers this value only; siblings and nested values start clear
            value = self._parse_value(depth, binary=key.value == PIECES_KEY)
            pairs.append((key, value))

        self.i += 1  # skip 'e'
        return BencodeDict(pairs, **self._span(start))


def decode(data: bytes, offset: int = 0, max_depth: int = MAX_DEPTH) -> Tuple[BencodeType, int]:
    """
    Decodes the value starting at ``offset``.
    Returns the value and the number of bytes it occupies.
    """
    decoder = BencodeDecoder(data, offset, max_depth)
    value = decoder.decode()
    return value, decoder.consumed
