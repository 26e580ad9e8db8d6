"""
Offset-only Bencode decoding.

Walks the same grammar as BencodeDecoder but builds nothing, so large
documents can be validated or skipped over cheaply. Used to find the exact
byte span of a nested value (e.g. the metainfo 'info' dictionary).
"""
from typing import Iterable, Optional, Tuple

from .decoder import read_integer, read_string_header
from .errors import (
    NestingTooDeep,
    NonStringKey,
    TruncatedInput,
    UnknownTypeTag,
    UnterminatedContainer,
)
from .markers import END, MAX_DEPTH, NEGATIVE, BencodeTag, tag_for


class BencodeScanner:
    """Measures encoded values without materializing them."""
    def __init__(self, data: bytes, offset: int = 0, max_depth: int = MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeScanner requires bytes.")
        self.data = bytes(data)
        if not 0 <= offset <= len(self.data):
            raise ValueError(f"offset {offset} outside of input of {len(self.data)} bytes")
        self.start = offset
        self.max_depth = max_depth

    def scan(self) -> int:
        """Returns the number of bytes taken by the value at the starting offset."""
        try:
            return self._skip_value(self.start, 0) - self.start
        except RecursionError as exc:
            raise self._stack_exhausted() from exc

    def _stack_exhausted(self) -> NestingTooDeep:
        return NestingTooDeep(
            f"Nesting at index {self.start} exceeds the interpreter stack "
            f"before reaching max_depth={self.max_depth}", self.start)

    def _lead(self, idx: int) -> int:
        if idx >= len(self.data):
            raise TruncatedInput(f"Unexpected end of input at index {idx}", idx)
        return self.data[idx]

    def _lead_in(self, idx: int, container_start: int) -> int:
        if idx >= len(self.data):
            raise UnterminatedContainer(
                f"Container at index {container_start} has no closing 'e'", container_start)
        return self.data[idx]

    def _enter(self, depth: int, idx: int) -> int:
        depth += 1
        if depth > self.max_depth:
            raise NestingTooDeep(f"Nesting deeper than {self.max_depth} at index {idx}", idx)
        return depth

    # Each _skip_* takes the index of a value's first byte and returns the
    # index just past it.

    def _skip_value(self, idx: int, depth: int) -> int:
        ch = self._lead(idx)
        tag = tag_for(ch)

        if tag is BencodeTag.INTEGER:
            return idx + read_integer(self.data, idx)[1]

        if tag is BencodeTag.STRING:
            return self._skip_string(idx)

        if tag is BencodeTag.LIST:
            return self._skip_list(idx, depth)

        if tag is BencodeTag.DICT:
            return self._skip_dict(idx, depth)

        raise UnknownTypeTag(f"Invalid token at index {idx}: {bytes((ch,))!r}", idx)

    def _skip_string(self, idx: int) -> int:
        length, payload_start = read_string_header(self.data, idx)
        return payload_start + length

    def _key_header(self, idx: int, container_start: int) -> Tuple[int, int]:
        ch = self._lead_in(idx, container_start)
        if tag_for(ch) is not BencodeTag.STRING and ch != NEGATIVE:
            raise NonStringKey(
                f"Dictionary key at index {idx} is not a byte string: {bytes((ch,))!r}", idx)
        return read_string_header(self.data, idx)

    def _skip_key(self, idx: int, container_start: int) -> int:
        length, payload_start = self._key_header(idx, container_start)
        return payload_start + length

    def _skip_list(self, idx: int, depth: int) -> int:
        start = idx
        depth = self._enter(depth, idx)
        idx += 1  # skip 'l'
        while self._lead_in(idx, start) != END:
            idx = self._skip_value(idx, depth)
        return idx + 1

    def _skip_dict(self, idx: int, depth: int) -> int:
        start = idx
        depth = self._enter(depth, idx)
        idx += 1  # skip 'd'
        while self._lead_in(idx, start) != END:
            idx = self._skip_key(idx, start)
            self._lead_in(idx, start)
            idx = self._skip_value(idx, depth)
        return idx + 1

    def locate(self, path: Iterable[bytes]) -> Optional[Tuple[int, int]]:
        """
        Follows ``path`` through nested dictionaries, skipping every value that
        is not on the way. Returns (offset, length) of the addressed value, or
        None if a key is missing or a value on the path is not a dictionary.
        """
        try:
            return self._locate(path)
        except RecursionError as exc:
            raise self._stack_exhausted() from exc

    def _locate(self, path):
        idx = self.start
        depth = 0
        for key in path:
            key = key.encode() if isinstance(key, str) else bytes(key)
            if tag_for(self._lead(idx)) is not BencodeTag.DICT:
                return None
            start = idx
            depth = self._enter(depth, idx)
            idx += 1
            while True:
                if self._lead_in(idx, start) == END:
                    return None
                length, payload_start = self._key_header(idx, start)
                value_start = payload_start + length
                self._lead_in(value_start, start)
                if self.data[payload_start:value_start] == key:
                    idx = value_start
                    break
                idx = self._skip_value(value_start, depth)
        return idx, self._skip_value(idx, depth) - idx


def decode_length(data: bytes, offset: int = 0, max_depth: int = MAX_DEPTH) -> int:
    """Returns how many bytes the value at ``offset`` occupies, without decoding it."""
    return BencodeScanner(data, offset, max_depth).scan()


def find_span(data: bytes, path: Iterable[bytes], offset: int = 0,
              max_depth: int = MAX_DEPTH) -> Optional[Tuple[int, int]]:
    """Returns (offset, length) of the value at a key path of nested dictionaries."""
    return BencodeScanner(data, offset, max_depth).locate(path)
