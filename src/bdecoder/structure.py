"""
Data structures for representing Bencoded types.

Every node produced by the decoder remembers where it came from: ``offset`` is
the index of its first byte and ``length`` the number of bytes it spans in
``source``, the input buffer shared by every node of one decoded tree.
``encoded`` slices that buffer on demand. Nodes built by hand have an empty span.
"""
__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeBinary",
    "BencodeList",
    "BencodeDict",
]


class BencodeType:
    """Base class for all Bencode data types."""
    def __init__(self, offset: int = 0, length: int = 0, source: bytes = b""):
        self.offset = offset
        self.length = length
        self.source = source
        self.released = False

    @property
    def encoded(self) -> bytes:
        """The input bytes this node was decoded from."""
        return self.source[self.offset:self.offset + self.length]

    def children(self):
        return ()


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    def __init__(self, value: int, offset: int = 0, length: int = 0, source: bytes = b""):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        super().__init__(offset, length, source)
        self.value = value

    def __repr__(self):
        return f"BencodeInt({self.value})"


class _BencodeBytes(BencodeType):
    def __init__(self, value: bytes, offset: int = 0, length: int = 0, source: bytes = b""):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"{type(self).__name__} requires bytes.")
        super().__init__(offset, length, source)
        self.value = bytes(value)

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class BencodeString(_BencodeBytes):
    """Represents a Bencoded byte string."""


class BencodeBinary(_BencodeBytes):
    """
    A Bencoded byte string known to hold opaque binary data, such as the
    concatenated SHA1 digests stored under a metainfo 'pieces' key.
    """
    def hex(self) -> str:
        return self.value.hex()

    def chunks(self, size: int = 20) -> list:
        """Splits the payload into consecutive ``size``-byte pieces."""
        if size <= 0:
            raise ValueError("chunk size must be positive")
        return [self.value[i:i + size] for i in range(0, len(self.value), size)]

    def __repr__(self):
        return f"BencodeBinary(<{len(self.value)} bytes>)"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    def __init__(self, value: list, offset: int = 0, length: int = 0, source: bytes = b""):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode types.")
        super().__init__(offset, length, source)
        self.value = value

    def children(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary as an ordered list of (key, value) pairs.

    Pairs keep the order they were read in and duplicate keys are kept as-is,
    so a decoded dictionary re-encodes to the exact bytes it came from.
    """
    def __init__(self, value: list, offset: int = 0, length: int = 0, source: bytes = b""):
        if not isinstance(value, list):
            raise TypeError("BencodeDict requires a list of (key, value) pairs.")
        for pair in value:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise TypeError("BencodeDict entries must be (key, value) tuples.")
            key, item = pair
            # keys must be byte strings (bencode requirement)
            if not isinstance(key, BencodeString):
                raise TypeError("BencodeDict keys must be BencodeString.")
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeDict values must be Bencode types.")
        super().__init__(offset, length, source)
        self.value = value

    def keys(self) -> list:
        return [key.value for key, _ in self.value]

    def children(self):
        for key, item in self.value:
            yield key
            yield item

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        pairs = ", ".join(f"{k.value!r}: {v!r}" for k, v in self.value)
        return f"BencodeDict({{{pairs}}})"
