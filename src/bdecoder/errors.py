"""
Exceptions raised while decoding and inspecting Bencoded data.
"""


class BencodeDecodeError(Exception):
    """Base exception for Bencode decoding errors."""
    def __init__(self, message: str, offset: int = None):
        super().__init__(message)
        self.offset = offset


class MalformedInteger(BencodeDecodeError):
    """Integer body is empty or contains something other than an optional sign and digits."""


class UnterminatedInteger(MalformedInteger):
    """No 'e' follows an integer before the end of input."""


class InvalidLeadingZero(BencodeDecodeError):
    """Integer written with a redundant leading zero (i03e) or as negative zero (i-0e)."""


class NegativeLength(BencodeDecodeError):
    """Byte string declares a negative length."""


class MalformedLength(BencodeDecodeError):
    """Byte string length is not a decimal number followed by ':'."""


class TruncatedInput(BencodeDecodeError):
    """Input ends before the value it announces is complete."""


class UnterminatedContainer(BencodeDecodeError):
    """List or dictionary has no closing 'e'."""


class UnknownTypeTag(BencodeDecodeError):
    """Lead byte does not start any Bencode type."""


class NonStringKey(BencodeDecodeError):
    """Dictionary key is not a byte string."""


class NestingTooDeep(BencodeDecodeError):
    """Lists and dictionaries are nested deeper than the configured limit."""


class AllocationFailure(BencodeDecodeError, MemoryError):
    """Ran out of memory while materializing a decoded tree."""


class BencodeTypeMismatch(TypeError):
    """A looked-up value exists but is not of the expected Bencode type."""
