"""
Defines the Bencode type markers, the lead-byte dispatcher and decoder defaults.
"""
from enum import IntEnum


class BencodeTag(IntEnum):
    """Kinds a lead byte can announce."""
    INVALID = 0
    INTEGER = 1
    STRING = 2
    LIST = 3
    DICT = 4


INT_START = ord("i")
LIST_START = ord("l")
DICT_START = ord("d")
END = ord("e")
STRING_SEP = ord(":")
NEGATIVE = ord("-")

# Dictionary key whose string value holds concatenated SHA1 digests
PIECES_KEY = b"pieces"
PIECE_HASH_LEN = 20

# Deepest list/dict nesting accepted before NestingTooDeep
MAX_DEPTH = 256


def tag_for(byte: int) -> BencodeTag:
    """Maps the first byte of an encoded value to its BencodeTag."""
    if byte == INT_START:
        return BencodeTag.INTEGER
    if 0x30 <= byte <= 0x39:
        return BencodeTag.STRING
    if byte == LIST_START:
        return BencodeTag.LIST
    if byte == DICT_START:
        return BencodeTag.DICT
    return BencodeTag.INVALID
