"""
Tear-down of decoded Bencode trees.
"""
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeType, _BencodeBytes


def destroy(value: BencodeType) -> int:
    """
    Releases ``value`` and everything below it, children before parents.

    Container storage is emptied, byte payloads and the shared source buffer are dropped
    and every node is flagged ``released``. Returns how many nodes were
    released; a node that was already released counts as zero.
    """
    if value is None or value.released:
        return 0

    released = 0
    if isinstance(value, BencodeList):
        for item in value.value:
            released += destroy(item)
        value.value.clear()
    elif isinstance(value, BencodeDict):
        for key, item in value.value:
            released += destroy(key)
            released += destroy(item)
        value.value.clear()
    elif isinstance(value, _BencodeBytes):
        value.value = b""
    elif not isinstance(value, BencodeInt):
        raise TypeError(f"Cannot destroy object of type {type(value)}")

    value.source = b""
    value.length = 0
    value.released = True
    return released + 1
