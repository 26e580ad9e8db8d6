"""
Human-readable rendering of decoded Bencode trees.
"""
from .markers import PIECE_HASH_LEN
from .structure import BencodeBinary, BencodeDict, BencodeInt, BencodeList, BencodeString

INDENT = "  "


def _text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return "0x" + raw.hex()


def _hex_rows(raw: bytes) -> list:
    return [
        " ".join(f"{b:02X}" for b in raw[i:i + PIECE_HASH_LEN])
        for i in range(0, len(raw), PIECE_HASH_LEN)
    ]


def _render(value, level: int, lines: list, prefix: str = ""):
    pad = INDENT * level

    if isinstance(value, BencodeInt):
        lines.append(f"{pad}{prefix}{value.value}")
    elif isinstance(value, BencodeString):
        lines.append(f"{pad}{prefix}{_text(value.value)}")
    elif isinstance(value, BencodeBinary):
        lines.append(f"{pad}{prefix}<binary, {len(value.value)} bytes>")
        lines.extend(f"{pad}{INDENT}{row}" for row in _hex_rows(value.value))
    elif isinstance(value, BencodeList):
        lines.append(f"{pad}{prefix}[list, {len(value)} items]")
        for item in value.value:
            _render(item, level + 1, lines, "- ")
    elif isinstance(value, BencodeDict):
        lines.append(f"{pad}{prefix}{{dict, {len(value)} keys}}")
        for key, item in value.value:
            _render(item, level + 1, lines, f"{_text(key.value)}: ")
    else:
        raise TypeError(f"Cannot render object of type {type(value)}")


def render(value) -> str:
    """Renders a decoded tree as indented text, binary payloads as hex rows."""
    lines = []
    _render(value, 0, lines)
    return "\n".join(lines)
