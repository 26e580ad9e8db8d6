"""
Bencode package for decoding BitTorrent data.
"""
from .decoder import BencodeDecoder, decode
from .encoder import encode
from .errors import BencodeDecodeError, BencodeTypeMismatch
from .lookup import find, find_path, get_nested_dict
from .markers import MAX_DEPTH
from .release import destroy
from .scanner import BencodeScanner, decode_length, find_span
from .structure import (
    BencodeBinary,
    BencodeDict,
    BencodeInt,
    BencodeList,
    BencodeString,
    BencodeType,
)

__all__ = [
    'decode', 'decode_length', 'find_span', 'destroy', 'encode',
    'find', 'find_path', 'get_nested_dict',
    'BencodeDecoder', 'BencodeScanner', 'BencodeDecodeError', 'BencodeTypeMismatch',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeBinary', 'BencodeList', 'BencodeDict',
    'MAX_DEPTH',
]
