import pytest

from bdecoder.decoder import decode
from bdecoder.encoder import encode
from bdecoder.errors import InvalidLeadingZero, NestingTooDeep, NonStringKey
from bdecoder.scanner import BencodeScanner, decode_length, find_span

DOCUMENT = encode({
    "announce": "http://tracker.example/announce",
    "comment": "",
    "info": {
        "files": [
            {"length": 10, "path": ["cd1", "a.mp3"]},
            {"length": 5, "path": ["b.txt"]},
        ],
        "name": "album",
        "piece length": 16384,
        "pieces": bytes(range(40)),
    },
    "nested": [[[]], {}, [-12, 0, b"e:l"]],
}) + b"trailing"


def walk(node):
    yield node
    for child in node.children():
        yield from walk(child)


def test_decode_length_of_scalars_and_containers():
    assert decode_length(b"i42e") == 4
    assert decode_length(b"4:spam") == 6
    assert decode_length(b"le") == 2
    assert decode_length(b"de") == 2
    assert decode_length(b"li1ei2ee") == 8
    assert decode_length(b"d3:key5:valuee") == 14


def test_both_modes_agree_on_every_node():
    root, consumed = decode(DOCUMENT)
    assert consumed == decode_length(DOCUMENT) == len(DOCUMENT) - len(b"trailing")

    nodes = list(walk(root))
    print(f"Checking {len(nodes)} nodes")
    for node in nodes:
        assert decode_length(DOCUMENT, node.offset) == node.length
        assert DOCUMENT[node.offset:node.offset + node.length] == node.encoded


def test_scanner_reports_consumed_from_offset():
    scanner = BencodeScanner(b"xxli1ee", offset=2)
    assert scanner.scan() == 5


def test_find_span_locates_nested_value():
    root, _ = decode(DOCUMENT)
    info = dict((k.value, v) for k, v in root.value)[b"info"]

    span = find_span(DOCUMENT, [b"info"])
    assert span == (info.offset, info.length)

    start, length = find_span(DOCUMENT, [b"info", "name"])
    assert DOCUMENT[start:start + length] == b"5:album"


def test_find_span_missing_or_not_a_dict():
    assert find_span(DOCUMENT, [b"missing"]) is None
    assert find_span(DOCUMENT, [b"announce", b"x"]) is None
    assert find_span(b"li1ee", [b"info"]) is None


def test_find_span_with_empty_path_is_the_root():
    assert find_span(b"i7e", []) == (0, 3)


def test_find_span_still_validates_what_it_skips():
    with pytest.raises(InvalidLeadingZero):
        find_span(b"d1:ai042e4:infodee", [b"info"])


def test_find_span_too_deep_for_the_stack():
    raw = b"d4:info" + b"l" * 3000 + b"e" * 3000 + b"e"
    with pytest.raises(NestingTooDeep):
        find_span(raw, [b"info"], max_depth=10000)


def test_find_span_rejects_non_string_key_on_the_way():
    with pytest.raises(NonStringKey):
        find_span(b"di1e1:xe", [b"info"])
