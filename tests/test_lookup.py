import pytest

from bdecoder.decoder import decode
from bdecoder.errors import BencodeTypeMismatch
from bdecoder.lookup import find, find_path, get_nested_dict
from bdecoder.structure import BencodeDict, BencodeInt


@pytest.fixture
def root():
    value, _ = decode(b"d4:infod4:name5:album6:lengthi7ee4:listle3:dupi1e3:dupi2ee")
    return value


def test_find_by_bytes_and_str(root):
    assert find(root, b"dup").value == 1
    assert find(root, "dup").value == 1


def test_find_returns_first_duplicate(root):
    assert find(root, b"dup").value == 1


def test_find_missing_is_none(root):
    assert find(root, b"absent") is None


def test_find_on_non_dict():
    value, _ = decode(b"li1ee")
    with pytest.raises(BencodeTypeMismatch):
        find(value, b"x")


def test_get_nested_dict(root):
    info = get_nested_dict(root, b"info")
    assert isinstance(info, BencodeDict)
    assert find(info, b"name").value == b"album"
    assert get_nested_dict(root, b"absent") is None


def test_get_nested_dict_wrong_kind(root):
    with pytest.raises(BencodeTypeMismatch):
        get_nested_dict(root, b"list")


def test_find_path(root):
    length = find_path(root, "info", "length")
    assert isinstance(length, BencodeInt) and length.value == 7
    assert find_path(root, "info", "absent") is None
    assert find_path(root, "list", "anything") is None
    assert find_path(root) is root
