import pytest

from bdecoder.encoder import encode

from samples import MULTI_FILE, SINGLE_FILE


@pytest.fixture
def sample_torrent(tmp_path):
    path = tmp_path / "sample.torrent"
    path.write_bytes(encode(SINGLE_FILE))
    return path


@pytest.fixture
def multi_torrent(tmp_path):
    path = tmp_path / "album.torrent"
    path.write_bytes(encode(MULTI_FILE))
    return path
