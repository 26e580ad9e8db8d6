from .metainfo import TorrentMeta, extract_info_bytes, read_metainfo
from .peer_id import generate_peer_id

__all__ = ['TorrentMeta', 'extract_info_bytes', 'read_metainfo', 'generate_peer_id']
