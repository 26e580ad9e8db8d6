"""
Peer identifier generation.
"""
import hashlib

PEER_ID_PREFIX = b"-GS0001-"
PEER_ID_LEN = 20


def generate_peer_id(seed: str, prefix: bytes = PEER_ID_PREFIX) -> bytes:
    """
    Builds a 20-byte peer id: the client prefix followed by the leading bytes
    of SHA1(seed). The same seed always yields the same id.
    """
    if len(prefix) >= PEER_ID_LEN:
        raise ValueError(f"peer id prefix must be shorter than {PEER_ID_LEN} bytes")
    digest = hashlib.sha1(seed.encode()).digest()
    return prefix + digest[:PEER_ID_LEN - len(prefix)]
