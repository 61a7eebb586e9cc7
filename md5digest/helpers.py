import logging
import os

from md5digest.engine import MD5

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096


def md5(message, length: int = None) -> str:
    """Hex digest of ``message`` (or of its first ``length`` bytes)."""
    if length is not None:
        if isinstance(message, str):
            message = message.encode("utf-8")
        view = memoryview(message).cast("B")
        if length < 0 or length > len(view):
            raise ValueError(f"length must be in [0, {len(view)}], got {length}")
        message = view[:length]
    with MD5(message) as h:
        return h.hexdigest()


def md5_stream(stream, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Hex digest of a binary file object, read until EOF."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    with MD5() as h:
        while True:
            chunk = stream.read(chunk_size)
            if isinstance(chunk, str):
                raise TypeError("stream must be opened in binary mode")
            if not chunk:
                break
            h.update(chunk)
        logger.debug(f"Read {h.total_length} bytes in {chunk_size}-byte chunks")
        return h.hexdigest()


def md5_file(path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    logger.debug(f"Hashing {os.fspath(path)}")
    with open(path, "rb") as f:
        return md5_stream(f, chunk_size)
