import copy
import logging
from struct import pack

import numpy as np

from md5digest.digest import DIGEST_SIZE, Digest

logger = logging.getLogger(__name__)

BLOCKSIZE = 64
LENGTH_SIZE = 8
MAX_MESSAGE_LENGTH = 0xFFFFFFFFFFFFFFFF
MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

WORD_DTYPE = np.dtype("<u4")

INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

Shifts = (
    7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22,
    5, 9, 14, 20, 5, 9, 14, 20, 5, 9, 14, 20, 5, 9, 14, 20,
    4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23,
    6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21,
)

# floor(abs(sin(i + 1)) * 2**32)
K = (
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee,
    0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be,
    0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa,
    0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed,
    0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c,
    0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05,
    0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039,
    0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1,
    0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
)


def _rol32(x: int, n: int) -> int:
    return ((x << n) & MASK32) | (x >> (32 - n))


def bytes_to_words(block) -> list[int]:
    """Read a 64-byte block as sixteen little-endian 32-bit words."""
    return np.frombuffer(block, dtype=WORD_DTYPE, count=BLOCKSIZE // 4).tolist()


def words_to_bytes(words) -> bytes:
    """Serialize 32-bit words little-endian, whatever the host byte order."""
    return np.asarray(words, dtype=WORD_DTYPE).tobytes()


def compress(state, words) -> None:
    """Run the 64 MD5 rounds over one block and add the result into ``state``.

    ``state`` is any mutable sequence of four 32-bit words and is updated in
    place; ``words`` are the sixteen message words of the block.
    """
    a, b, c, d = (int(x) for x in state)
    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (d & b) | (~d & c)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | (~d & MASK32))
            g = (7 * i) % 16
        f = (f + a + K[i] + words[g]) & MASK32
        a = d
        d = c
        c = b
        b = (b + _rol32(f, Shifts[i])) & MASK32
    for i, v in enumerate((a, b, c, d)):
        state[i] = (int(state[i]) + v) & MASK32


def _as_view(data) -> memoryview:
    if isinstance(data, str):
        text = data.encode("utf-8")
        end = text.find(b"\x00")
        return memoryview(text if end < 0 else text[:end])
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError(f"data must be bytes-like or str, not {type(data).__name__}") from None
    if view.ndim != 1 or view.itemsize != 1:
        view = view.cast("B")
    return view


class MD5:
    """Streaming MD5 (RFC 1321).

    Interface: MD5(data).update(data) then finalize() / digest() / hexdigest().
    Finalizing works on a snapshot, so ingestion may continue afterwards.
    """
    name = "md5"
    block_size = BLOCKSIZE
    digest_size = DIGEST_SIZE

    def __init__(self, data=None):
        self._state = np.array(INITIAL_STATE, dtype=np.uint32)
        self._pending = np.zeros(BLOCKSIZE, dtype=np.uint8)
        self._pending_len = 0
        self._message_byte_length = 0
        self._wiped = False
        if data is not None:
            self.update(data)

    @property
    def total_length(self) -> int:
        return self._message_byte_length

    @property
    def pending_length(self) -> int:
        return self._pending_len

    def _check_usable(self):
        if self._wiped:
            raise ValueError("MD5 engine has been wiped")

    def update(self, data) -> "MD5":
        self._check_usable()
        view = _as_view(data)
        n = len(view)
        if self._message_byte_length + n > MAX_MESSAGE_LENGTH:
            raise OverflowError("message length exceeds 2**64 - 1 bytes")
        self._message_byte_length += n

        offset = 0
        if self._pending_len:
            take = min(BLOCKSIZE - self._pending_len, n)
            self._pending[self._pending_len:self._pending_len + take] = np.frombuffer(view[:take], dtype=np.uint8)
            self._pending_len += take
            offset = take
            if self._pending_len < BLOCKSIZE:
                return self
            compress(self._state, bytes_to_words(self._pending))
            self._pending_len = 0

        while n - offset >= BLOCKSIZE:
            compress(self._state, bytes_to_words(view[offset:offset + BLOCKSIZE]))
            offset += BLOCKSIZE

        rest = n - offset
        if rest:
            self._pending[:rest] = np.frombuffer(view[offset:], dtype=np.uint8)
            self._pending_len = rest
        return self

    def finalize(self) -> Digest:
        self._check_usable()
        state = self._state.copy()
        block = np.zeros(BLOCKSIZE, dtype=np.uint8)
        block[:self._pending_len] = self._pending[:self._pending_len]
        block[self._pending_len] = 0x80

        if self._pending_len + 1 > BLOCKSIZE - LENGTH_SIZE:
            logger.debug(f"Padding spills into a second block ({self._pending_len} bytes pending)")
            compress(state, bytes_to_words(block))
            block.fill(0)

        bit_length = (self._message_byte_length * 8) & MASK64
        block[-LENGTH_SIZE:] = np.frombuffer(pack("<Q", bit_length), dtype=np.uint8)
        compress(state, bytes_to_words(block))
        block.fill(0)

        result = Digest(words_to_bytes(state))
        state.fill(0)
        return result

    def digest(self) -> bytes:
        return bytes(self.finalize())

    def hexdigest(self) -> str:
        return self.finalize().hex()

    def copy(self) -> "MD5":
        self._check_usable()
        return copy.deepcopy(self)

    def reset(self) -> "MD5":
        self._state[:] = INITIAL_STATE
        self._pending.fill(0)
        self._pending_len = 0
        self._message_byte_length = 0
        self._wiped = False
        return self

    def wipe(self):
        """Zero the running state and buffered message bytes."""
        self._state.fill(0)
        self._pending.fill(0)
        self._pending_len = 0
        self._message_byte_length = 0
        self._wiped = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.wipe()

    def __del__(self):
        if hasattr(self, "_pending"):
            self.wipe()

    def __repr__(self) -> str:
        return f"MD5(total_length={self._message_byte_length}, pending={self._pending_len})"
